"""Shared fixtures: in-memory storage, a frozen clock and a reference date."""

from datetime import date, datetime, timezone

import pytest

from onlytime.models.notification import Notification
from onlytime.notifications import NotificationChannel
from onlytime.services.expenses import ExpenseStore
from onlytime.services.settings_store import SettingsStore
from onlytime.services.storage import InMemoryStorage, StorageKeys
from onlytime.wage import normalize_settings


FROZEN_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def frozen_clock():
    return lambda: FROZEN_NOW


@pytest.fixture
def frozen_ms() -> int:
    """createdAt that stores with the frozen clock assign."""
    return int(FROZEN_NOW.timestamp() * 1000)


@pytest.fixture
def reference_date() -> date:
    return date(2024, 3, 15)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def keys() -> StorageKeys:
    return StorageKeys()


@pytest.fixture
def received() -> list[Notification]:
    return []


@pytest.fixture
def channel(received) -> NotificationChannel:
    channel = NotificationChannel()
    channel.subscribe(received.append)
    return channel


@pytest.fixture
def expense_store(storage, keys, frozen_clock) -> ExpenseStore:
    return ExpenseStore(storage, keys, clock=frozen_clock)


@pytest.fixture
def settings_store(storage, keys) -> SettingsStore:
    return SettingsStore(storage, keys)


@pytest.fixture
def base_settings():
    """Scenario A: 5000 net, 40h/week, 4.33 weeks/month."""
    return normalize_settings({
        "netMonthlyIncome": 5000,
        "weeklyWorkingHours": 40,
        "weeksPerMonth": 4.33,
    })
