"""Load and save the Settings record."""

from typing import Any, Optional

import structlog
from pydantic.alias_generators import to_camel

from onlytime.models.settings import Settings
from onlytime.numeric.money import Currency
from onlytime.services.storage import KeyValueStorageInterface, StorageKeys
from onlytime.wage.normalize import normalize_settings


logger = structlog.get_logger(__name__)


class SettingsStore:
    """
    Persistence for the singleton Settings record.

    Whatever is stored is normalized on the way out, so a corrupt or
    outdated record still loads as valid Settings.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        keys: Optional[StorageKeys] = None,
        default_currency: Currency = Currency.CHF,
    ):
        self._storage = storage
        self._keys = keys or StorageKeys()
        self._default_currency = Currency(default_currency)

    def load(self) -> Settings:
        """Stored settings, or the defaults (in the default currency) if none."""
        raw = self._storage.get(self._keys.settings)
        if raw is None:
            return normalize_settings({"currency": self._default_currency.value})
        return normalize_settings(raw)

    def save(self, settings: Settings) -> Settings:
        """Persist settings (normalized first) and return what was stored."""
        normalized = normalize_settings(settings)
        self._storage.set(self._keys.settings, normalized.to_storage_dict())
        logger.info("settings_saved", currency=normalized.currency.value)
        return normalized

    def update(self, **changes: Any) -> Settings:
        """
        Apply raw field edits (e.g. form strings) on top of the stored record.

        Keys may be snake_case or camelCase.
        """
        current = self.load().to_storage_dict()
        current.update({
            to_camel(key) if "_" in key else key: value
            for key, value in changes.items()
        })
        return self.save(normalize_settings(current))
