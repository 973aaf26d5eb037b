"""Destructive maintenance operations."""

from typing import Optional

import structlog

from onlytime.models.notification import NotificationBuilder
from onlytime.notifications.channel import NotificationChannel
from onlytime.services.storage import KeyValueStorageInterface, StorageKeys


logger = structlog.get_logger(__name__)


def clear_all_data(
    storage: KeyValueStorageInterface,
    keys: Optional[StorageKeys] = None,
    notifications: Optional[NotificationChannel] = None,
) -> int:
    """
    Remove every key in the app namespace (settings and all expenses,
    including keys of older schema versions). Keys of other apps sharing
    the storage are untouched.

    Returns:
        Number of keys removed
    """
    keys = keys or StorageKeys()
    removed = storage.clear_by_prefix(keys.clear_prefix)

    logger.warning("data_cleared", prefix=keys.clear_prefix, removed_keys=removed)
    if notifications is not None:
        notifications.publish(NotificationBuilder.data_cleared(removed))
    return removed
