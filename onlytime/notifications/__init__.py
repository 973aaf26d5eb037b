"""Notification channel and logging setup."""

from onlytime.notifications.channel import (
    NotificationChannel,
    configure_log_level,
)

__all__ = ["NotificationChannel", "configure_log_level"]
