"""
Notification Channel

DESIGN DECISION: Notifications are published to an explicit channel object
that callers pass into the operations that report outcomes (adding
expenses, importing, budget checks). Nothing subscribes through module
globals.

The channel:
- Always logs each notification through structlog
- Delivers to subscribers in subscription order
- Never lets a failing subscriber break the caller (failure is logged)
"""

import logging
from typing import Callable

import structlog

from onlytime.models.notification import Notification, NotificationKind


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_log_level(level: str) -> None:
    """Set the stdlib level that structlog's filter_by_level honours."""
    logging.basicConfig(format="%(message)s")
    logging.getLogger("onlytime").setLevel(level)


Subscriber = Callable[[Notification], None]


class NotificationChannel:
    """
    Publish/subscribe for transient user-facing messages.

    Usage:
        channel = NotificationChannel()
        unsubscribe = channel.subscribe(show_toast)
        channel.publish(NotificationBuilder.expenses_imported(3, 0))
        unsubscribe()
    """

    def __init__(self):
        self._subscribers: list[Subscriber] = []
        self._logger = structlog.get_logger(__name__)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback.

        Returns:
            A function that removes this callback again
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def publish(self, notification: Notification) -> int:
        """
        Log a notification and deliver it to every subscriber.

        Returns:
            Number of subscribers that received it without error
        """
        log_dict = notification.to_log_dict()
        if notification.kind == NotificationKind.ERROR:
            self._logger.error("notification", **log_dict)
        elif notification.kind == NotificationKind.WARNING:
            self._logger.warning("notification", **log_dict)
        else:
            self._logger.info("notification", **log_dict)

        delivered = 0
        for callback in list(self._subscribers):
            try:
                callback(notification)
            except Exception as e:
                self._logger.error(
                    "notification_subscriber_failed",
                    error=str(e),
                    notification_id=str(notification.notification_id),
                )
                continue
            delivered += 1
        return delivered
