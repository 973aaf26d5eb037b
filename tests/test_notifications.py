"""
Tests for notification models and the NotificationChannel.
"""

import pytest

from onlytime.models.notification import (
    Notification,
    NotificationBuilder,
    NotificationKind,
    NotificationType,
)
from onlytime.notifications import NotificationChannel


class TestNotificationBuilder:
    """Tests for the builder helpers."""

    def test_budget_exceeded(self):
        note = NotificationBuilder.budget_exceeded("Food", 120.0, 120.0, 100.0)
        assert note.notification_type == NotificationType.BUDGET_EXCEEDED
        assert note.kind == NotificationKind.ERROR
        assert note.message == "Budget for Food exceeded (120%)"
        assert note.duration_ms == 5000

    def test_import_without_rows_is_a_warning(self):
        assert NotificationBuilder.expenses_imported(0, 4).kind == NotificationKind.WARNING
        assert NotificationBuilder.expenses_imported(2, 0).kind == NotificationKind.SUCCESS

    def test_untitled_expense(self):
        assert NotificationBuilder.expense_added("", 5.0, "2024-01").message == "Expense added: untitled"

    def test_log_dict(self):
        note = NotificationBuilder.data_cleared(3)
        log = note.to_log_dict()
        assert log["notification_type"] == "data_cleared"
        assert log["details"] == {"removed_keys": 3}
        assert log["notification_id"] == str(note.notification_id)


class TestNotificationChannel:
    """Tests for publish / subscribe."""

    def test_delivers_in_subscription_order(self):
        channel = NotificationChannel()
        seen = []
        channel.subscribe(lambda n: seen.append(("first", n.message)))
        channel.subscribe(lambda n: seen.append(("second", n.message)))

        delivered = channel.publish(NotificationBuilder.data_cleared(1))

        assert delivered == 2
        assert seen == [("first", "All data deleted"), ("second", "All data deleted")]

    def test_unsubscribe(self):
        channel = NotificationChannel()
        seen: list[Notification] = []
        unsubscribe = channel.subscribe(seen.append)
        unsubscribe()
        unsubscribe()

        assert channel.subscriber_count == 0
        assert channel.publish(NotificationBuilder.data_cleared(1)) == 0
        assert seen == []

    def test_failing_subscriber_is_isolated(self):
        """One broken subscriber doesn't stop the others or the caller."""
        channel = NotificationChannel()
        seen: list[Notification] = []

        def broken(_notification):
            raise RuntimeError("boom")

        channel.subscribe(broken)
        channel.subscribe(seen.append)

        assert channel.publish(NotificationBuilder.data_cleared(1)) == 1
        assert len(seen) == 1

    def test_publish_without_subscribers(self):
        assert NotificationChannel().publish(NotificationBuilder.expenses_imported(1, 0)) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
