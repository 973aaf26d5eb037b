"""
Notification Models

Short user-facing messages ("Budget for Food exceeded", "42 expenses
imported"). They travel through an explicit NotificationChannel that callers
pass in; there is no global listener list.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class NotificationKind(str, Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class NotificationType(str, Enum):
    """What happened. Presentation picks wording/icons from this."""
    EXPENSE_ADDED = "expense_added"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSES_IMPORTED = "expenses_imported"
    BUDGET_AT_RISK = "budget_at_risk"
    BUDGET_EXCEEDED = "budget_exceeded"
    DATA_CLEARED = "data_cleared"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Notification(BaseModel):
    """A single transient message for the user."""

    notification_id: UUID = Field(default_factory=uuid4)
    created_at: datetime = Field(default_factory=_utcnow)

    notification_type: NotificationType
    kind: NotificationKind = NotificationKind.INFO
    message: str = Field(..., max_length=500)
    details: dict[str, Any] = Field(default_factory=dict)

    duration_ms: int = Field(
        default=3000,
        ge=0,
        description="How long presentation should show it",
    )
    action_label: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Flat dict for structured logging."""
        return {
            "notification_id": str(self.notification_id),
            "created_at": self.created_at.isoformat(),
            "notification_type": self.notification_type.value,
            "kind": self.kind.value,
            "message": self.message,
            "details": self.details,
        }


class NotificationBuilder:
    """
    Helper class to build notifications with common patterns.

    Usage:
        note = NotificationBuilder.budget_exceeded("Food", 120.0, 450.0, 540.0)
    """

    @staticmethod
    def expense_added(title: str, amount: float, period_key: str) -> Notification:
        return Notification(
            notification_type=NotificationType.EXPENSE_ADDED,
            kind=NotificationKind.SUCCESS,
            message=f"Expense added: {title or 'untitled'}",
            details={"amount": amount, "period_key": period_key},
        )

    @staticmethod
    def expense_deleted(expense_id: str, period_key: str) -> Notification:
        return Notification(
            notification_type=NotificationType.EXPENSE_DELETED,
            kind=NotificationKind.INFO,
            message="Expense deleted",
            details={"expense_id": expense_id, "period_key": period_key},
        )

    @staticmethod
    def expenses_imported(imported: int, skipped: int) -> Notification:
        return Notification(
            notification_type=NotificationType.EXPENSES_IMPORTED,
            kind=NotificationKind.SUCCESS if imported else NotificationKind.WARNING,
            message=f"{imported} expense(s) imported, {skipped} skipped",
            details={"imported": imported, "skipped": skipped},
        )

    @staticmethod
    def budget_at_risk(
        category_name: str,
        percentage: float,
        spent: float,
        budget_amount: float,
    ) -> Notification:
        return Notification(
            notification_type=NotificationType.BUDGET_AT_RISK,
            kind=NotificationKind.WARNING,
            message=f"Budget for {category_name} at {percentage:.0f}%",
            details={
                "category": category_name,
                "percentage": percentage,
                "spent": spent,
                "budget_amount": budget_amount,
            },
        )

    @staticmethod
    def budget_exceeded(
        category_name: str,
        percentage: float,
        spent: float,
        budget_amount: float,
    ) -> Notification:
        return Notification(
            notification_type=NotificationType.BUDGET_EXCEEDED,
            kind=NotificationKind.ERROR,
            message=f"Budget for {category_name} exceeded ({percentage:.0f}%)",
            details={
                "category": category_name,
                "percentage": percentage,
                "spent": spent,
                "budget_amount": budget_amount,
            },
            duration_ms=5000,
        )

    @staticmethod
    def data_cleared(removed_keys: int) -> Notification:
        return Notification(
            notification_type=NotificationType.DATA_CLEARED,
            kind=NotificationKind.INFO,
            message="All data deleted",
            details={"removed_keys": removed_keys},
        )
