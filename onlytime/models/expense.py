"""
Expense Models

Expenses are stored per calendar month. The month is always the one implied
by the expense's own date ("2026-01-15" lives in "2026-01").
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


DEFAULT_CATEGORY_ID = "Other"

# Built-in category ids and their emoji. Custom categories live in Settings;
# any other id is still valid and displayed as-is.
BUILTIN_CATEGORIES: dict[str, str] = {
    "Food": "🍕",
    "Transport": "🚲",
    "Shopping": "🛒",
    "Housing": "🏠",
    "Leisure": "🎮",
    "Subscriptions": "📅",
    DEFAULT_CATEGORY_ID: "📁",
}


class NewExpense(BaseModel):
    """
    An expense as entered by the user, before it has an id.

    The caller (form, CSV import) has already validated the values.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    date: str = Field(
        ...,
        min_length=7,
        description="YYYY-MM-DD",
    )
    amount: float = Field(..., ge=0)
    title: str = ""
    category_id: str = DEFAULT_CATEGORY_ID


class Expense(NewExpense):
    """
    A recorded expense.

    Immutable after creation; the only other operation is delete.
    Stored strings are kept exactly as persisted.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=False,
    )

    id: str = Field(..., min_length=1)
    created_at: int = Field(
        ...,
        description="Creation time in milliseconds since the epoch",
    )

    @property
    def period_key(self) -> str:
        return self.date[:7]

    @property
    def day(self) -> int:
        """Day of month, 1 when the date has no readable day part."""
        try:
            day = int(self.date[8:10])
        except ValueError:
            return 1
        return day if day >= 1 else 1

    def to_storage_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
