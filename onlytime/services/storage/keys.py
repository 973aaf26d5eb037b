"""
Persisted key layout.

    onlytime:v1:settings              -> Settings record
    onlytime:v1:expenses:YYYY-MM      -> list of Expense records
"""

from dataclasses import dataclass

DEFAULT_KEY_PREFIX = "onlytime:v1"
DEFAULT_CLEAR_PREFIX = "onlytime:"


@dataclass(frozen=True)
class StorageKeys:
    prefix: str = DEFAULT_KEY_PREFIX
    clear_prefix: str = DEFAULT_CLEAR_PREFIX

    @property
    def settings(self) -> str:
        return f"{self.prefix}:settings"

    def expenses(self, period_key: str) -> str:
        return f"{self.prefix}:expenses:{period_key}"
