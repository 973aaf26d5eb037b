"""
Services Package

Persistence of settings and expenses on top of the key-value storage,
plus bulk operations (expense import, sample data, clearing everything).
"""

from onlytime.services.expenses import ExpenseStore, partition_key_for, sort_newest_first
from onlytime.services.importer import ExpenseImporter, ImportResult, guess_category
from onlytime.services.maintenance import clear_all_data
from onlytime.services.sample_data import generate_sample_data
from onlytime.services.settings_store import SettingsStore

__all__ = [
    # Stores
    "ExpenseStore",
    "SettingsStore",
    "partition_key_for",
    "sort_newest_first",
    # Import
    "ExpenseImporter",
    "ImportResult",
    "guess_category",
    # Bulk
    "clear_all_data",
    "generate_sample_data",
]
