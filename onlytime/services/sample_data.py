"""
Sample Data Generator

Fills the store with realistic expenses for demos and workshops. Each
template has an average monthly frequency; the actual count varies by
±20% per month, days and titles are random and amounts are rounded to
0.05.
"""

import random
from dataclasses import dataclass
from datetime import date
from typing import Optional

import structlog

from onlytime.models.expense import NewExpense
from onlytime.numeric.dates import days_in_month, iso_date, month_key_from_date, shift_month
from onlytime.numeric.money import round_half_up
from onlytime.services.expenses import ExpenseStore


logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ExpenseTemplate:
    titles: tuple[str, ...]
    category_id: str
    min_amount: float
    max_amount: float
    frequency: float  # average occurrences per month


SAMPLE_TEMPLATES: tuple[ExpenseTemplate, ...] = (
    # Food
    ExpenseTemplate(("Coffee", "Espresso", "Cappuccino", "Latte Macchiato"), "Food", 3.5, 6.5, 15),
    ExpenseTemplate(("Lunch", "Canteen", "Sandwich", "Snack"), "Food", 12, 25, 20),
    ExpenseTemplate(("Dinner", "Restaurant", "Take-Away", "Pizza"), "Food", 20, 60, 8),
    ExpenseTemplate(("Supermarket", "Groceries", "Migros", "Coop"), "Food", 30, 150, 4),
    # Transport
    ExpenseTemplate(("Public transport", "Tram", "Bus", "Train"), "Transport", 3, 8, 18),
    ExpenseTemplate(("Petrol station", "Petrol", "Diesel"), "Transport", 50, 100, 2),
    ExpenseTemplate(("Parking fee", "Car park", "Parking meter"), "Transport", 2, 15, 4),
    # Shopping
    ExpenseTemplate(("Clothes", "H&M", "Zara", "Shopping"), "Shopping", 30, 150, 2),
    ExpenseTemplate(("Drugstore", "Pharmacy items", "Toiletries"), "Shopping", 10, 50, 3),
    ExpenseTemplate(("Amazon", "Online shop", "Galaxus", "Digitec"), "Shopping", 15, 200, 3),
    # Housing
    ExpenseTemplate(("Hardware store", "Household", "IKEA", "Furniture"), "Housing", 20, 300, 1),
    ExpenseTemplate(("Electricity", "Electricity bill"), "Housing", 50, 120, 0.25),
    # Leisure
    ExpenseTemplate(("Cinema", "Film", "Movie"), "Leisure", 15, 25, 2),
    ExpenseTemplate(("Bar", "Night out", "Club", "Drinks"), "Leisure", 30, 100, 3),
    ExpenseTemplate(("Sport", "Gym", "Yoga", "Swimming pool"), "Leisure", 10, 80, 4),
    ExpenseTemplate(("Book", "Bookshop", "eBook"), "Leisure", 15, 40, 1),
    ExpenseTemplate(("Concert", "Event", "Theatre", "Museum"), "Leisure", 30, 120, 1),
    # Subscriptions
    ExpenseTemplate(("Netflix", "Spotify", "Disney+", "YouTube Premium"), "Subscriptions", 9.9, 19.9, 1),
    ExpenseTemplate(("Mobile plan", "Internet", "Phone"), "Subscriptions", 30, 80, 1),
    # Other
    ExpenseTemplate(("Gift", "Birthday present", "Present"), "Other", 20, 100, 1),
    ExpenseTemplate(("Doctor", "Pharmacy", "Medication", "Dentist"), "Other", 30, 200, 0.5),
)


def _round_to_five_cents(amount: float) -> float:
    return round_half_up(amount * 20) / 20


def generate_sample_data(
    store: ExpenseStore,
    months: int,
    now: date,
    rng: Optional[random.Random] = None,
    templates: tuple[ExpenseTemplate, ...] = SAMPLE_TEMPLATES,
) -> int:
    """
    Add random expenses to now's month and the months - 1 before it.

    Args:
        store: Where the expenses are recorded
        months: Number of months to fill, counting back from now
        now: Reference date
        rng: Random source; pass a seeded one for reproducible data

    Returns:
        Number of expenses created
    """
    rng = rng or random.Random()
    current_month = date(now.year, now.month, 1)
    created = 0

    for offset in range(max(0, months)):
        month_start = shift_month(current_month, -offset)
        month_key = month_key_from_date(month_start)
        dim = days_in_month(month_start)

        for template in templates:
            variation = rng.random() * 0.4 - 0.2
            count = max(0, round_half_up(template.frequency * (1 + variation)))

            for _ in range(count):
                day = rng.randint(1, dim)
                amount = template.min_amount + rng.random() * (template.max_amount - template.min_amount)
                store.add(
                    month_key,
                    NewExpense(
                        date=iso_date(month_start.replace(day=day)),
                        title=rng.choice(template.titles),
                        amount=_round_to_five_cents(amount),
                        category_id=template.category_id,
                    ),
                    notify=False,
                )
                created += 1

    logger.info("sample_data_generated", months=months, expenses=created)
    return created
