"""
Tests for budget threshold detection.
"""

import pytest

from onlytime.analytics import budget_warnings, evaluate_budgets, month_budget_statuses
from onlytime.models.expense import NewExpense
from onlytime.models.notification import NotificationKind, NotificationType
from onlytime.wage import normalize_settings


@pytest.fixture
def settings():
    return normalize_settings({
        "netMonthlyIncome": 5000,
        "customCategories": [{"id": "pets", "name": "Pets"}],
        "categoryBudgets": [
            {"categoryId": "Food", "monthlyBudgetAmount": 100},
            {"categoryId": "Transport", "monthlyBudgetHours": 2},
            {"categoryId": "pets", "monthlyBudgetAmount": 50},
            {"categoryId": "ghost", "monthlyBudgetAmount": 10},
        ],
    })


class TestEvaluateBudgets:
    """Tests for per-category budget status."""

    def test_spent_equal_to_budget_is_exceeded(self, settings):
        """Exactly 100% counts as exceeded (and at risk)."""
        statuses = evaluate_budgets(settings, {"Food": 100.0}, rate=25.0)
        food = next(s for s in statuses if s.category_id == "Food")
        assert food.percentage == 100.0
        assert food.is_exceeded
        assert food.is_at_risk

    def test_just_below_warning_is_neither(self, settings):
        statuses = evaluate_budgets(settings, {"Food": 79.9}, rate=25.0)
        food = next(s for s in statuses if s.category_id == "Food")
        assert not food.is_at_risk
        assert not food.is_exceeded

    def test_warning_threshold_inclusive(self, settings):
        statuses = evaluate_budgets(settings, {"Food": 80.0}, rate=25.0)
        food = next(s for s in statuses if s.category_id == "Food")
        assert food.is_at_risk
        assert not food.is_exceeded

    def test_hours_budget_uses_rate(self, settings):
        """2 hours at 25/h is a 50 budget."""
        statuses = evaluate_budgets(settings, {"Transport": 25.0}, rate=25.0)
        transport = next(s for s in statuses if s.category_id == "Transport")
        assert transport.budget_amount == 50.0
        assert transport.percentage == 50.0
        assert transport.remaining == 25.0

    def test_hours_budget_without_rate_never_warns(self, settings):
        statuses = evaluate_budgets(settings, {"Transport": 25.0}, rate=0.0)
        transport = next(s for s in statuses if s.category_id == "Transport")
        assert transport.budget_amount == 0.0
        assert transport.percentage == 0.0

    def test_unknown_category_without_spending(self, settings):
        """A budget for a category nobody uses is simply at 0%."""
        statuses = evaluate_budgets(settings, {}, rate=25.0)
        ghost = next(s for s in statuses if s.category_id == "ghost")
        assert ghost.percentage == 0.0
        assert not ghost.is_at_risk

    def test_sorted_by_percentage(self, settings):
        statuses = evaluate_budgets(settings, {"Food": 50.0, "pets": 45.0}, rate=25.0)
        assert [s.category_id for s in statuses][:2] == ["pets", "Food"]

    def test_custom_thresholds(self, settings):
        statuses = evaluate_budgets(
            settings, {"Food": 60.0}, rate=25.0, warning_percent=50.0, exceeded_percent=60.0
        )
        food = next(s for s in statuses if s.category_id == "Food")
        assert food.is_exceeded


class TestBudgetWarnings:
    """Tests for warnings and their notifications."""

    def test_only_at_risk_returned(self, settings):
        warnings = budget_warnings(settings, {"Food": 120.0, "pets": 10.0}, rate=25.0)
        assert [w.category_id for w in warnings] == ["Food"]

    def test_notifications(self, settings, channel, received):
        """Exceeded and at-risk budgets publish different notifications."""
        budget_warnings(settings, {"Food": 120.0, "pets": 42.0}, rate=25.0, notifications=channel)

        assert [n.notification_type for n in received] == [
            NotificationType.BUDGET_EXCEEDED,
            NotificationType.BUDGET_AT_RISK,
        ]
        assert received[0].kind == NotificationKind.ERROR
        assert "Food" in received[0].message
        assert received[1].details["category"] == "Pets"

    def test_no_channel_no_error(self, settings):
        assert budget_warnings(settings, {"Food": 500.0}, rate=25.0, notifications=None)


class TestMonthBudgetStatuses:
    """Tests for budgets against stored expenses."""

    def test_uses_current_month_only(self, settings, expense_store, reference_date):
        expense_store.add("2024-02", NewExpense(date="2024-02-10", amount=500, category_id="Food"))
        expense_store.add("2024-03", NewExpense(date="2024-03-10", amount=90, category_id="Food"))
        statuses = month_budget_statuses(settings, reference_date, expense_store)
        food = next(s for s in statuses if s.category_id == "Food")
        assert food.spent == 90.0
        assert food.is_at_risk
        assert not food.is_exceeded


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
