from datetime import date
from decimal import Decimal

import pytest

from errors import ValidationError


def _add(services, user_id, amount, entry_type, on_date, category_id=None):
    return services.transactions.create(
        user_id,
        amount=Decimal(amount),
        entry_type=entry_type,
        on_date=on_date,
        category_id=category_id,
    )


class TestSummary:
    def test_income_and_expense_totals(self, services, alice):
        _add(services, alice.id, "100", "income", date(2024, 3, 1))
        _add(services, alice.id, "40", "expense", date(2024, 3, 15))

        summary = services.dashboard.summary(alice.id, "2024-03")

        assert summary.month == "2024-03"
        assert summary.income_total == Decimal("100")
        assert summary.expense_total == Decimal("40")
        assert summary.net == Decimal("60")

    def test_empty_month_is_zero(self, services, alice):
        summary = services.dashboard.summary(alice.id, "2024-03")

        assert summary.income_total == Decimal("0")
        assert summary.expense_total == Decimal("0")

    def test_month_boundaries(self, services, alice):
        _add(services, alice.id, "1", "expense", date(2024, 2, 29))
        _add(services, alice.id, "2", "expense", date(2024, 3, 1))
        _add(services, alice.id, "4", "expense", date(2024, 3, 31))
        _add(services, alice.id, "8", "expense", date(2024, 4, 1))

        summary = services.dashboard.summary(alice.id, "2024-03")

        assert summary.expense_total == Decimal("6")

    def test_cents_are_kept(self, services, alice):
        _add(services, alice.id, "0.10", "expense", date(2024, 3, 1))
        _add(services, alice.id, "0.20", "expense", date(2024, 3, 2))

        summary = services.dashboard.summary(alice.id, "2024-03")

        assert summary.expense_total == Decimal("0.3")

    def test_other_users_transactions_excluded(self, services, alice, bob):
        _add(services, alice.id, "100", "income", date(2024, 3, 1))
        _add(services, bob.id, "999", "income", date(2024, 3, 1))

        summary = services.dashboard.summary(alice.id, "2024-03")

        assert summary.income_total == Decimal("100")

    @pytest.mark.parametrize("month", ["2024-00", "2024-13", "March", "2024-3"])
    def test_invalid_month(self, services, alice, month):
        with pytest.raises(ValidationError) as exc_info:
            services.dashboard.summary(alice.id, month)

        assert exc_info.value.code == "invalid_month"


class TestCategoryBreakdown:
    def test_expenses_grouped_by_category(self, services, alice):
        food = services.categories.create(alice.id, "Food", "expense")
        rent = services.categories.create(alice.id, "Rent", "expense")
        _add(services, alice.id, "10", "expense", date(2024, 3, 1), food.id)
        _add(services, alice.id, "15", "expense", date(2024, 3, 2), food.id)
        _add(services, alice.id, "500", "expense", date(2024, 3, 3), rent.id)
        _add(services, alice.id, "7", "expense", date(2024, 3, 4))
        _add(services, alice.id, "1000", "income", date(2024, 3, 4))

        breakdown = services.dashboard.category_breakdown(alice.id, "2024-03")

        assert [(b.category_id, b.category_name, b.total) for b in breakdown] == [
            (rent.id, "Rent", Decimal("500")),
            (food.id, "Food", Decimal("25")),
            (None, None, Decimal("7")),
        ]

    def test_other_months_excluded(self, services, alice):
        _add(services, alice.id, "10", "expense", date(2024, 4, 1))

        assert services.dashboard.category_breakdown(alice.id, "2024-03") == []


class TestBudgetStatus:
    def test_category_and_global_budgets(self, services, alice):
        food = services.categories.create(alice.id, "Food", "expense")
        food_budget = services.budgets.create(alice.id, food.id, "2024-03", Decimal("50"))
        global_budget = services.budgets.create(alice.id, None, "2024-03", Decimal("100"))
        _add(services, alice.id, "60", "expense", date(2024, 3, 1), food.id)
        _add(services, alice.id, "20", "expense", date(2024, 3, 2))
        _add(services, alice.id, "300", "income", date(2024, 3, 2))

        statuses = services.dashboard.budget_status(alice.id, "2024-03")

        assert [s.budget_id for s in statuses] == [food_budget.id, global_budget.id]
        food_status, global_status = statuses
        assert food_status.spent == Decimal("60")
        assert food_status.remaining == Decimal("-10")
        assert food_status.to_dict()["over_limit"] is True
        assert global_status.spent == Decimal("80")
        assert global_status.remaining == Decimal("20")
        assert global_status.to_dict()["over_limit"] is False

    def test_only_budgets_of_the_month(self, services, alice):
        services.budgets.create(alice.id, None, "2024-04", Decimal("100"))

        assert services.dashboard.budget_status(alice.id, "2024-03") == []

    def test_other_users_budgets_excluded(self, services, alice, bob):
        services.budgets.create(bob.id, None, "2024-03", Decimal("100"))

        assert services.dashboard.budget_status(alice.id, "2024-03") == []
