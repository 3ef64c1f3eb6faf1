from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from budgetbuddy.errors import PersistenceFailure
from budgetbuddy.services import budgeting, expenses, savings
from budgetbuddy.services.dashboard import load_dashboard

TODAY = date(2026, 3, 21)


def _load(app_context, user_id, **overrides):
    repos = {
        "expense_repo": app_context.expense_repo,
        "budget_repo": app_context.budget_repo,
        "goal_repo": app_context.goal_repo,
    }
    repos.update(overrides)
    return load_dashboard(user_id=user_id, today=TODAY, **repos)


def test_dashboard_aggregates_one_users_records(app_context, user, other_user):
    for amount, category, day in [
        ("50", "food", date(2026, 3, 3)),
        ("30.25", "travel", date(2026, 3, 20)),
        ("500", "rent", date(2026, 2, 27)),
    ]:
        expenses.add_expense(
            app_context.expense_repo, amount=amount, category=category, spent_on=day, user_id=user.id
        )
    expenses.add_expense(
        app_context.expense_repo, amount=999, category="food", spent_on=TODAY, user_id=other_user.id
    )
    budgeting.create_budget(app_context.budget_repo, category="food", limit_amount=100, user_id=user.id)
    budgeting.create_budget(
        app_context.budget_repo, category="travel", limit_amount="250.50", user_id=user.id
    )
    laptop = savings.create_goal(app_context.goal_repo, title="Laptop", target_amount=1000, user_id=user.id)
    savings.deposit(app_context.goal_repo, laptop.id, 400, user_id=user.id)
    bike = savings.create_goal(app_context.goal_repo, title="Bike", target_amount=200, user_id=user.id)
    savings.deposit(app_context.goal_repo, bike.id, 50, user_id=user.id)

    view = _load(app_context, user.id)

    assert view.period_start == date(2026, 3, 1)
    assert view.summary.total_monthly_spend == Decimal("80.25")
    assert view.summary.total_monthly_budget == Decimal("350.50")
    assert view.summary.average_savings_progress_percentage == Decimal("32.5")
    assert [e.amount for e in view.summary.recent_expenses] == [Decimal("30.25"), Decimal("50.00")]
    assert {s.budget.category.value: s.spent for s in view.budget_statuses} == {
        "food": Decimal("50.00"),
        "travel": Decimal("30.25"),
    }


def test_dashboard_for_new_user_is_empty(app_context, user):
    view = _load(app_context, user.id)

    assert view.summary.total_monthly_spend == 0
    assert view.summary.total_monthly_budget == 0
    assert view.summary.average_savings_progress_percentage == 0
    assert view.summary.recent_expenses == []
    assert view.budget_statuses == []


def test_failed_read_propagates(app_context, user):
    class _BrokenGoals:
        def list_all(self, *, user_id):
            raise PersistenceFailure("savings_goal read failed")

    with pytest.raises(PersistenceFailure, match="savings_goal read failed"):
        _load(app_context, user.id, goal_repo=_BrokenGoals())
