"""Tests for the SQLModel record stores."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from budgetbuddy.constants.categories import ExpenseCategory
from budgetbuddy.errors import (
    AlreadyCompleted,
    ConstraintViolation,
    InvalidInput,
    NotFound,
    PersistenceFailure,
)
from budgetbuddy.infra.repositories import SQLModelExpenseRepository
from budgetbuddy.models import Budget, Expense, SavingsGoal


def _expense(amount, category=ExpenseCategory.FOOD, on=date(2026, 3, 3), description=None):
    return Expense(amount=Decimal(str(amount)), category=category, date=on, description=description)


def test_expense_insert_and_get(expense_repo, user):
    """Inserted rows come back with an id and exact amount."""
    created = expense_repo.insert(_expense("12.34", description="lunch"), user_id=user.id)

    assert created.id is not None
    assert created.user_id == user.id

    fetched = expense_repo.get(created.id, user_id=user.id)
    assert fetched is not None
    assert fetched.amount == Decimal("12.34")
    assert fetched.category == ExpenseCategory.FOOD
    assert fetched.description == "lunch"
    assert fetched.date == date(2026, 3, 3)


def test_amounts_survive_storage_exactly(expense_repo, user):
    for _ in range(10):
        expense_repo.insert(_expense("0.10"), user_id=user.id)

    rows = expense_repo.query(user_id=user.id)

    assert sum((row.amount for row in rows), Decimal("0")) == Decimal("1.00")


def test_insert_overrides_user_id(expense_repo, user, other_user):
    record = _expense(5)
    record.user_id = other_user.id

    created = expense_repo.insert(record, user_id=user.id)

    assert created.user_id == user.id
    assert expense_repo.get(created.id, user_id=other_user.id) is None


def test_reads_are_scoped_to_owner(expense_repo, user, other_user):
    expense_repo.insert(_expense(10), user_id=user.id)
    expense_repo.insert(_expense(20), user_id=other_user.id)

    mine = expense_repo.query(user_id=user.id)
    theirs = expense_repo.query(user_id=other_user.id)

    assert [e.amount for e in mine] == [Decimal("10.00")]
    assert [e.amount for e in theirs] == [Decimal("20.00")]


def test_query_filters_order_and_limit(expense_repo, user):
    expense_repo.insert(_expense(1, ExpenseCategory.BOOKS, date(2026, 3, 1)), user_id=user.id)
    expense_repo.insert(_expense(2, ExpenseCategory.FOOD, date(2026, 3, 2)), user_id=user.id)
    expense_repo.insert(_expense(3, ExpenseCategory.BOOKS, date(2026, 3, 3)), user_id=user.id)
    expense_repo.insert(_expense(4, ExpenseCategory.BOOKS, date(2026, 3, 4)), user_id=user.id)

    books = expense_repo.query(
        user_id=user.id,
        filters={"category": ExpenseCategory.BOOKS},
        order_by=["amount"],
    )
    assert [e.amount for e in books] == [Decimal("1.00"), Decimal("3.00"), Decimal("4.00")]

    latest_two = expense_repo.query(user_id=user.id, order_by=["-date"], limit=2)
    assert [e.date for e in latest_two] == [date(2026, 3, 4), date(2026, 3, 3)]


def test_query_rejects_unknown_field(expense_repo, user):
    with pytest.raises(InvalidInput):
        expense_repo.query(user_id=user.id, filters={"colour": "red"})

    with pytest.raises(InvalidInput):
        expense_repo.query(user_id=user.id, order_by=["-colour"])


def test_list_since_is_inclusive_and_latest_first(expense_repo, user):
    early = expense_repo.insert(_expense(1, on=date(2026, 2, 28)), user_id=user.id)
    first = expense_repo.insert(_expense(2, on=date(2026, 3, 1)), user_id=user.id)
    second = expense_repo.insert(_expense(3, on=date(2026, 3, 9)), user_id=user.id)
    same_day = expense_repo.insert(_expense(4, on=date(2026, 3, 9)), user_id=user.id)

    rows = expense_repo.list_since(date(2026, 3, 1), user_id=user.id)

    assert [r.id for r in rows] == [same_day.id, second.id, first.id]
    assert early.id not in [r.id for r in rows]


def test_expenses_cannot_be_updated(expense_repo, user):
    created = expense_repo.insert(_expense(10), user_id=user.id)

    with pytest.raises(InvalidInput):
        expense_repo.update(created.id, {"amount": Decimal("11")}, user_id=user.id)

    assert expense_repo.get(created.id, user_id=user.id).amount == Decimal("10.00")


def test_delete_of_foreign_row_is_not_found(expense_repo, user, other_user):
    created = expense_repo.insert(_expense(10), user_id=user.id)

    with pytest.raises(NotFound):
        expense_repo.delete(created.id, user_id=other_user.id)

    assert expense_repo.get(created.id, user_id=user.id) is not None

    expense_repo.delete(created.id, user_id=user.id)
    assert expense_repo.get(created.id, user_id=user.id) is None

    with pytest.raises(NotFound):
        expense_repo.delete(created.id, user_id=user.id)


def test_missing_required_field_is_constraint_violation(expense_repo, user):
    record = Expense(amount=None, category=ExpenseCategory.FOOD, date=date(2026, 3, 3))

    with pytest.raises(ConstraintViolation) as excinfo:
        expense_repo.insert(record, user_id=user.id)

    assert excinfo.value.__cause__ is not None
    assert expense_repo.query(user_id=user.id) == []


def test_non_positive_amount_is_rejected_by_storage(expense_repo, user):
    with pytest.raises(ConstraintViolation):
        expense_repo.insert(_expense("0"), user_id=user.id)


def test_storage_failure_is_wrapped_with_cause():
    def broken_factory():
        raise OperationalError("SELECT 1", {}, Exception("disk I/O error"))

    repo = SQLModelExpenseRepository(broken_factory)

    with pytest.raises(PersistenceFailure) as excinfo:
        repo.query(user_id=1)

    assert isinstance(excinfo.value.__cause__, OperationalError)


class TestBudgetRepository:
    def test_list_monthly_ordered_by_category(self, budget_repo, user):
        budget_repo.insert(
            Budget(category=ExpenseCategory.TRAVEL, limit_amount=Decimal("50")), user_id=user.id
        )
        budget_repo.insert(
            Budget(category=ExpenseCategory.BOOKS, limit_amount=Decimal("80")), user_id=user.id
        )

        budgets = budget_repo.list_monthly(user_id=user.id)

        assert [b.category for b in budgets] == [ExpenseCategory.BOOKS, ExpenseCategory.TRAVEL]

    def test_duplicate_category_is_constraint_violation(self, budget_repo, user):
        budget_repo.insert(
            Budget(category=ExpenseCategory.FOOD, limit_amount=Decimal("100")), user_id=user.id
        )

        with pytest.raises(ConstraintViolation):
            budget_repo.insert(
                Budget(category=ExpenseCategory.FOOD, limit_amount=Decimal("50")), user_id=user.id
            )

    def test_same_category_for_different_users(self, budget_repo, user, other_user):
        budget_repo.insert(
            Budget(category=ExpenseCategory.FOOD, limit_amount=Decimal("100")), user_id=user.id
        )
        budget_repo.insert(
            Budget(category=ExpenseCategory.FOOD, limit_amount=Decimal("50")), user_id=other_user.id
        )

        assert len(budget_repo.list_monthly(user_id=user.id)) == 1
        assert len(budget_repo.list_monthly(user_id=other_user.id)) == 1

    def test_update_limit(self, budget_repo, user):
        created = budget_repo.insert(
            Budget(category=ExpenseCategory.RENT, limit_amount=Decimal("500")), user_id=user.id
        )

        updated = budget_repo.update(created.id, {"limit_amount": Decimal("650.50")}, user_id=user.id)

        assert updated.limit_amount == Decimal("650.50")
        assert budget_repo.get(created.id, user_id=user.id).limit_amount == Decimal("650.50")

    def test_update_rejects_owner_change(self, budget_repo, user, other_user):
        created = budget_repo.insert(
            Budget(category=ExpenseCategory.RENT, limit_amount=Decimal("500")), user_id=user.id
        )

        with pytest.raises(InvalidInput):
            budget_repo.update(created.id, {"user_id": other_user.id}, user_id=user.id)

    def test_update_of_foreign_row_is_not_found(self, budget_repo, user, other_user):
        created = budget_repo.insert(
            Budget(category=ExpenseCategory.RENT, limit_amount=Decimal("500")), user_id=user.id
        )

        with pytest.raises(NotFound):
            budget_repo.update(created.id, {"limit_amount": Decimal("1")}, user_id=other_user.id)


class TestSavingsGoalRepository:
    def _goal(self, goal_repo, user, target="1000", current="0"):
        return goal_repo.insert(
            SavingsGoal(
                title="New laptop",
                target_amount=Decimal(target),
                current_amount=Decimal(current),
            ),
            user_id=user.id,
        )

    def test_deposit_increments_in_place(self, goal_repo, user):
        goal = self._goal(goal_repo, user, current="400")

        updated = goal_repo.deposit_atomically(goal.id, Decimal("300"), user_id=user.id)

        assert updated.current_amount == Decimal("700.00")
        assert updated.completed is False

        finished = goal_repo.deposit_atomically(goal.id, Decimal("300"), user_id=user.id)

        assert finished.current_amount == Decimal("1000.00")
        assert finished.completed is True

    def test_deposit_into_completed_goal_is_rejected(self, goal_repo, user):
        goal = self._goal(goal_repo, user, target="500")
        goal_repo.deposit_atomically(goal.id, Decimal("500"), user_id=user.id)

        with pytest.raises(AlreadyCompleted):
            goal_repo.deposit_atomically(goal.id, Decimal("1"), user_id=user.id)

        assert goal_repo.get(goal.id, user_id=user.id).current_amount == Decimal("500.00")

    def test_deposit_into_foreign_goal_is_not_found(self, goal_repo, user, other_user):
        goal = self._goal(goal_repo, user)

        with pytest.raises(NotFound):
            goal_repo.deposit_atomically(goal.id, Decimal("10"), user_id=other_user.id)

        assert goal_repo.get(goal.id, user_id=user.id).current_amount == Decimal("0.00")

    def test_deposit_rejects_non_positive_amount(self, goal_repo, user):
        goal = self._goal(goal_repo, user)

        with pytest.raises(InvalidInput):
            goal_repo.deposit_atomically(goal.id, Decimal("0"), user_id=user.id)

    def test_list_active_skips_completed(self, goal_repo, user):
        done = self._goal(goal_repo, user, target="10")
        goal_repo.deposit_atomically(done.id, Decimal("10"), user_id=user.id)
        active = self._goal(goal_repo, user, target="20")

        assert [g.id for g in goal_repo.list_active(user_id=user.id)] == [active.id]
        assert {g.id for g in goal_repo.list_all(user_id=user.id)} == {done.id, active.id}


def test_list_recent_spans_periods(expense_repo, user):
    old = expense_repo.insert(_expense(1, on=date(2025, 12, 30)), user_id=user.id)
    new = expense_repo.insert(_expense(2, on=date(2026, 3, 2)), user_id=user.id)
    expense_repo.insert(_expense(3, on=date(2024, 1, 1)), user_id=user.id)

    rows = expense_repo.list_recent(user_id=user.id, limit=2)

    assert [r.id for r in rows] == [new.id, old.id]
