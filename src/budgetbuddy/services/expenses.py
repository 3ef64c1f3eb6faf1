"""Expense recording helpers."""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..constants.categories import parse_category
from ..domain.repositories import ExpenseRepository
from ..errors import InvalidInput
from ..logging_config import get_logger
from ..models.expense import Expense
from ..money import month_start, parse_positive_amount

logger = get_logger(__name__)


def add_expense(
    repo: ExpenseRepository,
    *,
    amount: object,
    category: object,
    spent_on: Optional[date] = None,
    description: Optional[str] = None,
    user_id: int,
) -> Expense:
    """Validate form input and record the expense.

    ``spent_on`` defaults to today. Blank descriptions are stored as ``None``.
    """

    parsed_amount = parse_positive_amount(amount)
    parsed_category = parse_category(category)
    if spent_on is not None and not isinstance(spent_on, date):
        raise InvalidInput("date must be a calendar date")
    note = (description or "").strip() or None

    expense = Expense(
        amount=parsed_amount,
        category=parsed_category,
        description=note,
        date=spent_on or date.today(),
    )
    saved = repo.insert(expense, user_id=user_id)
    logger.info(
        f"Expense recorded: {saved.id}",
        extra={"category": parsed_category.value, "amount": str(parsed_amount)},
    )
    return saved


def delete_expense(repo: ExpenseRepository, expense_id: int, *, user_id: int) -> None:
    """Remove an expense. Budgets and goals are not touched."""

    repo.delete(expense_id, user_id=user_id)
    logger.info(f"Expense deleted: {expense_id}")


def monthly_expenses(
    repo: ExpenseRepository, *, user_id: int, today: Optional[date] = None
) -> list[Expense]:
    """Expenses of the current month, latest first."""

    return repo.list_since(month_start(today), user_id=user_id)


__all__ = ["add_expense", "delete_expense", "monthly_expenses"]
