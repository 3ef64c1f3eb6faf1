"""Budgeting domain services."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from ..constants.categories import BudgetPeriod, ExpenseCategory, parse_category
from ..domain.repositories import BudgetRepository, ExpenseRepository
from ..logging_config import get_logger
from ..models.budget import Budget
from ..money import month_start, parse_positive_amount
from .aggregation import BudgetStatus, compute_budget_statuses, spend_by_category

logger = get_logger(__name__)


def create_budget(
    repo: BudgetRepository,
    *,
    category: object,
    limit_amount: object,
    user_id: int,
) -> Budget:
    """Create a monthly budget.

    A second budget for the same category raises ``ConstraintViolation``.
    """

    budget = Budget(
        category=parse_category(category),
        limit_amount=parse_positive_amount(limit_amount, field="limit_amount"),
        period=BudgetPeriod.MONTHLY,
    )
    saved = repo.insert(budget, user_id=user_id)
    logger.info(f"Budget created: {saved.id} ({saved.category.value})")
    return saved


def update_budget_limit(
    repo: BudgetRepository, budget_id: int, *, limit_amount: object, user_id: int
) -> Budget:
    """Change the monthly limit of an existing budget."""

    new_limit = parse_positive_amount(limit_amount, field="limit_amount")
    updated = repo.update(budget_id, {"limit_amount": new_limit}, user_id=user_id)
    logger.info(f"Budget {budget_id} limit set to {new_limit}")
    return updated


def delete_budget(repo: BudgetRepository, budget_id: int, *, user_id: int) -> None:
    """Delete a budget. Past expenses are unaffected."""

    repo.delete(budget_id, user_id=user_id)
    logger.info(f"Budget deleted: {budget_id}")


def load_budget_statuses(
    budget_repo: BudgetRepository,
    expense_repo: ExpenseRepository,
    *,
    user_id: int,
    today: Optional[date] = None,
) -> list[BudgetStatus]:
    """Fetch this month's budgets and expenses and compute spend vs. limit."""

    period_start = month_start(today)
    budgets = budget_repo.list_monthly(user_id=user_id)
    expenses = expense_repo.list_since(period_start, user_id=user_id)
    return compute_budget_statuses(budgets, expenses, period_start)


def monthly_spend_by_category(
    expense_repo: ExpenseRepository, *, user_id: int, today: Optional[date] = None
) -> dict[ExpenseCategory, Decimal]:
    """This month's spend per category, largest first, budgeted or not."""

    period_start = month_start(today)
    expenses = expense_repo.list_since(period_start, user_id=user_id)
    return spend_by_category(expenses, period_start)


__all__ = [
    "create_budget",
    "delete_budget",
    "load_budget_statuses",
    "monthly_spend_by_category",
    "update_budget_limit",
]
