"""Dashboard load cycle: fetch one user's rows, then aggregate."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..domain.repositories import BudgetRepository, ExpenseRepository, SavingsGoalRepository
from ..logging_config import get_logger
from ..money import month_start
from .aggregation import BudgetStatus, DashboardSummary, compute_budget_statuses, compute_dashboard_summary

logger = get_logger(__name__)


@dataclass(slots=True)
class DashboardView:
    """Everything the dashboard screen renders for one load."""

    period_start: date
    summary: DashboardSummary
    budget_statuses: list[BudgetStatus]


def load_dashboard(
    *,
    expense_repo: ExpenseRepository,
    budget_repo: BudgetRepository,
    goal_repo: SavingsGoalRepository,
    user_id: int,
    today: Optional[date] = None,
) -> DashboardView:
    """Run the three independent reads concurrently and aggregate once all return.

    A failed read propagates unchanged; no partially-aggregated view is built.
    """

    period_start = month_start(today)
    with ThreadPoolExecutor(max_workers=3, thread_name_prefix="dashboard-load") as pool:
        expenses_future = pool.submit(expense_repo.list_since, period_start, user_id=user_id)
        budgets_future = pool.submit(budget_repo.list_monthly, user_id=user_id)
        goals_future = pool.submit(goal_repo.list_all, user_id=user_id)
        expenses = expenses_future.result()
        budgets = budgets_future.result()
        goals = goals_future.result()

    logger.info(
        "Dashboard data loaded",
        extra={"expenses": len(expenses), "budgets": len(budgets), "goals": len(goals)},
    )
    return DashboardView(
        period_start=period_start,
        summary=compute_dashboard_summary(expenses, budgets, goals, period_start),
        budget_statuses=compute_budget_statuses(budgets, expenses, period_start),
    )


__all__ = ["DashboardView", "load_dashboard"]
