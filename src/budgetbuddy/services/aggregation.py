"""Pure aggregation over already-fetched records.

Nothing here performs I/O. Every function assumes its inputs belong to a
single user and raises ``InvalidInput`` when they do not.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Sequence

from ..constants.categories import BudgetPeriod, ExpenseCategory
from ..errors import InvalidInput
from ..models.budget import Budget
from ..models.expense import Expense
from ..models.savings_goal import SavingsGoal
from ..money import HUNDRED, ZERO, percentage, sum_money, to_money

NEAR_LIMIT_THRESHOLD = Decimal("80")
RECENT_EXPENSE_LIMIT = 5


class BudgetHealth(str, Enum):
    """Display classification derived from a budget percentage."""

    ON_TRACK = "on track"
    NEAR_LIMIT = "near limit"
    OVER_BUDGET = "over budget"


def classify_percentage(value: Decimal) -> BudgetHealth:
    """Over 100 is over budget; 80 up to and including 100 is near the limit."""

    if value > HUNDRED:
        return BudgetHealth.OVER_BUDGET
    # Inclusive: spending exactly 80 of a 100 limit already reads "near limit".
    if value >= NEAR_LIMIT_THRESHOLD:
        return BudgetHealth.NEAR_LIMIT
    return BudgetHealth.ON_TRACK


def cap_for_display(value: Decimal) -> Decimal:
    """Clamp a percentage into [0, 100] for progress bars."""

    return max(Decimal(0), min(value, HUNDRED))


@dataclass(slots=True)
class BudgetStatus:
    """Spend versus limit for one budget in the current period."""

    budget: Budget
    spent: Decimal
    percentage: Decimal

    @property
    def health(self) -> BudgetHealth:
        return classify_percentage(self.percentage)

    @property
    def remaining(self) -> Decimal:
        return to_money(self.budget.limit_amount) - self.spent

    @property
    def display_percentage(self) -> Decimal:
        return cap_for_display(self.percentage)


@dataclass(slots=True)
class DashboardSummary:
    """Headline numbers for the dashboard cards."""

    total_monthly_spend: Decimal
    total_monthly_budget: Decimal
    average_savings_progress_percentage: Decimal
    recent_expenses: list[Expense] = field(default_factory=list)

    @property
    def budget_utilization(self) -> Optional[Decimal]:
        """Spend as a percentage of the total budget; ``None`` without budgets."""
        if self.total_monthly_budget <= ZERO:
            return None
        return percentage(self.total_monthly_spend, self.total_monthly_budget)

    @property
    def remaining_budget(self) -> Decimal:
        return self.total_monthly_budget - self.total_monthly_spend

    @property
    def is_over_budget(self) -> bool:
        return self.total_monthly_spend > self.total_monthly_budget


def ensure_single_owner(*collections: Iterable[object]) -> None:
    """Reject inputs that mix rows from different users."""

    owners = {
        getattr(row, "user_id", None)
        for rows in collections
        for row in rows
    }
    owners.discard(None)
    if len(owners) > 1:
        raise InvalidInput("Records from more than one user cannot be aggregated together")


def in_period(expenses: Iterable[Expense], period_start: date) -> list[Expense]:
    """Expenses dated on or after ``period_start`` (inclusive)."""

    return [e for e in expenses if e.date >= period_start]


def total_spend(expenses: Iterable[Expense], period_start: date) -> Decimal:
    """Exact sum of expense amounts in the period."""

    return sum_money(e.amount for e in in_period(expenses, period_start))


def spend_by_category(
    expenses: Iterable[Expense], period_start: date
) -> dict[ExpenseCategory, Decimal]:
    """Roll up period spend per category, largest first."""

    totals: dict[ExpenseCategory, Decimal] = {}
    for expense in in_period(expenses, period_start):
        category = ExpenseCategory(expense.category)
        totals[category] = totals.get(category, ZERO) + to_money(expense.amount)
    return dict(sorted(totals.items(), key=lambda item: item[1], reverse=True))


def compute_budget_statuses(
    budgets: Sequence[Budget], expenses: Sequence[Expense], period_start: date
) -> list[BudgetStatus]:
    """Pair each budget with what was spent against it since ``period_start``.

    Result order follows ``budgets``. Duplicate budgets for a category each
    receive the full category spend.
    """

    ensure_single_owner(budgets, expenses)
    spent_by_category: dict[ExpenseCategory, Decimal] = {}
    for expense in in_period(expenses, period_start):
        category = ExpenseCategory(expense.category)
        spent_by_category[category] = spent_by_category.get(category, ZERO) + to_money(
            expense.amount
        )

    statuses: list[BudgetStatus] = []
    for budget in budgets:
        spent = spent_by_category.get(ExpenseCategory(budget.category), ZERO)
        statuses.append(
            BudgetStatus(
                budget=budget,
                spent=spent,
                percentage=percentage(spent, to_money(budget.limit_amount)),
            )
        )
    return statuses


def recent_expenses(
    expenses: Sequence[Expense], limit: int = RECENT_EXPENSE_LIMIT
) -> list[Expense]:
    """Latest expenses by date.

    Same-day ties go to the most recently created row. Unsaved rows (no id)
    are newer than any saved row; saved rows rank by higher id, unsaved rows
    by later position in ``expenses``.
    """

    def _recency(pair: tuple[int, Expense]) -> tuple:
        position, expense = pair
        if expense.id is None:
            return (expense.date, 1, position)
        return (expense.date, 0, expense.id, position)

    ranked = sorted(enumerate(expenses), key=_recency, reverse=True)
    return [expense for _, expense in ranked[:limit]]


def goal_percentage(goal: SavingsGoal) -> Decimal:
    """Uncapped progress of a goal; zero for a malformed zero target."""

    return percentage(to_money(goal.current_amount), to_money(goal.target_amount))


def average_savings_progress(goals: Iterable[SavingsGoal]) -> Decimal:
    """Mean uncapped progress over incomplete goals; zero when there are none."""

    active = [g for g in goals if not g.completed]
    if not active:
        return Decimal(0)
    return sum((goal_percentage(g) for g in active), Decimal(0)) / len(active)


def compute_dashboard_summary(
    expenses: Sequence[Expense],
    budgets: Sequence[Budget],
    goals: Sequence[SavingsGoal],
    period_start: date,
) -> DashboardSummary:
    """Compose the dashboard numbers from one user's records."""

    ensure_single_owner(expenses, budgets, goals)
    monthly = in_period(expenses, period_start)
    return DashboardSummary(
        total_monthly_spend=sum_money(e.amount for e in monthly),
        # Duplicate budgets per category are summed, not deduplicated.
        total_monthly_budget=sum_money(
            b.limit_amount for b in budgets if BudgetPeriod(b.period) is BudgetPeriod.MONTHLY
        ),
        average_savings_progress_percentage=average_savings_progress(goals),
        recent_expenses=recent_expenses(monthly),
    )


__all__ = [
    "BudgetHealth",
    "BudgetStatus",
    "DashboardSummary",
    "average_savings_progress",
    "cap_for_display",
    "classify_percentage",
    "compute_budget_statuses",
    "compute_dashboard_summary",
    "ensure_single_owner",
    "goal_percentage",
    "in_period",
    "recent_expenses",
    "spend_by_category",
    "total_spend",
]
