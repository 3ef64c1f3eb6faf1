"""Savings goal state transitions.

A goal is Active until a deposit brings ``current_amount`` to or past
``target_amount``; it is then Completed for good. There is no withdrawal, and
deposits into a completed goal are rejected with ``AlreadyCompleted``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..errors import AlreadyCompleted, InvalidAmount
from ..models.savings_goal import SavingsGoal
from ..money import MAX_AMOUNT, parse_positive_amount, to_money
from .aggregation import cap_for_display, goal_percentage


@dataclass(slots=True)
class GoalProgress:
    """Goal plus its uncapped and display-capped progress."""

    goal: SavingsGoal
    percentage: Decimal

    @property
    def display_percentage(self) -> Decimal:
        return cap_for_display(self.percentage)

    @property
    def remaining(self) -> Decimal:
        return max(Decimal("0.00"), to_money(self.goal.target_amount) - to_money(self.goal.current_amount))


def is_completed(current_amount: Decimal, target_amount: Decimal) -> bool:
    return to_money(current_amount) >= to_money(target_amount)


def apply_deposit(goal: SavingsGoal, amount: object) -> SavingsGoal:
    """Return a copy of ``goal`` with ``amount`` added.

    ``goal`` itself is left untouched. Overfunding is kept as-is. The caller
    persists the result; applying the same deposit twice counts it twice.
    """

    deposit = parse_positive_amount(amount)
    if goal.completed:
        raise AlreadyCompleted(f"Savings goal {goal.title!r} is already completed")

    new_current = to_money(goal.current_amount) + deposit
    if new_current > MAX_AMOUNT:
        raise InvalidAmount(f"Savings goal {goal.title!r} cannot hold more than {MAX_AMOUNT}")
    return SavingsGoal(
        id=goal.id,
        user_id=goal.user_id,
        title=goal.title,
        target_amount=goal.target_amount,
        current_amount=new_current,
        target_date=goal.target_date,
        completed=is_completed(new_current, goal.target_amount),
        created_at=goal.created_at,
    )


def compute_goal_progress(goal: SavingsGoal) -> Decimal:
    """``current / target * 100``, not capped at 100."""

    return goal_percentage(goal)


def goal_progress(goal: SavingsGoal) -> GoalProgress:
    return GoalProgress(goal=goal, percentage=compute_goal_progress(goal))


__all__ = [
    "GoalProgress",
    "apply_deposit",
    "compute_goal_progress",
    "goal_progress",
    "is_completed",
]
