"""Savings goal use-cases."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from ..domain.repositories import SavingsGoalRepository
from ..errors import InvalidInput, NotFound
from ..logging_config import get_logger
from ..models.savings_goal import SavingsGoal
from ..money import parse_positive_amount
from .goal_ledger import GoalProgress, apply_deposit, goal_progress

logger = get_logger(__name__)


def create_goal(
    repo: SavingsGoalRepository,
    *,
    title: str,
    target_amount: object,
    target_date: Optional[date] = None,
    user_id: int,
) -> SavingsGoal:
    """Create a goal starting at zero."""

    title = (title or "").strip()
    if not title:
        raise InvalidInput("title is required")
    if target_date is not None and not isinstance(target_date, date):
        raise InvalidInput("target_date must be a calendar date")
    goal = SavingsGoal(
        title=title,
        target_amount=parse_positive_amount(target_amount, field="target_amount"),
        current_amount=Decimal("0.00"),
        target_date=target_date,
        completed=False,
    )
    saved = repo.insert(goal, user_id=user_id)
    logger.info(f"Savings goal created: {saved.id} ({saved.title})")
    return saved


def deposit(
    repo: SavingsGoalRepository, goal_id: int, amount: object, *, user_id: int
) -> SavingsGoal:
    """Add money to a goal.

    Validation runs through the ledger on the current row, then the store
    applies the increment atomically so concurrent deposits are never lost.
    Not retried on failure: a blind retry could count the deposit twice.
    """

    parsed = parse_positive_amount(amount)
    goal = repo.get(goal_id, user_id=user_id)
    if goal is None:
        raise NotFound(f"savings_goal {goal_id} not found")
    apply_deposit(goal, parsed)
    updated = repo.deposit_atomically(goal_id, parsed, user_id=user_id)
    logger.info(
        f"Deposit of {parsed} into goal {goal_id}",
        extra={"current_amount": str(updated.current_amount), "completed": updated.completed},
    )
    return updated


def delete_goal(repo: SavingsGoalRepository, goal_id: int, *, user_id: int) -> None:
    """Delete a goal. Nothing else changes."""

    repo.delete(goal_id, user_id=user_id)
    logger.info(f"Savings goal deleted: {goal_id}")


def list_goals_with_progress(repo: SavingsGoalRepository, *, user_id: int) -> list[GoalProgress]:
    """All goals, newest first, with their progress."""

    return [goal_progress(goal) for goal in repo.list_all(user_id=user_id)]


__all__ = ["create_goal", "delete_goal", "deposit", "list_goals_with_progress"]
