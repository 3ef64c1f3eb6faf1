"""SQLModel implementation of SavingsGoal repository."""

from __future__ import annotations

from decimal import Decimal
from typing import ClassVar

from sqlalchemy import false, update
from sqlmodel import SQLModel

from ...errors import AlreadyCompleted
from ...models.savings_goal import SavingsGoal
from ...money import parse_positive_amount
from .base import SQLModelRecordStore, translate_errors


class SQLModelSavingsGoalRepository(SQLModelRecordStore[SavingsGoal]):
    """SQLModel-based savings goal repository implementation."""

    model: ClassVar[type[SQLModel]] = SavingsGoal
    default_order: ClassVar[tuple[str, ...]] = ("-created_at", "-id")

    def list_all(self, *, user_id: int) -> list[SavingsGoal]:
        """List all goals, newest first."""
        return self.query(user_id=user_id)

    def list_active(self, *, user_id: int) -> list[SavingsGoal]:
        """List goals still short of their target."""
        return self.query(user_id=user_id, filters={"completed": False})

    def deposit_atomically(self, goal_id: int, amount: Decimal, *, user_id: int) -> SavingsGoal:
        """Increment ``current_amount`` in the database instead of read-modify-write.

        The UPDATE only matches goals that are still active, so two racing
        deposits both land and neither can reopen a completed goal.
        """
        amount = parse_positive_amount(amount)
        new_total = SavingsGoal.current_amount + amount
        statement = (
            update(SavingsGoal)
            .where(SavingsGoal.id == goal_id)
            .where(SavingsGoal.user_id == user_id)
            .where(SavingsGoal.completed == false())
            .values(current_amount=new_total, completed=new_total >= SavingsGoal.target_amount)
            .execution_options(synchronize_session=False)
        )
        with translate_errors("deposit into savings goal"):
            with self.session_factory() as session:
                result = session.exec(statement)
                if result.rowcount == 0:
                    # Distinguish a missing goal from a finished one.
                    self._fetch_owned(session, goal_id, user_id)
                    raise AlreadyCompleted(f"Savings goal {goal_id} is already completed")
                session.commit()
                goal = self._fetch_owned(session, goal_id, user_id)
                session.expunge(goal)
                return goal
