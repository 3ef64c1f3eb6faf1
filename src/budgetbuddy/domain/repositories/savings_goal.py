"""Savings goal repository protocol."""

from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from ...models.savings_goal import SavingsGoal
from .record_store import RecordStore


class SavingsGoalRepository(RecordStore[SavingsGoal], Protocol):
    """Repository for savings goals."""

    def list_all(self, *, user_id: int) -> list[SavingsGoal]:
        """All goals, newest first."""
        ...

    def list_active(self, *, user_id: int) -> list[SavingsGoal]:
        """Goals that have not reached their target."""
        ...

    def deposit_atomically(self, goal_id: int, amount: Decimal, *, user_id: int) -> SavingsGoal:
        """Add ``amount`` in a single conditional UPDATE and return the fresh row."""
        ...
