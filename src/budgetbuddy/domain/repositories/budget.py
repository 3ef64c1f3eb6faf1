"""Budget repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.budget import Budget
from .record_store import RecordStore


class BudgetRepository(RecordStore[Budget], Protocol):
    """Repository for budget rows."""

    def list_monthly(self, *, user_id: int) -> list[Budget]:
        """Monthly budgets ordered by category."""
        ...
