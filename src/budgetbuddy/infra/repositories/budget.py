"""SQLModel implementation of Budget repository."""

from __future__ import annotations

from typing import ClassVar

from sqlmodel import SQLModel

from ...constants.categories import BudgetPeriod
from ...models.budget import Budget
from .base import SQLModelRecordStore


class SQLModelBudgetRepository(SQLModelRecordStore[Budget]):
    """SQLModel-based budget repository implementation."""

    model: ClassVar[type[SQLModel]] = Budget
    default_order: ClassVar[tuple[str, ...]] = ("category", "id")

    def list_monthly(self, *, user_id: int) -> list[Budget]:
        """List monthly budgets ordered by category."""
        return self.query(user_id=user_id, filters={"period": BudgetPeriod.MONTHLY})
