"""SQLModel implementation of Expense repository."""

from __future__ import annotations

from datetime import date
from typing import ClassVar

from sqlmodel import SQLModel

from ...errors import InvalidInput
from ...models.expense import Expense
from .base import SQLModelRecordStore


class SQLModelExpenseRepository(SQLModelRecordStore[Expense]):
    """SQLModel-based expense repository implementation."""

    model: ClassVar[type[SQLModel]] = Expense
    # Same-day expenses fall back to insertion order, newest first.
    default_order: ClassVar[tuple[str, ...]] = ("-date", "-created_at", "-id")

    def list_since(self, period_start: date, *, user_id: int) -> list[Expense]:
        """Get expenses dated on or after ``period_start``."""
        statement = (
            self._scoped(user_id)
            .where(Expense.date >= period_start)
            .order_by(*self._order_clauses(None))
        )
        return self._all(statement, action="list expenses since period start")

    def list_recent(self, *, user_id: int, limit: int = 5) -> list[Expense]:
        """Latest expenses across all periods."""
        return self.query(user_id=user_id, limit=limit)

    def update(self, record_id, patch, *, user_id):  # type: ignore[override]
        """Expenses are immutable; delete and re-add instead."""
        raise InvalidInput("Expenses cannot be edited once recorded")
