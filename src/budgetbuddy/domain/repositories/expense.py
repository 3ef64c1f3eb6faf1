"""Expense repository protocol."""

from __future__ import annotations

from datetime import date
from typing import Protocol

from ...models.expense import Expense
from .record_store import RecordStore


class ExpenseRepository(RecordStore[Expense], Protocol):
    """Repository for expense rows."""

    def list_since(self, period_start: date, *, user_id: int) -> list[Expense]:
        """Expenses dated on or after ``period_start``, latest first."""
        ...

    def list_recent(self, *, user_id: int, limit: int = 5) -> list[Expense]:
        """The most recent expenses regardless of period."""
        ...
