"""
Closed set of expense/budget categories used by every form and report.
"""

from __future__ import annotations

from enum import Enum

from ..errors import InvalidCategory


class ExpenseCategory(str, Enum):
    """Category shared by expenses and budgets."""

    TUITION = "tuition"
    BOOKS = "books"
    FOOD = "food"
    TRAVEL = "travel"
    LEISURE = "leisure"
    RENT = "rent"
    UTILITIES = "utilities"
    OTHER = "other"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class BudgetPeriod(str, Enum):
    """Budgeting cycle. Only monthly budgets exist today."""

    MONTHLY = "monthly"


CATEGORY_CHOICES = [(c.value, c.label) for c in ExpenseCategory]


def parse_category(raw: object) -> ExpenseCategory:
    """Return the category for ``raw`` or raise ``InvalidCategory``."""

    if isinstance(raw, ExpenseCategory):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidCategory("category is required")
    try:
        return ExpenseCategory(raw.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(c.value for c in ExpenseCategory)
        raise InvalidCategory(f"Unknown category {raw!r}; expected one of: {allowed}") from exc


__all__ = ["BudgetPeriod", "CATEGORY_CHOICES", "ExpenseCategory", "parse_category"]
