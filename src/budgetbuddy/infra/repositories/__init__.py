"""Concrete repository implementations using SQLModel."""

from .base import SQLModelRecordStore, translate_errors
from .budget import SQLModelBudgetRepository
from .expense import SQLModelExpenseRepository
from .savings_goal import SQLModelSavingsGoalRepository

__all__ = [
    "SQLModelBudgetRepository",
    "SQLModelExpenseRepository",
    "SQLModelRecordStore",
    "SQLModelSavingsGoalRepository",
    "translate_errors",
]
