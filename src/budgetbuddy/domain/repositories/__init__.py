"""Repository protocol definitions for domain layer."""

from .budget import BudgetRepository
from .expense import ExpenseRepository
from .record_store import RecordStore
from .savings_goal import SavingsGoalRepository

__all__ = [
    "BudgetRepository",
    "ExpenseRepository",
    "RecordStore",
    "SavingsGoalRepository",
]
