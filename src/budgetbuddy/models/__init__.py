"""SQLModel table exports."""

from .budget import Budget
from .expense import Expense
from .savings_goal import SavingsGoal
from .user import User

__all__ = [
    "Budget",
    "Expense",
    "SavingsGoal",
    "User",
]
