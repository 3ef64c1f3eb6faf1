"""Service module exports."""

from . import (
    aggregation,
    auth,
    budgeting,
    dashboard,
    expenses,
    goal_ledger,
    savings,
)

__all__ = [
    "aggregation",
    "auth",
    "budgeting",
    "dashboard",
    "expenses",
    "goal_ledger",
    "savings",
]
