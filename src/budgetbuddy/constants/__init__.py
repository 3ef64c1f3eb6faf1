"""Shared constants."""

from .categories import CATEGORY_CHOICES, BudgetPeriod, ExpenseCategory, parse_category

__all__ = ["BudgetPeriod", "CATEGORY_CHOICES", "ExpenseCategory", "parse_category"]
