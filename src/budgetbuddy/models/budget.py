"""Budgeting tables."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy import CheckConstraint, Column, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from ..constants.categories import BudgetPeriod, ExpenseCategory
from .types import Money

if TYPE_CHECKING:  # pragma: no cover
    from .user import User


class Budget(SQLModel, table=True):
    """Spending limit for one category over one period."""

    __tablename__: ClassVar[str] = "budget"
    __table_args__ = (
        UniqueConstraint("user_id", "category", "period", name="uq_budget_user_category_period"),
        CheckConstraint("limit_amount > 0", name="ck_budget_limit_positive"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    category: ExpenseCategory = Field(nullable=False, index=True)
    limit_amount: Decimal = Field(sa_column=Column("limit_amount", Money(), nullable=False))
    period: BudgetPeriod = Field(default=BudgetPeriod.MONTHLY, nullable=False)

    user: "User" = Relationship(sa_relationship=relationship("User", back_populates="budgets"))
