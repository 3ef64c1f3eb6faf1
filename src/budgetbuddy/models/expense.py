"""SQLModel definition for expenses."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy import CheckConstraint, Column
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from ..constants.categories import ExpenseCategory
from .types import Money

if TYPE_CHECKING:  # pragma: no cover - import guard for circular dependency
    from .user import User


class Expense(SQLModel, table=True):
    """A single spend record. Immutable once created; only deleted."""

    __tablename__: ClassVar[str] = "expense"
    __table_args__ = (CheckConstraint("amount > 0", name="ck_expense_amount_positive"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    amount: Decimal = Field(sa_column=Column("amount", Money(), nullable=False))
    category: ExpenseCategory = Field(nullable=False, index=True)
    description: Optional[str] = Field(default=None, max_length=255)
    date: dt.date = Field(nullable=False, index=True)
    created_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc),
        nullable=False,
    )

    user: "User" = Relationship(sa_relationship=relationship("User", back_populates="expenses"))
