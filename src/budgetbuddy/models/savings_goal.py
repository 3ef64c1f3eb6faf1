"""Savings goal table."""

from __future__ import annotations

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy import CheckConstraint, Column
from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from .types import Money

if TYPE_CHECKING:  # pragma: no cover
    from .user import User


class SavingsGoal(SQLModel, table=True):
    """A target amount filled by deposits.

    ``completed`` mirrors ``current_amount >= target_amount`` as of the last
    deposit and never goes back to ``False``.
    """

    __tablename__: ClassVar[str] = "savings_goal"
    __table_args__ = (
        CheckConstraint("target_amount > 0", name="ck_goal_target_positive"),
        CheckConstraint("current_amount >= 0", name="ck_goal_current_non_negative"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    title: str = Field(nullable=False, max_length=128)
    target_amount: Decimal = Field(sa_column=Column("target_amount", Money(), nullable=False))
    current_amount: Decimal = Field(
        default=Decimal("0.00"),
        sa_column=Column("current_amount", Money(), nullable=False),
    )
    target_date: Optional[date] = Field(default=None)
    completed: bool = Field(default=False, nullable=False, index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
        index=True,
    )

    user: "User" = Relationship(
        sa_relationship=relationship("User", back_populates="savings_goals")
    )
