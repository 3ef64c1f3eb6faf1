"""Custom column types."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import BigInteger
from sqlalchemy.types import TypeDecorator

from ..money import CENT, HUNDRED, to_money


class Money(TypeDecorator):
    """Store amounts as integer minor units (cents) and load them as ``Decimal``.

    Arithmetic performed in SQL (``current_amount + :amount``) therefore stays
    exact on every backend, SQLite included.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Any) -> Optional[int]:
        if value is None:
            return None
        return int(to_money(value) * HUNDRED)

    def process_result_value(self, value: Any, dialect: Any) -> Optional[Decimal]:
        if value is None:
            return None
        return (Decimal(int(value)) / HUNDRED).quantize(CENT)

    @property
    def python_type(self) -> type:
        return Decimal
