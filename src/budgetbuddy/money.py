"""Decimal money helpers.

Amounts are kept as ``Decimal`` quantized to the smallest currency unit so
that sums never drift. Floats are converted through ``str`` to avoid binary
representation noise (``0.1`` becomes ``Decimal("0.10")``, not
``Decimal("0.1000000000000000055511151231257827")``).
"""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from .errors import InvalidAmount

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
HUNDRED = Decimal("100")
# Largest amount whose cent value fits a signed 64-bit integer column.
MAX_AMOUNT = Decimal(2**63 - 1) / HUNDRED


def _to_decimal(value: object) -> Decimal:
    """Parse ``value`` into a finite, unrounded ``Decimal``."""

    if isinstance(value, bool):
        raise InvalidAmount(f"Not a monetary amount: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise InvalidAmount(f"Not a monetary amount: {value!r}") from exc
    else:
        raise InvalidAmount(f"Not a monetary amount: {value!r}")
    if not amount.is_finite():
        raise InvalidAmount(f"Amount must be finite, got {value!r}")
    return amount


def to_money(value: object) -> Decimal:
    """Coerce ``value`` into a cent-quantized ``Decimal``.

    Raises ``InvalidAmount`` for values that are not numbers.
    """

    amount = _to_decimal(value)
    if abs(amount) > MAX_AMOUNT:
        raise InvalidAmount(f"Amount is too large: {value!r}")
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_positive_amount(value: object, *, field: str = "amount") -> Decimal:
    """Return ``value`` as money.

    Rejects empty, zero and negative input, fractions of a cent and amounts
    whose cent value does not fit a 64-bit column.
    """

    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidAmount(f"{field} is required")
    amount = _to_decimal(value)
    if amount <= 0:
        raise InvalidAmount(f"{field} must be greater than zero")
    if amount > MAX_AMOUNT:
        raise InvalidAmount(f"{field} must not exceed {MAX_AMOUNT}")
    if amount != amount.quantize(CENT):
        raise InvalidAmount(f"{field} cannot have more than two decimal places")
    return amount.quantize(CENT)


def sum_money(values: Iterable[object]) -> Decimal:
    """Exact sum of monetary values."""

    return sum((to_money(v) for v in values), ZERO)


def percentage(part: Decimal, whole: Decimal) -> Decimal:
    """Return ``part / whole * 100``; zero when ``whole`` is zero."""

    if whole == 0:
        return Decimal(0)
    return part * HUNDRED / whole


def month_start(today: date | None = None) -> date:
    """First calendar day of the month containing ``today``."""

    today = today or date.today()
    return today.replace(day=1)


def format_money(amount: Decimal, symbol: str = "₹") -> str:
    """Render an amount the way the dashboard cards do (two decimals)."""

    return f"{symbol}{to_money(amount):,.2f}"


__all__ = [
    "CENT",
    "HUNDRED",
    "MAX_AMOUNT",
    "ZERO",
    "format_money",
    "month_start",
    "parse_positive_amount",
    "percentage",
    "sum_money",
    "to_money",
]
