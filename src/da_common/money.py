"""Decimal rounding utilities for share counts, prices and cash.

Two rounding modes are used and must not be merged:
  - allocation (shares, pro-rata factor): floor / truncate, so the buyer
    never repurchases more than was tendered or more than the pool;
  - currency (prices, cash, values): half-up to cents.
"""

from decimal import ROUND_DOWN, ROUND_FLOOR, ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import PlainSerializer

CENT = Decimal("0.01")
FACTOR_STEP = Decimal("0.0001")
ONE = Decimal(1)

# Upper bounds on admin-supplied prices and sizes; keeps every product well
# inside the 28-digit decimal context.
MAX_PRICE = Decimal("1000000000")
MAX_SHARES = 1_000_000_000

# Decimal in the domain, JSON number on the wire.
WireDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


def round_currency(value: Decimal) -> Decimal:
    """Half-up to 2 decimals: 52.005 -> 52.01, -0.005 -> -0.01."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def round_shares(qty: Decimal) -> int:
    """Nearest whole share, halves rounded up: 12.5 -> 13."""
    return int(qty.quantize(ONE, rounding=ROUND_HALF_UP))


def floor_shares(qty: Decimal) -> int:
    """Whole shares, rounded down: 499.98 -> 499."""
    return int(qty.to_integral_value(rounding=ROUND_FLOOR))


def pro_rata_factor(available: int, demanded: int) -> Decimal:
    """min(1, available / demanded), truncated to 4 decimals.

    A zero (or negative) demand has nothing to scale and yields 1.
    """
    if demanded <= 0 or demanded <= available:
        return ONE
    ratio = Decimal(max(available, 0)) / Decimal(demanded)
    return ratio.quantize(FACTOR_STEP, rounding=ROUND_DOWN)


def money_to_display(value: Decimal) -> str:
    """Convert an amount to display string: 6500 -> '$6,500.00', -12 -> '-$12.00'."""
    rounded = round_currency(value)
    if rounded < 0:
        return f"-${-rounded:,.2f}"
    return f"${rounded:,.2f}"
