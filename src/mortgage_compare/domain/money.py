from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
PERCENT = Decimal("0.01")
RATE = Decimal("0.001")
WHOLE = Decimal("1")
TENTH = Decimal("0.1")


def round_half_up(value: Decimal, exponent: Decimal = CENTS) -> Decimal:
    """Round to the given exponent, halves away from zero (cents by default)."""
    return value.quantize(exponent, rounding=ROUND_HALF_UP)
