"""Currency rounding for withholding amounts.

All amounts are Decimal dollars. Caller input is converted through
to_decimal(), which collapses NaN, infinities, absurd magnitudes and
unparsable values to zero so a bad input can never propagate into a
withholding figure.
"""

import math
from decimal import ROUND_FLOOR, Decimal, InvalidOperation, getcontext, localcontext
from typing import Any

from .schemas import RoundingRule

ZERO = Decimal("0")
CENT = Decimal("0.01")
_HALF = Decimal("0.5")

# Amounts of 10**100 dollars or more are treated like infinity
MAX_EXPONENT = 100


def _usable(amount: Decimal) -> Decimal:
    if not amount.is_finite() or (amount and amount.adjusted() >= MAX_EXPONENT):
        return ZERO
    return amount


def to_decimal(value: Any) -> Decimal:
    """Convert caller input to a finite Decimal (0 for anything else)."""
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, Decimal):
        return _usable(value)
    if isinstance(value, int):
        return _usable(Decimal(value))
    if isinstance(value, float):
        if not math.isfinite(value):
            return ZERO
        # str() keeps the shortest repr, e.g. 0.1 -> Decimal("0.1")
        return _usable(Decimal(str(value)))
    if isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation:
            return ZERO
        return _usable(parsed)
    return ZERO


def _digits_needed(value: Decimal, precision: Decimal) -> int:
    # Whole digits of value plus the fractional digits of precision, with guard digits
    return max(getcontext().prec, value.adjusted() - precision.adjusted() + 4)


def _round_half_up(value: Decimal, precision: Decimal) -> Decimal:
    # Ties go toward +infinity: 2.5 -> 3, -2.5 -> -2
    with localcontext() as ctx:
        ctx.prec = _digits_needed(value, precision)
        scaled = value / precision
        return (scaled + _HALF).to_integral_value(rounding=ROUND_FLOOR) * precision


def round_currency(value: Any, rule: RoundingRule) -> Decimal:
    """Round an amount to the rule's precision using the rule's mode.

    Example:
        round_currency(Decimal("302.923"), RoundingRule(precision=0.01, mode="half_up"))
        # -> Decimal("302.92")
    """
    amount = to_decimal(value)
    if rule.mode == "half_up":
        return _round_half_up(amount, rule.precision)
    raise ValueError(f"Unsupported rounding mode: {rule.mode}")


def clamp_currency(value: Any) -> Decimal:
    """Round to whole cents and floor at zero."""
    amount = to_decimal(value)
    with localcontext() as ctx:
        ctx.prec = _digits_needed(amount, CENT)
        rounded = _round_half_up(amount, CENT).quantize(CENT)
    return rounded if rounded > ZERO else ZERO.quantize(CENT)
