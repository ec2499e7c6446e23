"""Shift pay assembly.

Turns the per-day segments of a shift into minute totals and pay. Rates and
pay are integer cents; minutes are converted with integer arithmetic so that
recomputing thousands of shifts never accumulates floating-point error.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Tuple, Union

from ..dates import parse_instant
from .split import DailySegment, PenaltyConfig, split_into_daily_segments

logger = logging.getLogger(__name__)

_HOURS_PRECISION = Decimal("0.0001")


@dataclass(frozen=True)
class ShiftPayBreakdown:
    """Minutes and pay for one shift."""

    start: datetime
    end: datetime
    base_minutes: int
    penalty_minutes: int
    total_minutes: int
    base_pay: int  # cents
    penalty_pay: int  # cents
    total_pay: int  # cents
    segments: Tuple[DailySegment, ...]

    @property
    def base_hours(self) -> Decimal:
        return minutes_to_hours(self.base_minutes)

    @property
    def penalty_hours(self) -> Decimal:
        return minutes_to_hours(self.penalty_minutes)

    @property
    def total_hours(self) -> Decimal:
        return minutes_to_hours(self.total_minutes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "base_minutes": self.base_minutes,
            "penalty_minutes": self.penalty_minutes,
            "total_minutes": self.total_minutes,
            "base_hours": str(self.base_hours),
            "penalty_hours": str(self.penalty_hours),
            "total_hours": str(self.total_hours),
            "base_pay": self.base_pay,
            "penalty_pay": self.penalty_pay,
            "total_pay": self.total_pay,
            "segments": [segment.to_dict() for segment in self.segments],
        }


def minutes_to_hours(minutes: int) -> Decimal:
    """Minutes as hours, rounded to 4 decimal places."""
    return (Decimal(minutes) / Decimal(60)).quantize(_HOURS_PRECISION, rounding=ROUND_HALF_UP)


def minutes_to_cents(minutes: int, rate_cents_per_hour: int) -> int:
    """Pay in cents for minutes worked at an hourly rate in cents.

    Integer division by 60 with the remainder rounded half up, so
    1 minute at 2500c/h is 41.67c -> 42c.
    """
    whole, remainder = divmod(int(minutes) * int(rate_cents_per_hour), 60)
    if remainder >= 30:
        whole += 1
    return whole


def compute_pay(
    start: Union[datetime, str],
    end: Union[datetime, str],
    config: PenaltyConfig,
    base_rate: int,
    penalty_rate: int,
) -> ShiftPayBreakdown:
    """Compute the base/penalty split and pay for a shift.

    Base and penalty pay are rounded independently and then summed, so
    total_pay == base_pay + penalty_pay always holds (it may differ by a cent
    from rounding the combined minutes directly).

    Args:
        start: Clock-in instant (datetime or ISO string).
        end: Clock-out instant (datetime or ISO string).
        config: Penalty rules.
        base_rate: Base hourly rate in cents.
        penalty_rate: Penalty hourly rate in cents.

    Returns:
        ShiftPayBreakdown with minutes, pay in cents and per-day segments.

    Raises:
        InvalidIntervalError: If end is not strictly after start.
    """
    start = parse_instant(start)
    end = parse_instant(end)
    segments = split_into_daily_segments(start, end, config)

    base_minutes = sum(segment.minutes_base for segment in segments)
    penalty_minutes = sum(segment.minutes_penalty for segment in segments)

    base_pay = minutes_to_cents(base_minutes, base_rate)
    penalty_pay = minutes_to_cents(penalty_minutes, penalty_rate)

    logger.debug(
        f"pay {start.isoformat()} -> {end.isoformat()}: base {base_minutes}m={base_pay}c, "
        f"penalty {penalty_minutes}m={penalty_pay}c"
    )

    return ShiftPayBreakdown(
        start=start,
        end=end,
        base_minutes=base_minutes,
        penalty_minutes=penalty_minutes,
        total_minutes=base_minutes + penalty_minutes,
        base_pay=base_pay,
        penalty_pay=penalty_pay,
        total_pay=base_pay + penalty_pay,
        segments=tuple(segments),
    )


def compute_pay_for_settings(
    start: Union[datetime, str],
    end: Union[datetime, str],
    settings,
) -> ShiftPayBreakdown:
    """Compute shift pay using rates and penalty rules from PaySettings."""
    return compute_pay(
        start,
        end,
        settings.penalty_config(),
        settings.base_rate,
        settings.penalty_rate,
    )
