"""shifts - Shift pay splitting and assembly.

Scope:
- Split a shift into calendar-day segments (split)
- Classify minutes as base or penalty (split)
- Convert minutes to integer cents and assemble the breakdown (pay)
- Build and recompute cached shift records (records)
- Pay weeks, weekly totals and shift copies (records)

Usage:
    from shiftpay.sdk.shifts import PenaltyConfig, compute_pay

    breakdown = compute_pay("2024-04-02T06:30", "2024-04-02T07:30", PenaltyConfig(), 2500, 3500)
    breakdown.penalty_minutes  # 30
"""

from .split import (
    PenaltyConfig,
    DailySegment,
    split_into_daily_segments,
    validate_interval,
    weekday_index,
    minutes_between,
)

from .pay import (
    ShiftPayBreakdown,
    compute_pay,
    compute_pay_for_settings,
    minutes_to_cents,
    minutes_to_hours,
)

from .records import (
    ShiftRecord,
    ShiftWithholding,
    WeekRange,
    WeekSummary,
    ShiftCopy,
    build_shift_record,
    recompute_shifts,
    compute_shift_withholding,
    week_key,
    week_range,
    summarize_week,
    duplicate_shift,
)

__all__ = [
    "PenaltyConfig",
    "DailySegment",
    "split_into_daily_segments",
    "validate_interval",
    "weekday_index",
    "minutes_between",
    "ShiftPayBreakdown",
    "compute_pay",
    "compute_pay_for_settings",
    "minutes_to_cents",
    "minutes_to_hours",
    "ShiftRecord",
    "ShiftWithholding",
    "build_shift_record",
    "recompute_shifts",
    "compute_shift_withholding",
    "week_key",
    "WeekRange",
    "WeekSummary",
    "ShiftCopy",
    "week_range",
    "summarize_week",
    "duplicate_shift",
]
