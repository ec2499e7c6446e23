"""Shift Pay SDK - Core pay and withholding calculations."""

from .errors import (
    ShiftPayError,
    InvalidIntervalError,
    InvalidDateError,
    UnsupportedFrequencyError,
    ScheduleValidationError,
)

from .dates import (
    parse_iso_date,
    parse_instant,
    time_to_minutes,
    minutes_to_time,
    select_effective_record,
)

from .shifts import (
    PenaltyConfig,
    DailySegment,
    ShiftPayBreakdown,
    split_into_daily_segments,
    compute_pay,
    compute_pay_for_settings,
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

from .taxes import (
    PayFrequency,
    Residency,
    MedicareLevyStatus,
    TaxProfileSettings,
    WithholdingBreakdown,
    calculate_withholding,
    get_effective_schedule_dates,
)

from .schemas import PaySettings, PenaltySettings, TaxSettings

from .config import (
    get_config_dir,
    get_profile_path,
    load_profile,
    save_profile,
    load_pay_settings,
    ProfileNotFoundError,
    ProfileValidationError,
)

__all__ = [
    # Errors
    "ShiftPayError",
    "InvalidIntervalError",
    "InvalidDateError",
    "UnsupportedFrequencyError",
    "ScheduleValidationError",
    # Dates
    "parse_iso_date",
    "parse_instant",
    "time_to_minutes",
    "minutes_to_time",
    "select_effective_record",
    # Shift pay
    "PenaltyConfig",
    "DailySegment",
    "ShiftPayBreakdown",
    "split_into_daily_segments",
    "compute_pay",
    "compute_pay_for_settings",
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
    # Withholding
    "PayFrequency",
    "Residency",
    "MedicareLevyStatus",
    "TaxProfileSettings",
    "WithholdingBreakdown",
    "calculate_withholding",
    "get_effective_schedule_dates",
    # Settings
    "PaySettings",
    "PenaltySettings",
    "TaxSettings",
    "get_config_dir",
    "get_profile_path",
    "load_profile",
    "save_profile",
    "load_pay_settings",
    "ProfileNotFoundError",
    "ProfileValidationError",
]
