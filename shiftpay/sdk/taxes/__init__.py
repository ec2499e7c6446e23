"""taxes - Withholding estimates from effective-dated schedules.

Scope:
- Schedule 1 primary withholding (progressive scales, LITO, Medicare levy)
- Schedule 8 secondary loan withholding
- Selection of the schedule version in force on a pay date
- Currency rounding and clamping

Constraints:
- Pure calculation - no settings or storage access
- Schedule tables are loaded and validated at import from tax-rules/
- Amounts are Decimal dollars

Modules:
- types: profile enums and result dataclasses
- schemas: pydantic schemas for the schedule tables
- rules: table loading and validation
- rounding: round_currency, clamp_currency, to_decimal
- schedule1 / schedule8: per-schedule calculations
- withholding: orchestration across schedules

Usage:
    from shiftpay.sdk.taxes import calculate_withholding, TaxProfileSettings

    result = calculate_withholding("2024-08-15", 1500, "weekly", TaxProfileSettings())
    result.total_withheld  # Decimal("302.92")
"""

from .types import (
    PayFrequency,
    Residency,
    MedicareLevyStatus,
    TaxProfileSettings,
    ScheduleResult,
    EffectiveScheduleDates,
    WithholdingBreakdown,
    parse_pay_frequency,
)

from .schemas import (
    RoundingRule,
    FrequencyRule,
    TaxRateBand,
    LitoConfig,
    MedicareLevyConfig,
    Schedule1Data,
    Schedule8Data,
)

from .rounding import round_currency, clamp_currency, to_decimal

from .rules import SCHEDULES, ScheduleTables, load_schedules, get_tax_rules_dir

from .schedule1 import apply_bands, compute_lito, compute_levy, calculate_schedule1
from .schedule8 import calculate_schedule8

from .withholding import calculate_withholding, get_effective_schedule_dates

__all__ = [
    # Types
    "PayFrequency",
    "Residency",
    "MedicareLevyStatus",
    "TaxProfileSettings",
    "ScheduleResult",
    "EffectiveScheduleDates",
    "WithholdingBreakdown",
    "parse_pay_frequency",
    # Schemas
    "RoundingRule",
    "FrequencyRule",
    "TaxRateBand",
    "LitoConfig",
    "MedicareLevyConfig",
    "Schedule1Data",
    "Schedule8Data",
    # Rounding
    "round_currency",
    "clamp_currency",
    "to_decimal",
    # Tables
    "SCHEDULES",
    "ScheduleTables",
    "load_schedules",
    "get_tax_rules_dir",
    # Calculations
    "apply_bands",
    "compute_lito",
    "compute_levy",
    "calculate_schedule1",
    "calculate_schedule8",
    "calculate_withholding",
    "get_effective_schedule_dates",
]
