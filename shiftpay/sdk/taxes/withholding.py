"""Withholding orchestration across effective-dated schedules.

Resolves which Schedule 1 (and, for profiles with a study/training loan,
Schedule 8) table applies on the pay date, runs each schedule and combines
the results. Nothing here depends on the current time: the same inputs
always give the same breakdown.
"""

import logging
from typing import Any, Dict, Optional

from ..dates import DateLike, parse_iso_date, select_effective_record
from .rounding import ZERO, clamp_currency
from .rules import SCHEDULES, ScheduleTables
from .schedule1 import calculate_schedule1
from .schedule8 import calculate_schedule8
from .types import EffectiveScheduleDates, TaxProfileSettings, WithholdingBreakdown, parse_pay_frequency

logger = logging.getLogger(__name__)


def calculate_withholding(
    pay_date: DateLike,
    gross_for_period: Any,
    frequency: Any,
    profile: TaxProfileSettings,
    tables: Optional[ScheduleTables] = None,
) -> WithholdingBreakdown:
    """Estimate the amount withheld from one period's gross pay.

    Args:
        pay_date: Date of payment (date, datetime or ISO string).
        gross_for_period: Gross pay for the period in dollars.
        frequency: PayFrequency or its name (weekly, fortnightly, monthly,
            quarterly).
        profile: Tax profile settings.
        tables: Schedule tables to use (default: bundled tables).

    Returns:
        WithholdingBreakdown with base and secondary loan components, the
        clamped total, the effective dates of the schedules used and notes.

    Raises:
        InvalidDateError: If pay_date cannot be parsed.
        UnsupportedFrequencyError: If frequency is unknown or missing from
            the selected Schedule 1 table.
    """
    tables = tables or SCHEDULES
    pay_day = parse_iso_date(pay_date)
    frequency = parse_pay_frequency(frequency)

    schedule1, fallback_note = select_effective_record(tables.schedule1, pay_day)
    base = calculate_schedule1(schedule1, gross_for_period, frequency, profile)
    notes = list(base.notes)
    if fallback_note:
        notes.append(fallback_note)

    secondary_amount = clamp_currency(ZERO)
    schedule8_effective_from = None
    if profile.has_secondary_loan:
        schedule8, fallback_note = select_effective_record(tables.schedule8, pay_day)
        schedule8_effective_from = schedule8.effective_from
        secondary = calculate_schedule8(schedule8, gross_for_period, frequency)
        secondary_amount = secondary.amount
        notes.extend(secondary.notes)
        if fallback_note:
            notes.append(fallback_note)

    total = clamp_currency(base.amount + secondary_amount)
    logger.debug(
        f"withholding {pay_day.isoformat()} {frequency.value}: base {base.amount}, "
        f"secondary {secondary_amount}, total {total}"
    )

    return WithholdingBreakdown(
        base_withholding=base.amount,
        secondary_loan_component=secondary_amount,
        total_withheld=total,
        effective_schedules=EffectiveScheduleDates(
            schedule1_effective_from=schedule1.effective_from,
            schedule8_effective_from=schedule8_effective_from,
        ),
        notes=tuple(notes),
    )


def get_effective_schedule_dates(
    pay_date: DateLike,
    tables: Optional[ScheduleTables] = None,
) -> Dict[str, str]:
    """Effective dates of the Schedule 1 and Schedule 8 tables for a pay date.

    Returns:
        Dict with schedule1_effective_from and schedule8_effective_from as
        ISO date strings.

    Raises:
        InvalidDateError: If pay_date cannot be parsed.
    """
    tables = tables or SCHEDULES
    pay_day = parse_iso_date(pay_date)
    schedule1, _ = select_effective_record(tables.schedule1, pay_day)
    schedule8, _ = select_effective_record(tables.schedule8, pay_day)
    return {
        "schedule1_effective_from": schedule1.effective_from.isoformat(),
        "schedule8_effective_from": schedule8.effective_from.isoformat(),
    }
