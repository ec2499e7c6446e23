"""Secondary loan withholding (Schedule 8).

The repayment rate is picked from income tiers and applied to the whole
annualized income, not just the part above the tier minimum.
"""

import logging
from decimal import Decimal
from typing import Any, Dict

from .rounding import ZERO, clamp_currency, round_currency, to_decimal
from .schemas import Schedule8Data
from .types import PayFrequency, ScheduleResult, parse_pay_frequency

logger = logging.getLogger(__name__)

# Schedule 8 annualizes with its own fixed period counts rather than the
# Schedule 1 annual_factor; kept separate until confirmed against the ATO text.
PAY_PERIODS: Dict[PayFrequency, int] = {
    PayFrequency.WEEKLY: 52,
    PayFrequency.FORTNIGHTLY: 26,
    PayFrequency.MONTHLY: 12,
    PayFrequency.QUARTERLY: 4,
}


def _format_rate(rate: Decimal) -> str:
    percent = (rate * 100).quantize(Decimal("0.1")).normalize()
    return f"{percent:f}"


def calculate_schedule8(
    schedule: Schedule8Data,
    gross_for_period: Any,
    frequency: Any,
) -> ScheduleResult:
    """Calculate the secondary loan component for one pay period.

    Args:
        schedule: Schedule 8 table in force on the pay date.
        gross_for_period: Gross pay for the period in dollars.
        frequency: PayFrequency or its name.

    Returns:
        ScheduleResult with the rounded, non-negative amount and a note
        naming the applied rate (or stating nothing was triggered).

    Raises:
        UnsupportedFrequencyError: If frequency is not a known pay frequency.
    """
    frequency = parse_pay_frequency(frequency)
    periods = PAY_PERIODS[frequency]
    notes = list(schedule.notes)

    annual_income = max(ZERO, to_decimal(gross_for_period) * periods)
    active = schedule.thresholds[0]
    for tier in schedule.thresholds:
        if annual_income >= tier.minimum:
            active = tier
        else:
            break

    annual_repayment = annual_income * active.rate
    per_period = annual_repayment / periods
    amount = clamp_currency(round_currency(per_period, schedule.rounding))

    if active.rate > 0:
        notes.append(f"Secondary loan repayment rate {_format_rate(active.rate)}% applied.")
    else:
        notes.append("Secondary loan repayment not triggered for this income.")

    logger.debug(
        f"schedule8 {schedule.effective_from.isoformat()} {frequency.value}: "
        f"annual income {annual_income}, rate {active.rate}, per period {amount}"
    )
    return ScheduleResult(amount=amount, notes=tuple(notes))
