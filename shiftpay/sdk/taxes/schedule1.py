"""Primary withholding (Schedule 1).

Per-period withholding is computed by annualizing the period's gross,
applying the progressive scale for the profile, subtracting the low income
tax offset (tax-free threshold claimed) and adding the Medicare levy
(residents only), then dividing back to a period amount.
"""

import logging
from decimal import Decimal
from typing import Any, Sequence

from ..errors import UnsupportedFrequencyError
from .rounding import ZERO, clamp_currency, round_currency, to_decimal
from .schemas import LitoConfig, MedicareLevyConfig, Schedule1Data, TaxRateBand
from .types import MedicareLevyStatus, Residency, ScheduleResult, TaxProfileSettings, parse_pay_frequency

logger = logging.getLogger(__name__)


def apply_bands(annual_income: Decimal, bands: Sequence[TaxRateBand]) -> Decimal:
    """Annual tax on a progressive scale before offsets.

    The active band is the highest one whose threshold is at or below the
    income (the lowest band when income is below every threshold).

    Example:
        With bands (0, 0%), (18200, 16%), (45000, 30%, base 4292):
        apply_bands(Decimal("78000"), bands)  # -> 4292 + 33000 * 0.30 = 14192
    """
    ordered = sorted(bands, key=lambda band: band.threshold)
    active = ordered[0]
    for band in ordered:
        if annual_income >= band.threshold:
            active = band
        else:
            break
    taxable = max(ZERO, annual_income - active.threshold)
    return active.base + taxable * active.rate


def compute_lito(annual_income: Decimal, lito: LitoConfig) -> Decimal:
    """Low income tax offset for an annual income.

    Full offset up to full_threshold, reduced at phase_out_rate_low up to
    middle_threshold, then from middle_offset at phase_out_rate_high until it
    reaches zero at phase_out.
    """
    if annual_income <= lito.full_threshold:
        return lito.maximum
    if annual_income <= lito.middle_threshold:
        reduction = (annual_income - lito.full_threshold) * lito.phase_out_rate_low
        return max(ZERO, lito.maximum - reduction)
    if annual_income <= lito.phase_out:
        reduction = (annual_income - lito.middle_threshold) * lito.phase_out_rate_high
        return max(ZERO, lito.middle_offset - reduction)
    return ZERO


def compute_levy(annual_income: Decimal, status: MedicareLevyStatus, medicare: MedicareLevyConfig) -> Decimal:
    """Annual Medicare levy for the declared exemption status."""
    if status is MedicareLevyStatus.STANDARD:
        return annual_income * medicare.standard.rate
    if status is MedicareLevyStatus.HALF_EXEMPT:
        return annual_income * medicare.half_exempt.rate
    if status is MedicareLevyStatus.FULL_EXEMPT:
        return ZERO
    raise ValueError(f"Unknown Medicare levy status: {status!r}")


def calculate_schedule1(
    schedule: Schedule1Data,
    gross_for_period: Any,
    frequency: Any,
    profile: TaxProfileSettings,
) -> ScheduleResult:
    """Calculate the Schedule 1 withholding for one pay period.

    Args:
        schedule: Schedule 1 table in force on the pay date.
        gross_for_period: Gross pay for the period in dollars.
        frequency: PayFrequency or its name.
        profile: Residency, tax-free threshold, Medicare levy status.

    Returns:
        ScheduleResult with the rounded, non-negative amount and notes
        (the schedule's static notes followed by the branch taken).

    Raises:
        UnsupportedFrequencyError: If the schedule has no entry for frequency.
    """
    frequency = parse_pay_frequency(frequency)
    rule = schedule.frequencies.get(frequency)
    if rule is None:
        raise UnsupportedFrequencyError(
            f"Unsupported frequency: {frequency.value} "
            f"(schedule effective {schedule.effective_from.isoformat()})"
        )

    notes = list(schedule.notes)
    annual_income = max(ZERO, to_decimal(gross_for_period) * rule.annual_factor)

    if profile.residency is Residency.NON_RESIDENT:
        annual_tax = apply_bands(annual_income, schedule.non_resident.tax_rates)
        notes.append("Non-resident scale (no Medicare levy).")
    elif profile.residency is Residency.RESIDENT:
        resident = schedule.resident
        levy = compute_levy(annual_income, profile.medicare_levy, resident.medicare_levy)
        if profile.claims_tax_free_threshold:
            scale = resident.tax_free_threshold
            raw_tax = apply_bands(annual_income, scale.tax_rates)
            lito = compute_lito(annual_income, scale.lito)
            annual_tax = max(ZERO, raw_tax - lito) + levy
            notes.append("Resident scale with tax-free threshold claimed.")
        else:
            raw_tax = apply_bands(annual_income, resident.no_tax_free_threshold.tax_rates)
            annual_tax = raw_tax + levy
            notes.append("Resident scale without the tax-free threshold.")

        if profile.medicare_levy is MedicareLevyStatus.HALF_EXEMPT:
            notes.append("Medicare levy reduced by half exemption.")
        elif profile.medicare_levy is MedicareLevyStatus.FULL_EXEMPT:
            notes.append("Medicare levy exemption applied.")
    else:
        raise ValueError(f"Unknown residency: {profile.residency!r}")

    per_period = annual_tax / rule.annual_factor
    amount = clamp_currency(round_currency(per_period, rule.rounding))
    logger.debug(
        f"schedule1 {schedule.effective_from.isoformat()} {frequency.value}: "
        f"annual income {annual_income}, annual tax {annual_tax}, per period {amount}"
    )
    return ScheduleResult(amount=amount, notes=tuple(notes))
