"""Withholding estimate commands."""

import json
from datetime import date
from decimal import Decimal, InvalidOperation

import click
from rich.console import Console

from shiftpay.sdk import (
    MedicareLevyStatus,
    PayFrequency,
    Residency,
    ShiftPayError,
    TaxProfileSettings,
    calculate_withholding,
    get_effective_schedule_dates,
    load_pay_settings,
    parse_iso_date,
)

from shiftpay.sdk.taxes.rounding import MAX_EXPONENT

from .renderers import render_schedule_dates, render_withholding

MEDICARE_CHOICES = {
    "standard": MedicareLevyStatus.STANDARD,
    "half": MedicareLevyStatus.HALF_EXEMPT,
    "none": MedicareLevyStatus.FULL_EXEMPT,
}


def _parse_gross(value: str) -> Decimal:
    try:
        gross = Decimal(value)
    except InvalidOperation:
        raise click.BadParameter(f"Invalid amount '{value}'.", param_hint="--gross")
    if not gross.is_finite() or gross < 0:
        raise click.BadParameter(f"Amount must be a non-negative number, got '{value}'.", param_hint="--gross")
    if gross and gross.adjusted() >= MAX_EXPONENT:
        raise click.BadParameter(f"Amount is too large: '{value}'.", param_hint="--gross")
    return gross


@click.command("withhold")
@click.option("--gross", required=True, help="Gross pay for the period in dollars")
@click.option("--date", "pay_date", help="Pay date YYYY-MM-DD (default: today)")
@click.option("--freq", type=click.Choice([f.value for f in PayFrequency]), help="Pay frequency (default: profile)")
@click.option("--non-resident", is_flag=True, help="Use the non-resident scale")
@click.option("--no-threshold", is_flag=True, help="Tax-free threshold not claimed")
@click.option("--medicare", type=click.Choice(list(MEDICARE_CHOICES)), help="Medicare levy status (default: profile)")
@click.option("--secondary-loan", is_flag=True, help="Include the study/training loan component")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def withhold(gross, pay_date, freq, non_resident, no_threshold, medicare, secondary_loan, as_json):
    """Estimate PAYG withholding for one pay period.

    Flags override the tax settings in profile.yaml for this run only.
    """
    amount = _parse_gross(gross)

    try:
        settings = load_pay_settings()
        profile = settings.tax_profile()
        profile = TaxProfileSettings(
            residency=Residency.NON_RESIDENT if non_resident else profile.residency,
            claims_tax_free_threshold=False if no_threshold else profile.claims_tax_free_threshold,
            medicare_levy=MEDICARE_CHOICES[medicare] if medicare else profile.medicare_levy,
            has_secondary_loan=True if secondary_loan else profile.has_secondary_loan,
        )
        pay_day = parse_iso_date(pay_date) if pay_date else date.today()
        frequency = PayFrequency(freq) if freq else settings.pay_frequency

        breakdown = calculate_withholding(pay_day, amount, frequency, profile)
    except ShiftPayError as e:
        raise click.ClickException(str(e))

    data = breakdown.to_dict()
    if as_json:
        output = {
            "pay_date": pay_day.isoformat(),
            "frequency": frequency.value,
            "gross": str(amount),
            **data,
        }
        click.echo(json.dumps(output, indent=2))
        return

    render_withholding(Console(), data, str(amount), frequency.value, pay_day.isoformat())


@click.command("schedules")
@click.argument("pay_date", required=False)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def schedules(pay_date, as_json):
    """Show which schedule tables apply on PAY_DATE (default: today)."""
    try:
        dates = get_effective_schedule_dates(pay_date or date.today())
    except ShiftPayError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(dates, indent=2))
        return

    render_schedule_dates(Console(), dates)
