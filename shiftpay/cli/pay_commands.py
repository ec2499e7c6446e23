"""Shift pay command."""

import json
from dataclasses import replace

import click
from rich.console import Console

from shiftpay.sdk import ShiftPayError, compute_pay, load_pay_settings, parse_iso_date

from .renderers import render_pay_breakdown


@click.command("pay")
@click.argument("start")
@click.argument("end")
@click.option("--base-rate", type=click.IntRange(min=0), help="Base hourly rate in cents (default: profile)")
@click.option("--penalty-rate", type=click.IntRange(min=0), help="Penalty hourly rate in cents (default: profile)")
@click.option("--holiday", "holidays", multiple=True, metavar="YYYY-MM-DD",
              help="Treat this date as a public holiday (repeatable).")
@click.option("--no-window", is_flag=True, help="Disable the daily penalty window.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def pay(start, end, base_rate, penalty_rate, holidays, no_window, as_json):
    """Compute base and penalty pay for a shift.

    START and END are ISO datetimes, e.g. 2024-04-05T23:00 2024-04-06T03:00.
    Rates and penalty rules default to the profile settings.
    """
    try:
        settings = load_pay_settings()
        config = settings.penalty_config()
        if holidays:
            extra = frozenset(parse_iso_date(h) for h in holidays)
            config = replace(
                config,
                include_public_holidays=True,
                public_holiday_dates=config.public_holiday_dates | extra,
            )
        if no_window:
            config = replace(config, daily_window_enabled=False)

        breakdown = compute_pay(
            start,
            end,
            config,
            settings.base_rate if base_rate is None else base_rate,
            settings.penalty_rate if penalty_rate is None else penalty_rate,
        )
    except ShiftPayError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(breakdown.to_dict(), indent=2))
        return

    render_pay_breakdown(Console(), breakdown.to_dict(), currency=settings.currency)
