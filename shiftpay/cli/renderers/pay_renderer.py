"""Rich renderer for shift pay breakdowns.

Transforms SDK JSON output (ShiftPayBreakdown.to_dict()) into Rich tables.
"""

from decimal import Decimal

from rich import box
from rich.console import Console
from rich.table import Table


def format_cents(cents: int, currency: str = "AUD") -> str:
    """Format integer cents as a dollar amount, e.g. 7750 -> "$77.50"."""
    amount = (Decimal(cents) / 100).quantize(Decimal("0.01"))
    prefix = "$" if currency in ("AUD", "USD", "NZD", "CAD") else f"{currency} "
    return f"{prefix}{amount:,}"


def _format_minutes(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins:02d}m"


def render_pay_breakdown(console: Console, data: dict, currency: str = "AUD") -> None:
    """Render a shift pay breakdown as Rich tables.

    Args:
        console: Rich Console instance
        data: SDK output from ShiftPayBreakdown.to_dict()
        currency: ISO currency code for amount formatting
    """
    console.print(f"\n[bold]Shift: {data['start']} -> {data['end']}[/bold]")

    segments = Table(show_header=True, header_style="bold", box=box.SIMPLE)
    segments.add_column("Date", style="cyan")
    segments.add_column("Worked", justify="right")
    segments.add_column("Base", justify="right")
    segments.add_column("Penalty", justify="right")
    for segment in data["segments"]:
        segments.add_row(
            segment["date"],
            _format_minutes(segment["minutes_total"]),
            _format_minutes(segment["minutes_base"]),
            _format_minutes(segment["minutes_penalty"]),
        )
    console.print(segments)

    summary = Table(show_header=True, header_style="bold")
    summary.add_column("Component")
    summary.add_column("Hours", justify="right")
    summary.add_column("Pay", justify="right")
    summary.add_row("Base", data["base_hours"], format_cents(data["base_pay"], currency))
    summary.add_row("Penalty", data["penalty_hours"], format_cents(data["penalty_pay"], currency))
    summary.add_row(
        "[bold]Total[/bold]",
        f"[bold]{data['total_hours']}[/bold]",
        f"[bold]{format_cents(data['total_pay'], currency)}[/bold]",
    )
    console.print(summary)
