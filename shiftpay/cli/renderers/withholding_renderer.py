"""Rich renderer for withholding estimates.

Transforms SDK JSON output (WithholdingBreakdown.to_dict()) into Rich tables.
"""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table


def render_withholding(console: Console, data: dict, gross: str, frequency: str, pay_date: str) -> None:
    """Render a withholding breakdown.

    Args:
        console: Rich Console instance
        data: SDK output from WithholdingBreakdown.to_dict()
        gross: Gross pay for the period as entered
        frequency: Pay frequency name
        pay_date: ISO pay date
    """
    console.print(f"\n[bold]Withholding estimate: {pay_date} ({frequency})[/bold]")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Field", style="cyan")
    table.add_column("Amount", justify="right")
    table.add_row("Gross", f"${gross}")
    table.add_row("Schedule 1", f"${data['base_withholding']}")
    table.add_row("Secondary loan", f"${data['secondary_loan_component']}")
    table.add_row("[bold]Total withheld[/bold]", f"[bold]${data['total_withheld']}[/bold]")
    console.print(table)

    render_schedule_dates(console, data["effective_schedules"])

    for note in data.get("notes", []):
        console.print(Panel(f"[yellow]{note}[/yellow]", title="Note", border_style="yellow"))


def render_schedule_dates(console: Console, schedules: dict) -> None:
    """Render the effective dates of the schedules in force."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("Schedule", style="cyan")
    table.add_column("Effective from")
    table.add_row("Schedule 1", schedules["schedule1_effective_from"])
    if "schedule8_effective_from" in schedules:
        table.add_row("Schedule 8", schedules["schedule8_effective_from"])
    console.print(table)
