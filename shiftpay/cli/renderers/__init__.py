"""Rich renderers for CLI output."""

from .pay_renderer import format_cents, render_pay_breakdown
from .withholding_renderer import render_schedule_dates, render_withholding

__all__ = [
    "format_cents",
    "render_pay_breakdown",
    "render_schedule_dates",
    "render_withholding",
]
