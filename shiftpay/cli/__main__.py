"""Shift Pay CLI - Command-line interface for shift pay and withholding estimates."""

import logging
import os

import click

from shiftpay import __version__

from .pay_commands import pay as pay_command
from .profile_commands import profile as profile_group
from .withhold_commands import schedules as schedules_command
from .withhold_commands import withhold as withhold_command

# Configure logging based on LOG_LEVEL environment variable
_log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
logging.basicConfig(
    level=getattr(logging, _log_level, logging.WARNING),
    format="%(asctime)s.%(msecs)03d %(levelname)s: %(message)s",
    datefmt="%H:%M:%S"
)


@click.group()
@click.version_option(version=__version__, prog_name="shift-pay")
def cli():
    """Shift Pay - Shift pay and PAYG withholding estimates.

    Pay settings are loaded from (in order):

    \b
    1. SHIFT_PAY_CONFIG_PATH environment variable
    2. ~/.config/shift-pay/profile.yaml (XDG default)

    Run 'shift-pay profile init' to create a profile with default settings.
    """
    pass


# Add subcommands
cli.add_command(pay_command)
cli.add_command(withhold_command)
cli.add_command(schedules_command)
cli.add_command(profile_group)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
