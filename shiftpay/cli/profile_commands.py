"""Profile CLI commands for Shift Pay.

Manages the user's pay settings (profile.yaml).
"""

import click
import yaml

from shiftpay.sdk import (
    PaySettings,
    ShiftPayError,
    get_profile_path,
    load_pay_settings,
    save_profile,
)


@click.group()
def profile():
    """Manage pay settings (profile.yaml)."""
    pass


@profile.command("path")
def profile_path():
    """Print the profile.yaml location."""
    click.echo(str(get_profile_path()))


@profile.command("show")
def profile_show():
    """Show the effective pay settings.

    Defaults are shown when no profile.yaml exists.
    """
    path = get_profile_path()
    try:
        settings = load_pay_settings()
    except ShiftPayError as e:
        raise click.ClickException(str(e))

    if path.exists():
        click.echo(f"Profile: {path}")
    else:
        click.echo(click.style(f"Profile: {path} (not found, showing defaults)", fg="yellow"))
    click.echo()
    click.echo(yaml.safe_dump(settings.model_dump(mode="json"), default_flow_style=False, sort_keys=False).rstrip())


@profile.command("init")
@click.option("--force", is_flag=True, help="Overwrite an existing profile.yaml")
def profile_init(force):
    """Create profile.yaml with default settings."""
    path = get_profile_path()
    if path.exists() and not force:
        raise click.ClickException(f"Profile already exists at {path}. Use --force to overwrite.")

    saved = save_profile(PaySettings(), path)
    click.echo(click.style(f"Created {saved}", fg="green"))
