"""Configuration management for Shift Pay.

User pay settings live in a single profile.yaml:

    base_rate: 2500          # cents per hour
    penalty_rate: 3500
    week_starts_on: 1        # 0 = Sunday ... 6 = Saturday
    currency: AUD
    pay_frequency: weekly
    penalty:
      daily_window_enabled: true
      daily_start: "00:00"
      daily_end: "07:00"
      all_day_weekdays: [0, 6]
      include_public_holidays: true
      public_holiday_dates: ["2024-12-25", "2024-12-26"]
    tax:
      residency: resident
      claims_tax_free_threshold: true
      medicare_levy: standard
      has_secondary_loan: false

Config directory resolution:
1. SHIFT_PAY_CONFIG_PATH environment variable (if set)
2. $XDG_CONFIG_HOME/shift-pay/ (default ~/.config/shift-pay/)
"""

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from .errors import ShiftPayError
from .schemas import PaySettings

logger = logging.getLogger(__name__)

APP_NAME = "shift-pay"
PROFILE_FILENAME = "profile.yaml"


class ProfileNotFoundError(ShiftPayError):
    """Raised when no profile.yaml is found."""
    pass


class ProfileValidationError(ShiftPayError):
    """Raised when profile.yaml does not match the PaySettings schema."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. SHIFT_PAY_CONFIG_PATH environment variable
    2. ~/.config/shift-pay/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("SHIFT_PAY_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_profile_path() -> Path:
    """Get the path to profile.yaml (may not exist yet)."""
    return get_config_dir() / PROFILE_FILENAME


def load_profile(profile_path: Optional[Path] = None) -> dict:
    """Load the raw profile.yaml contents.

    Args:
        profile_path: Explicit path (default: get_profile_path()).

    Returns:
        Profile dictionary (empty dict for an empty file)

    Raises:
        ProfileNotFoundError: If the profile file doesn't exist
    """
    profile_path = profile_path or get_profile_path()
    if not profile_path.exists():
        raise ProfileNotFoundError(
            f"Profile not found at {profile_path}. "
            "Run 'shift-pay profile init' to create one."
        )

    with open(profile_path, "r") as f:
        data = yaml.safe_load(f)
    return data or {}


def save_profile(settings: PaySettings, profile_path: Optional[Path] = None) -> Path:
    """Write settings to profile.yaml.

    Returns:
        Path to the saved profile
    """
    profile_path = profile_path or get_profile_path()
    profile_path.parent.mkdir(parents=True, exist_ok=True)

    with open(profile_path, "w") as f:
        yaml.safe_dump(settings.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)

    logger.debug(f"Saved profile to {profile_path}")
    return profile_path


def load_pay_settings(profile_path: Optional[Path] = None) -> PaySettings:
    """Load and validate pay settings.

    Falls back to defaults when no profile exists, so the engines always get
    a complete snapshot.

    Raises:
        ProfileValidationError: If the profile exists but is invalid
    """
    try:
        data = load_profile(profile_path)
    except ProfileNotFoundError:
        logger.debug("No profile found, using default pay settings")
        return PaySettings()

    try:
        return PaySettings.model_validate(data)
    except ValidationError as e:
        raise ProfileValidationError(f"Invalid profile {profile_path or get_profile_path()}: {e}") from e
