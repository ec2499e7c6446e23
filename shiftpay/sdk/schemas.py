"""Pydantic schemas for user pay settings (profile.yaml).

PaySettings is the read-only snapshot handed to the pay and withholding
engines. Unknown keys are rejected so typos in profile.yaml fail loudly;
values that are merely out of range are sanitized the same way the settings
screen does (minutes clamped to a day, weekdays filtered, malformed holiday
dates dropped).
"""

import logging
import re
from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .dates import MINUTES_PER_DAY, parse_iso_date, time_to_minutes
from .shifts.split import DEFAULT_DAILY_END_MINUTE, DEFAULT_DAILY_START_MINUTE, PenaltyConfig
from .taxes.types import MedicareLevyStatus, PayFrequency, Residency, TaxProfileSettings

logger = logging.getLogger(__name__)

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _is_calendar_date(value: str) -> bool:
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


class PenaltySettings(BaseModel):
    """Penalty-time rules as stored in profile.yaml."""

    model_config = ConfigDict(extra="forbid")

    daily_window_enabled: bool = True
    daily_start: int = Field(
        default=DEFAULT_DAILY_START_MINUTE,
        description="Window start in minutes past midnight (or 'HH:MM' / 'hh:mm am')",
    )
    daily_end: int = Field(
        default=DEFAULT_DAILY_END_MINUTE,
        description="Window end (exclusive) in minutes past midnight; 1440 = midnight",
    )
    all_day_weekdays: List[int] = Field(
        default_factory=lambda: [0, 6],
        description="Weekdays that are penalty all day (0 = Sunday ... 6 = Saturday)",
    )
    include_public_holidays: bool = False
    public_holiday_dates: List[str] = Field(default_factory=list, description="YYYY-MM-DD dates")

    @field_validator("daily_start", "daily_end", mode="before")
    @classmethod
    def sanitize_minutes(cls, value):
        if isinstance(value, str):
            value = time_to_minutes(value)
        if isinstance(value, float):
            value = int(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return max(0, min(MINUTES_PER_DAY, value))
        return value

    @field_validator("all_day_weekdays", mode="before")
    @classmethod
    def sanitize_weekdays(cls, values):
        if not isinstance(values, (list, tuple, set, frozenset)):
            return values
        kept = set()
        dropped = []
        for value in values:
            if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 6:
                kept.add(value)
            else:
                dropped.append(value)
        if dropped:
            logger.warning(f"Ignoring invalid weekdays in penalty settings: {dropped!r}")
        return sorted(kept)

    @field_validator("public_holiday_dates", mode="before")
    @classmethod
    def sanitize_holiday_dates(cls, values):
        if not isinstance(values, (list, tuple, set, frozenset)):
            return values
        kept = set()
        for value in values:
            if isinstance(value, date):
                kept.add(value.isoformat())
            elif isinstance(value, str) and _ISO_DATE.match(value.strip()) and _is_calendar_date(value.strip()):
                kept.add(value.strip())
            else:
                logger.warning(f"Ignoring invalid public holiday date: {value!r}")
        return sorted(kept)

    @model_validator(mode="after")
    def check_window(self) -> "PenaltySettings":
        if self.daily_window_enabled and self.daily_end <= self.daily_start:
            logger.warning(
                f"Penalty window end ({self.daily_end}) is not after start ({self.daily_start}); "
                f"resetting end to {DEFAULT_DAILY_END_MINUTE}"
            )
            self.daily_end = DEFAULT_DAILY_END_MINUTE
        return self


class TaxSettings(BaseModel):
    """Tax profile as stored in profile.yaml."""

    model_config = ConfigDict(extra="forbid")

    residency: Residency = Residency.RESIDENT
    claims_tax_free_threshold: bool = True
    medicare_levy: MedicareLevyStatus = MedicareLevyStatus.STANDARD
    has_secondary_loan: bool = False


class PaySettings(BaseModel):
    """Complete pay settings snapshot.

    Rates are integer cents per hour.
    """

    model_config = ConfigDict(extra="forbid")

    base_rate: int = Field(default=2500, ge=0, description="Base hourly rate in cents")
    penalty_rate: int = Field(default=3500, ge=0, description="Penalty hourly rate in cents")
    week_starts_on: int = Field(default=1, ge=0, le=6, description="0 = Sunday ... 6 = Saturday")
    currency: str = Field(default="AUD", min_length=1)
    pay_frequency: PayFrequency = PayFrequency.WEEKLY
    penalty: PenaltySettings = Field(default_factory=PenaltySettings)
    tax: TaxSettings = Field(default_factory=TaxSettings)

    def penalty_config(self) -> PenaltyConfig:
        """Penalty rules in the form the day splitter takes."""
        return PenaltyConfig(
            daily_window_enabled=self.penalty.daily_window_enabled,
            daily_start_minute=self.penalty.daily_start,
            daily_end_minute=self.penalty.daily_end,
            all_day_weekdays=frozenset(self.penalty.all_day_weekdays),
            include_public_holidays=self.penalty.include_public_holidays,
            public_holiday_dates=frozenset(parse_iso_date(d) for d in self.penalty.public_holiday_dates),
        )

    def tax_profile(self) -> TaxProfileSettings:
        """Tax profile in the form the withholding calculator takes."""
        return TaxProfileSettings(
            residency=self.tax.residency,
            claims_tax_free_threshold=self.tax.claims_tax_free_threshold,
            medicare_levy=self.tax.medicare_levy,
            has_secondary_loan=self.tax.has_secondary_loan,
        )
