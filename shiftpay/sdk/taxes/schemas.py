"""Pydantic schemas for regulatory schedule tables.

These schemas validate the tax-rules/schedule1/*.yaml and
tax-rules/schedule8/*.yaml files when they are loaded at startup. Every
model forbids unknown keys and is frozen, so a typo in a table is a load
error and nothing can alter a table once it is in memory.

Numbers are held as Decimal. YAML floats are converted through str() so
0.16 stays exactly 0.16.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, Dict, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator

from .types import PayFrequency


def _float_to_decimal(value):
    if isinstance(value, float):
        return Decimal(str(value))
    return value


NonNegativeDecimal = Annotated[Decimal, BeforeValidator(_float_to_decimal), Field(ge=0)]
PositiveDecimal = Annotated[Decimal, BeforeValidator(_float_to_decimal), Field(gt=0)]


def _require_increasing(values: Sequence[Decimal], label: str) -> None:
    for previous, current in zip(values, values[1:]):
        if current <= previous:
            raise ValueError(f"{label} must be strictly increasing ({previous} then {current})")


class _TableModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class RoundingRule(_TableModel):
    """How a per-period amount is rounded."""

    precision: PositiveDecimal = Field(..., description="Rounding step in dollars, e.g. 0.01")
    mode: Literal["half_up"] = Field(..., description="Tie-breaking mode")


class FrequencyRule(_TableModel):
    """Annualization and rounding for one pay frequency."""

    annual_factor: PositiveDecimal = Field(..., description="Periods per year")
    rounding: RoundingRule


class TaxRateBand(_TableModel):
    """One band of a progressive scale.

    Tax on income in this band is base + (income - threshold) * rate.
    """

    threshold: NonNegativeDecimal = Field(..., description="Annual income where the band starts")
    rate: NonNegativeDecimal = Field(..., description="Marginal rate as decimal")
    base: NonNegativeDecimal = Field(..., description="Tax payable at the threshold")


class BandedScale(_TableModel):
    """Progressive scale: bands sorted by strictly increasing threshold."""

    tax_rates: Tuple[TaxRateBand, ...] = Field(..., min_length=1)

    @field_validator("tax_rates")
    @classmethod
    def check_thresholds(cls, bands: Tuple[TaxRateBand, ...]) -> Tuple[TaxRateBand, ...]:
        _require_increasing([band.threshold for band in bands], "Band thresholds")
        return bands


class LitoConfig(_TableModel):
    """Low income tax offset parameters."""

    maximum: NonNegativeDecimal
    full_threshold: NonNegativeDecimal
    middle_threshold: NonNegativeDecimal
    phase_out: NonNegativeDecimal
    phase_out_rate_low: NonNegativeDecimal
    phase_out_rate_high: NonNegativeDecimal
    middle_offset: NonNegativeDecimal

    @model_validator(mode="after")
    def check_thresholds(self) -> "LitoConfig":
        if not (self.full_threshold <= self.middle_threshold <= self.phase_out):
            raise ValueError(
                "LITO thresholds must satisfy full_threshold <= middle_threshold <= phase_out "
                f"(got {self.full_threshold}, {self.middle_threshold}, {self.phase_out})"
            )
        return self


class MedicareRate(_TableModel):
    type: Literal["flat_rate"]
    rate: NonNegativeDecimal


class MedicareLevyConfig(_TableModel):
    standard: MedicareRate
    half_exempt: MedicareRate
    full_exempt: MedicareRate


class TaxFreeThresholdScale(BandedScale):
    lito: LitoConfig


class ResidentRules(_TableModel):
    tax_free_threshold: TaxFreeThresholdScale
    no_tax_free_threshold: BandedScale
    medicare_levy: MedicareLevyConfig


class Schedule1Data(_TableModel):
    """Primary withholding schedule (PAYG Schedule 1) effective from a date."""

    schedule: str
    effective_from: date
    source_url: Optional[str] = None
    retrieved_at: Optional[str] = None
    notes: Tuple[str, ...] = ()
    frequencies: Dict[PayFrequency, FrequencyRule]
    resident: ResidentRules
    non_resident: BandedScale

    @field_validator("frequencies")
    @classmethod
    def check_frequencies(cls, frequencies: Dict[PayFrequency, FrequencyRule]) -> Dict[PayFrequency, FrequencyRule]:
        missing = [freq.value for freq in PayFrequency if freq not in frequencies]
        if missing:
            raise ValueError(f"Missing pay frequencies: {', '.join(missing)}")
        return frequencies


class Schedule8Threshold(_TableModel):
    """Repayment tier: rate applies to all income once minimum is reached."""

    minimum: NonNegativeDecimal
    rate: NonNegativeDecimal


class Schedule8Data(_TableModel):
    """Study and training loan withholding schedule (Schedule 8)."""

    schedule: str
    effective_from: date
    source_url: Optional[str] = None
    retrieved_at: Optional[str] = None
    notes: Tuple[str, ...] = ()
    rounding: RoundingRule
    thresholds: Tuple[Schedule8Threshold, ...] = Field(..., min_length=1)

    @field_validator("thresholds")
    @classmethod
    def check_minimums(cls, thresholds: Tuple[Schedule8Threshold, ...]) -> Tuple[Schedule8Threshold, ...]:
        _require_increasing([tier.minimum for tier in thresholds], "Schedule 8 minimums")
        return thresholds
