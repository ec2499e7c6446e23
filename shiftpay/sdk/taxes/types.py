"""Profile variants and result types for withholding calculations."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..errors import UnsupportedFrequencyError


class PayFrequency(str, Enum):
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"


class Residency(str, Enum):
    RESIDENT = "resident"
    NON_RESIDENT = "nonResident"


class MedicareLevyStatus(str, Enum):
    STANDARD = "standard"
    HALF_EXEMPT = "halfExempt"
    FULL_EXEMPT = "fullExempt"


@dataclass(frozen=True)
class TaxProfileSettings:
    """User-declared tax profile, passed by value into each calculation."""

    residency: Residency = Residency.RESIDENT
    claims_tax_free_threshold: bool = True
    medicare_levy: MedicareLevyStatus = MedicareLevyStatus.STANDARD
    has_secondary_loan: bool = False

    def __post_init__(self):
        object.__setattr__(self, "residency", Residency(self.residency))
        object.__setattr__(self, "medicare_levy", MedicareLevyStatus(self.medicare_levy))


@dataclass(frozen=True)
class ScheduleResult:
    """Per-period amount produced by a single schedule."""

    amount: Decimal
    notes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class EffectiveScheduleDates:
    schedule1_effective_from: date
    schedule8_effective_from: Optional[date] = None


@dataclass(frozen=True)
class WithholdingBreakdown:
    """Estimated withholding for one pay period (dollars, 2 decimal places)."""

    base_withholding: Decimal
    secondary_loan_component: Decimal
    total_withheld: Decimal
    effective_schedules: EffectiveScheduleDates
    notes: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        schedules: Dict[str, Any] = {
            "schedule1_effective_from": self.effective_schedules.schedule1_effective_from.isoformat(),
        }
        if self.effective_schedules.schedule8_effective_from is not None:
            schedules["schedule8_effective_from"] = self.effective_schedules.schedule8_effective_from.isoformat()
        return {
            "base_withholding": str(self.base_withholding),
            "secondary_loan_component": str(self.secondary_loan_component),
            "total_withheld": str(self.total_withheld),
            "effective_schedules": schedules,
            "notes": list(self.notes),
        }


def parse_pay_frequency(value) -> PayFrequency:
    """Resolve a PayFrequency from an enum member or its name.

    Raises:
        UnsupportedFrequencyError: If the value names no known frequency.
    """
    if isinstance(value, PayFrequency):
        return value
    try:
        return PayFrequency(str(value).strip().lower())
    except ValueError:
        valid = ", ".join(freq.value for freq in PayFrequency)
        raise UnsupportedFrequencyError(f"Unsupported frequency: {value!r}. Must be one of: {valid}") from None
