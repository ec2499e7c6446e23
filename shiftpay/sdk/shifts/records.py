"""Shift records with their cached pay breakdown.

The storage layer persists ShiftRecord values; this module builds them,
recomputes every cached breakdown after a settings change, files them
under pay weeks and totals each week, copies a shift onto another day, and
derives the withholding estimate shown alongside a completed shift. All
functions return new values and never modify their inputs.
"""

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Union

from ..dates import DateLike, parse_instant, parse_iso_date
from ..errors import InvalidDateError
from ..taxes.rounding import ZERO
from ..taxes.types import WithholdingBreakdown
from ..taxes.withholding import calculate_withholding
from .pay import compute_pay_for_settings, minutes_to_hours
from .split import weekday_index

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShiftRecord:
    """A shift as stored, with its breakdown cached for listing and totals."""

    id: str
    start: datetime
    end: Optional[datetime]  # None while clocked in
    base_minutes: int = 0
    penalty_minutes: int = 0
    base_pay: int = 0  # cents
    penalty_pay: int = 0  # cents
    total_pay: int = 0  # cents
    week_key: str = ""
    note: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.end is None


@dataclass(frozen=True)
class ShiftWithholding:
    """Withholding estimate for one completed shift, in cents."""

    gross_cents: int
    base_withholding_cents: int
    secondary_loan_cents: int
    total_withheld_cents: int
    take_home_cents: int
    breakdown: WithholdingBreakdown


@dataclass(frozen=True)
class WeekRange:
    """A pay week: start date inclusive, end date exclusive."""

    start: date
    end: date

    @property
    def key(self) -> str:
        return self.start.isoformat()

    def days(self) -> List[date]:
        return [self.start + timedelta(days=offset) for offset in range((self.end - self.start).days)]

    def contains(self, day: date) -> bool:
        return self.start <= day < self.end


@dataclass(frozen=True)
class WeekSummary:
    """Totals over the completed shifts filed under one week."""

    week_key: str
    shift_count: int = 0
    base_minutes: int = 0
    penalty_minutes: int = 0
    base_pay: int = 0  # cents
    penalty_pay: int = 0  # cents

    @property
    def total_minutes(self) -> int:
        return self.base_minutes + self.penalty_minutes

    @property
    def total_pay(self) -> int:
        return self.base_pay + self.penalty_pay

    def to_dict(self) -> Dict[str, Any]:
        return {
            "week_key": self.week_key,
            "shift_count": self.shift_count,
            "base_minutes": self.base_minutes,
            "penalty_minutes": self.penalty_minutes,
            "total_minutes": self.total_minutes,
            "base_hours": str(minutes_to_hours(self.base_minutes)),
            "penalty_hours": str(minutes_to_hours(self.penalty_minutes)),
            "base_pay": self.base_pay,
            "penalty_pay": self.penalty_pay,
            "total_pay": self.total_pay,
        }


@dataclass(frozen=True)
class ShiftCopy:
    """Start, end and note for a new shift copied from an existing one."""

    start: datetime
    end: Optional[datetime]
    note: Optional[str] = None


def week_range(instant: Union[date, datetime], week_starts_on: int) -> WeekRange:
    """The seven-day pay week containing instant.

    week_starts_on uses 0 = Sunday ... 6 = Saturday.
    """
    day = instant.date() if isinstance(instant, datetime) else instant
    offset = (weekday_index(day) - week_starts_on) % 7
    start = day - timedelta(days=offset)
    return WeekRange(start=start, end=start + timedelta(days=7))


def week_key(instant: Union[date, datetime], week_starts_on: int) -> str:
    """ISO date of the first day of the week containing instant."""
    return week_range(instant, week_starts_on).key


def summarize_week(shifts: Iterable[ShiftRecord], week_key: str) -> WeekSummary:
    """Sum minutes and pay of the completed shifts filed under week_key.

    Open shifts are skipped; their cached pay is zero until clock-out.
    """
    key = parse_iso_date(week_key).isoformat()
    count = base_minutes = penalty_minutes = base_pay = penalty_pay = 0
    for shift in shifts:
        if shift.week_key != key or shift.is_open:
            continue
        count += 1
        base_minutes += shift.base_minutes
        penalty_minutes += shift.penalty_minutes
        base_pay += shift.base_pay
        penalty_pay += shift.penalty_pay
    return WeekSummary(
        week_key=key,
        shift_count=count,
        base_minutes=base_minutes,
        penalty_minutes=penalty_minutes,
        base_pay=base_pay,
        penalty_pay=penalty_pay,
    )


def duplicate_shift(shift: ShiftRecord, target_date: DateLike, note: Optional[str] = None) -> ShiftCopy:
    """Copy a shift's clock times onto another day.

    The copy keeps the original start and end times of day. An end that is
    not after the start on the target day rolls over to the next day, so
    overnight shifts stay overnight. A blank note falls back to the
    original shift's note.

    Raises:
        InvalidDateError: If target_date cannot be parsed.
    """
    if isinstance(target_date, str) and not target_date.strip():
        raise InvalidDateError("Please select a date for the copy.")
    day = parse_iso_date(target_date)

    start = datetime.combine(day, shift.start.timetz().replace(second=0, microsecond=0))
    end = None
    if shift.end is not None:
        original_end = shift.end
        if original_end.tzinfo is not None and shift.start.tzinfo is not None:
            original_end = original_end.astimezone(shift.start.tzinfo)
        end = datetime.combine(day, original_end.timetz().replace(second=0, microsecond=0))
        if end <= start:
            end += timedelta(days=1)

    copied_note = (note or "").strip() or (shift.note or "").strip() or None
    return ShiftCopy(start=start, end=end, note=copied_note)


def build_shift_record(
    shift_id: str,
    start: Union[datetime, str],
    end: Optional[Union[datetime, str]],
    settings,
    note: Optional[str] = None,
) -> ShiftRecord:
    """Create a shift record, computing its breakdown when it has ended.

    Raises:
        InvalidIntervalError: If end is set and not after start.
    """
    start = parse_instant(start)
    end = parse_instant(end) if end is not None else None
    record = ShiftRecord(
        id=shift_id,
        start=start,
        end=end,
        week_key=week_key(start, settings.week_starts_on),
        note=note,
    )
    if end is None:
        return record
    return _with_breakdown(record, settings)


def _with_breakdown(record: ShiftRecord, settings) -> ShiftRecord:
    breakdown = compute_pay_for_settings(record.start, record.end, settings)
    return replace(
        record,
        base_minutes=breakdown.base_minutes,
        penalty_minutes=breakdown.penalty_minutes,
        base_pay=breakdown.base_pay,
        penalty_pay=breakdown.penalty_pay,
        total_pay=breakdown.total_pay,
    )


def recompute_shifts(shifts: Iterable[ShiftRecord], settings) -> List[ShiftRecord]:
    """Recompute cached pay and week keys after rates or rules change.

    Open shifts keep zero pay until they are clocked out.
    """
    updated = []
    for shift in shifts:
        record = replace(shift, week_key=week_key(shift.start, settings.week_starts_on))
        if not record.is_open:
            record = _with_breakdown(record, settings)
        updated.append(record)
    logger.debug(f"Recomputed {len(updated)} shift(s)")
    return updated


def _to_cents(amount: Decimal) -> int:
    return max(0, int((amount * 100).to_integral_value()))


def compute_shift_withholding(shift: ShiftRecord, settings) -> Optional[ShiftWithholding]:
    """Estimate withholding on a completed shift's pay.

    The shift's total pay is treated as the gross for one pay period at the
    configured frequency, paid on the day the shift ends.

    Returns:
        ShiftWithholding, or None for a shift that is still open.
    """
    if shift.end is None:
        return None

    gross_cents = max(0, shift.total_pay)
    breakdown = calculate_withholding(
        shift.end,
        Decimal(gross_cents) / 100,
        settings.pay_frequency,
        settings.tax_profile(),
    )
    total_withheld_cents = _to_cents(breakdown.total_withheld)
    return ShiftWithholding(
        gross_cents=gross_cents,
        base_withholding_cents=_to_cents(breakdown.base_withholding),
        secondary_loan_cents=_to_cents(max(ZERO, breakdown.secondary_loan_component)),
        total_withheld_cents=total_withheld_cents,
        take_home_cents=max(0, gross_cents - total_withheld_cents),
        breakdown=breakdown,
    )
