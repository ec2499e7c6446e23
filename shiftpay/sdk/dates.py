"""Date and time helpers shared by the pay and withholding engines.

Covers parsing of ISO dates and instants, conversion between clock-time
strings and minutes past midnight, and selection of the effective-dated
record (schedule table) in force on a given pay date.
"""

import logging
import re
from datetime import date, datetime
from typing import Optional, Sequence, Tuple, TypeVar, Union

from .errors import InvalidDateError

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60

_TIME_24_HOUR = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")
_TIME_12_HOUR = re.compile(r"^(0?[1-9]|1[0-2]):([0-5]\d)\s*([AaPp][Mm])$")

DateLike = Union[date, datetime, str]

T = TypeVar("T")


def _fromisoformat(value: str) -> datetime:
    # datetime.fromisoformat() only accepts a trailing "Z" from Python 3.11
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def parse_instant(value: Union[datetime, str]) -> datetime:
    """Parse an ISO 8601 instant such as "2024-04-02T06:30:00".

    Naive values are local wall-clock times; offsets are preserved.

    Raises:
        InvalidDateError: If the value is not a datetime or ISO string.
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(f"Invalid ISO datetime: {value!r}")
    try:
        return _fromisoformat(value.strip())
    except ValueError:
        raise InvalidDateError(f"Invalid ISO datetime: {value!r}") from None


def parse_iso_date(value: DateLike) -> date:
    """Parse a calendar date from a date, datetime or ISO string.

    Datetime inputs (and strings carrying a time part) are reduced to their
    own calendar date.

    Raises:
        InvalidDateError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(f"Invalid ISO date: {value!r}")

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return _fromisoformat(text).date()
    except ValueError:
        raise InvalidDateError(f"Invalid ISO date: {value!r}") from None


def time_to_minutes(value: str) -> int:
    """Convert a clock time to minutes past midnight.

    Accepts 24-hour "HH:MM" (plus "24:00" for end of day) and 12-hour
    "hh:mm am/pm" input.

    Examples:
        time_to_minutes("12:00 am")  # -> 0
        time_to_minutes("12:00 pm")  # -> 720
        time_to_minutes("23:45")     # -> 1425

    Raises:
        InvalidDateError: If the value matches neither format.
    """
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise InvalidDateError("Enter a time value.")
    if text == "24:00":
        return MINUTES_PER_DAY

    match = _TIME_24_HOUR.match(text)
    if match:
        return int(match.group(1)) * 60 + int(match.group(2))

    match = _TIME_12_HOUR.match(text)
    if match:
        hours = int(match.group(1)) % 12
        if match.group(3).lower() == "pm":
            hours += 12
        return hours * 60 + int(match.group(2))

    raise InvalidDateError(f"Use HH:MM (24-hour) or HH:MM AM/PM (12-hour), got {value!r}.")


def minutes_to_time(minutes: int) -> str:
    """Format minutes past midnight as 24-hour "HH:MM"."""
    minutes = max(0, min(MINUTES_PER_DAY, int(minutes)))
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def select_effective_record(records: Sequence[T], pay_date: date) -> Tuple[T, Optional[str]]:
    """Select the record in force on pay_date.

    Records are ordered by their ``effective_from`` date (input order is not
    trusted) and the last one effective on or before pay_date wins. The sort
    is stable, so when several records share an effective date the one listed
    last in ``records`` is selected.

    If pay_date precedes every record, the earliest record is returned with a
    diagnostic note instead of failing, so estimates stay available for dates
    outside the bundled tables.

    Args:
        records: Effective-dated records exposing ``effective_from: date``.
        pay_date: Date the payment is made.

    Returns:
        Tuple of (record, note). note is None unless the fallback applied.

    Raises:
        ValueError: If records is empty.
    """
    if not records:
        raise ValueError("No effective-dated records to select from")

    ordered = sorted(records, key=lambda record: record.effective_from)
    active = None
    for record in ordered:
        if record.effective_from <= pay_date:
            active = record
        else:
            break

    if active is None:
        earliest = ordered[0]
        logger.warning(
            f"No record effective on {pay_date.isoformat()}; "
            f"using earliest available ({earliest.effective_from.isoformat()})"
        )
        note = (
            f"Pay date {pay_date.isoformat()} precedes the earliest schedule; "
            f"using the schedule effective from {earliest.effective_from.isoformat()}."
        )
        return earliest, note

    logger.debug(f"Selected record effective {active.effective_from.isoformat()} for {pay_date.isoformat()}")
    return active, None
