"""Split a shift into calendar-day segments and classify penalty minutes.

A shift is walked one calendar day at a time. Each day's chunk is classified
once, using that day's local date:

1. The whole chunk is penalty time if the weekday is an all-day penalty day
   or the date is a configured public holiday (when holidays are enabled).
2. Otherwise, if the daily penalty window is enabled and well formed, the
   overlap between the chunk and [start_minute, end_minute) on that day is
   penalty time and the rest is base time.
3. Otherwise the whole chunk is base time.

Weekday indexes follow the settings convention: 0 = Sunday ... 6 = Saturday.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from typing import FrozenSet, Iterable, List, Union

from ..dates import MINUTES_PER_DAY, parse_instant
from ..errors import InvalidIntervalError

logger = logging.getLogger(__name__)

SUNDAY = 0
SATURDAY = 6

DEFAULT_DAILY_START_MINUTE = 0
DEFAULT_DAILY_END_MINUTE = 7 * 60
DEFAULT_ALL_DAY_WEEKDAYS = frozenset({SUNDAY, SATURDAY})


@dataclass(frozen=True)
class PenaltyConfig:
    """Penalty-time rules for a single split call."""

    daily_window_enabled: bool = True
    daily_start_minute: int = DEFAULT_DAILY_START_MINUTE
    daily_end_minute: int = DEFAULT_DAILY_END_MINUTE  # exclusive; 1440 = midnight
    all_day_weekdays: FrozenSet[int] = DEFAULT_ALL_DAY_WEEKDAYS
    include_public_holidays: bool = False
    public_holiday_dates: FrozenSet[date] = field(default_factory=frozenset)

    def __post_init__(self):
        # Accept any iterable from callers but store immutable sets
        object.__setattr__(self, "all_day_weekdays", frozenset(self.all_day_weekdays))
        object.__setattr__(self, "public_holiday_dates", frozenset(self.public_holiday_dates))

    @property
    def has_daily_window(self) -> bool:
        """True when the daily window is enabled and spans at least a minute."""
        return self.daily_window_enabled and self.daily_end_minute > self.daily_start_minute

    def is_all_day_penalty(self, day: date) -> bool:
        """True when every minute worked on ``day`` is penalty time."""
        if weekday_index(day) in self.all_day_weekdays:
            return True
        return self.include_public_holidays and day in self.public_holiday_dates


@dataclass(frozen=True)
class DailySegment:
    """Minutes worked on one calendar day of a shift."""

    date: date
    minutes_total: int
    minutes_penalty: int
    minutes_base: int

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "minutes_total": self.minutes_total,
            "minutes_penalty": self.minutes_penalty,
            "minutes_base": self.minutes_base,
        }


def weekday_index(day: date) -> int:
    """Weekday with Sunday as 0 and Saturday as 6."""
    return day.isoweekday() % 7


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end.

    Aware datetimes are compared in UTC so DST transitions count real time.
    """
    if start.tzinfo is not None:
        start = start.astimezone(timezone.utc)
        end = end.astimezone(timezone.utc)
    return int((end - start).total_seconds() // 60)


def _truncate_to_minute(value: datetime) -> datetime:
    return value.replace(second=0, microsecond=0)


def validate_interval(start: datetime, end: datetime) -> None:
    """Check that a shift interval is usable.

    Raises:
        InvalidIntervalError: If the instants mix naive and aware values or
            end is not strictly after start.
    """
    if (start.tzinfo is None) != (end.tzinfo is None):
        raise InvalidIntervalError("Shift start and end must both be naive or both timezone-aware")
    if end <= start:
        raise InvalidIntervalError(
            f"Shift end must be after start (start={start.isoformat()}, end={end.isoformat()})"
        )


def _day_bounds(cursor: datetime):
    day = cursor.date()
    day_start = datetime.combine(day, time.min, tzinfo=cursor.tzinfo)
    next_day_start = datetime.combine(day + timedelta(days=1), time.min, tzinfo=cursor.tzinfo)
    return day, day_start, next_day_start


def _window_penalty_minutes(
    day_start: datetime,
    chunk_start: datetime,
    chunk_end: datetime,
    config: PenaltyConfig,
) -> int:
    start_minute = max(0, min(MINUTES_PER_DAY, config.daily_start_minute))
    end_minute = max(0, min(MINUTES_PER_DAY, config.daily_end_minute))
    window_start = day_start + timedelta(minutes=start_minute)
    window_end = day_start + timedelta(minutes=end_minute)

    overlap_start = max(chunk_start, window_start)
    overlap_end = min(chunk_end, window_end)
    if overlap_end <= overlap_start:
        return 0
    return max(0, minutes_between(overlap_start, overlap_end))


def split_into_daily_segments(
    start: Union[datetime, str],
    end: Union[datetime, str],
    config: PenaltyConfig,
) -> List[DailySegment]:
    """Partition a shift into chronologically ordered per-day segments.

    Instants are truncated to whole minutes before splitting; days that end
    up with zero minutes (e.g. a shift ending exactly at midnight) produce no
    segment.

    Args:
        start: Clock-in instant (datetime or ISO string).
        end: Clock-out instant (datetime or ISO string).
        config: Penalty rules.

    Returns:
        List of DailySegment, one per calendar day touched.

    Raises:
        InvalidIntervalError: If end is not strictly after start once both
            are truncated to whole minutes.
        InvalidDateError: If a string instant cannot be parsed.
    """
    start = parse_instant(start)
    end = parse_instant(end)
    validate_interval(start, end)

    if start.tzinfo is not None:
        # Day boundaries are taken in the clock-in timezone
        end = end.astimezone(start.tzinfo)
    start = _truncate_to_minute(start)
    end = _truncate_to_minute(end)
    # A shift shorter than a minute is empty once truncated
    validate_interval(start, end)

    segments: List[DailySegment] = []
    cursor = start
    while cursor < end:
        day, day_start, next_day_start = _day_bounds(cursor)
        chunk_end = min(end, next_day_start)

        minutes_total = minutes_between(cursor, chunk_end)
        if minutes_total <= 0:
            cursor = chunk_end
            continue

        if config.is_all_day_penalty(day):
            minutes_penalty = minutes_total
            rule = "all-day"
        elif config.has_daily_window:
            minutes_penalty = min(minutes_total, _window_penalty_minutes(day_start, cursor, chunk_end, config))
            rule = "window"
        else:
            minutes_penalty = 0
            rule = "base"

        segment = DailySegment(
            date=day,
            minutes_total=minutes_total,
            minutes_penalty=minutes_penalty,
            minutes_base=minutes_total - minutes_penalty,
        )
        logger.debug(
            f"segment {day.isoformat()}: {minutes_total} min "
            f"({minutes_penalty} penalty, rule={rule})"
        )
        segments.append(segment)
        cursor = chunk_end

    return segments


def total_minutes(segments: Iterable[DailySegment]) -> int:
    """Sum of minutes across segments."""
    return sum(segment.minutes_total for segment in segments)
