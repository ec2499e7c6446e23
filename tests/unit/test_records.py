"""Unit tests for shift records, week keys and per-shift withholding."""

from datetime import date, datetime, timedelta, timezone

import pytest

from shiftpay.sdk.errors import InvalidDateError, InvalidIntervalError
from shiftpay.sdk.schemas import PaySettings
from shiftpay.sdk.shifts.records import (
    ShiftRecord,
    build_shift_record,
    compute_shift_withholding,
    duplicate_shift,
    recompute_shifts,
    summarize_week,
    week_key,
    week_range,
)


@pytest.fixture
def settings():
    return PaySettings()


class TestWeekKey:
    """Tests for week_key."""

    def test_monday_start(self):
        """Thursday 2024-04-04 belongs to the week starting Monday 2024-04-01."""
        assert week_key(datetime(2024, 4, 4, 9, 0), 1) == "2024-04-01"

    def test_sunday_start(self):
        assert week_key(datetime(2024, 4, 4, 9, 0), 0) == "2024-03-31"

    def test_on_first_day_of_week(self):
        assert week_key(datetime(2024, 4, 1, 0, 0), 1) == "2024-04-01"

    def test_sunday_with_monday_start(self):
        assert week_key(datetime(2024, 4, 7, 23, 59), 1) == "2024-04-01"


class TestBuildShiftRecord:
    """Tests for build_shift_record."""

    def test_completed_shift_has_breakdown(self, settings):
        record = build_shift_record("s1", "2024-04-02T05:30", "2024-04-02T08:00", settings, note="opening")

        assert record.total_pay == 7750
        assert record.penalty_minutes == 90
        assert record.week_key == "2024-04-01"
        assert record.note == "opening"

    def test_open_shift_has_zero_pay(self, settings):
        record = build_shift_record("s1", "2024-04-02T05:30", None, settings)

        assert record.is_open
        assert record.total_pay == 0

    def test_invalid_interval_raises(self, settings):
        with pytest.raises(InvalidIntervalError):
            build_shift_record("s1", "2024-04-02T08:00", "2024-04-02T05:30", settings)


class TestRecomputeShifts:
    """Tests for recompute_shifts."""

    def test_rates_change_updates_cached_pay(self, settings):
        shifts = [build_shift_record("s1", "2024-04-02T09:00", "2024-04-02T10:00", settings)]
        updated = recompute_shifts(shifts, PaySettings(base_rate=3000))

        assert updated[0].total_pay == 3000
        assert shifts[0].total_pay == 2500

    def test_week_start_change_updates_key(self, settings):
        shifts = [build_shift_record("s1", "2024-04-04T09:00", "2024-04-04T10:00", settings)]
        updated = recompute_shifts(shifts, PaySettings(week_starts_on=0))

        assert updated[0].week_key == "2024-03-31"

    def test_open_shift_stays_unpaid(self, settings):
        shifts = [ShiftRecord(id="s1", start=datetime(2024, 4, 2, 9, 0), end=None)]
        updated = recompute_shifts(shifts, settings)

        assert updated[0].total_pay == 0
        assert updated[0].week_key == "2024-04-01"


class TestComputeShiftWithholding:
    """Tests for compute_shift_withholding."""

    def test_open_shift_returns_none(self, settings):
        shift = ShiftRecord(id="s1", start=datetime(2024, 4, 2, 9, 0), end=None)

        assert compute_shift_withholding(shift, settings) is None

    def test_weekly_shift_pay(self, settings):
        """A 1500.00 gross shift paid weekly withholds 302.92."""
        shift = ShiftRecord(
            id="s1",
            start=datetime(2024, 8, 15, 9, 0),
            end=datetime(2024, 8, 15, 17, 0),
            total_pay=150000,
        )
        result = compute_shift_withholding(shift, settings)

        assert result.gross_cents == 150000
        assert result.total_withheld_cents == 30292
        assert result.base_withholding_cents == 30292
        assert result.secondary_loan_cents == 0
        assert result.take_home_cents == 150000 - 30292

    def test_small_shift_uses_medicare_only(self, settings):
        shift = ShiftRecord(
            id="s1",
            start=datetime(2024, 8, 15, 9, 0),
            end=datetime(2024, 8, 15, 17, 0),
            total_pay=30000,
        )
        result = compute_shift_withholding(shift, settings)

        assert result.total_withheld_cents == 600
        assert result.take_home_cents == 29400


class TestWeekRange:
    """Tests for week_range."""

    def test_monday_start(self):
        week = week_range(datetime(2024, 4, 4, 9, 0), 1)

        assert week.start == date(2024, 4, 1)
        assert week.end == date(2024, 4, 8)
        assert week.key == "2024-04-01"

    def test_days_cover_seven_dates(self):
        week = week_range(date(2024, 4, 4), 0)

        assert week.days() == [date(2024, 3, 31) + timedelta(days=i) for i in range(7)]

    def test_contains_excludes_end(self):
        week = week_range(date(2024, 4, 4), 1)

        assert week.contains(date(2024, 4, 1))
        assert week.contains(date(2024, 4, 7))
        assert not week.contains(date(2024, 4, 8))
        assert not week.contains(date(2024, 3, 31))


class TestSummarizeWeek:
    """Tests for summarize_week."""

    @pytest.fixture
    def shifts(self, settings):
        return [
            build_shift_record("s1", "2024-04-02T05:30", "2024-04-02T08:00", settings),
            build_shift_record("s2", "2024-04-03T09:00", "2024-04-03T10:00", settings),
            build_shift_record("s3", "2024-04-09T09:00", "2024-04-09T10:00", settings),
            build_shift_record("s4", "2024-04-04T09:00", None, settings),
        ]

    def test_totals_for_week(self, shifts):
        summary = summarize_week(shifts, "2024-04-01")

        assert summary.shift_count == 2
        assert summary.base_minutes == 120
        assert summary.penalty_minutes == 90
        assert summary.base_pay == 5000
        assert summary.penalty_pay == 5250
        assert summary.total_pay == 10250

    def test_open_shift_skipped(self, shifts):
        summary = summarize_week(shifts, "2024-04-01")

        assert summary.total_minutes == 210

    def test_other_week(self, shifts):
        summary = summarize_week(shifts, "2024-04-08")

        assert summary.shift_count == 1
        assert summary.total_pay == 2500

    def test_empty_week(self, shifts):
        summary = summarize_week(shifts, "2024-05-06")

        assert summary.shift_count == 0
        assert summary.to_dict()["total_pay"] == 0

    def test_invalid_key_raises(self, shifts):
        with pytest.raises(InvalidDateError):
            summarize_week(shifts, "not-a-date")


class TestDuplicateShift:
    """Tests for duplicate_shift."""

    def test_same_day_shift(self):
        shift = ShiftRecord(id="s1", start=datetime(2024, 4, 2, 9, 15), end=datetime(2024, 4, 2, 17, 45))
        copy = duplicate_shift(shift, "2024-04-10")

        assert copy.start == datetime(2024, 4, 10, 9, 15)
        assert copy.end == datetime(2024, 4, 10, 17, 45)

    def test_overnight_shift_ends_next_day(self):
        shift = ShiftRecord(id="s1", start=datetime(2024, 4, 2, 22, 0), end=datetime(2024, 4, 3, 2, 0))
        copy = duplicate_shift(shift, date(2024, 4, 10))

        assert copy.start == datetime(2024, 4, 10, 22, 0)
        assert copy.end == datetime(2024, 4, 11, 2, 0)

    def test_aware_shift_keeps_timezone(self):
        tz = timezone(timedelta(hours=10))
        shift = ShiftRecord(
            id="s1",
            start=datetime(2024, 4, 2, 9, 0, tzinfo=tz),
            end=datetime(2024, 4, 2, 17, 0, tzinfo=tz),
        )
        copy = duplicate_shift(shift, "2024-04-10")

        assert copy.start == datetime(2024, 4, 10, 9, 0, tzinfo=tz)
        assert copy.end == datetime(2024, 4, 10, 17, 0, tzinfo=tz)

    def test_note_falls_back_to_original(self):
        shift = ShiftRecord(id="s1", start=datetime(2024, 4, 2, 9, 0), end=datetime(2024, 4, 2, 10, 0), note=" close ")

        assert duplicate_shift(shift, "2024-04-10", note="  ").note == "close"
        assert duplicate_shift(shift, "2024-04-10", note=" open ").note == "open"

    def test_no_note(self):
        shift = ShiftRecord(id="s1", start=datetime(2024, 4, 2, 9, 0), end=datetime(2024, 4, 2, 10, 0))

        assert duplicate_shift(shift, "2024-04-10").note is None

    def test_open_shift_copies_start_only(self):
        shift = ShiftRecord(id="s1", start=datetime(2024, 4, 2, 9, 0), end=None)
        copy = duplicate_shift(shift, "2024-04-10")

        assert copy.start == datetime(2024, 4, 10, 9, 0)
        assert copy.end is None

    def test_empty_date_raises(self):
        shift = ShiftRecord(id="s1", start=datetime(2024, 4, 2, 9, 0), end=datetime(2024, 4, 2, 10, 0))

        with pytest.raises(InvalidDateError, match="select a date"):
            duplicate_shift(shift, "")
