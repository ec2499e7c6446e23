"""Unit tests for Schedule 8 secondary loan withholding."""

from datetime import date
from decimal import Decimal

import pytest

from shiftpay.sdk.taxes.rules import SCHEDULES
from shiftpay.sdk.taxes.schedule8 import calculate_schedule8


def _table(effective_from: date):
    return next(s for s in SCHEDULES.schedule8 if s.effective_from == effective_from)


@pytest.fixture
def schedule_2024():
    return _table(date(2024, 7, 1))


@pytest.fixture
def schedule_2025():
    return _table(date(2025, 9, 24))


class TestCalculateSchedule8:
    """Tests for calculate_schedule8."""

    def test_rate_applies_to_whole_income(self, schedule_2024):
        """Weekly 2200 -> annual 114400 -> 7.5% of 114400 / 52 = 165.00."""
        result = calculate_schedule8(schedule_2024, Decimal("2200"), "weekly")

        assert result.amount == Decimal("165.00")
        assert "Secondary loan repayment rate 7.5% applied." in result.notes

    def test_revised_thresholds(self, schedule_2025):
        """Same income falls in the 7% tier of the revised table."""
        result = calculate_schedule8(schedule_2025, Decimal("2200"), "weekly")

        assert result.amount == Decimal("154.00")
        assert "Secondary loan repayment rate 7% applied." in result.notes

    def test_below_first_threshold(self, schedule_2024):
        result = calculate_schedule8(schedule_2024, Decimal("500"), "weekly")

        assert result.amount == Decimal("0.00")
        assert "Secondary loan repayment not triggered for this income." in result.notes

    def test_exactly_on_minimum(self, schedule_2024):
        """51550 annual is the first 1% tier: 515.50 / 4 = 128.875 -> 128.88."""
        result = calculate_schedule8(schedule_2024, Decimal("12887.50"), "quarterly")

        assert result.amount == Decimal("128.88")

    def test_static_notes_included(self, schedule_2024):
        result = calculate_schedule8(schedule_2024, Decimal("2200"), "weekly")

        assert "Study and training support loan component is an estimate." in result.notes

    def test_nan_gross_gives_zero(self, schedule_2024):
        result = calculate_schedule8(schedule_2024, float("nan"), "weekly")

        assert result.amount == Decimal("0.00")
