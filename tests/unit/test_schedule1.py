"""Unit tests for Schedule 1 primary withholding and its components.

Expected values are worked by hand from the 2024-06-17 table:
e.g. weekly 1500 -> annual 78000 -> tax 4292 + 33000 * 0.30 = 14192,
LITO 0, Medicare 1560 -> (14192 + 1560) / 52 = 302.92.
"""

from decimal import Decimal

import pytest

from shiftpay.sdk.errors import UnsupportedFrequencyError
from shiftpay.sdk.taxes.rules import SCHEDULES
from shiftpay.sdk.taxes.schedule1 import apply_bands, calculate_schedule1, compute_levy, compute_lito
from shiftpay.sdk.taxes.types import MedicareLevyStatus, PayFrequency, Residency, TaxProfileSettings


@pytest.fixture
def schedule():
    return SCHEDULES.schedule1[0]


class TestApplyBands:
    """Tests for the progressive scale evaluator."""

    def test_below_tax_free_threshold(self, schedule):
        bands = schedule.resident.tax_free_threshold.tax_rates

        assert apply_bands(Decimal("15000"), bands) == Decimal("0")

    def test_second_band(self, schedule):
        bands = schedule.resident.tax_free_threshold.tax_rates

        assert apply_bands(Decimal("78000"), bands) == Decimal("14192")

    def test_exactly_on_threshold_uses_that_band(self, schedule):
        bands = schedule.resident.tax_free_threshold.tax_rates

        assert apply_bands(Decimal("45000"), bands) == Decimal("4292")

    def test_top_band(self, schedule):
        bands = schedule.resident.tax_free_threshold.tax_rates

        assert apply_bands(Decimal("200000"), bands) == Decimal("52392") + Decimal("10000") * Decimal("0.45")


class TestLito:
    """Tests for the low income tax offset."""

    @pytest.mark.parametrize("income, expected", [
        ("30000", "700"),
        ("37500", "700"),
        ("40000", "575"),
        ("45000", "325"),
        ("50000", "250"),
        ("70000", "0"),
    ])
    def test_offset(self, schedule, income, expected):
        lito = schedule.resident.tax_free_threshold.lito

        assert compute_lito(Decimal(income), lito) == Decimal(expected)


class TestMedicareLevy:
    """Tests for the Medicare levy."""

    def test_standard(self, schedule):
        levy = compute_levy(Decimal("78000"), MedicareLevyStatus.STANDARD, schedule.resident.medicare_levy)

        assert levy == Decimal("1560")

    def test_half_exempt(self, schedule):
        levy = compute_levy(Decimal("78000"), MedicareLevyStatus.HALF_EXEMPT, schedule.resident.medicare_levy)

        assert levy == Decimal("780")

    def test_full_exempt(self, schedule):
        levy = compute_levy(Decimal("78000"), MedicareLevyStatus.FULL_EXEMPT, schedule.resident.medicare_levy)

        assert levy == Decimal("0")


class TestCalculateSchedule1:
    """Tests for calculate_schedule1."""

    def test_resident_with_threshold_weekly(self, schedule):
        result = calculate_schedule1(schedule, Decimal("1500"), PayFrequency.WEEKLY, TaxProfileSettings())

        assert result.amount == Decimal("302.92")
        assert "Resident scale with tax-free threshold claimed." in result.notes

    def test_resident_without_threshold_fortnightly(self, schedule):
        profile = TaxProfileSettings(claims_tax_free_threshold=False)
        result = calculate_schedule1(schedule, Decimal("2800"), "fortnightly", profile)

        assert result.amount == Decimal("653.69")
        assert "Resident scale without the tax-free threshold." in result.notes

    def test_non_resident_monthly(self, schedule):
        profile = TaxProfileSettings(residency=Residency.NON_RESIDENT)
        result = calculate_schedule1(schedule, Decimal("9000"), PayFrequency.MONTHLY, profile)

        assert result.amount == Decimal("2700.00")
        assert "Non-resident scale (no Medicare levy)." in result.notes

    def test_non_resident_ignores_medicare_status(self, schedule):
        standard = TaxProfileSettings(residency=Residency.NON_RESIDENT)
        exempt = TaxProfileSettings(residency=Residency.NON_RESIDENT, medicare_levy=MedicareLevyStatus.FULL_EXEMPT)

        assert (
            calculate_schedule1(schedule, 9000, "monthly", standard).amount
            == calculate_schedule1(schedule, 9000, "monthly", exempt).amount
        )

    def test_half_exemption_reduces_withholding(self, schedule):
        standard = calculate_schedule1(schedule, Decimal("1300"), "weekly", TaxProfileSettings())
        half = calculate_schedule1(
            schedule, Decimal("1300"), "weekly", TaxProfileSettings(medicare_levy=MedicareLevyStatus.HALF_EXEMPT)
        )

        assert standard.amount == Decimal("238.92")
        assert half.amount == Decimal("225.92")
        assert "Medicare levy reduced by half exemption." in half.notes

    def test_full_exemption_note(self, schedule):
        profile = TaxProfileSettings(medicare_levy=MedicareLevyStatus.FULL_EXEMPT)
        result = calculate_schedule1(schedule, Decimal("1300"), "weekly", profile)

        assert result.amount == Decimal("212.92")
        assert "Medicare levy exemption applied." in result.notes

    def test_low_income_is_medicare_only(self, schedule):
        """LITO cannot make income tax negative; the levy still applies."""
        result = calculate_schedule1(schedule, Decimal("300"), "weekly", TaxProfileSettings())

        assert result.amount == Decimal("6.00")

    def test_quarterly(self, schedule):
        result = calculate_schedule1(schedule, Decimal("19500"), "quarterly", TaxProfileSettings())

        # Same annual income as weekly 1500
        assert result.amount == Decimal("3938.00")

    def test_static_notes_come_first(self, schedule):
        result = calculate_schedule1(schedule, Decimal("1500"), "weekly", TaxProfileSettings())

        assert result.notes[: len(schedule.notes)] == schedule.notes

    def test_negative_gross_gives_zero(self, schedule):
        result = calculate_schedule1(schedule, Decimal("-100"), "weekly", TaxProfileSettings())

        assert result.amount == Decimal("0.00")

    def test_unknown_frequency_raises(self, schedule):
        with pytest.raises(UnsupportedFrequencyError):
            calculate_schedule1(schedule, Decimal("1500"), "daily", TaxProfileSettings())

    def test_monotonic_in_gross(self, schedule):
        profile = TaxProfileSettings()
        amounts = [
            calculate_schedule1(schedule, Decimal(gross), "weekly", profile).amount
            for gross in range(0, 6000, 50)
        ]

        assert amounts == sorted(amounts)
