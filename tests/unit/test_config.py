"""Unit tests for profile.yaml loading and saving."""

import pytest

from shiftpay.sdk.config import (
    ProfileNotFoundError,
    ProfileValidationError,
    get_config_dir,
    get_profile_path,
    load_pay_settings,
    load_profile,
    save_profile,
)
from shiftpay.sdk.schemas import PaySettings


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Point the config directory at a temp dir."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("SHIFT_PAY_CONFIG_PATH", str(config_dir))
    return config_dir


class TestConfigDir:
    """Tests for config directory resolution."""

    def test_env_var_wins(self, isolated_env):
        assert get_config_dir() == isolated_env
        assert get_profile_path() == isolated_env / "profile.yaml"

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SHIFT_PAY_CONFIG_PATH", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_dir() == tmp_path / "shift-pay"


class TestLoadProfile:
    """Tests for load_profile and load_pay_settings."""

    def test_missing_profile_raises(self, isolated_env):
        with pytest.raises(ProfileNotFoundError):
            load_profile()

    def test_missing_profile_gives_defaults(self, isolated_env):
        assert load_pay_settings() == PaySettings()

    def test_empty_profile_gives_defaults(self, isolated_env):
        isolated_env.mkdir()
        (isolated_env / "profile.yaml").write_text("")

        assert load_pay_settings() == PaySettings()

    def test_partial_profile(self, isolated_env):
        isolated_env.mkdir()
        (isolated_env / "profile.yaml").write_text(
            "base_rate: 3000\n"
            "penalty:\n"
            "  daily_start: '22:00'\n"
            "  daily_end: '24:00'\n"
            "tax:\n"
            "  has_secondary_loan: true\n"
        )
        settings = load_pay_settings()

        assert settings.base_rate == 3000
        assert settings.penalty.daily_start == 1320
        assert settings.tax.has_secondary_loan is True

    def test_nested_weekday_list_is_ignored(self, isolated_env):
        isolated_env.mkdir()
        (isolated_env / "profile.yaml").write_text("penalty:\n  all_day_weekdays: [[1], 0]\n")

        assert load_pay_settings().penalty.all_day_weekdays == [0]

    def test_invalid_profile_raises(self, isolated_env):
        isolated_env.mkdir()
        (isolated_env / "profile.yaml").write_text("base_rate: -5\n")

        with pytest.raises(ProfileValidationError):
            load_pay_settings()


class TestSaveProfile:
    """Tests for save_profile."""

    def test_round_trip(self, isolated_env):
        settings = PaySettings(
            penalty_rate=4000,
            pay_frequency="fortnightly",
            penalty={"public_holiday_dates": ["2024-12-25"]},
            tax={"medicare_levy": "halfExempt"},
        )
        path = save_profile(settings)

        assert path == isolated_env / "profile.yaml"
        assert load_pay_settings() == settings

    def test_saved_yaml_uses_plain_values(self, isolated_env):
        save_profile(PaySettings())
        data = load_profile()

        assert data["pay_frequency"] == "weekly"
        assert data["tax"]["residency"] == "resident"
