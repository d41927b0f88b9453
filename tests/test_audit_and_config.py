"""Tests for the audit logger and configuration."""

from pathlib import Path

import pytest

from anthaathi.audit import AuditLogger
from anthaathi.config import AppSettings, StorageSettings, WeatherSettings, get_settings
from anthaathi.models.audit import AuditEventBuilder, AuditEventType

from conftest import run


class TestAuditLogger:

    def test_log_returns_true(self):
        logger = AuditLogger()
        assert run(logger.log(AuditEventBuilder.chat_replied("m1"))) is True

    def test_recent_events_newest_first(self):
        logger = AuditLogger()
        run(logger.log_otp_requested("9876543210"))
        run(logger.log_user_logged_out("u1"))

        types = [e.event_type for e in logger.recent_events]
        assert types == [AuditEventType.USER_LOGGED_OUT, AuditEventType.OTP_REQUESTED]

    def test_history_is_bounded(self):
        logger = AuditLogger(history_size=3)
        for i in range(5):
            run(logger.log_chat_replied(f"m{i}"))

        assert [e.entity_id for e in logger.recent_events] == ["m4", "m3", "m2"]

    def test_expense_helper(self):
        logger = AuditLogger()
        run(logger.log_expense_added(
            expense_id="e1",
            title="Urea",
            amount="450",
            category="fertilizer",
        ))
        event = logger.recent_events[0]
        assert event.entity_id == "e1"
        assert event.details == {"title": "Urea", "amount": "450", "category": "fertilizer"}

    def test_error_helper(self):
        logger = AuditLogger()
        run(logger.log_error("StorageWriteError", "disk full", {"key": "expenses"}))
        event = logger.recent_events[0]
        assert event.event_type == AuditEventType.SYSTEM_ERROR
        assert event.details == {"key": "expenses"}


class TestSettings:

    def test_weather_defaults(self):
        settings = WeatherSettings(api_key="k")
        assert settings.base_url == "https://api.openweathermap.org/data/2.5"
        assert settings.units == "metric"

    def test_weather_key_from_environment(self, monkeypatch):
        monkeypatch.setenv("OPENWEATHER_API_KEY", "from-env")
        assert WeatherSettings().api_key == "from-env"

    def test_storage_path(self, tmp_path):
        settings = StorageSettings(data_dir=tmp_path)
        assert settings.storage_path == Path(tmp_path) / "storage.json"
        assert (settings.user_key, settings.language_key, settings.expenses_key) == (
            "user", "language", "expenses",
        )

    def test_default_delays(self):
        settings = AppSettings()
        assert settings.splash_delay_seconds == 1.5
        assert settings.diagnosis_delay_seconds == 2.0
        assert settings.chat_reply_delay_seconds == 1.2

    def test_default_language_is_normalised(self):
        assert AppSettings(default_language=" TA ").default_language == "ta"

    def test_unsupported_default_language(self):
        with pytest.raises(ValueError):
            AppSettings(default_language="fr")

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError):
            AppSettings(splash_delay_seconds=-1)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
