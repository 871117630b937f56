import pytest
from pydantic import ValidationError

from carbonroute.core.settings import Settings


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("WEATHER_ADJUSTMENT_SOURCE", raising=False)
        monkeypatch.delenv("APPLY_ROUTE_ADJUSTMENT", raising=False)

        settings = Settings(_env_file=None)

        assert settings.WEATHER_ADJUSTMENT_SOURCE == "scenario"
        assert settings.APPLY_ROUTE_ADJUSTMENT is False
        assert settings.FALLBACK_DISTANCE_KM == 150.0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("WEATHER_ADJUSTMENT_SOURCE", "LIVE")
        monkeypatch.setenv("APPLY_ROUTE_ADJUSTMENT", "true")
        monkeypatch.setenv("MOCK_WEATHER_SEED", "7")

        settings = Settings(_env_file=None)

        assert settings.WEATHER_ADJUSTMENT_SOURCE == "live"
        assert settings.APPLY_ROUTE_ADJUSTMENT is True
        assert settings.MOCK_WEATHER_SEED == 7

    def test_invalid_weather_source(self, monkeypatch):
        monkeypatch.setenv("WEATHER_ADJUSTMENT_SOURCE", "satellite")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_allowed_origins_from_comma_separated_list(self):
        settings = Settings(_env_file=None, ALLOWED_ORIGINS="http://a.test, http://b.test")

        assert settings.ALLOWED_ORIGINS == ["http://a.test", "http://b.test"]
