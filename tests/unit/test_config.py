"""Tests for application settings."""

from collections.abc import Generator

import pytest
import structlog
from pydantic import ValidationError

from enrollment.config import Settings, configure_logging, get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("DATABASE_URL", "ENVIRONMENT", "JOB_MAX_ATTEMPTS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.DATABASE_URL == "sqlite:///./enrollment.db"
        assert settings.ENVIRONMENT == "development"
        assert settings.JOB_MAX_ATTEMPTS == 5

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "  postgresql://db/enrollment  ")
        monkeypatch.setenv("JOB_MAX_ATTEMPTS", "3")

        settings = Settings(_env_file=None)

        assert settings.DATABASE_URL == "postgresql://db/enrollment"
        assert settings.JOB_MAX_ATTEMPTS == 3

    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("JOB_MAX_ATTEMPTS", "0"),
            ("JOB_POLL_INTERVAL_SECONDS", "0"),
            ("JOB_RETRY_DELAY_SECONDS", "-1"),
            ("ENVIRONMENT", "staging"),
            ("DATABASE_URL", "   "),
        ],
    )
    def test_invalid_values_are_rejected(
        self, monkeypatch: pytest.MonkeyPatch, name: str, value: str
    ) -> None:
        monkeypatch.setenv(name, value)
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def reset_structlog(self) -> Generator[None, None, None]:
        yield
        structlog.reset_defaults()

    def test_production_renders_json(self) -> None:
        configure_logging("production")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_development_renders_console(self) -> None:
        configure_logging("development")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
