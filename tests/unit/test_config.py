"""Unit tests for configuration module."""

from __future__ import annotations

from datetime import date

import pytest

from admission_engine.infrastructure.config import Config, ObservabilityConfig, QueryConfig, get_config


@pytest.mark.unit
class TestConfig:
    """Tests for Config class."""

    def test_default_config(self) -> None:
        """Test default configuration values."""
        config = Config()

        assert config.query.top_rated_limit == 5
        assert config.query.priority == 1
        assert config.query.age_threshold_years == 20
        assert config.query.reference_date is None
        assert config.observability.log_format == "json"
        assert config.observability.metrics_enabled is False

    def test_reference_date(self) -> None:
        config = Config(query=QueryConfig(reference_date=date(2024, 10, 10)))

        assert config.as_of() == date(2024, 10, 10)

    def test_as_of_defaults_to_today(self) -> None:
        assert Config().as_of() == date.today()

    def test_invalid_priority(self) -> None:
        """Test that a non-positive priority raises validation error."""
        with pytest.raises(ValueError):
            QueryConfig(priority=0)

    def test_invalid_top_rated_limit(self) -> None:
        with pytest.raises(ValueError):
            QueryConfig(top_rated_limit=-1)

    def test_log_formats(self) -> None:
        for log_format in ["json", "console"]:
            observability = ObservabilityConfig(log_format=log_format)  # type: ignore
            assert observability.log_format == log_format

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Nested settings can be overridden from the environment."""
        monkeypatch.setenv("ADMISSION_ENGINE_QUERY__TOP_RATED_LIMIT", "3")
        monkeypatch.setenv("ADMISSION_ENGINE_QUERY__REFERENCE_DATE", "2024-10-10")

        config = Config()

        assert config.query.top_rated_limit == 3
        assert config.query.reference_date == date(2024, 10, 10)


@pytest.mark.unit
class TestConfigSingleton:
    """Tests for get_config singleton."""

    def test_get_config_returns_same_instance(self) -> None:
        """Test that get_config returns the same instance."""
        config1 = get_config()
        config2 = get_config()
        assert config1 is config2
