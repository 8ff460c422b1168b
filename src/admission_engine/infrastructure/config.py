"""Configuration management for the admissions engine."""

from __future__ import annotations

from datetime import date
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class QueryConfig(BaseModel):
    """Default parameters of the analytical queries."""

    top_rated_limit: int = Field(default=5, ge=0, description="Applicants in the top-rated report")
    priority: int = Field(default=1, ge=1, description="Priority treated as first choice")
    age_threshold_years: int = Field(
        default=20, ge=0, description="Age an applicant must have reached to count as older"
    )
    reference_date: date | None = Field(
        default=None, description="Date ages are measured at (today when unset)"
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    metrics_enabled: bool = Field(default=False, description="Expose Prometheus metrics")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus metrics port")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(
        default="admission_engine", description="Service name for tracing"
    )


class Config(BaseSettings):
    """Main configuration for the admissions engine."""

    model_config = SettingsConfigDict(
        env_prefix="ADMISSION_ENGINE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    query: QueryConfig = Field(default_factory=QueryConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    def as_of(self) -> date:
        """Date ages are measured at."""
        return self.query.reference_date or date.today()


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
