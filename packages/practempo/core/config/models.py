"""Configuration models for PracTempo."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from practempo.core.utils.durations import parse_duration

# Three hours, the ceiling for a single built schedule
DEFAULT_MAX_TOTAL_DURATION_SECONDS = 3 * 60 * 60


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Root log level",
    )
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format string (ignored when structured=True)",
    )
    structured: bool = Field(default=False, description="Emit JSON log lines")
    filename: str | None = Field(default=None, description="Log file; stderr when None")

    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v


class ScheduleConfig(BaseModel):
    """Schedule editing and build settings.

    Example:
        >>> cfg = ScheduleConfig()
        >>> cfg.max_total_duration_seconds
        10800
    """

    model_config = ConfigDict(extra="forbid")

    max_total_duration_seconds: int = Field(
        default=DEFAULT_MAX_TOTAL_DURATION_SECONDS,
        gt=0,
        description="Builds whose cumulative interval duration exceeds this fail",
    )
    default_category: str = Field(
        default="Guitar",
        min_length=1,
        description="Category assigned to intervals parsed from the text format",
    )
    default_interval_duration: str = Field(
        default="3:00", description="Duration given to newly added interval rows"
    )
    warmup_period_seconds: int = Field(
        default=0, ge=0, description="Warmup attached to every built interval"
    )

    @field_validator("default_interval_duration")
    @classmethod
    def _check_duration(cls, v: str) -> str:
        parse_duration(v)
        return v


class StorageConfig(BaseModel):
    """Where the last committed schedule is persisted."""

    model_config = ConfigDict(extra="forbid")

    path: Path = Field(
        default=Path("data/last_schedule.json"),
        description="File holding the last built schedule JSON",
    )


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="forbid")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
