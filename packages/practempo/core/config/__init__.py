"""Configuration management for PracTempo."""

from practempo.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
)
from practempo.core.config.models import (
    AppConfig,
    LoggingConfig,
    ScheduleConfig,
    StorageConfig,
)

__all__ = [
    # Loaders
    "detect_format",
    "load_config",
    "load_app_config",
    "configure_logging",
    # Models
    "AppConfig",
    "LoggingConfig",
    "ScheduleConfig",
    "StorageConfig",
]
