"""Configuration management for Glowline."""

from glowline.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
    load_roofline,
)
from glowline.core.config.models import (
    AppConfig,
    ConfigBase,
    DeviceConfig,
    LoggingConfig,
    ParserConfig,
    SolverConfig,
)

__all__ = [
    # Loaders
    "configure_logging",
    "detect_format",
    "load_app_config",
    "load_config",
    "load_roofline",
    # Models
    "AppConfig",
    "ConfigBase",
    "DeviceConfig",
    "LoggingConfig",
    "ParserConfig",
    "SolverConfig",
]
