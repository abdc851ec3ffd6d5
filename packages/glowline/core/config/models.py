"""Application configuration models."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from glowline.core.transport.retry import RetryPolicy


class ConfigBase(BaseModel):
    """Base class for file-backed configurations.

    Subclasses name their default location via :meth:`default_path`.
    """

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    @classmethod
    def default_path(cls) -> Path:
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load from ``path`` (or the default path); defaults if it is absent.

        Raises:
            ValueError: If the file exists but cannot be parsed.
            ValidationError: If the file content is invalid.
        """
        from glowline.core.config.loader import load_config

        path = Path(path) if path is not None else cls.default_path()
        if not path.exists():
            return cls()
        return cls.model_validate(load_config(path))


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False
    filename: str | None = None


class ParserConfig(BaseModel):
    """Confidence scoring and defaults used by the intent assembler."""

    ambiguity_penalty: float = Field(default=0.15, ge=0.0, le=1.0)
    all_zone_penalty: float = Field(default=0.05, ge=0.0, le=1.0)
    white_primary_penalty: float = Field(default=0.1, ge=0.0, le=1.0)
    zone_ambiguity_segment_threshold: int = Field(
        default=4,
        ge=0,
        description="Ask which segments when a single role matches more than this many",
    )
    default_equally_spaced_count: int = Field(default=10, ge=1)


class SolverConfig(BaseModel):
    """Tunable thresholds of the constraint solver.

    The defaults are empirical; none of them is derived.
    """

    model_config = ConfigDict(frozen=True)

    contrast_threshold: float = Field(
        default=0.3,
        ge=0.0,
        le=1.0,
        description="Minimum normalized contrast between overlapping layers",
    )
    spacing_tolerance: float = Field(
        default=0.01,
        gt=0.0,
        description="Max distance from an integer for equal spacing to count as exact",
    )
    equally_spaced_search_radius: int = Field(default=3, ge=1)
    every_nth_search_radius: int = Field(default=2, ge=1)
    max_alternatives: int = Field(default=4, ge=1)
    recommend_below_deviation: float = Field(default=0.1, ge=0.0)
    keep_remainder_deviation: float = Field(default=0.1, ge=0.0)
    architectural_fallback_fraction: float = Field(default=0.2, gt=0.0, le=1.0)
    location_fallback_fraction: float = Field(default=0.4, gt=0.0, le=1.0)


class DeviceConfig(BaseModel):
    """Controller connection settings."""

    host: str | None = None
    timeout_s: float = Field(default=5.0, gt=0.0)
    brightness: int = Field(default=200, ge=0, le=255)
    rgbw: bool = False
    retry: RetryPolicy = Field(default_factory=RetryPolicy)

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("host cannot be empty")
        return v

    @property
    def base_url(self) -> str | None:
        if self.host is None:
            return None
        if self.host.startswith(("http://", "https://")):
            return self.host
        return f"http://{self.host}"


class AppConfig(ConfigBase):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")

    logging: LoggingConfig = LoggingConfig()
    parser: ParserConfig = ParserConfig()
    solver: SolverConfig = SolverConfig()
    device: DeviceConfig = DeviceConfig()

    @classmethod
    def default_path(cls) -> Path:
        return Path("glowline.yaml")


__all__ = [
    "AppConfig",
    "ConfigBase",
    "DeviceConfig",
    "LoggingConfig",
    "ParserConfig",
    "SolverConfig",
]
