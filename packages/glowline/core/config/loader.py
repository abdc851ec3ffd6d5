"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from glowline.core.config.models import AppConfig
from glowline.core.models import RooflineConfiguration
from glowline.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Returns:
        ``"json"`` or ``"yaml"``.

    Raises:
        ValueError: If the extension is not recognised.

    Example:
        >>> detect_format("roofline.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()
    if suffix == ".json":
        return "json"
    if suffix in (".yaml", ".yml"):
        return "yaml"
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load a raw configuration mapping from JSON or YAML.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the format is unsupported, the content cannot be
            parsed, or the top level is not a mapping.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)
    with path.open("r", encoding="utf-8") as f:
        if fmt == "json":
            try:
                content = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {path}: {e}") from e
        else:
            try:
                content = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e

    # safe_load returns None for empty files
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Expected a mapping at the top level of {path}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load application configuration, falling back to defaults.

    Raises:
        ValidationError: If the file content is invalid.
    """
    config = AppConfig.load_or_default(path)
    logger.debug("Loaded app config (solver=%s)", config.solver)
    return config


def load_roofline(path: str | Path) -> RooflineConfiguration:
    """Load and validate a roofline description.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file cannot be parsed.
        ValidationError: If the content is not a valid configuration.
    """
    raw = load_config(path)
    roofline = RooflineConfiguration.model_validate(raw)
    logger.debug(
        "Loaded roofline %s: %d segments, %d pixels",
        roofline.id,
        len(roofline.segments),
        roofline.total_pixel_count,
    )
    return roofline


def configure_logging(config: AppConfig) -> None:
    """Apply the logging section of ``config``."""
    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )


__all__ = [
    "configure_logging",
    "detect_format",
    "load_app_config",
    "load_config",
    "load_roofline",
]
