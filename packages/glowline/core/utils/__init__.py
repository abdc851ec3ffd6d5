"""Shared utilities."""

from glowline.core.utils.logging import StructuredJSONFormatter, configure_logging, get_logger
from glowline.core.utils.math import clamp, round_half_up

__all__ = [
    "StructuredJSONFormatter",
    "clamp",
    "configure_logging",
    "get_logger",
    "round_half_up",
]
