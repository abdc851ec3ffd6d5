"""Math utilities for pixel arithmetic."""

from __future__ import annotations

import math
from typing import TypeVar

Number = TypeVar("Number", int, float)


def clamp(value: Number, min_val: Number, max_val: Number) -> Number:
    """Clamp value to range [min_val, max_val].

    Args:
        value: Value to clamp
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Clamped value
    """
    return max(min_val, min(max_val, value))


def round_half_up(x: float) -> int:
    return math.floor(x + 0.5)  # round() is half-to-even


__all__ = ["clamp", "round_half_up"]
