"""RGB to RGBW conversion for strips with a dedicated white channel."""

from __future__ import annotations

from glowline.core.models import RGBColor
from glowline.core.utils.math import clamp


def rgb_to_rgbw(
    color: RGBColor,
    explicit_white: int | None = None,
    force_zero_white: bool = False,
) -> list[int]:
    """Split a colour into ``[r, g, b, w]`` channels.

    By default the common component ``min(r, g, b)`` moves to the white
    channel. An explicit white leaves RGB untouched and is clamped to
    0-255; ``force_zero_white`` keeps RGB and turns the white LED off.

    Args:
        color: Colour to convert.
        explicit_white: White level to use instead of extracting one.
        force_zero_white: Never light the white LED.

    Returns:
        Four channel values.
    """
    if force_zero_white:
        return [color.r, color.g, color.b, 0]
    if explicit_white is not None:
        return [color.r, color.g, color.b, clamp(explicit_white, 0, 255)]
    white = min(color.r, color.g, color.b)
    return [color.r - white, color.g - white, color.b - white, white]


__all__ = ["rgb_to_rgbw"]
