"""WLED JSON state payloads.

Two wire shapes are produced, both with an explicit segment boundary
(``start`` 0, ``stop`` exclusive) so device effects wrap at the last
physical pixel:

- individual: every lit pixel listed as ``[index, r, g, b, ...]`` under ``i``
- segment: up to three colour slots under ``col`` plus ``fx``/``sx``/``ix``
"""

from __future__ import annotations

from typing import Any

from glowline.core.encoding.rgbw import rgb_to_rgbw
from glowline.core.models import WHITE, LedColorGroup, RGBColor
from glowline.core.vocabulary import DEFAULT_INTENSITY, DEFAULT_SPEED

MAX_SEGMENT_COLORS = 3


def _channels(color: RGBColor, rgbw: bool) -> list[int]:
    return rgb_to_rgbw(color) if rgbw else color.rgb()


def _stop(groups: list[LedColorGroup], total_pixel_count: int | None) -> int:
    if total_pixel_count is not None:
        return total_pixel_count
    if not groups:
        return 0
    return max(g.end_led for g in groups) + 1


def _envelope(brightness: int, segment: dict[str, Any], transition: int | None) -> dict[str, Any]:
    payload: dict[str, Any] = {"on": True, "bri": brightness}
    if transition is not None:
        payload["transition"] = transition
    payload["seg"] = [segment]
    return payload


def distinct_colors(
    groups: list[LedColorGroup], limit: int = MAX_SEGMENT_COLORS
) -> list[RGBColor]:
    """First ``limit`` distinct colours in group order."""
    colors: list[RGBColor] = []
    for group in groups:
        if not any(c.same_rgb(group.color) for c in colors):
            colors.append(group.color)
            if len(colors) >= limit:
                break
    return colors


def to_individual_payload(
    groups: list[LedColorGroup],
    brightness: int,
    total_pixel_count: int | None = None,
    segment_id: int = 0,
    transition: int | None = None,
    rgbw: bool = False,
) -> dict[str, Any]:
    """Per-pixel payload.

    Args:
        groups: Pixel groups to light.
        brightness: Global brightness 0-255.
        total_pixel_count: Segment stop; inferred from the groups when None.
        segment_id: Device segment to address.
        transition: Fade time in tenths of a second, omitted when None.
        rgbw: Emit four channels per pixel.

    Returns:
        ``{"on", "bri", "seg": [{"id", "start", "stop", "i"}]}``
    """
    flat: list[int] = []
    for group in groups:
        channels = _channels(group.color, rgbw)
        for led in group.pixels():
            flat.append(led)
            flat.extend(channels)

    segment = {
        "id": segment_id,
        "start": 0,
        "stop": _stop(groups, total_pixel_count),
        "i": flat,
    }
    return _envelope(brightness, segment, transition)


def to_segment_payload(
    groups: list[LedColorGroup],
    brightness: int,
    effect_id: int,
    speed: int = DEFAULT_SPEED,
    intensity: int = DEFAULT_INTENSITY,
    total_pixel_count: int | None = None,
    segment_id: int = 0,
    reverse: bool | None = None,
    transition: int | None = None,
    rgbw: bool = False,
) -> dict[str, Any]:
    """Effect payload using the first three distinct group colours.

    Falls back to a single white slot when ``groups`` is empty.
    """
    colors = distinct_colors(groups) or [WHITE]
    segment: dict[str, Any] = {
        "id": segment_id,
        "start": 0,
        "stop": _stop(groups, total_pixel_count),
        "col": [_channels(c, rgbw) for c in colors],
        "fx": effect_id,
        "sx": speed,
        "ix": intensity,
    }
    if reverse is not None:
        segment["rev"] = reverse
    return _envelope(brightness, segment, transition)


def to_motion_payload(
    brightness: int,
    effect_id: int,
    total_pixel_count: int,
    colors: list[RGBColor] | None = None,
    speed: int = DEFAULT_SPEED,
    intensity: int = DEFAULT_INTENSITY,
    segment_id: int = 0,
    rgbw: bool = False,
) -> dict[str, Any]:
    """Device-native effect over the whole strip with explicit colours."""
    slots = (colors or [WHITE])[:MAX_SEGMENT_COLORS]
    segment = {
        "id": segment_id,
        "start": 0,
        "stop": total_pixel_count,
        "col": [_channels(c, rgbw) for c in slots],
        "fx": effect_id,
        "sx": speed,
        "ix": intensity,
    }
    return _envelope(brightness, segment, None)


__all__ = [
    "MAX_SEGMENT_COLORS",
    "distinct_colors",
    "to_individual_payload",
    "to_motion_payload",
    "to_segment_payload",
]
