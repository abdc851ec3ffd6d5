"""Device previews for clarification options."""

from __future__ import annotations

from typing import Any

from glowline.core.encoding.wled import to_individual_payload, to_motion_payload
from glowline.core.lowering.composer import apply_spacing
from glowline.core.lowering.merge import groups_from_pixels
from glowline.core.models import (
    ClarificationOption,
    ColorAssignment,
    DesignIntent,
    PixelRange,
    RGBColor,
    RooflineConfiguration,
    SpacingRule,
)
from glowline.core.vocabulary import WledEffect

# Strip length assumed when no installation is known
DEFAULT_PREVIEW_PIXELS = 100

NEUTRAL_PREVIEW_COLOR = RGBColor(r=128, g=128, b=128)


def color_preview(color: RGBColor, pixel_count: int, brightness: int) -> dict[str, Any]:
    """Solid fill of ``pixel_count`` pixels in ``color``."""
    return to_motion_payload(
        brightness=brightness,
        effect_id=WledEffect.SOLID.effect_id,
        total_pixel_count=pixel_count,
        colors=[color],
    )


def spacing_preview(
    rule: SpacingRule,
    colors: ColorAssignment,
    pixel_count: int,
    brightness: int,
) -> dict[str, Any]:
    """Per-pixel rendering of ``rule`` over a strip of ``pixel_count`` pixels."""
    if pixel_count <= 0:
        return to_individual_payload([], brightness, total_pixel_count=0)
    pixels = apply_spacing(PixelRange(start=0, end=pixel_count - 1), colors, rule)
    return to_individual_payload(
        groups_from_pixels(pixels), brightness, total_pixel_count=pixel_count
    )


def generate_preview_payload(
    option: ClarificationOption,
    intent: DesignIntent,
    config: RooflineConfiguration | None = None,
) -> dict[str, Any]:
    """Quick look at what an option would do.

    Uses the option's own preview when it has one, a solid fill of its
    first swatch when it has swatches, and a neutral grey otherwise.
    """
    if option.preview_payload is not None:
        return option.preview_payload

    pixel_count = config.total_pixel_count if config is not None else DEFAULT_PREVIEW_PIXELS
    brightness = intent.global_settings.brightness
    if option.color_swatches:
        return color_preview(option.color_swatches[0], pixel_count, brightness)
    return color_preview(NEUTRAL_PREVIEW_COLOR, pixel_count, brightness)


__all__ = [
    "DEFAULT_PREVIEW_PIXELS",
    "NEUTRAL_PREVIEW_COLOR",
    "color_preview",
    "generate_preview_payload",
    "spacing_preview",
]
