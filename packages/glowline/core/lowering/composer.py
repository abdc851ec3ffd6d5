"""Compose a resolved :class:`DesignIntent` into pixel groups and a payload.

Each enabled layer is lowered over the pixel ranges of its zone, then the
layers are painted onto a pixel map in ascending priority so later layers
win where they overlap. The map is run-length encoded back into merged
groups and encoded for the device.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from glowline.core.encoding.wled import to_individual_payload, to_segment_payload
from glowline.core.lowering.merge import groups_from_pixels
from glowline.core.models import (
    BLACK,
    AnchorsOnly,
    ColorAssignment,
    Continuous,
    DesignIntent,
    DesignLayer,
    EquallySpaced,
    EveryNth,
    GradientStop,
    LedColorGroup,
    MotionSettings,
    PatternRule,
    PatternSpacing,
    PixelRange,
    RGBColor,
    RooflineConfiguration,
    SpacingRule,
)
from glowline.core.solver.zones import resolve_zone_ranges
from glowline.core.utils.math import round_half_up
from glowline.core.vocabulary import PatternType

logger = logging.getLogger(__name__)


class CompositionResult(BaseModel):
    """Outcome of composing an intent.

    Attributes:
        success: Whether groups and payload were produced.
        groups: Merged pixel groups, empty on failure.
        payload: Device payload, None on failure.
        warnings: Non-fatal notes (e.g. layers that lit nothing).
        error: Failure reason.
        suggestions: Hints for the user on failure.
        recommend_manual: Whether manual editing is the better route.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    success: bool
    groups: list[LedColorGroup] = Field(default_factory=list)
    payload: dict[str, Any] | None = None
    warnings: list[str] = Field(default_factory=list)
    error: str | None = None
    suggestions: list[str] = Field(default_factory=list)
    recommend_manual: bool = False

    @classmethod
    def failure(
        cls,
        error: str,
        suggestions: list[str] | None = None,
        recommend_manual: bool = False,
        warnings: list[str] | None = None,
    ) -> CompositionResult:
        return cls(
            success=False,
            error=error,
            suggestions=suggestions or [],
            recommend_manual=recommend_manual,
            warnings=warnings or [],
        )


def _pixel_run(start: int, end: int, color: RGBColor) -> dict[int, RGBColor]:
    return {i: color for i in range(start, end + 1)}


def apply_spacing(
    pixel_range: PixelRange,
    colors: ColorAssignment,
    rule: SpacingRule,
    roofline: RooflineConfiguration | None = None,
) -> dict[int, RGBColor]:
    """Pixels lit by ``rule`` inside one range.

    Lit pixels use the accent colour when set, else the primary. Unlit
    pixels are only painted when a fill colour is set. Anchor layouts need
    ``roofline`` and light nothing without it.
    """
    on_color = colors.accent or colors.primary
    off_color = colors.fill
    start, end = pixel_range.start, pixel_range.end
    length = pixel_range.length
    pixels: dict[int, RGBColor] = {}

    match rule:
        case PatternSpacing(on_count=on, off_count=off, start_with_on=lit):
            if on <= 0 or off < 0:
                return pixels
            lit = lit or off == 0
            position = start
            while position <= end:
                count = on if lit else off
                run_end = min(position + count - 1, end)
                if lit:
                    pixels.update(_pixel_run(position, run_end, on_color))
                elif off_color is not None:
                    pixels.update(_pixel_run(position, run_end, off_color))
                position += count
                lit = not lit if off > 0 else True
        case EquallySpaced(count=count):
            if count <= 0:
                return pixels
            if off_color is not None:
                pixels.update(_pixel_run(start, end, off_color))
            if count == 1:
                pixels[start + length // 2] = on_color
            else:
                step = (length - 1) / (count - 1)
                for i in range(count):
                    index = start + round_half_up(step * i)
                    if index <= end:
                        pixels[index] = on_color
        case EveryNth(interval=interval):
            if interval <= 0:
                return pixels
            if off_color is not None:
                pixels.update(_pixel_run(start, end, off_color))
            for index in range(start, end + 1, interval):
                pixels[index] = on_color
        case AnchorsOnly():
            if off_color is not None:
                pixels.update(_pixel_run(start, end, off_color))
            for segment in roofline.segments if roofline is not None else []:
                if segment.start_pixel > end or segment.end_pixel < start:
                    continue
                for anchor in segment.global_anchor_pixels:
                    if start <= anchor <= end:
                        anchor_end = min(
                            anchor + segment.anchor_led_count - 1, segment.end_pixel, end
                        )
                        pixels.update(_pixel_run(anchor, anchor_end, on_color))
        case Continuous():
            pixels.update(_pixel_run(start, end, on_color))
    return pixels


def _gradient_color(stops: list[GradientStop], position: float) -> RGBColor:
    lower, upper = stops[0], stops[-1]
    for current, following in zip(stops, stops[1:]):
        if current.position <= position <= following.position:
            lower, upper = current, following
            break
    if upper.position == lower.position:
        return lower.color
    t = (position - lower.position) / (upper.position - lower.position)
    return lower.color.lerp(upper.color, t)


def apply_pattern(
    pixel_range: PixelRange, colors: ColorAssignment, pattern: PatternRule
) -> dict[int, RGBColor]:
    """Pixels for a layer without a spacing rule."""
    start, end = pixel_range.start, pixel_range.end
    match pattern.type:
        case PatternType.ALTERNATING:
            second = colors.secondary or BLACK
            return {
                i: second if (i - start) % 2 == 1 else colors.primary
                for i in range(start, end + 1)
            }
        case PatternType.GRADIENT:
            stops = sorted(pattern.gradient_stops, key=lambda s: s.position)
            if len(stops) < 2 and colors.secondary is not None:
                stops = [
                    GradientStop(position=0.0, color=colors.primary),
                    GradientStop(position=1.0, color=colors.secondary),
                ]
            if len(stops) < 2:
                return _pixel_run(start, end, colors.primary)
            length = pixel_range.length
            return {
                i: _gradient_color(stops, (i - start) / length) for i in range(start, end + 1)
            }
        case PatternType.SOLID | PatternType.WAVE | PatternType.TWINKLE:
            # animated layouts get their base colour; the device effect does the rest
            return _pixel_run(start, end, colors.primary)


class PatternComposer:
    """Lowers layered intents to pixel groups and a device payload.

    Args:
        rgbw: Encode four channels per colour.
    """

    def __init__(self, rgbw: bool = False):
        self.rgbw = rgbw

    def compose_layer(
        self, layer: DesignLayer, roofline: RooflineConfiguration
    ) -> dict[int, RGBColor]:
        pixels: dict[int, RGBColor] = {}
        for pixel_range in resolve_zone_ranges(layer.zone, roofline):
            if layer.colors.spacing is not None:
                pixels.update(
                    apply_spacing(pixel_range, layer.colors, layer.colors.spacing, roofline)
                )
            else:
                pixels.update(apply_pattern(pixel_range, layer.colors, layer.pattern))
        return pixels

    def compose(self, intent: DesignIntent, roofline: RooflineConfiguration) -> CompositionResult:
        """Compose every enabled layer of a fully clarified intent.

        Args:
            intent: Intent with no open ambiguities.
            roofline: Installation to light.

        Returns:
            A successful result with groups and payload, or a failure
            describing why nothing could be produced.
        """
        if intent.ambiguities:
            return CompositionResult.failure(
                "Design intent has unresolved ambiguities",
                suggestions=["Resolve clarification questions first"],
                recommend_manual=True,
            )
        if not intent.layers:
            return CompositionResult.failure(
                "No design layers specified",
                suggestions=["Add at least one layer to your design"],
            )

        total = roofline.total_pixel_count
        warnings: list[str] = []
        canvas: dict[int, RGBColor] = {}
        enabled = [layer for layer in intent.layers if layer.enabled]
        painted = 0
        # stable sort keeps clause order for equal priorities
        for layer in sorted(enabled, key=lambda layer: layer.priority):
            pixels = {i: c for i, c in self.compose_layer(layer, roofline).items() if i < total}
            if not pixels:
                warnings.append(f'Layer "{layer.name}" produced no LED assignments')
                continue
            canvas.update(pixels)
            painted += 1

        if painted == 0:
            return CompositionResult.failure(
                "No layers produced LED assignments",
                suggestions=["Check that zones match your roofline configuration"],
                warnings=warnings,
            )

        groups = groups_from_pixels(canvas)
        motion = next(
            (layer.motion for layer in enabled if layer.motion is not None),
            None,
        )
        payload = self.build_payload(groups, intent, motion, total)
        logger.debug(
            "Composed %d layer(s) into %d group(s), %d warning(s)",
            painted,
            len(groups),
            len(warnings),
        )
        return CompositionResult(success=True, groups=groups, payload=payload, warnings=warnings)

    def build_payload(
        self,
        groups: list[LedColorGroup],
        intent: DesignIntent,
        motion: MotionSettings | None,
        total_pixel_count: int,
    ) -> dict[str, Any]:
        """Segment payload when a device effect runs, individual otherwise."""
        settings = intent.global_settings
        if motion is not None and motion.effect_id > 0:
            return to_segment_payload(
                groups,
                brightness=settings.brightness,
                effect_id=motion.effect_id,
                speed=motion.speed,
                intensity=motion.intensity,
                total_pixel_count=total_pixel_count,
                reverse=motion.reverse,
                transition=settings.device_transition,
                rgbw=self.rgbw,
            )
        return to_individual_payload(
            groups,
            brightness=settings.brightness,
            total_pixel_count=total_pixel_count,
            transition=settings.device_transition,
            rgbw=self.rgbw,
        )


__all__ = ["CompositionResult", "PatternComposer", "apply_pattern", "apply_spacing"]
