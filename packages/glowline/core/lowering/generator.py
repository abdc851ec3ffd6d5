"""Segment-aware pattern templates lowered to pixel groups.

Every template walks the installation segment by segment and skips empty
segments, so group bounds always stay within ``[0, total)``.
"""

from __future__ import annotations

import logging

from glowline.core.lowering.merge import merge_adjacent_groups
from glowline.core.models import (
    LedColorGroup,
    RGBColor,
    RooflineConfiguration,
    Segment,
    SegmentAwarePattern,
)
from glowline.core.utils.math import round_half_up
from glowline.core.vocabulary import PatternTemplateType, SegmentType

logger = logging.getLogger(__name__)

_ACCENT_TYPES = (SegmentType.CORNER, SegmentType.PEAK)


def _whole_segment(segment: Segment, color: RGBColor) -> LedColorGroup:
    return LedColorGroup(start_led=segment.start_pixel, end_led=segment.end_pixel, color=color)


def _anchor_groups(segment: Segment, color: RGBColor) -> list[LedColorGroup]:
    groups = []
    for offset in segment.effective_anchors:
        start = segment.start_pixel + offset
        end = min(start + segment.anchor_led_count - 1, segment.end_pixel)
        groups.append(LedColorGroup(start_led=start, end_led=end, color=color))
    return groups


def spaced_pixels(segment: Segment, spacing_count: int) -> list[int]:
    """Local offsets of evenly spaced pixels between consecutive anchors.

    Each gap runs from the end of one anchor zone up to the next anchor.
    Positions falling outside the gap or inside any anchor zone are dropped.
    """
    anchors = segment.effective_anchors
    if spacing_count <= 0 or len(anchors) < 2:
        return []

    positions: list[int] = []
    for current, following in zip(anchors, anchors[1:]):
        gap_start = current + segment.anchor_led_count
        gap_end = following - 1
        gap_length = gap_end - gap_start + 1
        if gap_length <= 0:
            continue
        interval = gap_length / (spacing_count + 1)
        for j in range(1, spacing_count + 1):
            local = gap_start + round_half_up(interval * j)
            if local < gap_start or local > gap_end:
                continue
            if segment.is_anchor_pixel(local):
                continue
            positions.append(local)
    return positions


class SegmentPatternGenerator:
    """Lowers a :class:`SegmentAwarePattern` template against a roofline."""

    def generate(
        self, config: RooflineConfiguration, pattern: SegmentAwarePattern
    ) -> list[LedColorGroup]:
        """Run ``pattern.template`` and return merged groups."""
        match pattern.template:
            case PatternTemplateType.DOWNLIGHTING:
                groups = self.downlighting(
                    config,
                    anchor_color=pattern.anchor_color,
                    spaced_color=pattern.spaced_color,
                    spacing_count=pattern.spacing_count,
                    anchor_always_on=pattern.anchor_always_on,
                )
            case PatternTemplateType.CHASE_BY_SEGMENT:
                groups = self.chase_by_segment(config, pattern.anchor_color)
            case PatternTemplateType.ALTERNATING_SEGMENTS:
                groups = self.alternating_segments(
                    config,
                    pattern.anchor_color,
                    pattern.secondary_color or pattern.spaced_color,
                )
            case PatternTemplateType.CORNER_ACCENT:
                groups = self.corner_accent(config, pattern.anchor_color, pattern.spaced_color)
            case PatternTemplateType.UNIFORM:
                groups = self.uniform(config, pattern.anchor_color)
            case PatternTemplateType.ANCHORS_ONLY:
                groups = self.anchors_only(config, pattern.anchor_color)

        merged = merge_adjacent_groups(groups)
        logger.debug(
            "Template %s produced %d group(s) over %d pixels",
            pattern.template.value,
            len(merged),
            config.total_pixel_count,
        )
        return merged

    def downlighting(
        self,
        config: RooflineConfiguration,
        anchor_color: RGBColor,
        spaced_color: RGBColor,
        spacing_count: int,
        anchor_always_on: bool = True,
    ) -> list[LedColorGroup]:
        """Anchor zones plus ``spacing_count`` single pixels in each gap.

        Args:
            config: Installation to light.
            anchor_color: Colour of anchor zones.
            spaced_color: Colour of the spaced single pixels.
            spacing_count: Pixels per gap between consecutive anchors.
            anchor_always_on: Emit the anchor zones themselves.

        Returns:
            Unmerged groups in segment order.
        """
        groups: list[LedColorGroup] = []
        for segment in config.segments:
            if segment.pixel_count <= 0:
                continue
            if anchor_always_on:
                groups.extend(_anchor_groups(segment, anchor_color))
            for local in spaced_pixels(segment, spacing_count):
                pixel = segment.start_pixel + local
                groups.append(LedColorGroup(start_led=pixel, end_led=pixel, color=spaced_color))
        return groups

    def chase_by_segment(
        self, config: RooflineConfiguration, color: RGBColor
    ) -> list[LedColorGroup]:
        return [_whole_segment(s, color) for s in config.segments if s.pixel_count > 0]

    def alternating_segments(
        self, config: RooflineConfiguration, first: RGBColor, second: RGBColor
    ) -> list[LedColorGroup]:
        """Fill segments by index parity (even -> ``first``)."""
        return [
            _whole_segment(s, first if i % 2 == 0 else second)
            for i, s in enumerate(config.segments)
            if s.pixel_count > 0
        ]

    def corner_accent(
        self, config: RooflineConfiguration, accent: RGBColor, fill: RGBColor
    ) -> list[LedColorGroup]:
        """Corners and peaks in ``accent``, everything else in ``fill``."""
        return [
            _whole_segment(s, accent if s.type in _ACCENT_TYPES else fill)
            for s in config.segments
            if s.pixel_count > 0
        ]

    def uniform(self, config: RooflineConfiguration, color: RGBColor) -> list[LedColorGroup]:
        if config.total_pixel_count <= 0:
            return []
        return [LedColorGroup(start_led=0, end_led=config.total_pixel_count - 1, color=color)]

    def anchors_only(
        self, config: RooflineConfiguration, color: RGBColor
    ) -> list[LedColorGroup]:
        return self.downlighting(config, color, color, spacing_count=0)


__all__ = ["SegmentPatternGenerator", "spaced_pixels"]
