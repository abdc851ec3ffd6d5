"""Pattern vocabulary - static colour layouts and lowering templates."""

from enum import Enum


class PatternType(str, Enum):
    """Colour layout of a layer within its zone.

    Attributes:
        SOLID: Single colour fill.
        GRADIENT: Interpolated between gradient stops.
        ALTERNATING: Primary and secondary on alternating pixels.
        TWINKLE: Base colour, sparkle supplied by the device effect.
        WAVE: Base colour, wave supplied by the device effect.
    """

    SOLID = "solid"
    GRADIENT = "gradient"
    ALTERNATING = "alternating"
    TWINKLE = "twinkle"
    WAVE = "wave"


class PatternTemplateType(str, Enum):
    """Segment-aware templates that lower directly to pixel groups."""

    DOWNLIGHTING = "downlighting"
    CHASE_BY_SEGMENT = "chase_by_segment"
    ALTERNATING_SEGMENTS = "alternating_segments"
    CORNER_ACCENT = "corner_accent"
    UNIFORM = "uniform"
    ANCHORS_ONLY = "anchors_only"


__all__ = ["PatternTemplateType", "PatternType"]
