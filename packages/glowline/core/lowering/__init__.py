"""Lowering of designs and templates to pixel groups."""

from glowline.core.lowering.composer import (
    CompositionResult,
    PatternComposer,
    apply_pattern,
    apply_spacing,
)
from glowline.core.lowering.generator import SegmentPatternGenerator, spaced_pixels
from glowline.core.lowering.merge import groups_from_pixels, merge_adjacent_groups

__all__ = [
    # Composition
    "CompositionResult",
    "PatternComposer",
    "apply_pattern",
    "apply_spacing",
    # Templates
    "SegmentPatternGenerator",
    "spaced_pixels",
    # Merge
    "groups_from_pixels",
    "merge_adjacent_groups",
]
