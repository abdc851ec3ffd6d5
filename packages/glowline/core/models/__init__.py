"""Glowline data models."""

from glowline.core.models.clarification import (
    MAX_OPTIONS,
    ClarificationOption,
    ClarificationQuestion,
)
from glowline.core.models.color import BLACK, WHITE, RGBColor
from glowline.core.models.constraints import (
    AlternativeSuggestion,
    ConstraintValidationResult,
    DesignConstraint,
)
from glowline.core.models.groups import LedColorGroup, SegmentAwarePattern
from glowline.core.models.intent import (
    AmbiguityFlag,
    ClarificationChoice,
    ColorAssignment,
    DesignIntent,
    DesignLayer,
    GlobalSettings,
    GradientStop,
    MotionSettings,
    PatternRule,
)
from glowline.core.models.roofline import RooflineConfiguration, Segment
from glowline.core.models.spacing import (
    AnchorsOnly,
    Continuous,
    EquallySpaced,
    EveryNth,
    PatternSpacing,
    SpacingRule,
    every_other,
    one_on_two_off,
    two_on_one_off,
)
from glowline.core.models.zones import (
    AllZone,
    ArchitecturalZone,
    CustomZone,
    LevelZone,
    LocationZone,
    PixelRange,
    SegmentsZone,
    ZoneSelector,
    zones_overlap,
)

__all__ = [
    # Colour
    "BLACK",
    "RGBColor",
    "WHITE",
    # Installation
    "RooflineConfiguration",
    "Segment",
    # Zones
    "AllZone",
    "ArchitecturalZone",
    "CustomZone",
    "LevelZone",
    "LocationZone",
    "PixelRange",
    "SegmentsZone",
    "ZoneSelector",
    "zones_overlap",
    # Spacing
    "AnchorsOnly",
    "Continuous",
    "EquallySpaced",
    "EveryNth",
    "PatternSpacing",
    "SpacingRule",
    "every_other",
    "one_on_two_off",
    "two_on_one_off",
    # Intent
    "AmbiguityFlag",
    "ClarificationChoice",
    "ColorAssignment",
    "DesignIntent",
    "DesignLayer",
    "GlobalSettings",
    "GradientStop",
    "MotionSettings",
    "PatternRule",
    # Constraints
    "AlternativeSuggestion",
    "ConstraintValidationResult",
    "DesignConstraint",
    # Clarification
    "ClarificationOption",
    "ClarificationQuestion",
    "MAX_OPTIONS",
    # Lowering
    "LedColorGroup",
    "SegmentAwarePattern",
]
