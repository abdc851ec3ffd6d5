"""Glowline vocabulary - controlled enums shared by every pipeline stage."""

from glowline.core.vocabulary.architecture import (
    ROLE_SEGMENT_TYPES,
    ArchitecturalRole,
    Location,
    SegmentType,
    segment_types_for_roles,
)
from glowline.core.vocabulary.clarification import (
    AMBIGUITY_TO_CLARIFICATION,
    AmbiguityType,
    ClarificationType,
    ConstraintType,
)
from glowline.core.vocabulary.effects import (
    MOTION_EFFECTS,
    EffectCategory,
    WledEffect,
    effect_for_motion,
)
from glowline.core.vocabulary.motion import (
    DEFAULT_INTENSITY,
    DEFAULT_SPEED,
    SPEED_VALUES,
    MotionDirection,
    MotionType,
    SpeedLevel,
)
from glowline.core.vocabulary.pattern import PatternTemplateType, PatternType

__all__ = [
    # Architecture
    "ArchitecturalRole",
    "Location",
    "ROLE_SEGMENT_TYPES",
    "SegmentType",
    "segment_types_for_roles",
    # Clarification
    "AMBIGUITY_TO_CLARIFICATION",
    "AmbiguityType",
    "ClarificationType",
    "ConstraintType",
    # Effects
    "EffectCategory",
    "MOTION_EFFECTS",
    "WledEffect",
    "effect_for_motion",
    # Motion
    "DEFAULT_INTENSITY",
    "DEFAULT_SPEED",
    "MotionDirection",
    "MotionType",
    "SPEED_VALUES",
    "SpeedLevel",
    # Pattern
    "PatternTemplateType",
    "PatternType",
]
