"""Ambiguity, clarification and constraint vocabulary."""

from enum import Enum


class AmbiguityType(str, Enum):
    """What kind of underspecification an AmbiguityFlag describes."""

    ZONE = "zone"
    COLOR = "color"
    SPACING_IMPOSSIBLE = "spacing_impossible"
    DIRECTION = "direction"
    CONFLICT = "conflict"
    EFFECT = "effect"


class ClarificationType(str, Enum):
    """Kind of question shown to the user.

    Declaration order is display priority: zone questions come first,
    manual fallback last.
    """

    ZONE = "zone"
    COLOR = "color"
    SPACING = "spacing"
    DIRECTION = "direction"
    EFFECT = "effect"
    CONFLICT = "conflict"
    BRIGHTNESS = "brightness"
    SPEED = "speed"
    CONFIRMATION = "confirmation"
    MANUAL_FALLBACK = "manual_fallback"

    @property
    def priority(self) -> int:
        """Sort key; lower is asked first."""
        return _CLARIFICATION_ORDER.index(self)


_CLARIFICATION_ORDER: list[ClarificationType] = list(ClarificationType)


AMBIGUITY_TO_CLARIFICATION: dict[AmbiguityType, ClarificationType] = {
    AmbiguityType.ZONE: ClarificationType.ZONE,
    AmbiguityType.COLOR: ClarificationType.COLOR,
    AmbiguityType.SPACING_IMPOSSIBLE: ClarificationType.SPACING,
    AmbiguityType.DIRECTION: ClarificationType.DIRECTION,
    AmbiguityType.CONFLICT: ClarificationType.CONFLICT,
    AmbiguityType.EFFECT: ClarificationType.EFFECT,
}


class ConstraintType(str, Enum):
    """Physical constraint checked by the solver."""

    SPACING_MATH = "spacing_math"
    COLOR_CONTRAST = "color_contrast"
    ZONE_EXISTENCE = "zone_existence"


__all__ = [
    "AMBIGUITY_TO_CLARIFICATION",
    "AmbiguityType",
    "ClarificationType",
    "ConstraintType",
]
