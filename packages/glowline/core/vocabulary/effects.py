"""Device effect catalog.

The controller identifies effects by numeric id. Those ids live here and
nowhere else; the rest of the code refers to :class:`WledEffect` members.
"""

from __future__ import annotations

from enum import Enum

from glowline.core.vocabulary.motion import MotionType


class EffectCategory(str, Enum):
    """Grouping used by effect pickers."""

    BASIC = "basic"
    WIPE = "wipe"
    CHASE = "chase"
    SCANNER = "scanner"
    SPARKLE = "sparkle"
    RAINBOW = "rainbow"
    AMBIENT = "ambient"


class WledEffect(Enum):
    """Closed catalog of device effects.

    Each member carries ``effect_id`` (the wire value sent as ``fx``),
    ``display_name`` and ``category``.
    """

    SOLID = (0, "Solid", EffectCategory.BASIC)
    BLINK = (1, "Blink", EffectCategory.BASIC)
    BREATHE = (2, "Breathe", EffectCategory.BASIC)
    WIPE = (3, "Wipe", EffectCategory.WIPE)
    SWEEP = (6, "Sweep", EffectCategory.WIPE)
    RAINBOW = (9, "Rainbow", EffectCategory.RAINBOW)
    SCAN = (10, "Scan", EffectCategory.SCANNER)
    FADE = (12, "Fade", EffectCategory.BASIC)
    THEATER = (13, "Theater", EffectCategory.CHASE)
    RUNNING = (15, "Running", EffectCategory.CHASE)
    TWINKLE = (17, "Twinkle", EffectCategory.SPARKLE)
    SPARKLE = (20, "Sparkle", EffectCategory.SPARKLE)
    CHASE = (28, "Chase", EffectCategory.CHASE)
    LIGHTHOUSE = (41, "Lighthouse", EffectCategory.SCANNER)
    GRADIENT = (46, "Gradient", EffectCategory.BASIC)
    COLORWAVES = (67, "Colorwaves", EffectCategory.AMBIENT)
    TWINKLEFOX = (80, "Twinklefox", EffectCategory.SPARKLE)
    FLOW = (110, "Flow", EffectCategory.AMBIENT)

    def __init__(self, effect_id: int, display_name: str, category: EffectCategory) -> None:
        self.effect_id = effect_id
        self.display_name = display_name
        self.category = category

    @classmethod
    def from_id(cls, effect_id: int) -> WledEffect:
        """Look up a catalog entry by its wire id.

        Raises:
            ValueError: If the id is not in the catalog.
        """
        try:
            return _BY_ID[effect_id]
        except KeyError:
            raise ValueError(f"Unknown effect id: {effect_id}") from None

    @classmethod
    def in_category(cls, category: EffectCategory) -> list[WledEffect]:
        return [e for e in cls if e.category is category]


_BY_ID: dict[int, WledEffect] = {e.effect_id: e for e in WledEffect}


MOTION_EFFECTS: dict[MotionType, WledEffect | None] = {
    MotionType.NONE: None,
    MotionType.CHASE: WledEffect.CHASE,
    MotionType.WAVE: WledEffect.COLORWAVES,
    MotionType.FLOW: WledEffect.FLOW,
    MotionType.PULSE: WledEffect.BREATHE,
    MotionType.TWINKLE: WledEffect.TWINKLEFOX,
    MotionType.SCAN: WledEffect.SCAN,
}


def effect_for_motion(motion_type: MotionType) -> WledEffect | None:
    """Device effect that renders ``motion_type`` (None for static)."""
    return MOTION_EFFECTS[motion_type]


__all__ = [
    "EffectCategory",
    "MOTION_EFFECTS",
    "WledEffect",
    "effect_for_motion",
]
