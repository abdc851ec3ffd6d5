"""Motion vocabulary - animated behaviour of a layer."""

from enum import Enum


class MotionType(str, Enum):
    """Kind of animation applied to a layer.

    Attributes:
        NONE: Static.
        CHASE: Pixels travel along the strip.
        WAVE: Smooth rolling brightness/colour wave.
        FLOW: Slow palette flow.
        PULSE: Whole zone breathes in and out.
        TWINKLE: Random pixels sparkle.
        SCAN: A lit band sweeps back and forth.
    """

    NONE = "none"
    CHASE = "chase"
    WAVE = "wave"
    FLOW = "flow"
    PULSE = "pulse"
    TWINKLE = "twinkle"
    SCAN = "scan"


class MotionDirection(str, Enum):
    """Direction of travel for animated layers."""

    LEFT_TO_RIGHT = "left_to_right"
    RIGHT_TO_LEFT = "right_to_left"
    INWARD = "inward"
    OUTWARD = "outward"
    UPWARD = "upward"
    DOWNWARD = "downward"
    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter_clockwise"

    @property
    def display_name(self) -> str:
        """Human label, e.g. ``"left to right"``."""
        return self.value.replace("_", " ")

    @property
    def reverses_strip(self) -> bool:
        """Whether the device segment must run reversed for this direction."""
        return self is MotionDirection.RIGHT_TO_LEFT


class SpeedLevel(str, Enum):
    """Named speed presets offered during clarification."""

    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"
    VERY_FAST = "very_fast"


SPEED_VALUES: dict[SpeedLevel, int] = {
    SpeedLevel.SLOW: 64,
    SpeedLevel.MEDIUM: 128,
    SpeedLevel.FAST: 192,
    SpeedLevel.VERY_FAST: 240,
}

DEFAULT_SPEED = 128
DEFAULT_INTENSITY = 128


__all__ = [
    "DEFAULT_INTENSITY",
    "DEFAULT_SPEED",
    "MotionDirection",
    "MotionType",
    "SPEED_VALUES",
    "SpeedLevel",
]
