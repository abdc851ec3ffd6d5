"""Device payload encoding."""

from glowline.core.encoding.rgbw import rgb_to_rgbw
from glowline.core.encoding.wled import (
    MAX_SEGMENT_COLORS,
    distinct_colors,
    to_individual_payload,
    to_motion_payload,
    to_segment_payload,
)

__all__ = [
    "MAX_SEGMENT_COLORS",
    "distinct_colors",
    "rgb_to_rgbw",
    "to_individual_payload",
    "to_motion_payload",
    "to_segment_payload",
]
