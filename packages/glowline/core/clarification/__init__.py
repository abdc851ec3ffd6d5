"""Clarification questions and answer application."""

from glowline.core.clarification.apply import (
    CONFIDENCE_STEP,
    apply_clarifications,
    spacing_from_option,
)
from glowline.core.clarification.previews import (
    DEFAULT_PREVIEW_PIXELS,
    color_preview,
    generate_preview_payload,
    spacing_preview,
)
from glowline.core.clarification.questions import (
    QuestionBuilder,
    build_questions,
    segment_options,
    zone_icon,
)

__all__ = [
    # Questions
    "QuestionBuilder",
    "build_questions",
    "segment_options",
    "zone_icon",
    # Answers
    "CONFIDENCE_STEP",
    "apply_clarifications",
    "spacing_from_option",
    # Previews
    "DEFAULT_PREVIEW_PIXELS",
    "color_preview",
    "generate_preview_payload",
    "spacing_preview",
]
