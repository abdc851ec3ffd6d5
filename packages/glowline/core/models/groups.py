"""Lowering outputs and segment-aware pattern templates."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from glowline.core.models.color import WHITE, RGBColor
from glowline.core.vocabulary import DEFAULT_INTENSITY, DEFAULT_SPEED, PatternTemplateType


class LedColorGroup(BaseModel):
    """Contiguous inclusive pixel range sharing one colour.

    Upper bounds depend on the installation, so ``end_led < total`` is
    enforced by the lowering code rather than here.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    start_led: int = Field(ge=0)
    end_led: int = Field(ge=0)
    color: RGBColor

    @model_validator(mode="after")
    def validate_range(self) -> LedColorGroup:
        if self.end_led < self.start_led:
            raise ValueError(
                f"end_led {self.end_led} is before start_led {self.start_led}"
            )
        return self

    @property
    def length(self) -> int:
        return self.end_led - self.start_led + 1

    def pixels(self) -> range:
        return range(self.start_led, self.end_led + 1)


class SegmentAwarePattern(BaseModel):
    """Template-driven pattern lowered per segment.

    Attributes:
        template: Which emission rule to run per segment.
        anchor_color: Colour of anchor zones.
        spaced_color: Colour of evenly spaced pixels between anchors.
        secondary_color: Second fill colour for alternating templates.
        spacing_count: Pixels placed in each gap between anchors.
        anchor_always_on: Emit anchor zones.
        effect_id: Device effect to run on top of the static layout.
        speed: Effect speed.
        intensity: Effect intensity.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    template: PatternTemplateType = PatternTemplateType.DOWNLIGHTING
    anchor_color: RGBColor = WHITE
    spaced_color: RGBColor = WHITE
    secondary_color: RGBColor | None = None
    spacing_count: int = Field(default=3, ge=0)
    anchor_always_on: bool = True
    effect_id: int = 0
    speed: int = Field(default=DEFAULT_SPEED, ge=0, le=255)
    intensity: int = Field(default=DEFAULT_INTENSITY, ge=0, le=255)


__all__ = ["LedColorGroup", "SegmentAwarePattern"]
