"""Design intent models - the parsed, layered form of a text instruction.

Everything here is frozen. Parsing, clarification and solving produce new
:class:`DesignIntent` values; nothing edits one in place.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from glowline.core.models.color import WHITE, RGBColor
from glowline.core.models.spacing import SpacingRule
from glowline.core.models.zones import AllZone, ZoneSelector
from glowline.core.vocabulary import (
    DEFAULT_INTENSITY,
    DEFAULT_SPEED,
    AmbiguityType,
    MotionDirection,
    MotionType,
    PatternType,
    WledEffect,
)


class ColorAssignment(BaseModel):
    """Colour slots of a layer plus its optional spacing rule.

    Attributes:
        primary: Main colour.
        primary_name: Name the primary was matched from (display only).
        secondary: Second colour for alternating layouts.
        accent: Colour of lit pixels when a spacing rule applies.
        fill: Colour of unlit pixels when a spacing rule applies.
        spacing: Distribution of lit pixels, None for a full fill.
        accepted_spacing: Spacing rule the user confirmed during
            clarification; the solver does not ask about it again.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    primary: RGBColor = WHITE
    primary_name: str = "white"
    secondary: RGBColor | None = None
    accent: RGBColor | None = None
    fill: RGBColor | None = None
    spacing: SpacingRule | None = None
    accepted_spacing: SpacingRule | None = None

    @property
    def spacing_accepted(self) -> bool:
        return self.spacing is not None and self.accepted_spacing == self.spacing


class GradientStop(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    position: float = Field(ge=0.0, le=1.0)
    color: RGBColor


class PatternRule(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    type: PatternType = PatternType.SOLID
    gradient_stops: list[GradientStop] = Field(default_factory=list)


class MotionSettings(BaseModel):
    """Animation of a layer.

    ``effect`` is serialized as its numeric device id and accepts either
    an id or a :class:`WledEffect` on input.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    motion_type: MotionType = MotionType.NONE
    direction: MotionDirection = MotionDirection.LEFT_TO_RIGHT
    speed: int = Field(default=DEFAULT_SPEED, ge=0, le=255)
    intensity: int = Field(default=DEFAULT_INTENSITY, ge=0, le=255)
    reverse: bool = False
    effect: WledEffect | None = None

    @field_validator("effect", mode="before")
    @classmethod
    def coerce_effect(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return WledEffect.from_id(v)
        return v

    @field_serializer("effect")
    def serialize_effect(self, effect: WledEffect | None) -> int | None:
        return effect.effect_id if effect is not None else None

    @property
    def effect_id(self) -> int:
        """Device effect id, 0 (solid) when no effect is set."""
        return self.effect.effect_id if self.effect is not None else WledEffect.SOLID.effect_id


class DesignLayer(BaseModel):
    """One colour/pattern/motion rule scoped to a zone.

    Higher ``priority`` paints over lower priority where zones overlap.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    zone: ZoneSelector = Field(default_factory=AllZone)
    colors: ColorAssignment = Field(default_factory=ColorAssignment)
    pattern: PatternRule = Field(default_factory=PatternRule)
    motion: MotionSettings | None = None
    priority: int = 0
    enabled: bool = True


class ClarificationChoice(BaseModel):
    """One way of resolving an ambiguity.

    ``value`` carries the structured replacement (a zone selector, colour,
    spacing rule, layer index, ...) when the choice has one.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    label: str
    description: str = ""
    is_recommended: bool = False
    value: Any = None
    preview: dict[str, Any] | None = None


class AmbiguityFlag(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    type: AmbiguityType
    description: str
    source_clause: str = ""
    affected_layer_id: str | None = None
    choices: list[ClarificationChoice] = Field(default_factory=list)

    @property
    def recommended_choice(self) -> ClarificationChoice | None:
        for choice in self.choices:
            if choice.is_recommended:
                return choice
        return self.choices[0] if self.choices else None


class GlobalSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    brightness: int = Field(default=200, ge=0, le=255)
    smooth_transition: bool = True
    transition_ms: int = Field(default=500, ge=0)

    @property
    def device_transition(self) -> int:
        """Transition in device units (tenths of a second)."""
        return self.transition_ms // 100 if self.smooth_transition else 0


class DesignIntent(BaseModel):
    """Parsed, possibly ambiguous design made of prioritised layers.

    Attributes:
        original_prompt: Text the intent was parsed from.
        layers: One layer per clause, in clause order.
        ambiguities: Open questions; empty when the design is ready.
        confidence: Parser confidence in [0, 1].
        parsed_at: Creation timestamp (UTC).
        global_settings: Brightness and transition for the whole design.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    original_prompt: str = ""
    layers: list[DesignLayer] = Field(default_factory=list)
    ambiguities: list[AmbiguityFlag] = Field(default_factory=list)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    parsed_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    global_settings: GlobalSettings = Field(default_factory=GlobalSettings)

    @property
    def needs_clarification(self) -> bool:
        return bool(self.ambiguities)

    @property
    def is_ready(self) -> bool:
        return bool(self.layers) and not self.ambiguities

    def layer_by_id(self, layer_id: str | None) -> DesignLayer | None:
        if layer_id is None:
            return None
        for layer in self.layers:
            if layer.id == layer_id:
                return layer
        return None

    def with_layer(self, updated: DesignLayer) -> DesignIntent:
        """Copy with the layer sharing ``updated.id`` replaced."""
        layers = [updated if layer.id == updated.id else layer for layer in self.layers]
        return self.model_copy(update={"layers": layers})


__all__ = [
    "AmbiguityFlag",
    "ClarificationChoice",
    "ColorAssignment",
    "DesignIntent",
    "DesignLayer",
    "GlobalSettings",
    "GradientStop",
    "MotionSettings",
    "PatternRule",
]
