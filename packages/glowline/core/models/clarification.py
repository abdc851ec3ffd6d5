"""User-facing clarification questions."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from glowline.core.models.color import RGBColor
from glowline.core.vocabulary import ClarificationType

MAX_OPTIONS = 4


class ClarificationOption(BaseModel):
    """One answer offered for a question.

    Attributes:
        id: Option id submitted back with the answer.
        label: Short label.
        description: Longer help text.
        icon: Icon hint for the presentation layer.
        is_recommended: Preselected/highlighted option.
        value: Structured payload applied when chosen.
        preview_payload: Device payload previewing the option.
        color_swatches: Colours to render next to the option.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    label: str
    description: str = ""
    icon: str | None = None
    is_recommended: bool = False
    value: Any = None
    preview_payload: dict[str, Any] | None = None
    color_swatches: list[RGBColor] | None = None


class ClarificationQuestion(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    type: ClarificationType
    question: str
    options: list[ClarificationOption] = Field(max_length=MAX_OPTIONS)
    is_required: bool = True
    source_text: str = ""
    affected_layer_id: str | None = None
    context: dict[str, Any] = Field(default_factory=dict)

    def option_by_id(self, option_id: str) -> ClarificationOption | None:
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    @property
    def recommended_option(self) -> ClarificationOption | None:
        for option in self.options:
            if option.is_recommended:
                return option
        return self.options[0] if self.options else None


__all__ = ["ClarificationOption", "ClarificationQuestion", "MAX_OPTIONS"]
