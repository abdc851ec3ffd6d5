"""Constraint solver results."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from glowline.core.models.intent import AmbiguityFlag
from glowline.core.vocabulary import ConstraintType


class AlternativeSuggestion(BaseModel):
    """A nearby setting that would satisfy a failed constraint.

    ``deviation_score`` is 0 for "no change" and grows with distance from
    what the user asked for; lists of suggestions are ranked by it.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    label: str
    description: str = ""
    deviation_score: float = Field(default=0.0, ge=0.0)
    value: Any = None


class DesignConstraint(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    type: ConstraintType
    description: str
    is_satisfied: bool
    failure_reason: str | None = None
    alternatives: list[AlternativeSuggestion] = Field(default_factory=list)
    layer_id: str | None = None


class ConstraintValidationResult(BaseModel):
    """Everything one validation pass found.

    Attributes:
        constraints: Every individual check, satisfied or not.
        ambiguities: New ambiguities raised by failed checks.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    constraints: list[DesignConstraint] = Field(default_factory=list)
    ambiguities: list[AmbiguityFlag] = Field(default_factory=list)

    @property
    def all_satisfied(self) -> bool:
        return all(c.is_satisfied for c in self.constraints)

    @property
    def failed(self) -> list[DesignConstraint]:
        return [c for c in self.constraints if not c.is_satisfied]


__all__ = ["AlternativeSuggestion", "ConstraintValidationResult", "DesignConstraint"]
