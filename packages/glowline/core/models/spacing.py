"""Spacing rules - how lit pixels are distributed within a zone.

Counts are plain integers here; the constraint solver reports
non-positive values as invalid parameters instead of failing validation,
so a sparse or odd prompt never raises.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class PatternSpacing(BaseModel):
    """Repeating ``on_count`` lit / ``off_count`` dark cycle."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["pattern"] = "pattern"
    on_count: int
    off_count: int
    start_with_on: bool = True

    @property
    def cycle_length(self) -> int:
        return self.on_count + self.off_count

    @property
    def description(self) -> str:
        return f"{self.on_count} on, {self.off_count} off"


class EquallySpaced(BaseModel):
    """``count`` pixels spread evenly, endpoints included."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["equally_spaced"] = "equally_spaced"
    count: int

    @property
    def description(self) -> str:
        return f"{self.count} equally spaced"


class EveryNth(BaseModel):
    """One lit pixel every ``interval`` pixels."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["every_nth"] = "every_nth"
    interval: int

    @property
    def description(self) -> str:
        return f"every {self.interval} pixels"


class AnchorsOnly(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["anchors_only"] = "anchors_only"

    @property
    def description(self) -> str:
        return "anchors only"


class Continuous(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["continuous"] = "continuous"

    @property
    def description(self) -> str:
        return "continuous"


SpacingRule = Annotated[
    PatternSpacing | EquallySpaced | EveryNth | AnchorsOnly | Continuous,
    Field(discriminator="kind"),
]


def every_other() -> PatternSpacing:
    return PatternSpacing(on_count=1, off_count=1)


def one_on_two_off() -> PatternSpacing:
    return PatternSpacing(on_count=1, off_count=2)


def two_on_one_off() -> PatternSpacing:
    return PatternSpacing(on_count=2, off_count=1)


__all__ = [
    "AnchorsOnly",
    "Continuous",
    "EquallySpaced",
    "EveryNth",
    "PatternSpacing",
    "SpacingRule",
    "every_other",
    "one_on_two_off",
    "two_on_one_off",
]
