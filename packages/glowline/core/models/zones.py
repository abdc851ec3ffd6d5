"""Zone selectors - ways of naming a subset of an installation's pixels.

``ZoneSelector`` is a tagged union discriminated on ``kind``. Code that
branches on selectors uses ``match`` over the concrete classes so a new
variant shows up as an unhandled case rather than a silent fallthrough.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from glowline.core.vocabulary import ArchitecturalRole, Location

_LEVEL_NAMES = {1: "ground floor", 2: "second floor", 3: "third floor"}


class PixelRange(BaseModel):
    """Inclusive global pixel range."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def validate_order(self) -> PixelRange:
        if self.end < self.start:
            raise ValueError(f"range end {self.end} is before start {self.start}")
        return self

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def overlaps(self, other: PixelRange) -> bool:
        return self.start <= other.end and other.start <= self.end


class AllZone(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["all"] = "all"

    @property
    def description(self) -> str:
        return "entire roofline"


class SegmentsZone(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["segments"] = "segments"
    segment_ids: list[str] = Field(min_length=1)

    @property
    def description(self) -> str:
        noun = "segment" if len(self.segment_ids) == 1 else "segments"
        return f"{noun} {', '.join(self.segment_ids)}"


class ArchitecturalZone(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["architectural"] = "architectural"
    roles: list[ArchitecturalRole] = Field(min_length=1)

    @property
    def description(self) -> str:
        names = [f"{role.value}s" for role in self.roles]
        if len(names) == 1:
            return names[0]
        return f"{', '.join(names[:-1])} and {names[-1]}"


class LocationZone(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["location"] = "location"
    location: Location

    @property
    def description(self) -> str:
        if self.location in (Location.FRONT, Location.BACK):
            return f"{self.location.value} of house"
        return f"{self.location.value} side"


class LevelZone(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["level"] = "level"
    level: int = Field(ge=1)

    @property
    def description(self) -> str:
        return _LEVEL_NAMES.get(self.level, f"level {self.level}")


class CustomZone(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["custom"] = "custom"
    pixel_ranges: list[PixelRange] = Field(min_length=1)

    @property
    def description(self) -> str:
        spans = ", ".join(f"{r.start}-{r.end}" for r in self.pixel_ranges)
        return f"pixels {spans}"


ZoneSelector = Annotated[
    AllZone | SegmentsZone | ArchitecturalZone | LocationZone | LevelZone | CustomZone,
    Field(discriminator="kind"),
]


def zones_overlap(a: ZoneSelector, b: ZoneSelector) -> bool:
    """Whether two selectors can address the same pixels.

    ``all`` overlaps everything. Selectors of the same kind overlap when
    their concrete sets intersect. Selectors of different kinds are
    treated as disjoint since they cannot be compared without a
    configuration.
    """
    if isinstance(a, AllZone) or isinstance(b, AllZone):
        return True
    match a, b:
        case SegmentsZone(), SegmentsZone():
            return bool(set(a.segment_ids) & set(b.segment_ids))
        case ArchitecturalZone(), ArchitecturalZone():
            return bool(set(a.roles) & set(b.roles))
        case LocationZone(), LocationZone():
            return a.location == b.location
        case LevelZone(), LevelZone():
            return a.level == b.level
        case CustomZone(), CustomZone():
            return any(ra.overlaps(rb) for ra in a.pixel_ranges for rb in b.pixel_ranges)
        case _:
            return False


__all__ = [
    "AllZone",
    "ArchitecturalZone",
    "CustomZone",
    "LevelZone",
    "LocationZone",
    "PixelRange",
    "SegmentsZone",
    "ZoneSelector",
    "zones_overlap",
]
