"""Physical installation models - segments and the roofline they form."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

from glowline.core.vocabulary import Location, SegmentType

logger = logging.getLogger(__name__)


class Segment(BaseModel):
    """A named, contiguous pixel range with an architectural shape.

    ``start_pixel`` and ``sort_order`` are owned by the enclosing
    :class:`RooflineConfiguration`, which recomputes them on construction.

    Attributes:
        id: Stable identifier referenced by segment zone selectors.
        name: Display name; also used for location keyword matching.
        pixel_count: Number of LEDs in the segment.
        start_pixel: Global index of the first LED.
        type: Physical shape.
        direction: Free-form wiring direction tag.
        anchor_pixels: Local offsets of anchor zones. Empty means
            "use the type defaults".
        anchor_led_count: Width of each anchor zone.
        sort_order: Position along the strip.
        level: Storey the segment sits on (1 = ground floor).
        location: Side of the building, when known.
        is_prominent: Featured segment (e.g. main gable).
        is_connected_to_previous: False when the segment starts a new
            physical run.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    pixel_count: int = Field(ge=0)
    start_pixel: int = Field(default=0, ge=0)
    type: SegmentType = SegmentType.RUN
    direction: str = "left_to_right"
    anchor_pixels: list[int] = Field(default_factory=list)
    anchor_led_count: int = Field(default=2, ge=1)
    sort_order: int = 0
    level: int = Field(default=1, ge=1)
    location: Location | None = None
    is_prominent: bool = False
    is_connected_to_previous: bool = True

    @field_validator("anchor_pixels")
    @classmethod
    def validate_anchor_pixels(cls, v: list[int]) -> list[int]:
        if any(a < 0 for a in v):
            raise ValueError("anchor offsets must be non-negative")
        return sorted(set(v))

    @property
    def end_pixel(self) -> int:
        """Global index of the last LED (``start_pixel - 1`` when empty)."""
        return self.start_pixel + self.pixel_count - 1

    @property
    def default_anchors(self) -> list[int]:
        """Type-based anchor offsets used when none are configured."""
        n = self.pixel_count
        k = self.anchor_led_count
        if n <= 0:
            return []
        if self.type in (SegmentType.RUN, SegmentType.COLUMN):
            return sorted({0, max(n - k, 0)})
        if self.type in (SegmentType.CORNER, SegmentType.PEAK):
            return [max(n - k, 0) // 2]
        return []

    @property
    def effective_anchors(self) -> list[int]:
        """Configured anchors inside the segment, else the type defaults."""
        if self.anchor_pixels:
            return [a for a in self.anchor_pixels if a < self.pixel_count]
        return self.default_anchors

    @property
    def global_anchor_pixels(self) -> list[int]:
        return [self.start_pixel + a for a in self.effective_anchors]

    def is_anchor_pixel(self, local: int) -> bool:
        """Whether local offset ``local`` falls inside any anchor zone."""
        return any(a <= local < a + self.anchor_led_count for a in self.effective_anchors)

    def contains(self, global_pixel: int) -> bool:
        return self.start_pixel <= global_pixel <= self.end_pixel


class RooflineConfiguration(BaseModel):
    """Ordered segments making up one physical installation.

    Segments are laid end to end: segment *i* starts where segment *i-1*
    ends. Every editing helper returns a new configuration.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = "default"
    name: str = "Roofline"
    segments: list[Segment] = Field(default_factory=list)

    @field_validator("segments")
    @classmethod
    def recalculate_start_pixels(cls, v: list[Segment]) -> list[Segment]:
        ids = [s.id for s in v]
        if len(ids) != len(set(ids)):
            raise ValueError("segment ids must be unique")

        ordered = sorted(v, key=lambda s: s.sort_order)
        out: list[Segment] = []
        start = 0
        for index, segment in enumerate(ordered):
            out.append(segment.model_copy(update={"start_pixel": start, "sort_order": index}))
            start += segment.pixel_count
        return out

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def total_pixel_count(self) -> int:
        return sum(s.pixel_count for s in self.segments)

    @property
    def levels(self) -> list[int]:
        return sorted({s.level for s in self.segments})

    @property
    def all_global_anchor_pixels(self) -> list[int]:
        pixels: list[int] = []
        for segment in self.segments:
            pixels.extend(segment.global_anchor_pixels)
        return pixels

    @property
    def connected_runs(self) -> list[list[Segment]]:
        """Segments grouped into physically connected runs."""
        runs: list[list[Segment]] = []
        for segment in self.segments:
            if runs and segment.is_connected_to_previous:
                runs[-1].append(segment)
            else:
                runs.append([segment])
        return runs

    def segments_on_level(self, level: int) -> list[Segment]:
        return [s for s in self.segments if s.level == level]

    def segments_of_type(self, *types: SegmentType) -> list[Segment]:
        return [s for s in self.segments if s.type in types]

    def segment_by_id(self, segment_id: str) -> Segment | None:
        for segment in self.segments:
            if segment.id == segment_id:
                return segment
        return None

    def segment_for_pixel(self, global_pixel: int) -> Segment | None:
        for segment in self.segments:
            if segment.contains(global_pixel):
                return segment
        return None

    def is_anchor_pixel(self, global_pixel: int) -> bool:
        segment = self.segment_for_pixel(global_pixel)
        if segment is None:
            return False
        return segment.is_anchor_pixel(global_pixel - segment.start_pixel)

    def validate_against_device(self, device_pixel_count: int) -> bool:
        """True when the configured pixel total matches the controller."""
        matches = self.total_pixel_count == device_pixel_count
        if not matches:
            logger.warning(
                "Roofline %s has %d pixels but device reports %d",
                self.id,
                self.total_pixel_count,
                device_pixel_count,
            )
        return matches

    # ------------------------------------------------------------------
    # Editing (each returns a new configuration)
    # ------------------------------------------------------------------

    def _with_segments(self, segments: list[Segment]) -> RooflineConfiguration:
        renumbered = [s.model_copy(update={"sort_order": i}) for i, s in enumerate(segments)]
        return RooflineConfiguration(id=self.id, name=self.name, segments=renumbered)

    def add_segment(self, segment: Segment) -> RooflineConfiguration:
        return self._with_segments([*self.segments, segment])

    def update_segment(self, segment_id: str, updated: Segment) -> RooflineConfiguration:
        return self._with_segments(
            [updated if s.id == segment_id else s for s in self.segments]
        )

    def remove_segment(self, segment_id: str) -> RooflineConfiguration:
        return self._with_segments([s for s in self.segments if s.id != segment_id])

    def reorder_segments(self, old_index: int, new_index: int) -> RooflineConfiguration:
        """Move the segment at ``old_index`` to ``new_index``.

        Out-of-range indices leave the configuration unchanged.
        """
        count = len(self.segments)
        if not (0 <= old_index < count and 0 <= new_index < count) or old_index == new_index:
            return self
        segments = list(self.segments)
        moved = segments.pop(old_index)
        segments.insert(new_index, moved)
        return self._with_segments(segments)


__all__ = ["RooflineConfiguration", "Segment"]
