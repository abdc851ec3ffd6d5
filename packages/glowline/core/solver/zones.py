"""Resolve zone selectors against a concrete installation."""

from __future__ import annotations

from glowline.core.config.models import SolverConfig
from glowline.core.models import (
    AllZone,
    ArchitecturalZone,
    CustomZone,
    LevelZone,
    LocationZone,
    PixelRange,
    RooflineConfiguration,
    Segment,
    SegmentsZone,
    ZoneSelector,
)
from glowline.core.vocabulary import Location, segment_types_for_roles

# Name keywords used when a segment carries no location tag
LOCATION_NAME_KEYWORDS: list[tuple[Location, list[str]]] = [
    (Location.FRONT, ["front", "street", "main"]),
    (Location.BACK, ["back", "rear", "yard"]),
    (Location.LEFT, ["left", "west"]),
    (Location.RIGHT, ["right", "east"]),
]


def segment_matches_location(segment: Segment, location: Location) -> bool:
    if segment.location is not None:
        return segment.location is location
    name = segment.name.lower()
    for candidate, keywords in LOCATION_NAME_KEYWORDS:
        if candidate is location:
            return any(k in name for k in keywords)
    return False


def segments_for_zone(zone: ZoneSelector, config: RooflineConfiguration) -> list[Segment]:
    """Segments a selector covers; empty for ``all`` and ``custom``."""
    match zone:
        case AllZone() | CustomZone():
            return []
        case SegmentsZone(segment_ids=ids):
            return [s for s in config.segments if s.id in ids]
        case ArchitecturalZone(roles=roles):
            types = segment_types_for_roles(roles)
            return [s for s in config.segments if s.type in types]
        case LocationZone(location=location):
            return [s for s in config.segments if segment_matches_location(s, location)]
        case LevelZone(level=level):
            return config.segments_on_level(level)


def resolve_zone_ranges(zone: ZoneSelector, config: RooflineConfiguration) -> list[PixelRange]:
    """Inclusive global pixel ranges addressed by ``zone``.

    Ranges are clipped to the installation; empty segments are skipped.
    """
    total = config.total_pixel_count
    if total <= 0:
        return []
    match zone:
        case AllZone():
            return [PixelRange(start=0, end=total - 1)]
        case CustomZone(pixel_ranges=ranges):
            return [
                PixelRange(start=r.start, end=min(r.end, total - 1))
                for r in ranges
                if r.start < total
            ]
        case _:
            return [
                PixelRange(start=s.start_pixel, end=s.end_pixel)
                for s in segments_for_zone(zone, config)
                if s.pixel_count > 0
            ]


def zone_pixel_count(
    zone: ZoneSelector,
    config: RooflineConfiguration,
    solver_config: SolverConfig | None = None,
) -> int:
    """Number of pixels a zone covers.

    Architectural and location zones with no tagged segments fall back to
    a fixed share of the installation.
    """
    cfg = solver_config or SolverConfig()
    count = sum(r.length for r in resolve_zone_ranges(zone, config))
    if count == 0 and isinstance(zone, ArchitecturalZone):
        return int(config.total_pixel_count * cfg.architectural_fallback_fraction)
    if count == 0 and isinstance(zone, LocationZone):
        return int(config.total_pixel_count * cfg.location_fallback_fraction)
    return count


__all__ = [
    "LOCATION_NAME_KEYWORDS",
    "resolve_zone_ranges",
    "segment_matches_location",
    "segments_for_zone",
    "zone_pixel_count",
]
