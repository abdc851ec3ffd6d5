"""Architecture vocabulary - how an installation is described physically."""

from enum import Enum


class SegmentType(str, Enum):
    """Physical shape of a roofline segment.

    Attributes:
        RUN: Long horizontal stretch (eaves, gutters).
        CORNER: Short piece wrapping a corner.
        PEAK: Apex of a gable.
        COLUMN: Vertical post or pillar.
        CONNECTOR: Unlit or filler stretch joining two lit segments.
    """

    RUN = "run"
    CORNER = "corner"
    PEAK = "peak"
    COLUMN = "column"
    CONNECTOR = "connector"


class ArchitecturalRole(str, Enum):
    """Architectural feature a user can name in free text.

    Roles are coarser than segment types: eaves and fascia both resolve
    to RUN segments.
    """

    PEAK = "peak"
    CORNER = "corner"
    RUN = "run"
    COLUMN = "column"
    EAVE = "eave"
    FASCIA = "fascia"
    SOFFIT = "soffit"
    CONNECTOR = "connector"


class Location(str, Enum):
    """Side of the building a segment faces."""

    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"


# Roles -> segment types they cover. Soffit has no lit segment type.
ROLE_SEGMENT_TYPES: dict[ArchitecturalRole, tuple[SegmentType, ...]] = {
    ArchitecturalRole.PEAK: (SegmentType.PEAK,),
    ArchitecturalRole.CORNER: (SegmentType.CORNER,),
    ArchitecturalRole.RUN: (SegmentType.RUN,),
    ArchitecturalRole.EAVE: (SegmentType.RUN,),
    ArchitecturalRole.FASCIA: (SegmentType.RUN,),
    ArchitecturalRole.COLUMN: (SegmentType.COLUMN,),
    ArchitecturalRole.CONNECTOR: (SegmentType.CONNECTOR,),
    ArchitecturalRole.SOFFIT: (),
}


def segment_types_for_roles(roles: list[ArchitecturalRole]) -> set[SegmentType]:
    """Union of segment types covered by ``roles``."""
    types: set[SegmentType] = set()
    for role in roles:
        types.update(ROLE_SEGMENT_TYPES[role])
    return types


__all__ = [
    "ArchitecturalRole",
    "Location",
    "ROLE_SEGMENT_TYPES",
    "SegmentType",
    "segment_types_for_roles",
]
