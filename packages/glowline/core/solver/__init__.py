"""Constraint solving over zones, spacing and colour contrast."""

from glowline.core.solver.constraint_solver import ConstraintSolver, validate_intent
from glowline.core.solver.contrast import normalized_contrast, relative_luminance
from glowline.core.solver.spacing import (
    check_equally_spaced,
    check_every_nth,
    check_pattern,
    check_spacing,
    has_valid_parameters,
    suggest_spacing_alternatives,
)
from glowline.core.solver.zones import (
    LOCATION_NAME_KEYWORDS,
    resolve_zone_ranges,
    segment_matches_location,
    segments_for_zone,
    zone_pixel_count,
)

__all__ = [
    # Solver
    "ConstraintSolver",
    "validate_intent",
    # Spacing
    "check_equally_spaced",
    "check_every_nth",
    "check_pattern",
    "check_spacing",
    "has_valid_parameters",
    "suggest_spacing_alternatives",
    # Zones
    "LOCATION_NAME_KEYWORDS",
    "resolve_zone_ranges",
    "segment_matches_location",
    "segments_for_zone",
    "zone_pixel_count",
    # Contrast
    "normalized_contrast",
    "relative_luminance",
]
