"""Synonym tables and matchers for the rule-based parser.

Every table is an ordered list of ``(canonical, synonyms)`` pairs. Order
matters: tables are scanned front to back and, for single-valued
categories, the first synonym hit wins. Matching is substring
containment against the normalized clause padded with one space on each
side, so a synonym written as ``" in "`` only matches the whole word.
"""

from __future__ import annotations

import logging
import re
from typing import NamedTuple, TypeVar

from glowline.core.models import (
    AnchorsOnly,
    EquallySpaced,
    EveryNth,
    PatternSpacing,
    RGBColor,
    SpacingRule,
    every_other,
    one_on_two_off,
    two_on_one_off,
)
from glowline.core.vocabulary import (
    DEFAULT_SPEED,
    ArchitecturalRole,
    Location,
    MotionDirection,
    MotionType,
    PatternType,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ===================================================================
# Zone tables
# ===================================================================

ARCHITECTURAL_SYNONYMS: list[tuple[ArchitecturalRole, list[str]]] = [
    (
        ArchitecturalRole.PEAK,
        ["peak", "peaks", "apex", "apexes", "tip", "tips", "point", "points",
         "gable", "gables", "top", "tops", "highest"],
    ),
    (
        ArchitecturalRole.CORNER,
        ["corner", "corners", "angle", "angles", "turn", "turns", "bend", "bends",
         "corner point", "corner points"],
    ),
    (
        ArchitecturalRole.RUN,
        ["run", "runs", "horizontal", "flat", "straight", "eave", "eaves",
         "roofline", "roof line", "along the roof"],
    ),
    (
        ArchitecturalRole.COLUMN,
        ["column", "columns", "pillar", "pillars", "post", "posts", "vertical", "verticals"],
    ),
    (ArchitecturalRole.EAVE, ["eave", "eaves", "overhang", "overhangs", "edge", "edges"]),
    (ArchitecturalRole.FASCIA, ["fascia", "fascias", "trim", "board", "boards"]),
    (ArchitecturalRole.SOFFIT, ["soffit", "soffits", "underside", "underneath"]),
]

LOCATION_SYNONYMS: list[tuple[Location, list[str]]] = [
    (
        Location.FRONT,
        ["front", "facing", "street side", "curb side", "main", "facade",
         "front of house", "front of the house", "face"],
    ),
    (
        Location.BACK,
        ["back", "rear", "backyard", "back of house", "back of the house", "behind",
         "back side"],
    ),
    (Location.LEFT, ["left", "left side", "left of house", "on the left"]),
    (Location.RIGHT, ["right", "right side", "right of house", "on the right"]),
]

LEVEL_SYNONYMS: list[tuple[int, list[str]]] = [
    (
        1,
        ["first floor", "ground floor", "ground level", "lower", "bottom", "main level",
         "1st floor", "first story", "lower level"],
    ),
    (
        2,
        ["second floor", "upper", "top", "second story", "2nd floor", "upstairs",
         "upper level", "second level"],
    ),
    (3, ["third floor", "third story", "3rd floor", "third level"]),
]


# ===================================================================
# Spacing tables
# ===================================================================

SPACING_SYNONYMS: list[tuple[str, list[str]]] = [
    (
        "every_other",
        ["every other", "alternating", "alternate", "skip one", "every second",
         "one on one off", "1 on 1 off"],
    ),
    ("one_on_two_off", ["one on two off", "1 on 2 off", "spaced out", "sparse"]),
    ("two_on_one_off", ["two on one off", "2 on 1 off", "dense"]),
    (
        "equally_spaced",
        ["equally spaced", "evenly spaced", "uniform spacing", "evenly", "uniformly",
         "distributed", "spread out", "equally distributed"],
    ),
    (
        "anchors_only",
        ["anchors only", "just anchors", "only anchors", "anchor points only",
         "only at corners", "only at peaks", "just at corners", "just at peaks"],
    ),
]

_EQUAL_COUNT = re.compile(r"(\d+)\s*(?:(?:equally|evenly)\s*)?spaced")
_EVERY_N = re.compile(r"every\s*(\d+)")
_ON_OFF = re.compile(r"(\d+)\s*on\s*(\d+)\s*off")


# ===================================================================
# Motion tables
# ===================================================================

MOTION_TYPE_SYNONYMS: list[tuple[MotionType, list[str]]] = [
    (
        MotionType.CHASE,
        ["chase", "chasing", "running", "flowing", "flow", "moving", "move",
         "traveling", "travel", "march", "marching"],
    ),
    (
        MotionType.WAVE,
        ["wave", "waving", "ripple", "rippling", "undulating", "rolling"],
    ),
    (
        MotionType.TWINKLE,
        ["twinkle", "twinkling", "sparkle", "sparkling", "glitter", "glittering",
         "shimmer", "shimmering", "flicker", "flickering"],
    ),
    (
        MotionType.PULSE,
        ["pulse", "pulsing", "breathe", "breathing", "throb", "throbbing"],
    ),
    (MotionType.SCAN, ["scan", "scanning", "sweep", "sweeping", "back and forth"]),
]

DIRECTION_SYNONYMS: list[tuple[MotionDirection, list[str]]] = [
    (
        MotionDirection.LEFT_TO_RIGHT,
        ["left to right", "l to r", "rightward", "to the right", "→", "->",
         "from left", "toward right"],
    ),
    (
        MotionDirection.RIGHT_TO_LEFT,
        ["right to left", "r to l", "leftward", "to the left", "←", "<-",
         "from right", "toward left"],
    ),
    (
        MotionDirection.INWARD,
        ["inward", " in ", "toward center", "to center", "converging",
         "from edges", "from ends"],
    ),
    (
        MotionDirection.OUTWARD,
        ["outward", " out ", "from center", "expanding", "diverging", "toward edges",
         "toward ends"],
    ),
    (MotionDirection.UPWARD, ["upward", " up ", "ascending", "rising", "toward top"]),
    (
        MotionDirection.DOWNWARD,
        ["downward", " down ", "descending", "falling", "toward bottom"],
    ),
    (MotionDirection.COUNTER_CLOCKWISE, ["counterclockwise", "counter clockwise", "anticlockwise"]),
    (MotionDirection.CLOCKWISE, ["clockwise"]),
]

# Longer phrases first: "very fast" must win over "fast"
SPEED_KEYWORDS: list[tuple[list[str], int]] = [
    (["very fast"], 240),
    (["very slow"], 40),
    (["fast", "quick"], 200),
    (["slow"], 80),
]

PATTERN_KEYWORDS: list[tuple[list[str], PatternType]] = [
    (["gradient", "fade"], PatternType.GRADIENT),
    (["alternating", "alternate"], PatternType.ALTERNATING),
    (["twinkle", "sparkle"], PatternType.TWINKLE),
    (["wave"], PatternType.WAVE),
]


# ===================================================================
# Colour tables
# ===================================================================


class ColorEntry(NamedTuple):
    name: str
    hex: str
    synonyms: list[str]


class Shade(NamedTuple):
    id: str
    label: str
    hex: str


COLOR_TABLE: list[ColorEntry] = [
    ColorEntry("white", "FFFFFF", ["white", "pure white"]),
    ColorEntry("warm white", "FFE4C4", ["warm white", "soft white", "cozy white"]),
    ColorEntry("cool white", "F0F8FF", ["cool white", "bright white", "daylight"]),
    ColorEntry("soft white", "FFF5E1", ["soft white", "gentle white"]),
    ColorEntry("red", "FF0000", ["red", "bright red"]),
    ColorEntry("dark red", "8B0000", ["dark red", "deep red", "maroon"]),
    ColorEntry("crimson", "DC143C", ["crimson"]),
    ColorEntry("green", "00FF00", ["green", "bright green"]),
    ColorEntry("dark green", "006400", ["dark green", "forest green", "deep green"]),
    ColorEntry("light green", "90EE90", ["light green", "lime", "pale green"]),
    ColorEntry("emerald", "50C878", ["emerald", "emerald green"]),
    ColorEntry("blue", "0000FF", ["blue", "bright blue"]),
    ColorEntry("dark blue", "00008B", ["dark blue", "navy", "navy blue", "deep blue"]),
    ColorEntry("light blue", "ADD8E6", ["light blue", "sky blue", "pale blue"]),
    ColorEntry("cyan", "00FFFF", ["cyan", "aqua", "turquoise"]),
    ColorEntry("yellow", "FFFF00", ["yellow", "bright yellow"]),
    ColorEntry("gold", "FFD700", ["gold", "golden"]),
    ColorEntry("amber", "FFBF00", ["amber", "honey"]),
    ColorEntry("orange", "FFA500", ["orange", "bright orange"]),
    ColorEntry("dark orange", "FF8C00", ["dark orange", "deep orange"]),
    ColorEntry("purple", "800080", ["purple", "violet"]),
    ColorEntry("magenta", "FF00FF", ["magenta", "fuchsia"]),
    ColorEntry("lavender", "E6E6FA", ["lavender", "light purple"]),
    ColorEntry("pink", "FFC0CB", ["pink", "rose"]),
    ColorEntry("black", "000000", ["black"]),
]

VAGUE_COLORS: list[tuple[str, list[Shade]]] = [
    (
        "green",
        [
            Shade("forest", "Forest green", "228B22"),
            Shade("lime", "Lime green", "32CD32"),
            Shade("emerald", "Emerald", "50C878"),
            Shade("mint", "Mint", "98FF98"),
        ],
    ),
    (
        "blue",
        [
            Shade("royal", "Royal blue", "4169E1"),
            Shade("sky", "Sky blue", "87CEEB"),
            Shade("navy", "Navy", "000080"),
            Shade("cyan", "Cyan", "00FFFF"),
        ],
    ),
    (
        "red",
        [
            Shade("bright", "Bright red", "FF0000"),
            Shade("crimson", "Crimson", "DC143C"),
            Shade("dark", "Dark red", "8B0000"),
        ],
    ),
    (
        "purple",
        [
            Shade("violet", "Violet", "EE82EE"),
            Shade("deep", "Deep purple", "673AB7"),
            Shade("lavender", "Lavender", "E6E6FA"),
        ],
    ),
]


class ColorMatch(NamedTuple):
    name: str
    color: RGBColor
    start: int
    end: int


class VagueColorMatch(NamedTuple):
    word: str
    start: int
    shades: list[Shade]


# ===================================================================
# Matchers
# ===================================================================


def _padded(clause: str) -> str:
    return f" {clause} "


def contains_any(clause: str, synonyms: list[str]) -> bool:
    padded = _padded(clause)
    return any(s in padded for s in synonyms)


def first_match(clause: str, table: list[tuple[T, list[str]]]) -> T | None:
    """Canonical value of the first table row with a synonym in ``clause``."""
    padded = _padded(clause)
    for canonical, synonyms in table:
        for synonym in synonyms:
            if synonym in padded:
                return canonical
    return None


def all_matches(clause: str, table: list[tuple[T, list[str]]]) -> list[T]:
    """Canonical values of every table row with a synonym in ``clause``."""
    padded = _padded(clause)
    return [c for c, synonyms in table if any(s in padded for s in synonyms)]


def match_roles(clause: str) -> list[ArchitecturalRole]:
    return all_matches(clause, ARCHITECTURAL_SYNONYMS)


def match_location(clause: str) -> Location | None:
    return first_match(clause, LOCATION_SYNONYMS)


def match_level(clause: str) -> int | None:
    return first_match(clause, LEVEL_SYNONYMS)


def match_spacing(clause: str, default_equal_count: int = 10) -> SpacingRule | None:
    """Spacing rule named in ``clause``, or None.

    Named patterns are checked first, then free-form ``every N`` and
    ``N on M off``.
    """
    kind = first_match(clause, SPACING_SYNONYMS)
    if kind == "every_other":
        return every_other()
    if kind == "one_on_two_off":
        return one_on_two_off()
    if kind == "two_on_one_off":
        return two_on_one_off()
    if kind == "equally_spaced":
        m = _EQUAL_COUNT.search(clause)
        return EquallySpaced(count=int(m.group(1)) if m else default_equal_count)
    if kind == "anchors_only":
        return AnchorsOnly()

    m = _EVERY_N.search(clause)
    if m:
        return EveryNth(interval=int(m.group(1)))
    m = _ON_OFF.search(clause)
    if m:
        return PatternSpacing(on_count=int(m.group(1)), off_count=int(m.group(2)))

    m = _EQUAL_COUNT.search(clause)
    if m:
        return EquallySpaced(count=int(m.group(1)))
    return None


def match_motion_type(clause: str) -> MotionType | None:
    return first_match(clause, MOTION_TYPE_SYNONYMS)


def match_direction(clause: str) -> MotionDirection | None:
    return first_match(clause, DIRECTION_SYNONYMS)


def match_speed(clause: str) -> int:
    for keywords, speed in SPEED_KEYWORDS:
        if contains_any(clause, keywords):
            return speed
    return DEFAULT_SPEED


def match_pattern_type(clause: str) -> PatternType:
    for keywords, pattern_type in PATTERN_KEYWORDS:
        if contains_any(clause, keywords):
            return pattern_type
    return PatternType.SOLID


def _occurrences(text: str, needle: str) -> list[int]:
    positions: list[int] = []
    start = text.find(needle)
    while start != -1:
        positions.append(start)
        start = text.find(needle, start + 1)
    return positions


def match_colors(clause: str) -> tuple[list[ColorMatch], list[VagueColorMatch]]:
    """Find colour names in ``clause``.

    A match whose span lies inside a longer match is dropped, so "dark
    green" yields only dark green. Two entries sharing an identical span
    keep the earlier table entry. Each entry is reported once, at its
    first surviving position, and results are ordered by position.

    Returns:
        ``(colors, vague)`` where ``vague`` lists bare vague colour words
        (e.g. "green" on its own) that need a shade chosen.
    """
    candidates: list[tuple[int, int, int]] = []  # (start, end, table index)
    for index, entry in enumerate(COLOR_TABLE):
        for synonym in entry.synonyms:
            for start in _occurrences(clause, synonym):
                candidates.append((start, start + len(synonym), index))

    def shadowed(cand: tuple[int, int, int]) -> bool:
        start, end, index = cand
        for o_start, o_end, o_index in candidates:
            if (o_start, o_end, o_index) == cand:
                continue
            if o_start <= start and end <= o_end:
                if (o_end - o_start) > (end - start):
                    return True
                if (o_start, o_end) == (start, end) and o_index < index:
                    return True
        return False

    survivors = sorted((c for c in candidates if not shadowed(c)), key=lambda c: (c[0], c[2]))

    colors: list[ColorMatch] = []
    seen: set[int] = set()
    for start, end, index in survivors:
        if index in seen:
            continue
        seen.add(index)
        entry = COLOR_TABLE[index]
        colors.append(ColorMatch(entry.name, RGBColor.from_hex(entry.hex), start, end))

    vague: list[VagueColorMatch] = []
    for word, shades in VAGUE_COLORS:
        for start in _occurrences(clause, word):
            end = start + len(word)
            covered = any(
                s <= start and end <= e and (e - s) > len(word) for s, e, _ in candidates
            )
            if not covered:
                vague.append(VagueColorMatch(word, start, shades))
                break

    if vague:
        logger.debug("Vague colours in %r: %s", clause, [v.word for v in vague])
    return colors, vague


__all__ = [
    "ARCHITECTURAL_SYNONYMS",
    "COLOR_TABLE",
    "ColorEntry",
    "ColorMatch",
    "DIRECTION_SYNONYMS",
    "LEVEL_SYNONYMS",
    "LOCATION_SYNONYMS",
    "MOTION_TYPE_SYNONYMS",
    "PATTERN_KEYWORDS",
    "SPACING_SYNONYMS",
    "SPEED_KEYWORDS",
    "Shade",
    "VAGUE_COLORS",
    "VagueColorMatch",
    "all_matches",
    "contains_any",
    "first_match",
    "match_colors",
    "match_direction",
    "match_level",
    "match_location",
    "match_motion_type",
    "match_pattern_type",
    "match_roles",
    "match_spacing",
    "match_speed",
]
