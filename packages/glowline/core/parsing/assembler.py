"""Intent assembler - turns a prompt into a layered :class:`DesignIntent`.

One clause becomes one layer. Anything the parser cannot decide on its
own becomes an :class:`AmbiguityFlag` on the intent; parsing never raises
on sparse or odd text and falls back to ``zone=all``, ``color=white`` and
``pattern=solid``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from glowline.core.config.models import ParserConfig
from glowline.core.models import (
    WHITE,
    AllZone,
    AmbiguityFlag,
    ArchitecturalZone,
    ClarificationChoice,
    ColorAssignment,
    DesignIntent,
    DesignLayer,
    LevelZone,
    LocationZone,
    MotionSettings,
    PatternRule,
    RGBColor,
    RooflineConfiguration,
    SegmentsZone,
    ZoneSelector,
    zones_overlap,
)
from glowline.core.parsing import lexicon
from glowline.core.parsing.normalizer import normalize_prompt, split_into_clauses
from glowline.core.vocabulary import (
    AmbiguityType,
    ArchitecturalRole,
    Location,
    MotionDirection,
    MotionType,
    effect_for_motion,
    segment_types_for_roles,
)

logger = logging.getLogger(__name__)

# Words asking for animation without naming one
_GENERIC_MOTION_WORDS = ["animated", "animate", "animation", "dynamic", "lively", "in motion"]

_ACCENT_WORDS = ["accent", "highlight"]


@dataclass
class _ClauseResult:
    layer: DesignLayer
    ambiguities: list[AmbiguityFlag] = field(default_factory=list)


def _zone_text(clause: str) -> str:
    """Clause with direction phrases removed, so "right to left" is not a location."""
    text = f" {clause} "
    for _, synonyms in lexicon.DIRECTION_SYNONYMS:
        for synonym in synonyms:
            if len(synonym.strip()) > 2:
                text = text.replace(synonym, " ")
    return " ".join(text.split())


def _resolve_zone(
    clause: str,
    layer_id: str,
    config: RooflineConfiguration | None,
    parser_config: ParserConfig,
) -> tuple[ZoneSelector, list[AmbiguityFlag]]:
    text = _zone_text(clause)
    ambiguities: list[AmbiguityFlag] = []

    roles = lexicon.match_roles(text)
    if roles:
        zone = ArchitecturalZone(roles=roles)
        if config is not None and len(roles) == 1:
            amb = _many_segments_ambiguity(roles[0], zone, clause, layer_id, config, parser_config)
            if amb is not None:
                ambiguities.append(amb)
        return zone, ambiguities

    location = lexicon.match_location(text)
    if location is not None:
        return LocationZone(location=location), ambiguities

    level = lexicon.match_level(text)
    if level is not None:
        return LevelZone(level=level), ambiguities

    return AllZone(), ambiguities


def _many_segments_ambiguity(
    role: ArchitecturalRole,
    zone: ArchitecturalZone,
    clause: str,
    layer_id: str,
    config: RooflineConfiguration,
    parser_config: ParserConfig,
) -> AmbiguityFlag | None:
    matching = config.segments_of_type(*segment_types_for_roles([role]))
    if len(matching) <= parser_config.zone_ambiguity_segment_threshold:
        return None

    plural = f"{role.value}s"
    front_ids = [s.id for s in matching if s.location is Location.FRONT]
    front_zone: ZoneSelector = (
        SegmentsZone(segment_ids=front_ids) if front_ids else LocationZone(location=Location.FRONT)
    )
    return AmbiguityFlag(
        type=AmbiguityType.ZONE,
        description=f"Multiple {plural} found ({len(matching)})",
        source_clause=clause,
        affected_layer_id=layer_id,
        choices=[
            ClarificationChoice(id="all", label=f"All {plural}", is_recommended=True, value=zone),
            ClarificationChoice(id="front_only", label=f"Front {plural} only", value=front_zone),
            ClarificationChoice(id="select", label="Let me select"),
        ],
    )


def _resolve_colors(
    clause: str, layer_id: str
) -> tuple[ColorAssignment, list[AmbiguityFlag]]:
    matches, vague = lexicon.match_colors(clause)
    ambiguities: list[AmbiguityFlag] = []

    found: list[tuple[str, RGBColor]] = [(m.name, m.color) for m in matches]
    for v in vague:
        default = v.shades[0]
        ambiguities.append(
            AmbiguityFlag(
                type=AmbiguityType.COLOR,
                description=f"Which shade of {v.word}?",
                source_clause=clause,
                affected_layer_id=layer_id,
                choices=[
                    ClarificationChoice(
                        id=shade.id,
                        label=shade.label,
                        value=RGBColor.from_hex(shade.hex),
                        is_recommended=(i == 0),
                    )
                    for i, shade in enumerate(v.shades)
                ],
            )
        )
        shade_entry = (default.label.lower(), RGBColor.from_hex(default.hex))
        names = [name for name, _ in found]
        if v.word in names:
            found[names.index(v.word)] = shade_entry
        else:
            found.append(shade_entry)

    if not found:
        return ColorAssignment(primary=WHITE, primary_name="white"), ambiguities

    primary_name, primary = found[0]
    secondary: RGBColor | None = None
    accent: RGBColor | None = None
    if len(found) > 1:
        if lexicon.contains_any(clause, _ACCENT_WORDS):
            accent = found[1][1]
        else:
            secondary = found[1][1]
    if len(found) > 2 and accent is None:
        accent = found[2][1]

    colors = ColorAssignment(
        primary=primary,
        primary_name=primary_name,
        secondary=secondary,
        accent=accent,
    )
    return colors, ambiguities


def _direction_ambiguity(motion_type: MotionType, clause: str, layer_id: str) -> AmbiguityFlag:
    return AmbiguityFlag(
        type=AmbiguityType.DIRECTION,
        description=f"Which direction should the {motion_type.value} go?",
        source_clause=clause,
        affected_layer_id=layer_id,
        choices=[
            ClarificationChoice(
                id="left_to_right",
                label="Left to right",
                value=MotionDirection.LEFT_TO_RIGHT,
                is_recommended=True,
            ),
            ClarificationChoice(
                id="right_to_left",
                label="Right to left",
                value=MotionDirection.RIGHT_TO_LEFT,
            ),
        ],
    )


def _effect_ambiguity(clause: str, layer_id: str) -> AmbiguityFlag:
    choices = [
        ClarificationChoice(
            id=motion_type.value,
            label=motion_type.value.capitalize(),
            value=motion_type,
            is_recommended=(motion_type is MotionType.CHASE),
        )
        for motion_type in (MotionType.CHASE, MotionType.WAVE, MotionType.TWINKLE, MotionType.PULSE)
    ]
    return AmbiguityFlag(
        type=AmbiguityType.EFFECT,
        description="Which kind of animation?",
        source_clause=clause,
        affected_layer_id=layer_id,
        choices=choices,
    )


def _resolve_motion(
    clause: str, layer_id: str
) -> tuple[MotionSettings | None, list[AmbiguityFlag]]:
    motion_type = lexicon.match_motion_type(clause)
    if motion_type is None:
        if lexicon.contains_any(clause, _GENERIC_MOTION_WORDS):
            return None, [_effect_ambiguity(clause, layer_id)]
        return None, []

    ambiguities: list[AmbiguityFlag] = []
    direction = lexicon.match_direction(clause)
    if direction is None:
        ambiguities.append(_direction_ambiguity(motion_type, clause, layer_id))
        direction = MotionDirection.LEFT_TO_RIGHT

    motion = MotionSettings(
        motion_type=motion_type,
        direction=direction,
        speed=lexicon.match_speed(clause),
        reverse=direction.reverses_strip,
        effect=effect_for_motion(motion_type),
    )
    return motion, ambiguities


def parse_clause(
    clause: str,
    index: int,
    config: RooflineConfiguration | None = None,
    parser_config: ParserConfig | None = None,
) -> _ClauseResult:
    """Parse one normalized clause into a layer and its ambiguities."""
    parser_config = parser_config or ParserConfig()
    layer_id = f"layer_{index}"

    zone, zone_ambs = _resolve_zone(clause, layer_id, config, parser_config)
    colors, color_ambs = _resolve_colors(clause, layer_id)
    spacing = lexicon.match_spacing(clause, parser_config.default_equally_spaced_count)
    if spacing is not None:
        colors = colors.model_copy(update={"spacing": spacing})
    motion, motion_ambs = _resolve_motion(clause, layer_id)

    layer = DesignLayer(
        id=layer_id,
        name=f"{colors.primary_name} on {zone.description}",
        zone=zone,
        colors=colors,
        pattern=PatternRule(type=lexicon.match_pattern_type(clause)),
        motion=motion,
        priority=index,
    )
    return _ClauseResult(
        layer=layer,
        ambiguities=[*zone_ambs, *color_ambs, *motion_ambs],
    )


def detect_conflicts(layers: list[DesignLayer]) -> list[AmbiguityFlag]:
    """Conflict ambiguities for overlapping layers with different primaries.

    The later layer is recommended since later instructions override
    earlier ones.
    """
    ambiguities: list[AmbiguityFlag] = []
    for i, first in enumerate(layers):
        for j in range(i + 1, len(layers)):
            second = layers[j]
            if not zones_overlap(first.zone, second.zone):
                continue
            if first.colors.primary.same_rgb(second.colors.primary):
                continue
            ambiguities.append(
                AmbiguityFlag(
                    type=AmbiguityType.CONFLICT,
                    description="Two instructions target overlapping areas with different colors",
                    source_clause=f"{first.name} / {second.name}",
                    affected_layer_id=second.id,
                    choices=[
                        ClarificationChoice(
                            id=f"layer_{i}_wins",
                            label=f"Use {first.colors.primary_name}",
                            value=i,
                        ),
                        ClarificationChoice(
                            id=f"layer_{j}_wins",
                            label=f"Use {second.colors.primary_name}",
                            value=j,
                            is_recommended=True,
                        ),
                        ClarificationChoice(id="blend", label="Blend both colors"),
                    ],
                )
            )
    return ambiguities


def score_confidence(
    ambiguity_count: int,
    all_zone_layers: int,
    white_layers: int,
    layer_count: int,
    parser_config: ParserConfig | None = None,
) -> float:
    """Parser confidence in [0, 1]; 0 when nothing was parsed.

    Layers on the whole roofline or in plain white are penalised because
    those are also what the parser falls back to.
    """
    if layer_count == 0:
        return 0.0
    cfg = parser_config or ParserConfig()
    score = (
        1.0
        - cfg.ambiguity_penalty * ambiguity_count
        - cfg.all_zone_penalty * all_zone_layers
        - cfg.white_primary_penalty * white_layers
    )
    return max(0.0, min(1.0, score))


def parse_intent(
    text: str,
    config: RooflineConfiguration | None = None,
    parser_config: ParserConfig | None = None,
) -> DesignIntent:
    """Parse free text into a :class:`DesignIntent`.

    Args:
        text: Raw user instruction.
        config: Installation, used to spot roles with many segments.
        parser_config: Confidence penalties and defaults.

    Returns:
        A new intent with one layer per clause.
    """
    parser_config = parser_config or ParserConfig()
    clauses = split_into_clauses(normalize_prompt(text))

    results = [parse_clause(c, i, config, parser_config) for i, c in enumerate(clauses)]
    layers = [r.layer for r in results]
    ambiguities = [a for r in results for a in r.ambiguities]
    ambiguities.extend(detect_conflicts(layers))

    confidence = score_confidence(
        ambiguity_count=len(ambiguities),
        all_zone_layers=sum(isinstance(layer.zone, AllZone) for layer in layers),
        white_layers=sum(layer.colors.primary.same_rgb(WHITE) for layer in layers),
        layer_count=len(layers),
        parser_config=parser_config,
    )
    logger.debug(
        "Parsed %d clause(s) into %d layer(s), %d ambiguities, confidence %.2f",
        len(clauses),
        len(layers),
        len(ambiguities),
        confidence,
    )
    return DesignIntent(
        original_prompt=text,
        layers=layers,
        ambiguities=ambiguities,
        confidence=confidence,
    )


__all__ = ["detect_conflicts", "parse_clause", "parse_intent", "score_confidence"]
