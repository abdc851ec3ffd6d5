"""Apply clarification answers back onto a :class:`DesignIntent`.

Each answered question is matched to the ambiguity it was built from (the
index in its id, else the first open one with the same layer and type),
and a type-specific, pure mutation is applied to the layer. Matched
ambiguities are removed and confidence rises by a fixed step per resolved
ambiguity. Unknown question or option ids change nothing.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from pydantic import TypeAdapter, ValidationError

from glowline.core.models import (
    AllZone,
    AmbiguityFlag,
    ArchitecturalZone,
    ClarificationOption,
    ClarificationQuestion,
    DesignIntent,
    DesignLayer,
    EquallySpaced,
    EveryNth,
    MotionSettings,
    PatternSpacing,
    RGBColor,
    SegmentsZone,
    SpacingRule,
    ZoneSelector,
)
from glowline.core.vocabulary import (
    AMBIGUITY_TO_CLARIFICATION,
    SPEED_VALUES,
    ArchitecturalRole,
    ClarificationType,
    MotionDirection,
    MotionType,
    SpeedLevel,
    effect_for_motion,
)
from glowline.core.utils.math import clamp

logger = logging.getLogger(__name__)

CONFIDENCE_STEP = 0.1

_ZONE_ADAPTER: TypeAdapter[ZoneSelector] = TypeAdapter(ZoneSelector)
_SPACING_ADAPTER: TypeAdapter[SpacingRule] = TypeAdapter(SpacingRule)

_PATTERN_LABEL = re.compile(r"(\d+)\s*on,?\s*(\d+)\s*off")
_WINNER_ID = re.compile(r"layer_(\d+)_wins")

_ROLE_OPTIONS: dict[str, list[ArchitecturalRole]] = {
    "peaks": [ArchitecturalRole.PEAK],
    "corners": [ArchitecturalRole.CORNER],
    "peaks_and_corners": [ArchitecturalRole.PEAK, ArchitecturalRole.CORNER],
    "runs": [ArchitecturalRole.RUN],
}

_MERGE_IDS = ("merge", "blend")

Answer = str | ClarificationOption


# ===================================================================
# Value coercion
# ===================================================================


def _as_zone(value: Any) -> ZoneSelector | None:
    if value is None:
        return None
    try:
        return _ZONE_ADAPTER.validate_python(value)
    except ValidationError:
        return None


def _as_spacing(value: Any) -> SpacingRule | None:
    if value is None:
        return None
    try:
        return _SPACING_ADAPTER.validate_python(value)
    except ValidationError:
        return None


def _as_color(value: Any) -> RGBColor | None:
    if isinstance(value, RGBColor):
        return value
    if isinstance(value, str):
        try:
            return RGBColor.from_hex(value)
        except ValueError:
            return None
    if isinstance(value, Mapping):
        try:
            return RGBColor.model_validate(value)
        except ValidationError:
            return None
    return None


def _enum_value(enum_type: type[Any], *candidates: Any) -> Any:
    """First candidate that is (or names) a member of ``enum_type``."""
    for candidate in candidates:
        if isinstance(candidate, enum_type):
            return candidate
        if isinstance(candidate, str):
            try:
                return enum_type(candidate)
            except ValueError:
                continue
    return None


# ===================================================================
# Layer mutations
# ===================================================================


def apply_zone_choice(layer: DesignLayer, option: ClarificationOption) -> DesignLayer:
    zone = _as_zone(option.value)
    if zone is None:
        if option.id == "all":
            zone = AllZone()
        elif option.id.startswith("segment_"):
            zone = SegmentsZone(segment_ids=[option.id.removeprefix("segment_")])
        elif option.id in _ROLE_OPTIONS:
            zone = ArchitecturalZone(roles=_ROLE_OPTIONS[option.id])
    if zone is None:
        return layer
    return layer.model_copy(update={"zone": zone})


def apply_color_choice(layer: DesignLayer, option: ClarificationOption) -> DesignLayer:
    color = _as_color(option.value)
    if color is None and option.color_swatches:
        color = option.color_swatches[0]
    if color is None:
        return layer
    colors = layer.colors.model_copy(
        update={"primary": color, "primary_name": option.label.lower()}
    )
    return layer.model_copy(update={"colors": colors})


def spacing_from_option(option: ClarificationOption) -> SpacingRule | None:
    """Structured value first, then ids like ``count_6``, then the label."""
    if option.id == "manual":
        return None
    rule = _as_spacing(option.value)
    if rule is not None:
        return rule
    prefix, _, number = option.id.rpartition("_")
    if number.isdigit():
        if prefix == "count":
            return EquallySpaced(count=int(number))
        if prefix == "interval":
            return EveryNth(interval=int(number))
    match = _PATTERN_LABEL.search(option.label)
    if match:
        return PatternSpacing(on_count=int(match.group(1)), off_count=int(match.group(2)))
    return None


def apply_spacing_choice(layer: DesignLayer, option: ClarificationOption) -> DesignLayer:
    """Adopt the chosen rule and mark it accepted.

    Options without a rule (``manual``) accept the current rule as is.
    """
    rule = spacing_from_option(option) or layer.colors.spacing
    if rule is None:
        return layer
    colors = layer.colors.model_copy(update={"spacing": rule, "accepted_spacing": rule})
    return layer.model_copy(update={"colors": colors})


def apply_direction_choice(layer: DesignLayer, option: ClarificationOption) -> DesignLayer:
    direction = _enum_value(MotionDirection, option.value, option.id)
    if direction is None or layer.motion is None:
        return layer
    motion = layer.motion.model_copy(
        update={"direction": direction, "reverse": direction.reverses_strip}
    )
    return layer.model_copy(update={"motion": motion})


def apply_effect_choice(layer: DesignLayer, option: ClarificationOption) -> DesignLayer:
    motion_type = _enum_value(MotionType, option.value, option.id)
    if motion_type is None:
        return layer
    base = layer.motion or MotionSettings()
    motion = base.model_copy(
        update={"motion_type": motion_type, "effect": effect_for_motion(motion_type)}
    )
    return layer.model_copy(update={"motion": motion})


def apply_speed_choice(layer: DesignLayer, option: ClarificationOption) -> DesignLayer:
    if layer.motion is None:
        return layer
    if isinstance(option.value, int) and not isinstance(option.value, bool):
        speed = clamp(option.value, 0, 255)
    else:
        level = _enum_value(SpeedLevel, option.value, option.id)
        if level is None:
            return layer
        speed = SPEED_VALUES[level]
    return layer.model_copy(update={"motion": layer.motion.model_copy(update={"speed": speed})})


def _choice_layer_indices(ambiguity: AmbiguityFlag) -> list[int]:
    indices = []
    for choice in ambiguity.choices:
        match = _WINNER_ID.fullmatch(choice.id)
        if match:
            indices.append(int(match.group(1)))
    return indices


def apply_conflict_choice(
    layers: list[DesignLayer],
    affected: int,
    option: ClarificationOption,
    ambiguity: AmbiguityFlag | None,
) -> list[DesignLayer]:
    """Blend bumps the affected layer; ``layer_k_wins`` lifts k above the other."""
    updated = list(layers)
    if option.id in _MERGE_IDS:
        layer = updated[affected]
        updated[affected] = layer.model_copy(update={"priority": layer.priority + 1})
        return updated

    match = _WINNER_ID.fullmatch(option.id)
    if match is None:
        return updated
    winner = int(match.group(1))
    involved = _choice_layer_indices(ambiguity) if ambiguity is not None else []
    losers = [i for i in involved if i != winner and 0 <= i < len(updated)]
    if not 0 <= winner < len(updated) or not losers:
        return updated
    top = max(updated[i].priority for i in losers)
    if updated[winner].priority <= top:
        updated[winner] = updated[winner].model_copy(update={"priority": top + 1})
    return updated


def _apply_to_layers(
    layers: list[DesignLayer],
    question: ClarificationQuestion,
    option: ClarificationOption,
    ambiguity: AmbiguityFlag | None,
) -> list[DesignLayer]:
    affected = next(
        (i for i, candidate in enumerate(layers) if candidate.id == question.affected_layer_id),
        None,
    )
    if affected is None:
        return layers

    layer = layers[affected]
    match question.type:
        case ClarificationType.ZONE:
            layer = apply_zone_choice(layer, option)
        case ClarificationType.COLOR:
            layer = apply_color_choice(layer, option)
        case ClarificationType.SPACING:
            layer = apply_spacing_choice(layer, option)
        case ClarificationType.DIRECTION:
            layer = apply_direction_choice(layer, option)
        case ClarificationType.EFFECT:
            layer = apply_effect_choice(layer, option)
        case ClarificationType.SPEED:
            layer = apply_speed_choice(layer, option)
        case ClarificationType.CONFLICT:
            return apply_conflict_choice(layers, affected, option, ambiguity)
        case (
            ClarificationType.BRIGHTNESS
            | ClarificationType.CONFIRMATION
            | ClarificationType.MANUAL_FALLBACK
        ):
            return layers

    updated = list(layers)
    updated[affected] = layer
    return updated


def _resolve_option(question: ClarificationQuestion, answer: Answer) -> ClarificationOption | None:
    if isinstance(answer, ClarificationOption):
        return answer
    return question.option_by_id(answer)


def _find_ambiguity(
    ambiguities: list[AmbiguityFlag],
    resolved: set[int],
    question: ClarificationQuestion,
) -> int | None:
    """The ambiguity a question was built from.

    Question ids end in the ambiguity's index; the first open ambiguity
    with the same layer and type is the fallback.
    """

    def matches(index: int) -> bool:
        ambiguity = ambiguities[index]
        return (
            index not in resolved
            and ambiguity.affected_layer_id == question.affected_layer_id
            and AMBIGUITY_TO_CLARIFICATION[ambiguity.type] is question.type
        )

    _, _, suffix = question.id.rpartition("_")
    if suffix.isdigit() and int(suffix) < len(ambiguities) and matches(int(suffix)):
        return int(suffix)
    return next((i for i in range(len(ambiguities)) if matches(i)), None)


def apply_clarifications(
    intent: DesignIntent,
    answers: Mapping[str, Answer],
    questions: list[ClarificationQuestion],
) -> DesignIntent:
    """Return a new intent with the answered questions applied.

    Args:
        intent: Intent the questions were built from.
        answers: Question id to chosen option (or option id).
        questions: Questions as returned by ``build_questions``.

    Returns:
        A new intent; ``intent`` itself is never modified. Questions whose
        type has no ambiguity counterpart (speed, brightness) are applied
        without resolving anything.
    """
    layers = list(intent.layers)
    settings = intent.global_settings
    resolved: set[int] = set()

    for question in questions:
        answer = answers.get(question.id)
        if answer is None:
            continue
        option = _resolve_option(question, answer)
        if option is None:
            logger.debug("Ignoring unknown option for question %s", question.id)
            continue

        ambiguity: AmbiguityFlag | None = None
        if question.type in AMBIGUITY_TO_CLARIFICATION.values():
            index = _find_ambiguity(intent.ambiguities, resolved, question)
            if index is None:
                logger.debug("No open ambiguity matches question %s", question.id)
                continue
            resolved.add(index)
            ambiguity = intent.ambiguities[index]
        elif question.type is ClarificationType.BRIGHTNESS and isinstance(option.value, int):
            settings = settings.model_copy(update={"brightness": clamp(option.value, 0, 255)})
            continue

        layers = _apply_to_layers(layers, question, option, ambiguity)

    remaining = [a for i, a in enumerate(intent.ambiguities) if i not in resolved]
    confidence = min(1.0, intent.confidence + CONFIDENCE_STEP * len(resolved))
    logger.debug(
        "Resolved %d ambiguity(ies), %d remaining",
        len(resolved),
        len(remaining),
    )
    return intent.model_copy(
        update={
            "layers": layers,
            "ambiguities": remaining,
            "confidence": confidence,
            "global_settings": settings,
        }
    )


__all__ = [
    "CONFIDENCE_STEP",
    "apply_clarifications",
    "apply_color_choice",
    "apply_conflict_choice",
    "apply_direction_choice",
    "apply_effect_choice",
    "apply_spacing_choice",
    "apply_speed_choice",
    "apply_zone_choice",
    "spacing_from_option",
]
