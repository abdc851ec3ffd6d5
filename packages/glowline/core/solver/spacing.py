"""Spacing arithmetic checks.

Each check takes the pixel count of a zone and a spacing rule and returns
a :class:`DesignConstraint`. A failed check carries ranked alternatives
from a small neighbourhood of the requested values; no global search is
attempted. Invalid parameters (non-positive counts) fail with a reason
and no alternatives.
"""

from __future__ import annotations

import logging
import math

from glowline.core.config.models import SolverConfig
from glowline.core.models import (
    AlternativeSuggestion,
    AnchorsOnly,
    Continuous,
    DesignConstraint,
    EquallySpaced,
    EveryNth,
    PatternSpacing,
    SpacingRule,
)
from glowline.core.vocabulary import ConstraintType

logger = logging.getLogger(__name__)


def _ranked(
    alternatives: list[AlternativeSuggestion], limit: int
) -> list[AlternativeSuggestion]:
    return sorted(alternatives, key=lambda a: a.deviation_score)[:limit]


def _constraint(
    rule: SpacingRule,
    pixel_count: int,
    *,
    satisfied: bool,
    reason: str | None = None,
    alternatives: list[AlternativeSuggestion] | None = None,
    layer_id: str | None = None,
) -> DesignConstraint:
    return DesignConstraint(
        type=ConstraintType.SPACING_MATH,
        description=f"{rule.description} across {pixel_count} pixels",
        is_satisfied=satisfied,
        failure_reason=reason,
        alternatives=alternatives or [],
        layer_id=layer_id,
    )


def has_valid_parameters(rule: SpacingRule) -> bool:
    """False for non-positive counts or intervals, which no alternative can fix."""
    match rule:
        case PatternSpacing(on_count=on, off_count=off):
            return on > 0 and off >= 0
        case EquallySpaced(count=count):
            return count > 0
        case EveryNth(interval=interval):
            return interval > 0
        case AnchorsOnly() | Continuous():
            return True


def check_pattern(
    pixel_count: int,
    rule: PatternSpacing,
    config: SolverConfig | None = None,
    layer_id: str | None = None,
) -> DesignConstraint:
    """``on``/``off`` cycle; satisfied iff the leftover is at most ``on`` pixels."""
    cfg = config or SolverConfig()
    on, off = rule.on_count, rule.off_count
    if on <= 0 or off < 0:
        return _constraint(
            rule,
            pixel_count,
            satisfied=False,
            reason=f"Invalid spacing: {on} on, {off} off",
            layer_id=layer_id,
        )

    cycle = on + off
    full_cycles = pixel_count // cycle
    remainder = pixel_count % cycle
    if remainder <= on:
        return _constraint(rule, pixel_count, satisfied=True, layer_id=layer_id)

    alternatives: list[AlternativeSuggestion] = []
    if full_cycles > 0:
        stretched = math.ceil(pixel_count / full_cycles) - on
        if stretched > 0 and stretched != off:
            alternatives.append(
                AlternativeSuggestion(
                    id="stretch",
                    label=f"{on} on, {stretched} off",
                    description="Wider gaps so the pattern ends cleanly",
                    deviation_score=abs(stretched - off) / off,
                    value=PatternSpacing(on_count=on, off_count=stretched),
                )
            )
    compressed = pixel_count // (full_cycles + 1) - on
    if compressed > 0 and compressed != off:
        alternatives.append(
            AlternativeSuggestion(
                id="compress",
                label=f"{on} on, {compressed} off",
                description="Tighter gaps so the pattern ends cleanly",
                deviation_score=abs(compressed - off) / off,
                value=PatternSpacing(on_count=on, off_count=compressed),
            )
        )
    alternatives.append(
        AlternativeSuggestion(
            id="original",
            label=f"{on} on, {off} off (with remainder)",
            description=f"Keep the pattern; the last {remainder} pixels break the rhythm",
            deviation_score=cfg.keep_remainder_deviation,
            value=rule,
        )
    )
    return _constraint(
        rule,
        pixel_count,
        satisfied=False,
        reason=(
            f"{pixel_count} pixels leave {remainder} extra after {full_cycles} "
            f"cycles of {on} on, {off} off"
        ),
        alternatives=_ranked(alternatives, cfg.max_alternatives),
        layer_id=layer_id,
    )


def _near_integer(value: float, tolerance: float) -> bool:
    return abs(value - round(value)) < tolerance


def check_equally_spaced(
    pixel_count: int,
    rule: EquallySpaced,
    config: SolverConfig | None = None,
    layer_id: str | None = None,
) -> DesignConstraint:
    """``count`` evenly spread pixels need ``pixel_count / (count - 1)`` to be whole."""
    cfg = config or SolverConfig()
    count = rule.count
    if count <= 0:
        return _constraint(
            rule,
            pixel_count,
            satisfied=False,
            reason=f"Invalid spacing: count must be positive, got {count}",
            layer_id=layer_id,
        )

    if count > pixel_count:
        alternatives: list[AlternativeSuggestion] = []
        if pixel_count >= 1:
            alternatives.append(
                AlternativeSuggestion(
                    id="max",
                    label=f"Use all {pixel_count} pixels",
                    deviation_score=0.5,
                    value=EquallySpaced(count=pixel_count),
                )
            )
        if pixel_count // 2 >= 1:
            alternatives.append(
                AlternativeSuggestion(
                    id="half",
                    label=f"Use {pixel_count // 2} pixels",
                    deviation_score=0.3,
                    value=EquallySpaced(count=pixel_count // 2),
                )
            )
        return _constraint(
            rule,
            pixel_count,
            satisfied=False,
            reason=f"Requested {count} lights but the zone has only {pixel_count} pixels",
            alternatives=_ranked(alternatives, cfg.max_alternatives),
            layer_id=layer_id,
        )

    if count == 1:
        return _constraint(rule, pixel_count, satisfied=True, layer_id=layer_id)

    spacing = pixel_count / (count - 1)
    if _near_integer(spacing, cfg.spacing_tolerance):
        return _constraint(rule, pixel_count, satisfied=True, layer_id=layer_id)

    alternatives = []
    radius = cfg.equally_spaced_search_radius
    for candidate in range(count - radius, count + radius + 1):
        if candidate == count or candidate <= 1 or candidate > pixel_count:
            continue
        candidate_spacing = pixel_count / (candidate - 1)
        if not _near_integer(candidate_spacing, cfg.spacing_tolerance):
            continue
        alternatives.append(
            AlternativeSuggestion(
                id=f"count_{candidate}",
                label=f"{candidate} LEDs (every {round(candidate_spacing)} pixels)",
                deviation_score=abs(candidate - count) / count,
                value=EquallySpaced(count=candidate),
            )
        )

    return _constraint(
        rule,
        pixel_count,
        satisfied=False,
        reason=f"{count} lights over {pixel_count} pixels gives uneven spacing of {spacing:.2f}",
        alternatives=_ranked(alternatives, cfg.max_alternatives),
        layer_id=layer_id,
    )


def check_every_nth(
    pixel_count: int,
    rule: EveryNth,
    config: SolverConfig | None = None,
    layer_id: str | None = None,
) -> DesignConstraint:
    """Satisfied iff the leftover is at most half an interval.

    A leftover with no better interval nearby is accepted as is.
    """
    cfg = config or SolverConfig()
    interval = rule.interval
    if interval <= 0:
        return _constraint(
            rule,
            pixel_count,
            satisfied=False,
            reason=f"Invalid spacing: interval must be positive, got {interval}",
            layer_id=layer_id,
        )

    remainder = pixel_count % interval
    if remainder <= interval // 2:
        return _constraint(rule, pixel_count, satisfied=True, layer_id=layer_id)

    alternatives = []
    radius = cfg.every_nth_search_radius
    for candidate in range(interval - radius, interval + radius + 1):
        if candidate <= 0 or candidate == interval:
            continue
        candidate_remainder = pixel_count % candidate
        if candidate_remainder < remainder and candidate_remainder <= candidate // 2:
            alternatives.append(
                AlternativeSuggestion(
                    id=f"interval_{candidate}",
                    label=f"Every {candidate} pixels",
                    deviation_score=abs(candidate - interval) / interval,
                    value=EveryNth(interval=candidate),
                )
            )

    if not alternatives:
        logger.debug("No better interval near %d for %d pixels", interval, pixel_count)
        return _constraint(rule, pixel_count, satisfied=True, layer_id=layer_id)

    return _constraint(
        rule,
        pixel_count,
        satisfied=False,
        reason=f"Every {interval} pixels leaves {remainder} unlit at the end",
        alternatives=_ranked(alternatives, cfg.max_alternatives),
        layer_id=layer_id,
    )


def check_spacing(
    pixel_count: int,
    rule: SpacingRule,
    config: SolverConfig | None = None,
    layer_id: str | None = None,
) -> DesignConstraint:
    """Dispatch to the check for ``rule``'s variant."""
    match rule:
        case PatternSpacing():
            return check_pattern(pixel_count, rule, config, layer_id)
        case EquallySpaced():
            return check_equally_spaced(pixel_count, rule, config, layer_id)
        case EveryNth():
            return check_every_nth(pixel_count, rule, config, layer_id)
        case AnchorsOnly() | Continuous():
            return _constraint(rule, pixel_count, satisfied=True, layer_id=layer_id)


def suggest_spacing_alternatives(
    pixel_count: int,
    rule: SpacingRule,
    config: SolverConfig | None = None,
) -> list[AlternativeSuggestion]:
    """Ranked alternatives for ``rule``; empty when it already fits."""
    return check_spacing(pixel_count, rule, config).alternatives


__all__ = [
    "check_equally_spaced",
    "check_every_nth",
    "check_pattern",
    "check_spacing",
    "has_valid_parameters",
    "suggest_spacing_alternatives",
]
