"""Constraint solver for design intents.

Deterministic checks run against a concrete installation before lowering:
- Spacing arithmetic per layer (pattern, equally spaced, every Nth)
- Zone existence (segment ids, levels, custom ranges)
- Colour contrast between overlapping layers

Failed spacing checks come back as ``spacing_impossible`` ambiguities so
the clarification engine can offer the alternatives to the user. A rule
the user already accepted is reported but not asked about again.
"""

from __future__ import annotations

import logging

from glowline.core.config.models import SolverConfig
from glowline.core.models import (
    AlternativeSuggestion,
    AmbiguityFlag,
    ClarificationChoice,
    ConstraintValidationResult,
    CustomZone,
    DesignConstraint,
    DesignIntent,
    DesignLayer,
    LevelZone,
    RooflineConfiguration,
    SegmentsZone,
    zones_overlap,
)
from glowline.core.solver.contrast import normalized_contrast
from glowline.core.solver.spacing import check_spacing, has_valid_parameters
from glowline.core.solver.zones import zone_pixel_count
from glowline.core.vocabulary import AmbiguityType, ConstraintType

logger = logging.getLogger(__name__)


class ConstraintSolver:
    """Validates an intent against a roofline.

    Args:
        config: Thresholds and search radii; defaults when omitted.
    """

    def __init__(self, config: SolverConfig | None = None):
        self.config = config or SolverConfig()

    def validate(
        self, intent: DesignIntent, roofline: RooflineConfiguration
    ) -> ConstraintValidationResult:
        """Run every check and collect the results.

        Args:
            intent: Parsed (possibly partially clarified) intent.
            roofline: Installation the design targets.

        Returns:
            All constraint results plus new spacing ambiguities.
        """
        constraints: list[DesignConstraint] = []
        ambiguities: list[AmbiguityFlag] = []
        layers = [layer for layer in intent.layers if layer.enabled]

        for layer in layers:
            constraints.extend(self._check_zone_existence(layer, roofline))

            spacing = layer.colors.spacing
            if spacing is None:
                continue
            pixel_count = zone_pixel_count(layer.zone, roofline, self.config)
            constraint = check_spacing(pixel_count, spacing, self.config, layer.id)
            constraints.append(constraint)
            if self._needs_spacing_question(layer, constraint):
                ambiguities.append(self._spacing_ambiguity(layer, constraint))

        constraints.extend(self._check_contrast(layers))

        result = ConstraintValidationResult(constraints=constraints, ambiguities=ambiguities)
        if not result.all_satisfied:
            logger.debug(
                "%d of %d constraint(s) failed",
                len(result.failed),
                len(result.constraints),
            )
        return result

    @staticmethod
    def _needs_spacing_question(layer: DesignLayer, constraint: DesignConstraint) -> bool:
        """Failed checks on valid, not yet accepted rules go back to the user."""
        spacing = layer.colors.spacing
        return (
            not constraint.is_satisfied
            and spacing is not None
            and has_valid_parameters(spacing)
            and not layer.colors.spacing_accepted
        )

    def _spacing_ambiguity(
        self, layer: DesignLayer, constraint: DesignConstraint
    ) -> AmbiguityFlag:
        choices = [
            ClarificationChoice(
                id=alt.id,
                label=alt.label,
                description=alt.description,
                value=alt.value,
                is_recommended=(
                    rank == 0 or alt.deviation_score < self.config.recommend_below_deviation
                ),
            )
            for rank, alt in enumerate(constraint.alternatives)
        ]
        return AmbiguityFlag(
            type=AmbiguityType.SPACING_IMPOSSIBLE,
            description=constraint.failure_reason or constraint.description,
            source_clause=layer.name,
            affected_layer_id=layer.id,
            choices=choices,
        )

    def _check_zone_existence(
        self, layer: DesignLayer, roofline: RooflineConfiguration
    ) -> list[DesignConstraint]:
        zone = layer.zone
        reason: str | None = None
        match zone:
            case SegmentsZone(segment_ids=ids):
                missing = [i for i in ids if roofline.segment_by_id(i) is None]
                if missing:
                    reason = f"Segment(s) not found: {', '.join(missing)}"
            case LevelZone(level=level):
                if not roofline.segments_on_level(level):
                    reason = f"No segments on level {level}"
            case CustomZone(pixel_ranges=ranges):
                total = roofline.total_pixel_count
                beyond = [r for r in ranges if r.end >= total]
                if beyond:
                    reason = (
                        f"Pixel range {beyond[0].start}-{beyond[0].end} "
                        f"exceeds {total} pixels"
                    )
            case _:
                return []

        return [
            DesignConstraint(
                type=ConstraintType.ZONE_EXISTENCE,
                description=f"{zone.description} exists",
                is_satisfied=reason is None,
                failure_reason=reason,
                layer_id=layer.id,
            )
        ]

    def _check_contrast(self, layers: list[DesignLayer]) -> list[DesignConstraint]:
        constraints: list[DesignConstraint] = []
        for i, first in enumerate(layers):
            for second in layers[i + 1 :]:
                if not zones_overlap(first.zone, second.zone):
                    continue
                contrast = normalized_contrast(first.colors.primary, second.colors.primary)
                satisfied = contrast >= self.config.contrast_threshold
                alternatives: list[AlternativeSuggestion] = []
                if not satisfied:
                    alternatives = [
                        AlternativeSuggestion(
                            id="keep",
                            label="Keep colors",
                            description="Use the colors as requested",
                            deviation_score=0.0,
                        ),
                        AlternativeSuggestion(
                            id="brighten",
                            label="Increase brightness difference",
                            description=f"Make {second.name} stand out from {first.name}",
                            deviation_score=0.2,
                        ),
                    ]
                constraints.append(
                    DesignConstraint(
                        type=ConstraintType.COLOR_CONTRAST,
                        description=f"Contrast between {first.name} and {second.name}",
                        is_satisfied=satisfied,
                        failure_reason=(
                            None if satisfied else f"Low contrast ({contrast:.2f})"
                        ),
                        alternatives=alternatives,
                        layer_id=second.id,
                    )
                )
        return constraints


def validate_intent(
    intent: DesignIntent,
    roofline: RooflineConfiguration,
    config: SolverConfig | None = None,
) -> ConstraintValidationResult:
    """Shortcut for ``ConstraintSolver(config).validate(intent, roofline)``."""
    return ConstraintSolver(config).validate(intent, roofline)


__all__ = ["ConstraintSolver", "validate_intent"]
