"""Turn ambiguity flags into ranked multiple-choice questions.

Every question carries at most :data:`MAX_OPTIONS` options. Zone, spacing
and conflict questions always offer a catch-all (whole roofline, manual
spacing, blend both); that option is kept even when the list would
otherwise be cut.
"""

from __future__ import annotations

import logging

from glowline.core.clarification.previews import (
    DEFAULT_PREVIEW_PIXELS,
    color_preview,
    spacing_preview,
)
from glowline.core.config.models import SolverConfig
from glowline.core.models import (
    MAX_OPTIONS,
    AllZone,
    AmbiguityFlag,
    AnchorsOnly,
    ArchitecturalZone,
    ClarificationChoice,
    ClarificationOption,
    ClarificationQuestion,
    ColorAssignment,
    Continuous,
    DesignIntent,
    EquallySpaced,
    EveryNth,
    PatternSpacing,
    RGBColor,
    RooflineConfiguration,
)
from glowline.core.solver.zones import zone_pixel_count
from glowline.core.vocabulary import (
    AMBIGUITY_TO_CLARIFICATION,
    AmbiguityType,
    ArchitecturalRole,
    MotionDirection,
    MotionType,
    SegmentType,
)

logger = logging.getLogger(__name__)

_SPACING_TYPES = (PatternSpacing, EquallySpaced, EveryNth, AnchorsOnly, Continuous)

# Icon hints, first keyword hit wins
_ZONE_ICONS: list[tuple[list[str], str]] = [
    (["peak", "gable"], "change_history"),
    (["corner"], "turn_right"),
    (["run", "eave"], "horizontal_rule"),
    (["front"], "home"),
    (["back"], "home_outlined"),
    (["all", "entire"], "roofing"),
]

_DIRECTION_ICONS: dict[str, str] = {
    "left_to_right": "arrow_forward",
    "right_to_left": "arrow_back",
    "inward": "compress",
    "outward": "expand",
    "upward": "arrow_upward",
    "downward": "arrow_downward",
}

_EFFECT_ICONS: dict[str, str] = {
    "chase": "directions_run",
    "wave": "waves",
    "twinkle": "auto_awesome",
    "pulse": "favorite",
    "flow": "water",
    "scan": "radar",
}

_DEFAULT_DIRECTIONS: list[tuple[MotionDirection, str, str]] = [
    (MotionDirection.LEFT_TO_RIGHT, "Left to right", "Moves from the left side to the right side"),
    (MotionDirection.RIGHT_TO_LEFT, "Right to left", "Moves from the right side to the left side"),
    (MotionDirection.INWARD, "Inward", "From both ends toward the center"),
    (MotionDirection.OUTWARD, "Outward", "From the center toward both ends"),
]

_DEFAULT_EFFECTS: list[tuple[MotionType, str]] = [
    (MotionType.CHASE, "Running lights that move along"),
    (MotionType.WAVE, "Smooth wave of color"),
    (MotionType.TWINKLE, "Sparkling like stars"),
    (MotionType.PULSE, "Gentle breathing effect"),
]


def zone_icon(label: str) -> str:
    lower = label.lower()
    for keywords, icon in _ZONE_ICONS:
        if any(k in lower for k in keywords):
            return icon
    return "location_on"


def _option(choice: ClarificationChoice, icon: str | None = None) -> ClarificationOption:
    return ClarificationOption(
        id=choice.id,
        label=choice.label,
        description=choice.description,
        icon=icon,
        is_recommended=choice.is_recommended,
        value=choice.value,
        preview_payload=choice.preview,
    )


def _with_catch_all(
    options: list[ClarificationOption],
    catch_all: ClarificationOption,
    aliases: tuple[str, ...] = (),
) -> list[ClarificationOption]:
    """Cap ``options`` at MAX_OPTIONS while keeping one catch-all last."""
    ids = {catch_all.id, *aliases}
    existing = next((o for o in options if o.id in ids), catch_all)
    rest = [o for o in options if o.id not in ids]
    return [*rest[: MAX_OPTIONS - 1], existing]


def segment_options(config: RooflineConfiguration) -> list[ClarificationOption]:
    """Role-based zone options for the segment types present."""
    peaks = config.segments_of_type(SegmentType.PEAK)
    corners = config.segments_of_type(SegmentType.CORNER)
    runs = config.segments_of_type(SegmentType.RUN)

    options: list[ClarificationOption] = []
    if peaks:
        options.append(
            ClarificationOption(
                id="peaks",
                label=f"Peaks ({len(peaks)})",
                description="All peak and gable segments",
                icon="change_history",
                value=ArchitecturalZone(roles=[ArchitecturalRole.PEAK]),
            )
        )
    if corners:
        options.append(
            ClarificationOption(
                id="corners",
                label=f"Corners ({len(corners)})",
                description="All corner segments",
                icon="turn_right",
                value=ArchitecturalZone(roles=[ArchitecturalRole.CORNER]),
            )
        )
    if peaks and corners:
        options.append(
            ClarificationOption(
                id="peaks_and_corners",
                label="Peaks & corners",
                description="Both peaks and corners",
                icon="architecture",
                is_recommended=True,
                value=ArchitecturalZone(roles=[ArchitecturalRole.PEAK, ArchitecturalRole.CORNER]),
            )
        )
    if runs:
        options.append(
            ClarificationOption(
                id="runs",
                label=f"Runs ({len(runs)})",
                description="Horizontal run segments",
                icon="horizontal_rule",
                value=ArchitecturalZone(roles=[ArchitecturalRole.RUN]),
            )
        )
    return options


class QuestionBuilder:
    """Builds questions for one intent against an optional installation.

    Args:
        intent: Intent whose ambiguities are being asked about.
        config: Installation; enables segment options and sized previews.
        solver_config: Fallback fractions for zone pixel counts.
    """

    def __init__(
        self,
        intent: DesignIntent,
        config: RooflineConfiguration | None = None,
        solver_config: SolverConfig | None = None,
    ):
        self.intent = intent
        self.config = config
        self.solver_config = solver_config or SolverConfig()

    @property
    def brightness(self) -> int:
        return self.intent.global_settings.brightness

    def pixel_count_for(self, layer_id: str | None) -> int:
        """Pixels the affected layer covers; the whole strip when unknown."""
        if self.config is None:
            return DEFAULT_PREVIEW_PIXELS
        layer = self.intent.layer_by_id(layer_id)
        if layer is None:
            return self.config.total_pixel_count
        return zone_pixel_count(layer.zone, self.config, self.solver_config)

    def build(self, ambiguity: AmbiguityFlag, index: int) -> ClarificationQuestion:
        match ambiguity.type:
            case AmbiguityType.ZONE:
                question, options = self.zone_options(ambiguity)
            case AmbiguityType.COLOR:
                question, options = self.color_options(ambiguity)
            case AmbiguityType.SPACING_IMPOSSIBLE:
                question, options = self.spacing_options(ambiguity)
            case AmbiguityType.DIRECTION:
                question, options = self.direction_options(ambiguity)
            case AmbiguityType.EFFECT:
                question, options = self.effect_options(ambiguity)
            case AmbiguityType.CONFLICT:
                question, options = self.conflict_options(ambiguity)

        kind = AMBIGUITY_TO_CLARIFICATION[ambiguity.type]
        return ClarificationQuestion(
            id=f"{kind.value}_{index}",
            type=kind,
            question=question,
            options=options[:MAX_OPTIONS],
            source_text=ambiguity.source_clause,
            affected_layer_id=ambiguity.affected_layer_id,
            context={
                "description": ambiguity.description,
                "pixel_count": self.pixel_count_for(ambiguity.affected_layer_id),
            },
        )

    def zone_options(self, ambiguity: AmbiguityFlag) -> tuple[str, list[ClarificationOption]]:
        options = [_option(c, zone_icon(c.label)) for c in ambiguity.choices]
        if self.config is not None:
            has_recommended = any(o.is_recommended for o in options)
            for extra in segment_options(self.config):
                if any(o.id == extra.id for o in options):
                    continue
                if has_recommended and extra.is_recommended:
                    extra = extra.model_copy(update={"is_recommended": False})
                options.append(extra)
        catch_all = ClarificationOption(
            id="all",
            label="Entire roofline",
            description="Apply to all segments",
            icon="roofing",
            value=AllZone(),
        )
        if ambiguity.source_clause:
            question = f'You mentioned "{ambiguity.source_clause}" - which areas exactly?'
        else:
            question = "Which areas should this apply to?"
        return question, _with_catch_all(options, catch_all)

    def color_options(self, ambiguity: AmbiguityFlag) -> tuple[str, list[ClarificationOption]]:
        pixel_count = self.pixel_count_for(ambiguity.affected_layer_id)
        options = []
        for choice in ambiguity.choices:
            swatch = choice.value if isinstance(choice.value, RGBColor) else None
            options.append(
                ClarificationOption(
                    id=choice.id,
                    label=choice.label,
                    description=choice.description,
                    icon="palette",
                    is_recommended=choice.is_recommended,
                    value=choice.value,
                    color_swatches=[swatch] if swatch is not None else None,
                    preview_payload=(
                        color_preview(swatch, pixel_count, self.brightness)
                        if swatch is not None
                        else choice.preview
                    ),
                )
            )
        return ambiguity.description, options

    def spacing_options(self, ambiguity: AmbiguityFlag) -> tuple[str, list[ClarificationOption]]:
        pixel_count = self.pixel_count_for(ambiguity.affected_layer_id)
        layer = self.intent.layer_by_id(ambiguity.affected_layer_id)
        colors = layer.colors if layer is not None else ColorAssignment()
        options = []
        for choice in ambiguity.choices:
            preview = choice.preview
            if isinstance(choice.value, _SPACING_TYPES):
                preview = spacing_preview(choice.value, colors, pixel_count, self.brightness)
            options.append(
                _option(choice, "straighten").model_copy(update={"preview_payload": preview})
            )
        catch_all = ClarificationOption(
            id="manual",
            label="Set manually",
            description="Open spacing controls",
            icon="tune",
        )
        question = "The spacing doesn't quite work - which option looks best?"
        return question, _with_catch_all(options, catch_all)

    def direction_options(
        self, ambiguity: AmbiguityFlag
    ) -> tuple[str, list[ClarificationOption]]:
        if ambiguity.choices:
            options = [
                _option(c, _DIRECTION_ICONS.get(c.id, "swap_horiz")) for c in ambiguity.choices
            ]
        else:
            options = [
                ClarificationOption(
                    id=direction.value,
                    label=label,
                    description=description,
                    icon=_DIRECTION_ICONS[direction.value],
                    is_recommended=(i == 0),
                    value=direction,
                )
                for i, (direction, label, description) in enumerate(_DEFAULT_DIRECTIONS)
            ]
        return ambiguity.description or "Which direction should it move?", options

    def effect_options(self, ambiguity: AmbiguityFlag) -> tuple[str, list[ClarificationOption]]:
        options = [_option(c, _EFFECT_ICONS.get(c.id, "animation")) for c in ambiguity.choices]
        if len(options) < 2:
            has_recommended = any(o.is_recommended for o in options)
            for i, (motion_type, description) in enumerate(_DEFAULT_EFFECTS):
                if any(o.id == motion_type.value for o in options):
                    continue
                options.append(
                    ClarificationOption(
                        id=motion_type.value,
                        label=motion_type.value.capitalize(),
                        description=description,
                        icon=_EFFECT_ICONS[motion_type.value],
                        is_recommended=(i == 0 and not has_recommended),
                        value=motion_type,
                    )
                )
        return "Which effect did you have in mind?", options

    def conflict_options(
        self, ambiguity: AmbiguityFlag
    ) -> tuple[str, list[ClarificationOption]]:
        options = [_option(c, "layers") for c in ambiguity.choices]
        catch_all = ClarificationOption(
            id="merge",
            label="Blend both",
            description="Layer the designs together",
            icon="blur_linear",
        )
        question = "These settings overlap - which should take priority?"
        return question, _with_catch_all(options, catch_all, aliases=("blend",))


def build_questions(
    ambiguities: list[AmbiguityFlag],
    intent: DesignIntent,
    config: RooflineConfiguration | None = None,
    solver_config: SolverConfig | None = None,
) -> list[ClarificationQuestion]:
    """One question per ambiguity, asked in fixed type priority.

    Args:
        ambiguities: Flags to ask about, usually ``intent.ambiguities``
            plus any raised by the solver.
        intent: Intent the flags belong to.
        config: Installation for segment options and preview sizing.
        solver_config: Zone fallback fractions.

    Returns:
        Questions sorted zone first, manual fallback last; ties keep the
        order of ``ambiguities``.
    """
    builder = QuestionBuilder(intent, config, solver_config)
    questions = [builder.build(a, i) for i, a in enumerate(ambiguities)]
    questions.sort(key=lambda q: q.type.priority)
    logger.debug("Built %d clarification question(s)", len(questions))
    return questions


__all__ = ["QuestionBuilder", "build_questions", "segment_options", "zone_icon"]
