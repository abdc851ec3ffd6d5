"""Tests for the intent assembler."""

from __future__ import annotations

import pytest

from glowline.core.config.models import ParserConfig
from glowline.core.models import (
    AllZone,
    ArchitecturalZone,
    ColorAssignment,
    DesignLayer,
    EveryNth,
    LevelZone,
    LocationZone,
    RGBColor,
    RooflineConfiguration,
    Segment,
    SegmentsZone,
)
from glowline.core.parsing import detect_conflicts, parse_intent, score_confidence
from glowline.core.vocabulary import (
    AmbiguityType,
    ArchitecturalRole,
    Location,
    MotionDirection,
    MotionType,
    SegmentType,
    WledEffect,
)


class TestParseIntent:
    """One clause becomes one layer."""

    def test_color_on_role(self) -> None:
        intent = parse_intent("Warm white on peaks")

        assert intent.original_prompt == "Warm white on peaks"
        assert len(intent.layers) == 1
        layer = intent.layers[0]
        assert layer.id == "layer_0"
        assert layer.zone == ArchitecturalZone(roles=[ArchitecturalRole.PEAK])
        assert layer.colors.primary == RGBColor.from_hex("FFE4C4")
        assert layer.colors.primary_name == "warm white"
        assert layer.motion is None
        assert intent.ambiguities == []
        assert intent.confidence == pytest.approx(1.0)

    def test_layers_follow_clause_order(self) -> None:
        intent = parse_intent("gold on peaks and warm white on corners")
        assert [layer.id for layer in intent.layers] == ["layer_0", "layer_1"]
        assert [layer.priority for layer in intent.layers] == [0, 1]
        assert intent.layers[1].zone == ArchitecturalZone(roles=[ArchitecturalRole.CORNER])

    def test_location_and_level_zones(self) -> None:
        assert parse_intent("gold on the back").layers[0].zone == LocationZone(
            location=Location.BACK
        )
        assert parse_intent("gold upstairs").layers[0].zone == LevelZone(level=2)

    def test_spacing_attached_to_colors(self) -> None:
        layer = parse_intent("white every 3 on runs").layers[0]
        assert layer.colors.spacing == EveryNth(interval=3)
        assert layer.zone == ArchitecturalZone(roles=[ArchitecturalRole.RUN])

    def test_sparse_text_falls_back(self) -> None:
        intent = parse_intent("something nice")
        layer = intent.layers[0]
        assert layer.zone == AllZone()
        assert layer.colors.primary_name == "white"
        assert intent.confidence == pytest.approx(1.0 - 0.05 - 0.1)

    def test_explicit_white_is_still_penalised(self) -> None:
        intent = parse_intent("white on peaks")
        assert intent.ambiguities == []
        assert intent.confidence == pytest.approx(1.0 - 0.1)

    def test_empty_prompt(self) -> None:
        intent = parse_intent("")
        assert intent.layers == []
        assert intent.confidence == 0.0

    def test_black_and_white_over_splits(self) -> None:
        """Known limitation: the colour pair is read as two instructions."""
        intent = parse_intent("black and white")
        assert [layer.colors.primary_name for layer in intent.layers] == ["black", "white"]


class TestAmbiguities:
    def test_vague_color(self) -> None:
        intent = parse_intent("green")
        assert [a.type for a in intent.ambiguities] == [AmbiguityType.COLOR]
        amb = intent.ambiguities[0]
        assert amb.affected_layer_id == "layer_0"
        assert [c.id for c in amb.choices] == ["forest", "lime", "emerald", "mint"]
        assert intent.layers[0].colors.primary == RGBColor.from_hex("228B22")
        assert intent.confidence == pytest.approx(1.0 - 0.15 - 0.05)

    def test_motion_without_direction(self) -> None:
        intent = parse_intent("gold chase")
        motion = intent.layers[0].motion
        assert motion is not None
        assert motion.motion_type is MotionType.CHASE
        assert motion.effect is WledEffect.CHASE
        assert motion.direction is MotionDirection.LEFT_TO_RIGHT
        assert [a.type for a in intent.ambiguities] == [AmbiguityType.DIRECTION]

    def test_direction_phrase_is_not_a_location(self) -> None:
        intent = parse_intent("gold chase right to left")
        layer = intent.layers[0]
        assert layer.zone == AllZone()
        assert layer.motion.direction is MotionDirection.RIGHT_TO_LEFT
        assert layer.motion.reverse is True
        assert intent.ambiguities == []

    def test_generic_animation_asks_for_effect(self) -> None:
        intent = parse_intent("make it animated")
        assert [a.type for a in intent.ambiguities] == [AmbiguityType.EFFECT]
        assert intent.ambiguities[0].affected_layer_id == "layer_0"
        assert intent.layers[0].motion is None

    def test_role_with_many_segments(self) -> None:
        roofline = RooflineConfiguration(
            segments=[
                Segment(
                    id=f"peak_{i}",
                    name=f"Peak {i}",
                    pixel_count=10,
                    type=SegmentType.PEAK,
                    location=Location.FRONT if i < 2 else Location.BACK,
                )
                for i in range(5)
            ]
        )
        intent = parse_intent("gold on peaks", roofline)
        zone_ambs = [a for a in intent.ambiguities if a.type is AmbiguityType.ZONE]
        assert len(zone_ambs) == 1
        choices = {c.id: c for c in zone_ambs[0].choices}
        assert choices["all"].is_recommended
        assert choices["front_only"].value == SegmentsZone(segment_ids=["peak_0", "peak_1"])

    def test_few_segments_raise_nothing(self, house: RooflineConfiguration) -> None:
        intent = parse_intent("gold on peaks", house)
        assert intent.ambiguities == []


class TestConflicts:
    def test_overlapping_layers_with_different_colors(self) -> None:
        intent = parse_intent("red on all and blue on all")
        conflicts = [a for a in intent.ambiguities if a.type is AmbiguityType.CONFLICT]
        assert len(conflicts) == 1
        conflict = conflicts[0]
        assert conflict.affected_layer_id == "layer_1"
        assert conflict.recommended_choice.id == "layer_1_wins"
        assert {c.id for c in conflict.choices} == {"layer_0_wins", "layer_1_wins", "blend"}

    def test_same_color_is_not_a_conflict(self) -> None:
        layers = [
            DesignLayer(id="a", name="a", colors=ColorAssignment(primary_name="gold")),
            DesignLayer(id="b", name="b", colors=ColorAssignment(primary_name="gold too")),
        ]
        assert detect_conflicts(layers) == []

    def test_disjoint_zones_are_not_a_conflict(self) -> None:
        layers = [
            DesignLayer(
                id="a",
                name="a",
                zone=ArchitecturalZone(roles=[ArchitecturalRole.PEAK]),
                colors=ColorAssignment(primary=RGBColor(r=255, g=0, b=0)),
            ),
            DesignLayer(
                id="b",
                name="b",
                zone=ArchitecturalZone(roles=[ArchitecturalRole.CORNER]),
                colors=ColorAssignment(primary=RGBColor(r=0, g=0, b=255)),
            ),
        ]
        assert detect_conflicts(layers) == []


class TestScoreConfidence:
    def test_no_layers(self) -> None:
        assert score_confidence(0, 0, 0, layer_count=0) == 0.0

    def test_clamped_to_zero(self) -> None:
        assert score_confidence(20, 5, 5, layer_count=3) == 0.0

    def test_custom_penalties(self) -> None:
        cfg = ParserConfig(ambiguity_penalty=0.25)
        assert score_confidence(2, 0, 0, layer_count=1, parser_config=cfg) == pytest.approx(0.5)
