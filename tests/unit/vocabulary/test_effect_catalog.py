"""Tests for the effect catalog and vocabulary enums."""

from __future__ import annotations

import pytest

from glowline.core.vocabulary import (
    AMBIGUITY_TO_CLARIFICATION,
    MOTION_EFFECTS,
    AmbiguityType,
    ClarificationType,
    EffectCategory,
    MotionDirection,
    MotionType,
    WledEffect,
    effect_for_motion,
)


class TestWledEffect:
    def test_lookup_by_id(self) -> None:
        assert WledEffect.from_id(28) is WledEffect.CHASE
        assert WledEffect.from_id(0) is WledEffect.SOLID

    def test_unknown_id(self) -> None:
        with pytest.raises(ValueError):
            WledEffect.from_id(9999)

    def test_ids_are_unique(self) -> None:
        ids = [e.effect_id for e in WledEffect]
        assert len(ids) == len(set(ids))

    def test_category_filter(self) -> None:
        sparkle = WledEffect.in_category(EffectCategory.SPARKLE)
        assert WledEffect.TWINKLEFOX in sparkle
        assert all(e.category is EffectCategory.SPARKLE for e in sparkle)


class TestMotionMapping:
    def test_every_motion_type_is_mapped(self) -> None:
        assert set(MOTION_EFFECTS) == set(MotionType)

    def test_static_has_no_effect(self) -> None:
        assert effect_for_motion(MotionType.NONE) is None

    def test_chase_maps_to_chase(self) -> None:
        assert effect_for_motion(MotionType.CHASE) is WledEffect.CHASE

    def test_only_right_to_left_reverses(self) -> None:
        assert [d for d in MotionDirection if d.reverses_strip] == [MotionDirection.RIGHT_TO_LEFT]


class TestClarificationVocabulary:
    def test_every_ambiguity_has_a_question_type(self) -> None:
        assert set(AMBIGUITY_TO_CLARIFICATION) == set(AmbiguityType)

    def test_priority_follows_declaration(self) -> None:
        assert ClarificationType.ZONE.priority == 0
        assert ClarificationType.MANUAL_FALLBACK.priority == len(ClarificationType) - 1
        assert ClarificationType.COLOR.priority < ClarificationType.CONFLICT.priority
