"""Tests for colour, zone and intent models."""

from __future__ import annotations

from pydantic import TypeAdapter, ValidationError
import pytest

from glowline.core.models import (
    AllZone,
    ArchitecturalZone,
    ColorAssignment,
    CustomZone,
    DesignIntent,
    DesignLayer,
    EquallySpaced,
    GlobalSettings,
    LedColorGroup,
    LevelZone,
    MotionSettings,
    PixelRange,
    RGBColor,
    SegmentsZone,
    ZoneSelector,
    zones_overlap,
)
from glowline.core.vocabulary import ArchitecturalRole, MotionType, WledEffect


class TestRGBColor:
    def test_hex_round_trip(self) -> None:
        color = RGBColor.from_hex("#ff8800")
        assert color.rgb() == [255, 136, 0]
        assert color.to_hex() == "FF8800"

    def test_bad_hex(self) -> None:
        with pytest.raises(ValueError):
            RGBColor.from_hex("abc")

    def test_channel_range(self) -> None:
        with pytest.raises(ValidationError):
            RGBColor(r=256, g=0, b=0)

    def test_rgbw_channels(self) -> None:
        assert RGBColor(r=1, g=2, b=3, w=4).rgbw() == [1, 2, 3, 4]

    def test_lerp_midpoint(self) -> None:
        black = RGBColor(r=0, g=0, b=0)
        white = RGBColor(r=255, g=255, b=255)
        assert black.lerp(white, 0.5).rgb() == [128, 128, 128]


class TestZoneSelectors:
    def test_discriminated_union(self) -> None:
        adapter = TypeAdapter(ZoneSelector)
        zone = adapter.validate_python({"kind": "architectural", "roles": ["peak"]})
        assert isinstance(zone, ArchitecturalZone)
        assert zone.roles == [ArchitecturalRole.PEAK]

    def test_all_overlaps_everything(self) -> None:
        assert zones_overlap(AllZone(), LevelZone(level=2))

    def test_same_kind_overlap(self) -> None:
        assert zones_overlap(SegmentsZone(segment_ids=["a", "b"]), SegmentsZone(segment_ids=["b"]))
        assert not zones_overlap(SegmentsZone(segment_ids=["a"]), SegmentsZone(segment_ids=["b"]))

    def test_custom_overlap(self) -> None:
        first = CustomZone(pixel_ranges=[PixelRange(start=0, end=9)])
        second = CustomZone(pixel_ranges=[PixelRange(start=9, end=20)])
        third = CustomZone(pixel_ranges=[PixelRange(start=10, end=20)])
        assert zones_overlap(first, second)
        assert not zones_overlap(first, third)

    def test_different_kinds_do_not_overlap(self) -> None:
        peaks = ArchitecturalZone(roles=[ArchitecturalRole.PEAK])
        assert not zones_overlap(LevelZone(level=1), peaks)

    def test_pixel_range_order(self) -> None:
        with pytest.raises(ValidationError):
            PixelRange(start=5, end=4)


class TestLedColorGroup:
    def test_end_before_start_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LedColorGroup(start_led=5, end_led=4, color=RGBColor(r=0, g=0, b=0))

    def test_length(self) -> None:
        group = LedColorGroup(start_led=3, end_led=7, color=RGBColor(r=0, g=0, b=0))
        assert group.length == 5
        assert list(group.pixels()) == [3, 4, 5, 6, 7]


class TestIntent:
    def test_motion_effect_accepts_id(self) -> None:
        motion = MotionSettings(motion_type=MotionType.CHASE, effect=28)
        assert motion.effect is WledEffect.CHASE
        assert motion.model_dump(mode="json")["effect"] == 28

    def test_motion_without_effect_is_solid(self) -> None:
        assert MotionSettings().effect_id == 0

    def test_device_transition(self) -> None:
        assert GlobalSettings(transition_ms=500).device_transition == 5
        assert GlobalSettings(smooth_transition=False).device_transition == 0

    def test_json_round_trip(self) -> None:
        intent = DesignIntent(
            original_prompt="red every 5",
            layers=[
                DesignLayer(
                    id="layer_0",
                    name="red",
                    zone=ArchitecturalZone(roles=[ArchitecturalRole.PEAK]),
                    colors=ColorAssignment(
                        primary=RGBColor(r=255, g=0, b=0),
                        primary_name="red",
                        spacing=EquallySpaced(count=4),
                    ),
                    motion=MotionSettings(motion_type=MotionType.CHASE, effect=WledEffect.CHASE),
                )
            ],
            confidence=0.9,
        )
        restored = DesignIntent.model_validate_json(intent.model_dump_json())
        assert restored.model_dump() == intent.model_dump()
        assert restored.layers[0].motion.effect is WledEffect.CHASE

    def test_confidence_bounds(self) -> None:
        with pytest.raises(ValidationError):
            DesignIntent(confidence=1.5)

    def test_with_layer_replaces_by_id(self) -> None:
        layer = DesignLayer(id="layer_0", name="a")
        intent = DesignIntent(layers=[layer])
        updated = intent.with_layer(layer.model_copy(update={"priority": 5}))
        assert updated.layers[0].priority == 5
        assert intent.layers[0].priority == 0

    def test_is_ready(self) -> None:
        assert not DesignIntent().is_ready
        assert DesignIntent(layers=[DesignLayer(id="l", name="l")]).is_ready
