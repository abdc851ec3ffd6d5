"""Tests for WLED JSON payload encoding."""

from __future__ import annotations

from glowline.core.encoding import (
    distinct_colors,
    to_individual_payload,
    to_motion_payload,
    to_segment_payload,
)
from glowline.core.models import WHITE, LedColorGroup, RGBColor

RED = RGBColor(r=255, g=0, b=0)
GREEN = RGBColor(r=0, g=255, b=0)
BLUE = RGBColor(r=0, g=0, b=255)


def _group(start: int, end: int, color: RGBColor) -> LedColorGroup:
    return LedColorGroup(start_led=start, end_led=end, color=color)


class TestIndividualPayload:
    def test_envelope(self) -> None:
        payload = to_individual_payload([_group(0, 1, RED)], brightness=128, transition=7)
        assert payload == {
            "on": True,
            "bri": 128,
            "transition": 7,
            "seg": [{"id": 0, "start": 0, "stop": 2, "i": [0, 255, 0, 0, 1, 255, 0, 0]}],
        }

    def test_transition_omitted_when_none(self) -> None:
        payload = to_individual_payload([_group(0, 0, RED)], brightness=10)
        assert "transition" not in payload

    def test_stop_is_past_last_pixel(self) -> None:
        payload = to_individual_payload([_group(3, 5, RED), _group(9, 9, BLUE)], brightness=1)
        assert payload["seg"][0]["stop"] == 10

    def test_explicit_total_wins(self) -> None:
        payload = to_individual_payload([_group(3, 5, RED)], brightness=1, total_pixel_count=50)
        assert payload["seg"][0]["stop"] == 50

    def test_empty(self) -> None:
        segment = to_individual_payload([], brightness=1)["seg"][0]
        assert segment["stop"] == 0
        assert segment["i"] == []

    def test_segment_id_and_rgbw(self) -> None:
        payload = to_individual_payload(
            [_group(4, 4, RGBColor(r=10, g=20, b=30))], brightness=1, segment_id=2, rgbw=True
        )
        segment = payload["seg"][0]
        assert segment["id"] == 2
        assert segment["i"] == [4, 0, 10, 20, 10]


class TestSegmentPayload:
    def test_first_three_distinct_colours(self) -> None:
        groups = [
            _group(0, 0, RED),
            _group(1, 1, RED),
            _group(2, 2, GREEN),
            _group(3, 3, BLUE),
            _group(4, 4, WHITE),
        ]
        segment = to_segment_payload(groups, brightness=255, effect_id=28)["seg"][0]
        assert segment["col"] == [[255, 0, 0], [0, 255, 0], [0, 0, 255]]
        assert segment["fx"] == 28
        assert segment["sx"] == 128
        assert segment["ix"] == 128
        assert segment["stop"] == 5
        assert "rev" not in segment

    def test_reverse_and_transition(self) -> None:
        payload = to_segment_payload(
            [_group(0, 9, RED)],
            brightness=100,
            effect_id=2,
            speed=10,
            intensity=20,
            total_pixel_count=30,
            reverse=False,
            transition=0,
        )
        segment = payload["seg"][0]
        assert payload["transition"] == 0
        assert segment["rev"] is False
        assert (segment["sx"], segment["ix"], segment["stop"]) == (10, 20, 30)

    def test_no_groups_falls_back_to_white(self) -> None:
        segment = to_segment_payload([], brightness=1, effect_id=0)["seg"][0]
        assert segment["col"] == [[255, 255, 255]]
        assert segment["stop"] == 0


class TestMotionPayload:
    def test_whole_strip(self) -> None:
        payload = to_motion_payload(
            brightness=50, effect_id=9, total_pixel_count=60, colors=[RED, GREEN, BLUE, WHITE]
        )
        segment = payload["seg"][0]
        assert "transition" not in payload
        assert segment["stop"] == 60
        assert len(segment["col"]) == 3

    def test_default_colour(self) -> None:
        segment = to_motion_payload(brightness=50, effect_id=9, total_pixel_count=60)["seg"][0]
        assert segment["col"] == [[255, 255, 255]]


class TestDistinctColors:
    def test_ignores_white_channel(self) -> None:
        groups = [_group(0, 0, RED), _group(1, 1, RGBColor(r=255, g=0, b=0, w=40))]
        assert distinct_colors(groups) == [RED]

    def test_limit(self) -> None:
        groups = [_group(0, 0, RED), _group(1, 1, GREEN), _group(2, 2, BLUE)]
        assert distinct_colors(groups, limit=2) == [RED, GREEN]
