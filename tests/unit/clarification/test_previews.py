"""Tests for clarification previews."""

from __future__ import annotations

from glowline.core.clarification import (
    DEFAULT_PREVIEW_PIXELS,
    color_preview,
    generate_preview_payload,
    spacing_preview,
)
from glowline.core.models import (
    ClarificationOption,
    ColorAssignment,
    DesignIntent,
    PatternSpacing,
    RGBColor,
    RooflineConfiguration,
)


class TestColorPreview:
    def test_solid_fill(self) -> None:
        payload = color_preview(RGBColor(r=255, g=0, b=0), 30, 128)
        segment = payload["seg"][0]
        assert payload["bri"] == 128
        assert segment["fx"] == 0
        assert segment["stop"] == 30
        assert segment["col"] == [[255, 0, 0]]


class TestSpacingPreview:
    def test_pattern_with_fill(self) -> None:
        colors = ColorAssignment(
            primary=RGBColor(r=255, g=0, b=0), fill=RGBColor(r=0, g=0, b=255)
        )
        payload = spacing_preview(PatternSpacing(on_count=1, off_count=1), colors, 4, 200)
        flat = payload["seg"][0]["i"]
        assert flat[0::4] == [0, 1, 2, 3]
        assert flat[1:4] == [255, 0, 0]
        assert flat[5:8] == [0, 0, 255]

    def test_empty_strip(self) -> None:
        payload = spacing_preview(
            PatternSpacing(on_count=1, off_count=1), ColorAssignment(), 0, 200
        )
        assert payload["seg"][0]["stop"] == 0
        assert payload["seg"][0]["i"] == []


class TestGeneratePreviewPayload:
    def test_existing_preview_returned(self) -> None:
        option = ClarificationOption(id="a", label="A", preview_payload={"on": False})
        assert generate_preview_payload(option, DesignIntent()) == {"on": False}

    def test_swatch_sized_to_roofline(self, house: RooflineConfiguration) -> None:
        green = RGBColor(r=0, g=255, b=0)
        option = ClarificationOption(id="g", label="Green", color_swatches=[green])
        payload = generate_preview_payload(option, DesignIntent(), house)
        assert payload["seg"][0]["stop"] == 110
        assert payload["seg"][0]["col"] == [[0, 255, 0]]

    def test_neutral_fallback(self) -> None:
        option = ClarificationOption(id="x", label="X")
        payload = generate_preview_payload(option, DesignIntent())
        assert payload["seg"][0]["stop"] == DEFAULT_PREVIEW_PIXELS
        assert payload["seg"][0]["col"] == [[128, 128, 128]]
        assert payload["bri"] == 200
