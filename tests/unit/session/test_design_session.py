"""Tests for DesignSession - prompt to payload end to end."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from glowline.core.config.models import AppConfig, DeviceConfig
from glowline.core.models import (
    EquallySpaced,
    PatternSpacing,
    RGBColor,
    RooflineConfiguration,
    Segment,
)
from glowline.core.persistence import FileDesignRepository, InMemoryDesignRepository
from glowline.core.session import DesignSession, PayloadFormat

WARM_WHITE = [255, 228, 196]


class RecordingTransport:
    def __init__(self, accept: bool = True) -> None:
        self.accept = accept
        self.sent: list[dict[str, Any]] = []

    def send(self, payload: dict[str, Any]) -> bool:
        self.sent.append(payload)
        return self.accept


@pytest.fixture
def session(strip_100: RooflineConfiguration, app_config: AppConfig) -> DesignSession:
    return DesignSession(strip_100, app_config=app_config)


def _accept_recommended(session: DesignSession) -> None:
    for _ in range(5):
        if not session.questions:
            return
        session.answer({q.id: q.recommended_option for q in session.questions})


class TestParseAndClarify:
    def test_intent_before_parse(self, session: DesignSession) -> None:
        with pytest.raises(ValueError, match="parse"):
            _ = session.intent
        assert not session.is_ready

    def test_solver_question_merged(self, session: DesignSession) -> None:
        intent = session.parse("warm white 7 equally spaced")

        assert [q.id for q in session.questions] == ["spacing_0"]
        assert session.questions[0].recommended_option.id == "count_6"
        assert len(intent.ambiguities) == 1
        assert not session.is_ready

    def test_answer_resolves(self, session: DesignSession) -> None:
        session.parse("warm white 7 equally spaced")
        intent = session.answer({"spacing_0": "count_6"})

        assert intent.layers[0].colors.spacing == EquallySpaced(count=6)
        assert session.questions == []
        assert session.is_ready

    def test_brightness_from_config(self, strip_100: RooflineConfiguration) -> None:
        config = AppConfig(device=DeviceConfig(brightness=90))
        session = DesignSession(strip_100, app_config=config)
        assert session.parse("red").global_settings.brightness == 90

    @pytest.mark.parametrize("choice", ["original", "manual"])
    def test_keeping_uneven_pattern_settles(
        self, choice: str, app_config: AppConfig
    ) -> None:
        roofline = RooflineConfiguration(
            id="strip_102",
            name="Strip",
            segments=[Segment(id="main", name="Main run", pixel_count=102)],
        )
        session = DesignSession(roofline, app_config=app_config)
        session.parse("warm white 1 on 4 off")
        assert [o.id for o in session.questions[0].options] == [
            "original",
            "stretch",
            "compress",
            "manual",
        ]

        intent = session.answer({"spacing_0": choice})

        assert intent.layers[0].colors.spacing == PatternSpacing(on_count=1, off_count=4)
        assert session.questions == []
        assert session.is_ready
        assert not session.validate().all_satisfied
        result = session.compile()
        assert result.success
        assert result.payload is not None
        assert result.payload["seg"][0]["stop"] == 102

    def test_validate(self, session: DesignSession) -> None:
        session.parse("warm white 7 equally spaced")
        assert not session.validate().all_satisfied
        session.answer({"spacing_0": "count_6"})
        assert session.validate().all_satisfied


class TestCompile:
    def test_individual_payload(self, session: DesignSession) -> None:
        session.parse("warm white 7 equally spaced")
        session.answer({"spacing_0": "count_6"})
        result = session.compile()

        assert result.success
        assert session.last_result is result
        payload = result.payload
        assert payload["bri"] == 200
        assert payload["transition"] == 5
        segment = payload["seg"][0]
        assert segment["stop"] == 100
        assert segment["i"][0::4] == [0, 20, 40, 59, 79, 99]
        assert segment["i"][1:4] == WARM_WHITE

    def test_unresolved_compile_fails(self, session: DesignSession) -> None:
        session.parse("warm white 7 equally spaced")
        result = session.compile()
        assert not result.success
        assert result.payload is None

    def test_segment_format(self, session: DesignSession) -> None:
        session.parse("warm white 7 equally spaced")
        session.answer({"spacing_0": "count_6"})
        segment = session.compile(PayloadFormat.SEGMENT).payload["seg"][0]
        assert segment["fx"] == 0
        assert segment["col"] == [WARM_WHITE]
        assert "rev" not in segment

    def test_individual_format_forced(self, session: DesignSession) -> None:
        session.parse("red chase left to right")
        _accept_recommended(session)
        auto = session.compile().payload["seg"][0]
        forced = session.compile("individual").payload["seg"][0]
        assert "fx" in auto
        assert "i" in forced
        assert "fx" not in forced

    def test_conflict_resolved_by_recommendation(self, session: DesignSession) -> None:
        session.parse("red on all and blue on all")
        assert any(q.id.startswith("conflict_") for q in session.questions)

        _accept_recommended(session)
        result = session.compile()

        assert result.success
        assert len(result.groups) == 1
        group = result.groups[0]
        assert (group.start_led, group.end_led) == (0, 99)
        assert group.color == RGBColor.from_hex("4169E1")

    def test_answering_resets_last_result(self, session: DesignSession) -> None:
        session.parse("warm white 7 equally spaced")
        session.compile()
        session.answer({"spacing_0": "count_6"})
        assert session.last_result is None


class TestSend:
    def test_without_transport(self, session: DesignSession) -> None:
        with pytest.raises(ValueError, match="transport"):
            session.send()

    def test_nothing_compiled(self, strip_100: RooflineConfiguration) -> None:
        transport = RecordingTransport()
        session = DesignSession(strip_100, app_config=AppConfig(), transport=transport)
        session.parse("red")
        assert session.send() is False
        assert transport.sent == []

    def test_sends_last_payload(self, strip_100: RooflineConfiguration) -> None:
        transport = RecordingTransport()
        session = DesignSession(strip_100, app_config=AppConfig(), transport=transport)
        session.parse("warm white 7 equally spaced")
        session.answer({"spacing_0": "count_6"})
        result = session.compile()

        assert session.send() is True
        assert transport.sent == [result.payload]

    def test_rejection_reported(self, strip_100: RooflineConfiguration) -> None:
        transport = RecordingTransport(accept=False)
        session = DesignSession(strip_100, app_config=AppConfig(), transport=transport)
        session.parse("red")
        _accept_recommended(session)
        session.compile()
        assert session.send() is False
        assert len(transport.sent) == 1


class TestPersistence:
    def test_save_and_load(self, strip_100: RooflineConfiguration, tmp_path: Path) -> None:
        repository = FileDesignRepository(tmp_path)
        first = DesignSession(strip_100, app_config=AppConfig(), repository=repository)
        first.parse("warm white 7 equally spaced")
        first.answer({"spacing_0": "count_6"})
        first.compile()
        saved = first.save("porch")

        assert saved.name == "warm white 7 equally spaced"
        assert saved.roofline_id == "strip"
        assert saved.payload == first.last_result.payload

        second = DesignSession(strip_100, app_config=AppConfig(), repository=repository)
        intent = second.load("porch")
        assert intent.layers == first.intent.layers
        assert second.is_ready

    def test_load_missing(self, session: DesignSession) -> None:
        with pytest.raises(KeyError):
            session.load("nope")

    def test_designs_scoped_to_user(self, strip_100: RooflineConfiguration) -> None:
        repository = InMemoryDesignRepository()
        alice = DesignSession(
            strip_100, app_config=AppConfig(), repository=repository, user_id="alice"
        )
        alice.parse("red")
        alice.save("mine", name="Red")
        assert [d.name for d in repository.list("alice")] == ["Red"]
        assert repository.list("local") == []


class TestConstruction:
    def test_from_files(self, rooflines_dir: Path, tmp_path: Path) -> None:
        session = DesignSession.from_files(
            rooflines_dir / "strip.json", config_path=tmp_path / "missing.yaml"
        )
        assert session.roofline.total_pixel_count == 100

    def test_config_path(self, strip_100: RooflineConfiguration, tmp_path: Path) -> None:
        config_path = tmp_path / "glowline.yaml"
        config_path.write_text("device:\n  brightness: 42\n", encoding="utf-8")
        session = DesignSession(strip_100, app_config=config_path)
        assert session.app_config.device.brightness == 42

    def test_bad_config_type(self, strip_100: RooflineConfiguration) -> None:
        with pytest.raises(TypeError):
            DesignSession(strip_100, app_config=42)  # type: ignore[arg-type]
