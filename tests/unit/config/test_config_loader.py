"""Tests for configuration and roofline loading."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError
import pytest

from glowline.core.config.loader import (
    detect_format,
    load_app_config,
    load_config,
    load_roofline,
)
from glowline.core.config.models import AppConfig, DeviceConfig, SolverConfig
from glowline.core.vocabulary import SegmentType


class TestDetectFormat:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [("a.json", "json"), ("a.yaml", "yaml"), ("a.YML", "yaml")],
    )
    def test_known(self, name: str, expected: str) -> None:
        assert detect_format(name) == expected

    def test_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            detect_format("roofline.toml")


class TestLoadConfig:
    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_empty_yaml_is_empty_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(path) == {}

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{nope", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_config(path)

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("a: [1, 2", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(path)

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_config(path)


class TestLoadRoofline:
    def test_yaml(self, rooflines_dir: Path) -> None:
        roofline = load_roofline(rooflines_dir / "house.yaml")
        assert roofline.id == "house"
        assert roofline.total_pixel_count == 110
        assert [s.start_pixel for s in roofline.segments] == [0, 30, 50, 80, 90]
        assert roofline.segment_by_id("gable").type is SegmentType.PEAK
        assert roofline.levels == [1, 2]

    def test_json(self, rooflines_dir: Path) -> None:
        roofline = load_roofline(rooflines_dir / "strip.json")
        assert roofline.id == "strip"
        assert roofline.total_pixel_count == 100

    def test_invalid_content(self, rooflines_dir: Path) -> None:
        with pytest.raises(ValidationError):
            load_roofline(rooflines_dir / "invalid.yaml")


class TestAppConfig:
    def test_defaults(self) -> None:
        config = AppConfig()
        assert config.logging.level == "INFO"
        assert config.device.brightness == 200
        assert config.device.base_url is None
        assert config.solver.contrast_threshold == 0.3
        assert config.parser.default_equally_spaced_count == 10

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_app_config(tmp_path / "absent.yaml") == AppConfig()

    def test_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "glowline.yaml"
        path.write_text(
            "logging:\n"
            "  level: DEBUG\n"
            "solver:\n"
            "  contrast_threshold: 0.5\n"
            "device:\n"
            "  host: 192.168.1.50/\n"
            "  rgbw: true\n"
            "  retry:\n"
            "    max_attempts: 5\n"
            "unknown_section: ignored\n",
            encoding="utf-8",
        )
        config = load_app_config(path)
        assert config.logging.level == "DEBUG"
        assert config.solver.contrast_threshold == 0.5
        assert config.device.base_url == "http://192.168.1.50"
        assert config.device.rgbw is True
        assert config.device.retry.max_attempts == 5

    def test_invalid_level(self, tmp_path: Path) -> None:
        path = tmp_path / "glowline.yaml"
        path.write_text("logging:\n  level: LOUD\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_app_config(path)

    def test_https_host_kept(self) -> None:
        assert DeviceConfig(host="https://wled.local").base_url == "https://wled.local"

    def test_blank_host_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DeviceConfig(host="  ")

    def test_solver_config_bounds(self) -> None:
        with pytest.raises(ValidationError):
            SolverConfig(contrast_threshold=1.5)
