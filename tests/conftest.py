"""Shared pytest fixtures for glowline tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from glowline.core.config.models import AppConfig, SolverConfig
from glowline.core.models import RooflineConfiguration, Segment
from glowline.core.vocabulary import Location, SegmentType

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def fixtures_dir() -> Path:
    """Get test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def rooflines_dir(fixtures_dir: Path) -> Path:
    return fixtures_dir / "rooflines"


# ============================================================================
# Roofline Fixtures
# ============================================================================


@pytest.fixture
def strip_100() -> RooflineConfiguration:
    """A single 100-pixel run."""
    return RooflineConfiguration(
        id="strip",
        name="Strip",
        segments=[Segment(id="main", name="Main run", pixel_count=100)],
    )


@pytest.fixture
def anchored_segment() -> Segment:
    """20-pixel run with anchors at local offsets 0 and 18."""
    return Segment(id="gutter", name="Gutter", pixel_count=20, anchor_pixels=[0, 18])


@pytest.fixture
def house() -> RooflineConfiguration:
    """Five segments, 110 pixels, two levels.

    Layout (global ranges):
        front_left   run     0-29   front
        gable        peak   30-49   front
        front_right  run    50-79   front
        corner_ne    corner 80-89
        upstairs     run    90-109  level 2
    """
    return RooflineConfiguration(
        id="house",
        name="House",
        segments=[
            Segment(
                id="front_left",
                name="Front left",
                pixel_count=30,
                type=SegmentType.RUN,
                location=Location.FRONT,
            ),
            Segment(
                id="gable",
                name="Gable",
                pixel_count=20,
                type=SegmentType.PEAK,
                location=Location.FRONT,
                is_prominent=True,
            ),
            Segment(
                id="front_right",
                name="Front right",
                pixel_count=30,
                type=SegmentType.RUN,
                location=Location.FRONT,
            ),
            Segment(id="corner_ne", name="NE corner", pixel_count=10, type=SegmentType.CORNER),
            Segment(
                id="upstairs",
                name="Upstairs",
                pixel_count=20,
                type=SegmentType.RUN,
                level=2,
            ),
        ],
    )


# ============================================================================
# Config Fixtures
# ============================================================================


@pytest.fixture
def solver_config() -> SolverConfig:
    return SolverConfig()


@pytest.fixture
def app_config() -> AppConfig:
    """Defaults, never read from the working directory."""
    return AppConfig()
