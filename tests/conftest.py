"""Shared pytest fixtures for rowfit tests."""

from __future__ import annotations

import pytest

from rowfit.core.config import RowfitConfig
from rowfit.core.models import LayoutImage, LayoutOptions


@pytest.fixture
def test_config(monkeypatch) -> RowfitConfig:
    """Create a configuration isolated from the environment and .env files.

    Returns:
        RowfitConfig instance with default gallery settings
    """
    for name in (
        "ROWFIT_GAP",
        "ROWFIT_TARGET_ROW_HEIGHT",
        "ROWFIT_ROW_HEIGHT_TOLERANCE_MIN",
        "ROWFIT_ROW_HEIGHT_TOLERANCE_MAX",
        "ROWFIT_JUSTIFY_LAST_ROW",
        "ROWFIT_MAX_SCALE_UP",
        "ROWFIT_FALLBACK_ASPECT_RATIO",
    ):
        monkeypatch.delenv(name, raising=False)
    return RowfitConfig(_env_file=None)


@pytest.fixture
def mixed_images() -> list[LayoutImage]:
    """Three landscapes and two portraits.

    Returns:
        Images laid out as 3 + 2 by ``mixed_options``
    """
    return [
        LayoutImage("a", 4000, 3000),
        LayoutImage("b", 2000, 3200),
        LayoutImage("c", 3500, 2400),
        LayoutImage("d", 1800, 2700),
        LayoutImage("e", 4200, 3200),
    ]


@pytest.fixture
def mixed_options() -> LayoutOptions:
    """Options used with ``mixed_images``."""
    return LayoutOptions(
        container_width=1200,
        spacing=16,
        target_row_height=320,
        row_height_tolerance=(0.75, 1.3),
        justify_last_row=True,
        max_scale_up=1.6,
    )


@pytest.fixture
def panorama_images() -> list[LayoutImage]:
    """A 5:1 panorama followed by two portraits."""
    return [
        LayoutImage("panorama", 10000, 2000),
        LayoutImage("filler-1", 3200, 4800),
        LayoutImage("filler-2", 2800, 4300),
    ]


@pytest.fixture
def panorama_options() -> LayoutOptions:
    return LayoutOptions(
        container_width=1400,
        spacing=12,
        target_row_height=300,
        row_height_tolerance=(0.7, 1.35),
        justify_last_row=False,
        max_scale_up=1.5,
    )


@pytest.fixture
def portrait_images() -> list[LayoutImage]:
    """Four similar portraits and one landscape."""
    return [
        LayoutImage("p1", 2000, 3200),
        LayoutImage("p2", 2100, 3300),
        LayoutImage("p3", 1900, 3000),
        LayoutImage("p4", 2050, 3300),
        LayoutImage("landscape", 4000, 2500),
    ]


@pytest.fixture
def portrait_options() -> LayoutOptions:
    return LayoutOptions(
        container_width=1100,
        spacing=12,
        target_row_height=340,
        row_height_tolerance={"min": 0.8, "max": 1.3},
        justify_last_row=True,
        max_scale_up=1.5,
    )


@pytest.fixture
def test_client():
    """FastAPI TestClient bound to the rowfit app.

    Returns:
        TestClient for issuing requests against the API
    """
    from fastapi.testclient import TestClient

    from rowfit.api.main import app

    return TestClient(app)
