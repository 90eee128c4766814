"""Shared pytest fixtures for stac-entities tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator


# =============================================================================
# Fixture Directory Access
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def stac_dir(fixtures_dir: Path) -> Path:
    """Return the directory with the STAC JSON documents."""
    return fixtures_dir / "stac"


def _load(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


# =============================================================================
# STAC Documents (fresh dict per test, safe to mutate)
# =============================================================================


@pytest.fixture
def item_data(stac_dir: Path) -> dict[str, Any]:
    """Item with a self link, a COG with RGB bands and legacy eo/raster bands."""
    return _load(stac_dir / "item.json")


@pytest.fixture
def collection_data(stac_dir: Path) -> dict[str, Any]:
    """Collection with a union bbox followed by two footprints."""
    return _load(stac_dir / "collection.json")


@pytest.fixture
def catalog_data(stac_dir: Path) -> dict[str, Any]:
    """API landing page with search, data and child links."""
    return _load(stac_dir / "catalog.json")


@pytest.fixture
def item_collection_data(stac_dir: Path) -> dict[str, Any]:
    """Search result with two Items."""
    return _load(stac_dir / "item_collection.json")


@pytest.fixture
def collection_collection_data(stac_dir: Path) -> dict[str, Any]:
    """Collections response, one member crosses the antimeridian."""
    return _load(stac_dir / "collection_collection.json")


# =============================================================================
# Environment Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Remove STAC_ENTITIES_* variables so settings resolve to the defaults.

    Tests that need a config file or setting set the variables themselves.
    """
    import os

    from stac_entities.config import clear_settings_cache

    for name in list(os.environ):
        if name.startswith("STAC_ENTITIES_"):
            monkeypatch.delenv(name)
    clear_settings_cache()
    yield
    clear_settings_cache()
