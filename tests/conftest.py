"""Shared test fixtures for the pairing service tests.

Settings are loaded with ``APP_ENV=test`` so that YAML overrides from
``config/environments/test`` apply (metrics disabled, test collaborator URLs).
"""

from __future__ import annotations

import os


os.environ["APP_ENV"] = "test"

from typing import TYPE_CHECKING  # noqa: E402

import pytest  # noqa: E402

from pairing_ai.core.config import Settings, get_settings  # noqa: E402
from pairing_ai.schemas.catalog import CatalogCheese, CatalogWine  # noqa: E402


if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None]:
    """Make every test start from freshly loaded settings."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def test_settings() -> Settings:
    """Settings loaded from the test environment configuration."""
    return get_settings()


@pytest.fixture
def sample_wines() -> list[CatalogWine]:
    """Three in-stock wines."""
    return [
        CatalogWine(id="w-1", name="Pinot Noir Reserve 2022", type="red", price=24.5),
        CatalogWine(id="w-2", name="Chablis Premier Cru", type="white", price=31.0),
        CatalogWine(id="w-3", name="Sauternes", type="sweet", price=42.0),
    ]


@pytest.fixture
def sample_cheeses() -> list[CatalogCheese]:
    """Three in-stock cheeses."""
    return [
        CatalogCheese(id="c-1", name="Brie de Meaux AOP", price=12.0),
        CatalogCheese(id="c-2", name="Comté 24 mois", price=18.9),
        CatalogCheese(id="c-3", name="Roquefort", price=9.75),
    ]

