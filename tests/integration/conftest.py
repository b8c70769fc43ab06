"""Integration test fixtures.

The application is built with the test settings and served through
``ASGITransport``. Collaborators are real clients (catalog, completion)
whose outbound HTTP calls are intercepted by respx; the audit log store is
an in-memory mock.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest
import respx
from httpx import ASGITransport, AsyncClient

from pairing_ai.clients.catalog.client import CatalogClient
from pairing_ai.factory import create_app
from pairing_ai.llm.client.openai import OpenAIClient
from pairing_ai.llm.prompts.pairing import PairingPrompt
from pairing_ai.services.pairing.service import PairingService


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator

    from fastapi import FastAPI

    from pairing_ai.core.config import Settings


pytestmark = pytest.mark.integration

API_PREFIX = "/ai/pairings"

WINES_PAYLOAD = [
    {"id": "w-1", "name": "Pinot Noir Reserve 2022", "type": "red", "price": 24.5},
    {"id": "w-2", "name": "Chablis Premier Cru", "type": "white", "price": 31.0},
    {"id": "w-3", "name": "Sauternes", "type": "sweet", "price": 42.0},
]
CHEESES_PAYLOAD = [
    {"id": "c-1", "name": "Brie de Meaux AOP", "price": 12.0},
    {"id": "c-2", "name": "Roquefort", "price": 9.75},
]


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """Create FastAPI app with test settings (metrics disabled)."""
    return create_app(test_settings)


@pytest.fixture
def collaborators() -> Generator[respx.MockRouter]:
    """Intercept catalog and completion provider calls.

    Routes are named ``wines``, ``cheeses`` and ``llm``; tests override
    their responses as needed.
    """
    with respx.mock(assert_all_called=False) as router:
        router.get(host="catalog.test", path="/catalog/ai/wines", name="wines").respond(
            json=WINES_PAYLOAD
        )
        router.get(host="catalog.test", path="/catalog/ai/cheeses", name="cheeses").respond(
            json=CHEESES_PAYLOAD
        )
        router.post("https://llm.test/v1/chat/completions", name="llm")
        yield router


@pytest.fixture
def log_repository() -> MagicMock:
    """In-memory stand-in for the Redis audit log repository."""
    repository = MagicMock()
    repository.save = AsyncMock(side_effect=lambda record: record)
    repository.find_by_user_id_ordered_by_created_at_desc = AsyncMock(return_value=[])
    return repository


@pytest.fixture
async def pairing_service(
    app: FastAPI,
    test_settings: Settings,
    log_repository: MagicMock,
) -> AsyncGenerator[PairingService]:
    """Wire a pairing service into app state, as the lifespan would."""
    catalog_client = CatalogClient(base_url=test_settings.catalog.url)
    llm_client = OpenAIClient(
        api_key="test-key",
        model=test_settings.llm.model,
        base_url=test_settings.llm.url,
    )
    await catalog_client.initialize()
    await llm_client.initialize()

    service = PairingService(
        catalog_client=catalog_client,
        llm_client=llm_client,
        log_repository=log_repository,
        settings=test_settings.pairing,
        prompt=PairingPrompt(shuffle=lambda items: None),
    )
    app.state.pairing_service = service

    yield service

    await service.shutdown()
    await llm_client.shutdown()
    await catalog_client.shutdown()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
