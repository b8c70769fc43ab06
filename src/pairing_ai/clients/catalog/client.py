"""Catalog service client for in-stock wines and cheeses.

Both listings are best-effort: any failure is logged and reported as an empty
listing so the pairing request can still be answered.
"""

from __future__ import annotations

import asyncio
from typing import Any, Final

import httpx
from pydantic import ValidationError

from pairing_ai.clients.catalog.exceptions import (
    CatalogError,
    CatalogResponseError,
    CatalogUnavailableError,
)
from pairing_ai.observability.logging import get_logger
from pairing_ai.schemas.catalog import (
    CatalogCheese,
    CatalogItem,
    CatalogSnapshot,
    CatalogWine,
)

logger = get_logger(__name__)


class CatalogClient:
    """Client for the catalog service AI endpoints."""

    WINES_ENDPOINT: Final[str] = "/catalog/ai/wines"
    CHEESES_ENDPOINT: Final[str] = "/catalog/ai/cheeses"

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        *,
        in_stock_only: bool = True,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Catalog service base URL.
            timeout: Request timeout in seconds.
            in_stock_only: Ask the catalog for in-stock products only.
            http_client: HTTP client for API requests.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.in_stock_only = in_stock_only
        self._http = http_client
        self._owns_http_client = http_client is None

    async def initialize(self) -> None:
        """Initialize the HTTP client if not provided."""
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
        logger.info("CatalogClient initialized", base_url=self.base_url)

    async def shutdown(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_http_client and self._http is not None:
            await self._http.aclose()
            self._http = None
        logger.info("CatalogClient shutdown")

    async def get_wines(self) -> list[CatalogWine]:
        """Fetch in-stock wines; empty on any failure."""
        return await self._get_listing(self.WINES_ENDPOINT, CatalogWine)

    async def get_cheeses(self) -> list[CatalogCheese]:
        """Fetch in-stock cheeses; empty on any failure."""
        return await self._get_listing(self.CHEESES_ENDPOINT, CatalogCheese)

    async def get_snapshot(self) -> CatalogSnapshot:
        """Fetch wines and cheeses concurrently."""
        wines, cheeses = await asyncio.gather(self.get_wines(), self.get_cheeses())
        logger.debug("Catalog fetched", wines=len(wines), cheeses=len(cheeses))
        return CatalogSnapshot(wines=wines, cheeses=cheeses)

    async def _get_listing[M: CatalogItem](
        self,
        endpoint: str,
        model: type[M],
    ) -> list[M]:
        try:
            payload = await self._fetch(endpoint)
        except CatalogError as e:
            logger.warning(
                "Catalog request failed, continuing with an empty listing",
                endpoint=endpoint,
                error_type=type(e).__name__,
                error=str(e),
            )
            return []

        return _parse_items(payload, model, endpoint)

    async def _fetch(self, endpoint: str) -> list[Any]:
        """GET a catalog listing.

        Raises:
            CatalogUnavailableError: If the service cannot be reached.
            CatalogResponseError: If the service answers with an error or a
                body that is not a JSON array.
        """
        if self._http is None:
            await self.initialize()

        assert self._http is not None

        params = {"inStock": "true"} if self.in_stock_only else None

        try:
            response = await self._http.get(f"{self.base_url}{endpoint}", params=params)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            msg = f"Catalog returned {e.response.status_code} for {endpoint}"
            raise CatalogResponseError(msg) from e
        except httpx.HTTPError as e:
            msg = f"Cannot reach catalog: {e}"
            raise CatalogUnavailableError(msg) from e
        except ValueError as e:
            msg = f"Catalog returned invalid JSON for {endpoint}"
            raise CatalogResponseError(msg) from e

        if payload is None:
            return []
        if not isinstance(payload, list):
            msg = f"Catalog returned {type(payload).__name__} instead of a list"
            raise CatalogResponseError(msg)
        return payload


def _parse_items[M: CatalogItem](payload: list[Any], model: type[M], endpoint: str) -> list[M]:
    """Validate items one by one, dropping the ones that do not fit ``model``."""
    items: list[M] = []
    for raw in payload:
        try:
            items.append(model.model_validate(raw))
        except ValidationError:
            logger.warning("Skipping invalid catalog item", endpoint=endpoint)
    return items
