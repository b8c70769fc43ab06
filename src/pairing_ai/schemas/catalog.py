"""Catalog item schemas as served by the catalog service AI endpoints."""

from __future__ import annotations

from pydantic import Field

from pairing_ai.schemas.base import DownstreamResponse


class CatalogItem(DownstreamResponse):
    """Fields shared by every in-stock catalog product."""

    id: str = Field(..., min_length=1, description="Opaque catalog product ID")
    name: str | None = Field(default=None, description="Display name")
    price: float | None = Field(default=None, description="Unit price")

    @property
    def display_name(self) -> str:
        """Name shown to the model; the ID stands in when the name is missing."""
        return self.name if self.name else self.id

    @property
    def display_price(self) -> float:
        return self.price if self.price is not None else 0.0


class CatalogWine(CatalogItem):
    """Wine listed by ``/catalog/ai/wines``."""

    type: str | None = Field(default=None, description="Wine type (red, white, ...)")


class CatalogCheese(CatalogItem):
    """Cheese listed by ``/catalog/ai/cheeses``."""


class CatalogSnapshot(DownstreamResponse):
    """Wines and cheeses fetched for a single pairing request."""

    wines: list[CatalogWine] = Field(default_factory=list)
    cheeses: list[CatalogCheese] = Field(default_factory=list)

    @property
    def wine_ids(self) -> set[str]:
        return {wine.id for wine in self.wines}

    @property
    def cheese_ids(self) -> set[str]:
        return {cheese.id for cheese in self.cheeses}
