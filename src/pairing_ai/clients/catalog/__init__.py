"""Catalog service client package.

Provides the in-stock wine and cheese listings shown to the model.
"""

from pairing_ai.clients.catalog.client import CatalogClient
from pairing_ai.clients.catalog.exceptions import (
    CatalogError,
    CatalogResponseError,
    CatalogUnavailableError,
)


__all__ = [
    "CatalogClient",
    "CatalogError",
    "CatalogResponseError",
    "CatalogUnavailableError",
]
