"""Catalog client exceptions."""

from __future__ import annotations


class CatalogError(Exception):
    """Base exception for catalog client errors."""


class CatalogUnavailableError(CatalogError):
    """The catalog service could not be reached or timed out."""


class CatalogResponseError(CatalogError):
    """The catalog service answered with an HTTP error or an unexpected body."""
