"""Exceptions for the pairing audit log."""

from __future__ import annotations


class PairingLogStoreError(Exception):
    """The audit log store could not be read or written."""
