"""Pairing audit log."""

from pairing_ai.services.audit.exceptions import PairingLogStoreError
from pairing_ai.services.audit.repository import PairingLogRepository


__all__ = [
    "PairingLogRepository",
    "PairingLogStoreError",
]
