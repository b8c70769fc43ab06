"""Observability components: logging and metrics."""

from pairing_ai.observability.logging import (
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
)
from pairing_ai.observability.metrics import setup_metrics


__all__ = [
    "bind_context",
    "clear_context",
    "get_logger",
    "setup_logging",
    "setup_metrics",
]
