"""Prometheus metrics instrumentation.

This module provides:
- FastAPI automatic request metrics
- Pairing pipeline counters (mode distribution, fallbacks, audit failures)
- Metrics endpoint configuration
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from pairing_ai.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from pairing_ai.core.config import Settings

logger = get_logger(__name__)

METRIC_NAMESPACE = "saveurs_ia"

PAIRING_REQUESTS = Counter(
    "pairing_requests_total",
    "Pairing chat requests by resolved recommendation mode",
    ["mode"],
    namespace=METRIC_NAMESPACE,
)

PAIRING_FALLBACKS = Counter(
    "pairing_fallbacks_total",
    "Pairing answers degraded to a fallback",
    ["reason"],
    namespace=METRIC_NAMESPACE,
)

AUDIT_WRITE_FAILURES = Counter(
    "pairing_audit_write_failures_total",
    "Pairing audit log writes that failed",
    namespace=METRIC_NAMESPACE,
)


def setup_metrics(app: FastAPI, settings: Settings) -> Instrumentator:
    """Configure Prometheus HTTP metrics and expose them under the API prefix.

    Args:
        app: The FastAPI application instance.
        settings: Application settings.

    Returns:
        Configured Instrumentator instance.
    """
    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return Instrumentator()

    prefix = settings.api.prefix

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=[f"{prefix}{path}" for path in settings.api.quiet_paths],
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True,
    )

    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem="http",
            should_only_respect_2xx_for_highr=False,
        )
    )

    instrumentator.instrument(app)

    metrics_endpoint = f"{prefix}/metrics"
    instrumentator.expose(
        app,
        endpoint=metrics_endpoint,
        include_in_schema=True,
        tags=["Monitoring"],
    )

    logger.info("Prometheus metrics configured", endpoint=metrics_endpoint)

    return instrumentator


__all__ = [
    "AUDIT_WRITE_FAILURES",
    "PAIRING_FALLBACKS",
    "PAIRING_REQUESTS",
    "setup_metrics",
]
