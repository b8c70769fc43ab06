"""Request timing middleware.

This middleware:
- Measures request processing time
- Adds an ``X-Process-Time`` header to every response
- Warns about requests slower than ``api.slow_request_seconds``

A chat request waits on two catalog calls and one completion call, so the
threshold comes from configuration rather than a fixed constant.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from pairing_ai.observability.logging import get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from pairing_ai.core.config.settings import ApiSettings

logger = get_logger(__name__)

PROCESS_TIME_HEADER = "X-Process-Time"


class TimingMiddleware(BaseHTTPMiddleware):
    """Time each request and flag the slow ones."""

    def __init__(self, app: ASGIApp, *, api_settings: ApiSettings) -> None:
        super().__init__(app)
        self.slow_threshold = api_settings.slow_request_seconds

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        started = time.perf_counter()

        response = await call_next(request)

        elapsed = time.perf_counter() - started
        elapsed_ms = round(elapsed * 1000, 2)

        # Exposed through CORS so the chat UI can show it
        response.headers[PROCESS_TIME_HEADER] = f"{elapsed_ms}ms"

        if elapsed > self.slow_threshold:
            # Usually the completion provider; status shows whether it fell back
            logger.warning(
                "Slow request",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                process_time_ms=elapsed_ms,
                threshold_ms=self.slow_threshold * 1000,
            )

        return response
