"""Request logging middleware.

This middleware:
- Logs start and completion of every pairing API call
- Binds method, route, client address and the caller's user ID to the
  logging context, so service and client logs of one request correlate
- Stays silent for health and scrape paths (``api.quiet_paths``)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from pairing_ai.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

    from pairing_ai.core.config.settings import ApiSettings

logger = get_logger(__name__)

# Query parameter carrying the caller on GET /history
USER_ID_PARAM = "userId"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Structured request/response logging for the pairing API."""

    def __init__(self, app: ASGIApp, *, api_settings: ApiSettings) -> None:
        super().__init__(app)
        self.prefix = api_settings.prefix
        self.quiet_paths = {f"{self.prefix}{path}" for path in api_settings.quiet_paths}

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        path = request.url.path
        if path in self.quiet_paths:
            return await call_next(request)

        context: dict[str, str] = {
            "method": request.method,
            "route": path.removeprefix(self.prefix) or "/",
            "client_ip": client_ip(request),
        }
        # POST /chat carries the user in its body; the endpoint binds it there
        user_id = request.query_params.get(USER_ID_PARAM, "").strip()
        if user_id:
            context["user_id"] = user_id
        bind_context(**context)

        logger.info("Request started")

        response = await call_next(request)

        logger.info("Request completed", status_code=response.status_code)

        return response


def client_ip(request: Request) -> str:
    """Caller address, preferring the headers set by the BFF's proxy."""
    # First hop of X-Forwarded-For is the original client
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return "unknown"
