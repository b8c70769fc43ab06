"""Custom middleware components."""

from pairing_ai.core.middleware.logging import LoggingMiddleware
from pairing_ai.core.middleware.request_id import RequestIDMiddleware
from pairing_ai.core.middleware.timing import TimingMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "TimingMiddleware",
]
