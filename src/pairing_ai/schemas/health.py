"""Health and readiness schemas."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import Field

from pairing_ai.schemas.base import APIResponse


class ReadinessResponse(APIResponse):
    """Readiness check response with dependency status."""

    status: str = Field(..., description="Overall status", examples=["ready"])
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Current server timestamp",
    )
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Deployment environment")
    dependencies: dict[str, str] = Field(
        default_factory=dict,
        description="Status of external dependencies",
    )
