"""API router aggregating all endpoint routers.

All endpoints are mounted under the configured prefix (``/ai/pairings``).
"""

from __future__ import annotations

from fastapi import APIRouter

from pairing_ai.api.endpoints import health, pairings


router = APIRouter()

router.include_router(health.router)
router.include_router(pairings.router)
