"""Pairing service for LLM-powered wine and cheese recommendations.

Provides methods for:
- Answering a free-text pairing request from the in-stock catalog
- Best-effort audit logging of every answered request
- Per-user history of past recommendations
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from pairing_ai.core.config.settings import PairingSettings
from pairing_ai.llm.prompts.pairing import PairingPrompt
from pairing_ai.observability.logging import get_logger
from pairing_ai.observability.metrics import (
    AUDIT_WRITE_FAILURES,
    PAIRING_FALLBACKS,
    PAIRING_REQUESTS,
)
from pairing_ai.schemas.pairing import (
    PROMPT_SOURCE,
    PairingHistoryItem,
    PairingLogRecord,
)
from pairing_ai.services.audit.exceptions import PairingLogStoreError
from pairing_ai.services.pairing.modes import (
    compute_max_cheese_count,
    compute_max_wine_count,
    detect_mode,
)
from pairing_ai.services.pairing.sanitizer import sanitize_completion


if TYPE_CHECKING:
    from pairing_ai.clients.catalog.client import CatalogClient
    from pairing_ai.llm.client.protocol import LLMClientProtocol
    from pairing_ai.schemas.pairing import PairingChatRequest, PairingChatResponse
    from pairing_ai.services.audit.repository import PairingLogRepository
    from pairing_ai.services.pairing.sanitizer import SanitizedRecommendation

logger = get_logger(__name__)


class PairingService:
    """Service answering wine and cheese pairing requests.

    Orchestrates:
    1. Catalog fetch (wines and cheeses, concurrently)
    2. Mode and quantity resolution from the request
    3. Prompt construction and a single completion call
    4. Sanitization of the completion into a bounded recommendation
    5. Audit logging off the response path

    Collaborator failures never surface to the caller; the answer degrades to
    a fallback instead.
    """

    def __init__(
        self,
        catalog_client: CatalogClient,
        llm_client: LLMClientProtocol,
        log_repository: PairingLogRepository | None = None,
        settings: PairingSettings | None = None,
        prompt: PairingPrompt | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            catalog_client: Client for the in-stock catalog listings.
            llm_client: Chat completion client.
            log_repository: Audit log store; None disables audit and history.
            settings: Pairing pipeline settings.
            prompt: Prompt builder (injectable for deterministic shuffling).
        """
        self._catalog = catalog_client
        self._llm = llm_client
        self._log_repository = log_repository
        self._settings = settings or PairingSettings()
        self._prompt = prompt or PairingPrompt(
            listing_limit=self._settings.catalog_listing_limit,
        )
        self._pending_logs: set[asyncio.Task[None]] = set()

    @property
    def audit_enabled(self) -> bool:
        return self._settings.audit_enabled and self._log_repository is not None

    async def initialize(self) -> None:
        """Called during application startup."""
        logger.info(
            "PairingService initialized",
            audit_enabled=self.audit_enabled,
            restrict_to_catalog=self._settings.restrict_to_catalog,
        )

    async def shutdown(self) -> None:
        """Wait for in-flight audit writes; called during application shutdown."""
        await self.wait_for_pending_logs()
        logger.info("PairingService shutdown")

    async def chat(self, request: PairingChatRequest) -> PairingChatResponse:
        """Answer one pairing request.

        Args:
            request: The chat request from the BFF.

        Returns:
            The sanitized recommendation. Never raises for catalog, completion
            or audit failures.
        """
        locale = request.resolved_locale

        snapshot = await self._catalog.get_snapshot()

        mode = detect_mode(request)
        max_wine_count = compute_max_wine_count(
            request, mode, ceiling=self._settings.max_wine_ceiling
        )
        max_cheese_count = compute_max_cheese_count(request, mode)
        PAIRING_REQUESTS.labels(mode=mode.value).inc()

        logger.debug(
            "Pairing mode resolved",
            mode=mode.value,
            max_wine_count=max_wine_count,
            max_cheese_count=max_cheese_count,
            wines=len(snapshot.wines),
            cheeses=len(snapshot.cheeses),
        )

        user_prompt = self._prompt.format(
            locale=locale,
            mode=mode.value,
            max_wine_count=max_wine_count,
            max_cheese_count=max_cheese_count,
            message=request.message,
            selected_wine_ids=request.selected_wine_ids,
            selected_cheese_ids=request.selected_cheese_ids,
            wines=snapshot.wines,
            cheeses=snapshot.cheeses,
        )

        raw = await self._llm.complete(
            self._prompt.system_prompt or "",
            user_prompt,
            options=self._prompt.get_options(),
        )

        restrict = self._settings.restrict_to_catalog
        result = sanitize_completion(
            raw,
            mode=mode,
            max_wine_count=max_wine_count,
            max_cheese_count=max_cheese_count,
            locale=locale,
            allowed_wine_ids=snapshot.wine_ids if restrict else None,
            allowed_cheese_ids=snapshot.cheese_ids if restrict else None,
        )

        if result.fallback_reason is not None:
            PAIRING_FALLBACKS.labels(reason=result.fallback_reason.value).inc()
            logger.warning(
                "Pairing answer degraded",
                reason=result.fallback_reason.value,
                mode=mode.value,
            )

        self._schedule_log(request, locale, result)

        return result.to_response()

    async def history(self, user_id: str) -> list[PairingHistoryItem]:
        """Most recent pairing interactions of a user, newest first.

        Raises:
            PairingLogStoreError: If the audit store is unavailable.
        """
        if self._log_repository is None:
            msg = "Pairing log store is not available"
            raise PairingLogStoreError(msg)

        records = await self._log_repository.find_by_user_id_ordered_by_created_at_desc(
            user_id,
            limit=self._settings.history_limit,
        )
        return [PairingHistoryItem.from_record(record) for record in records]

    async def wait_for_pending_logs(self) -> None:
        """Wait until every scheduled audit write has finished."""
        if self._pending_logs:
            await asyncio.gather(*self._pending_logs, return_exceptions=True)

    def _schedule_log(
        self,
        request: PairingChatRequest,
        locale: str,
        result: SanitizedRecommendation,
    ) -> None:
        if not self.audit_enabled:
            return

        record = PairingLogRecord(
            user_id=request.user_id,
            locale=locale,
            source=PROMPT_SOURCE,
            message=request.message,
            selected_wine_ids=request.selected_wine_ids,
            selected_cheese_ids=request.selected_cheese_ids,
            answer=result.answer,
            recommended_wine_ids=list(result.recommended_wine_ids),
            recommended_cheese_ids=list(result.recommended_cheese_ids),
        )

        task = asyncio.create_task(self._write_log(record))
        self._pending_logs.add(task)
        task.add_done_callback(self._pending_logs.discard)

    async def _write_log(self, record: PairingLogRecord) -> None:
        assert self._log_repository is not None

        try:
            await self._log_repository.save(record)
        except Exception:
            AUDIT_WRITE_FAILURES.inc()
            logger.opt(exception=True).warning(
                "Failed to write pairing log",
                user_id=record.user_id,
            )
