"""Pairing audit log persisted in Redis.

Layout:
- ``ai_pairing_sessions:{id}``: JSON document of one ``PairingLogRecord``
- ``ai_pairing_sessions``: sorted set of all record IDs scored by creation time
- ``ai_pairing_sessions:user:{user_id}``: same, per user (history lookups)
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

import orjson
from pydantic import ValidationError
from redis.exceptions import RedisError

from pairing_ai.observability.logging import get_logger
from pairing_ai.schemas.pairing import PairingLogRecord
from pairing_ai.services.audit.exceptions import PairingLogStoreError


if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = get_logger(__name__)

COLLECTION = "ai_pairing_sessions"
DEFAULT_HISTORY_LIMIT = 20


def record_key(record_id: str) -> str:
    return f"{COLLECTION}:{record_id}"


def user_index_key(user_id: str) -> str:
    return f"{COLLECTION}:user:{user_id}"


class PairingLogRepository:
    """Append-only store of pairing interactions."""

    def __init__(self, client: Redis[Any]) -> None:
        self._client = client

    async def save(self, record: PairingLogRecord) -> PairingLogRecord:
        """Persist a record, stamping ``created_at`` with the current UTC time.

        Returns:
            The stored copy of the record.

        Raises:
            PairingLogStoreError: If Redis rejects the write.
        """
        stored = record.model_copy(update={"created_at": datetime.now(UTC)})
        assert stored.created_at is not None

        record_id = uuid.uuid4().hex
        score = stored.created_at.timestamp()
        document = orjson.dumps(stored.model_dump(mode="json"))

        try:
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.set(record_key(record_id), document)
                pipe.zadd(COLLECTION, {record_id: score})
                if stored.user_id:
                    pipe.zadd(user_index_key(stored.user_id), {record_id: score})
                await pipe.execute()
        except RedisError as e:
            msg = f"Failed to store pairing log: {e}"
            raise PairingLogStoreError(msg) from e

        logger.debug("Pairing log stored", record_id=record_id, user_id=stored.user_id)
        return stored

    async def find_by_user_id_ordered_by_created_at_desc(
        self,
        user_id: str,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> list[PairingLogRecord]:
        """Return the user's most recent records, newest first.

        Documents that can no longer be read are skipped.

        Raises:
            PairingLogStoreError: If Redis cannot be queried.
        """
        if limit <= 0:
            return []

        try:
            record_ids = await self._client.zrevrange(
                user_index_key(user_id), 0, limit - 1
            )
            if not record_ids:
                return []
            documents = await self._client.mget(
                [record_key(record_id) for record_id in record_ids]
            )
        except RedisError as e:
            msg = f"Failed to read pairing history: {e}"
            raise PairingLogStoreError(msg) from e

        records: list[PairingLogRecord] = []
        for record_id, document in zip(record_ids, documents, strict=True):
            if document is None:
                continue
            try:
                records.append(PairingLogRecord.model_validate_json(document))
            except ValidationError:
                logger.warning("Skipping unreadable pairing log", record_id=record_id)

        return records
