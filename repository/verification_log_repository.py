# repository/verification_log_repository.py
import logging
from typing import Final, List
from redis.asyncio import Redis
from config.cache import get_redis
from config.settings import settings
from model.audit import AuditRecord
from repository.namespaces import VERIFICATION_LOGS

KEY_PREFIX: Final[str] = VERIFICATION_LOGS
logger = logging.getLogger(__name__)


class VerificationLogRepository:
    """
    Flow:
    - Push each audit record to the head of a Redis list keyed by subjectId (LPUSH).
    - Keep only the newest `max_entries` (LTRIM); TTL refreshed on append.
    - Reads return newest first and skip malformed entries.
    """

    def __init__(
        self,
        ttl_seconds: int = settings.PERSISTENCE_TTL_SECONDS,
        max_entries: int = settings.AUDIT_LOG_MAX_ENTRIES,
    ) -> None:
        self._ttl = int(ttl_seconds)
        self._max = max(1, int(max_entries))

    @staticmethod
    async def _client() -> Redis:
        return await get_redis()

    @staticmethod
    def _key(subject_id: str) -> str:
        return f"{KEY_PREFIX}:{subject_id}"

    async def append(self, record: AuditRecord) -> None:
        r = await self._client()
        key = self._key(record.subjectId)
        payload = record.model_dump_json(exclude_none=True).encode("utf-8")
        await r.lpush(key, payload)
        await r.ltrim(key, 0, self._max - 1)
        await r.expire(key, self._ttl)

    async def recent(self, subject_id: str, limit: int | None = None) -> List[AuditRecord]:
        r = await self._client()
        end = -1 if limit is None else max(0, limit - 1)
        vals = await r.lrange(self._key(subject_id), 0, end)
        out: List[AuditRecord] = []
        for raw in vals or []:
            try:
                out.append(AuditRecord.model_validate_json(raw))
            except ValueError:
                logger.warning("audit.read.malformed subject=%s", subject_id)
                continue
        return out

    async def clear(self, subject_id: str) -> int:
        r = await self._client()
        return int(await r.delete(self._key(subject_id)))
