# repository/corpus_cache_repository.py
import json
import logging
from dataclasses import asdict
from typing import List, Optional
from redis.asyncio import Redis
from config.cache import get_redis
from config.settings import settings
from core.entities import ReferenceRecord
from repository.namespaces import CORPUS
from util.types import CachedRecord

logger = logging.getLogger(__name__)


class CorpusCacheRepository:
    """
    Redis-backed cache of verified records for one chapter (unit), stored as a JSON array.
    Entries are written whole and expire after CORPUS_CACHE_TTL_SECONDS.
    """

    def __init__(self, ttl_seconds: int = settings.CORPUS_CACHE_TTL_SECONDS) -> None:
        self._ttl = int(ttl_seconds)

    @staticmethod
    async def _client() -> Redis:
        return await get_redis()

    @staticmethod
    def _key(unit: int, translation_id: int) -> str:
        return f"{CORPUS}:{translation_id}:{unit}"

    async def put(
        self, unit: int, translation_id: int, records: List[ReferenceRecord]
    ) -> None:
        r = await self._client()
        payload = json.dumps([asdict(rec) for rec in records], ensure_ascii=False)
        await r.set(self._key(unit, translation_id), payload.encode("utf-8"), ex=self._ttl)

    async def get(self, unit: int, translation_id: int) -> Optional[List[ReferenceRecord]]:
        r = await self._client()
        raw = await r.get(self._key(unit, translation_id))
        if raw is None:
            return None
        try:
            items: List[CachedRecord] = json.loads(raw)
            return [ReferenceRecord(**item) for item in items]
        except (ValueError, TypeError):
            logger.warning("corpus.cache.malformed unit=%d", unit)
            return None
