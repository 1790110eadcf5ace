# tests/conftest.py
import os

# Settings are read at import time; keep tests independent of a local .env
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("ALLOWED_ORIGIN", "http://localhost:3000")

import pytest  # noqa: E402

from core.entities import ReferenceRecord  # noqa: E402


class FakeRedis:
    """In-memory stand-in for the handful of redis.asyncio calls the repositories make."""

    def __init__(self) -> None:
        self.kv: dict = {}
        self.lists: dict = {}
        self.ttls: dict = {}

    @staticmethod
    def _slice(items: list, start: int, end: int) -> list:
        stop = len(items) if end == -1 else end + 1
        return items[start:stop]

    async def ping(self) -> bool:
        return True

    async def get(self, key):
        return self.kv.get(key)

    async def set(self, key, value, ex=None):
        self.kv[key] = value
        if ex is not None:
            self.ttls[key] = ex
        return True

    async def lpush(self, key, *values):
        items = self.lists.setdefault(key, [])
        for v in values:
            items.insert(0, v)
        return len(items)

    async def ltrim(self, key, start, end):
        self.lists[key] = self._slice(self.lists.get(key, []), start, end)
        return True

    async def lrange(self, key, start, end):
        return self._slice(self.lists.get(key, []), start, end)

    async def expire(self, key, ttl):
        if key in self.kv or key in self.lists:
            self.ttls[key] = ttl
            return True
        return False

    async def delete(self, *keys):
        n = 0
        for key in keys:
            n += int(self.kv.pop(key, None) is not None)
            n += int(self.lists.pop(key, None) is not None)
        return n


@pytest.fixture
def fake_redis(monkeypatch):
    fake = FakeRedis()

    async def _get_redis():
        return fake

    monkeypatch.setattr("repository.verification_log_repository.get_redis", _get_redis)
    monkeypatch.setattr("repository.corpus_cache_repository.get_redis", _get_redis)
    return fake


@pytest.fixture
def pharaoh_record() -> ReferenceRecord:
    return ReferenceRecord(
        ordinal=24,
        composite_key="79:24",
        lead_word="فَقَالَ",
        transliteration="faqāla",
        short_translation="He said, I am your",
        canonical_source_text="فَقَالَ أَنَا۠ رَبُّكُمُ ٱلْأَعْلَىٰ",
        canonical_translation='He said, "I am your lord, most high"',
    )
