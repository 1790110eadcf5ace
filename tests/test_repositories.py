# tests/test_repositories.py
import asyncio
from datetime import datetime, timezone

from model.audit import AuditRecord
from repository.corpus_cache_repository import CorpusCacheRepository
from repository.verification_log_repository import VerificationLogRepository
from util.enums import VerificationStatus


def _record(n: int) -> AuditRecord:
    return AuditRecord(
        subjectId="lesson-1",
        verifiedAt=datetime(2025, 1, n, tzinfo=timezone.utc),
        totalQuestions=n,
        referenceRelatedQuestions=0,
        correctionsApplied=0,
        status=VerificationStatus.verified,
    )


def test_logs_are_newest_first_and_capped(fake_redis):
    repo = VerificationLogRepository(ttl_seconds=60, max_entries=3)

    async def run():
        for n in range(1, 6):
            await repo.append(_record(n))
        return await repo.recent("lesson-1"), await repo.recent("lesson-1", limit=2)

    everything, two = asyncio.run(run())
    assert [r.totalQuestions for r in everything] == [5, 4, 3]
    assert [r.totalQuestions for r in two] == [5, 4]
    assert fake_redis.ttls["quizverify:logs:lesson-1"] == 60


def test_malformed_log_entries_are_skipped(fake_redis):
    repo = VerificationLogRepository(ttl_seconds=60, max_entries=10)
    fake_redis.lists["quizverify:logs:lesson-1"] = [b"not json"]

    async def run():
        await repo.append(_record(1))
        return await repo.recent("lesson-1")

    logs = asyncio.run(run())
    assert len(logs) == 1 and logs[0].totalQuestions == 1


def test_clear(fake_redis):
    repo = VerificationLogRepository(ttl_seconds=60, max_entries=10)

    async def run():
        await repo.append(_record(1))
        removed = await repo.clear("lesson-1")
        return removed, await repo.recent("lesson-1")

    removed, logs = asyncio.run(run())
    assert removed == 1
    assert logs == []


def test_corpus_cache_round_trip(fake_redis, pharaoh_record):
    cache = CorpusCacheRepository(ttl_seconds=120)

    async def run():
        missing = await cache.get(79, 20)
        await cache.put(79, 20, [pharaoh_record])
        return missing, await cache.get(79, 20), await cache.get(79, 131)

    missing, hit, other_translation = asyncio.run(run())
    assert missing is None
    assert hit == [pharaoh_record]
    assert other_translation is None
    assert fake_redis.ttls["quizverify:corpus:20:79"] == 120


def test_corpus_cache_ignores_malformed_payload(fake_redis):
    fake_redis.kv["quizverify:corpus:20:79"] = b'[{"unexpected": 1}]'
    assert asyncio.run(CorpusCacheRepository().get(79, 20)) is None
