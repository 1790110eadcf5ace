# service/quran_corpus_service.py
import asyncio
import logging
import re
from typing import Any, Dict, List, Optional
import httpx
from redis.exceptions import RedisError
from config.settings import settings
from core.entities import ReferenceRecord
from repository.corpus_cache_repository import CorpusCacheRepository
from util.constants import ExternalURIs
from util.timing import timed

logger = logging.getLogger(__name__)

_FOOTNOTE_RE = re.compile(r"<sup[^>]*>.*?</sup>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")


def clean_translation(text: str) -> str:
    """Strip footnote markers and HTML tags from a Quran.com translation."""
    return _TAG_RE.sub("", _FOOTNOTE_RE.sub("", text or "")).strip()


def build_records(
    chapter: int,
    uthmani: Dict[str, Any],
    translations: Dict[str, Any],
    words: Dict[str, Any],
) -> List[ReferenceRecord]:
    """
    Merge the three Quran.com payloads into one record per verse of `chapter`.
    Translations come back in verse order without keys, so they are numbered 1..n.
    """
    arabic: Dict[int, str] = {}
    for v in uthmani.get("verses") or []:
        key = str(v.get("verse_key") or "")
        _, _, num = key.partition(":")
        if num.isdigit():
            arabic[int(num)] = v.get("text_uthmani") or ""

    translated: Dict[int, str] = {
        i: clean_translation(t.get("text") or "")
        for i, t in enumerate(translations.get("translations") or [], start=1)
    }

    out: List[ReferenceRecord] = []
    for v in words.get("verses") or []:
        n = v.get("verse_number")
        if not isinstance(n, int):
            continue
        first = next(
            (
                w
                for w in v.get("words") or []
                if w.get("char_type_name") == "word" and w.get("position") == 1
            ),
            {},
        )
        full = translated.get(n, "")
        out.append(
            ReferenceRecord(
                ordinal=n,
                composite_key=v.get("verse_key") or f"{chapter}:{n}",
                lead_word=first.get("text_uthmani") or "",
                transliteration=(first.get("transliteration") or {}).get("text") or "",
                short_translation=" ".join(full.split()[:5]),
                canonical_source_text=arabic.get(n, ""),
                canonical_translation=full,
            )
        )
    return sorted(out, key=lambda r: r.ordinal)


class QuranCorpusService:
    """
    Retrieval adapter for the verified corpus (Quran.com API v4).
    Cache first, then the API. Any upstream failure yields [] so the engine no-ops.
    """

    def __init__(
        self,
        cache: CorpusCacheRepository,
        *,
        base_url: str = settings.QURAN_API_URL,
        translation_id: int = settings.QURAN_TRANSLATION_ID,
        timeout: float = settings.QURAN_HTTP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._cache = cache
        self._base = base_url.rstrip("/")
        self._translation_id = translation_id
        self._timeout = timeout
        self._transport = transport

    async def _get_json(self, client: httpx.AsyncClient, path: str, **params) -> Dict[str, Any]:
        res = await client.get(f"{self._base}{path}", params=params)
        res.raise_for_status()
        return res.json()

    async def _fetch_chapter(self, chapter: int) -> List[ReferenceRecord]:
        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport
        ) as client:
            uthmani, translations, words = await asyncio.gather(
                self._get_json(
                    client, ExternalURIs.QURAN_UTHMANI, chapter_number=chapter
                ),
                self._get_json(
                    client,
                    ExternalURIs.QURAN_TRANSLATION.format(
                        translation_id=self._translation_id
                    ),
                    chapter_number=chapter,
                ),
                self._get_json(
                    client,
                    ExternalURIs.QURAN_VERSES_BY_CHAPTER.format(chapter=chapter),
                    words="true",
                    word_fields="text_uthmani,transliteration",
                    per_page=300,
                ),
            )
        return build_records(chapter, uthmani, translations, words)

    async def _chapter(self, chapter: int) -> List[ReferenceRecord]:
        try:
            cached = await self._cache.get(chapter, self._translation_id)
        except RedisError as e:
            logger.warning("corpus.cache.get.error unit=%d err=%s", chapter, type(e).__name__)
            cached = None
        if cached is not None:
            logger.info("corpus.cache.hit unit=%d n=%d", chapter, len(cached))
            return cached

        try:
            with timed(logger, "corpus.fetch", slow_ms=2000, unit=chapter):
                records = await self._fetch_chapter(chapter)
        except httpx.HTTPStatusError as e:
            logger.error(
                "corpus.fetch.bad_status unit=%d status=%d", chapter, e.response.status_code
            )
            return []
        except (httpx.RequestError, ValueError) as e:
            logger.error("corpus.fetch.error unit=%d err=%s", chapter, type(e).__name__)
            return []

        if records:
            try:
                await self._cache.put(chapter, self._translation_id, records)
            except RedisError as e:
                logger.warning("corpus.cache.put.error unit=%d err=%s", chapter, type(e).__name__)
        return records

    async def records_for_range(
        self, chapter: int, start: int, end: int
    ) -> List[ReferenceRecord]:
        """Verified records of `chapter` with start <= ordinal <= end."""
        records = await self._chapter(chapter)
        selected = [r for r in records if start <= r.ordinal <= end]
        logger.info(
            "corpus.range unit=%d start=%d end=%d n=%d", chapter, start, end, len(selected)
        )
        return selected
