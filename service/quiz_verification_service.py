# service/quiz_verification_service.py
import logging
from typing import Iterable, List, Optional
from redis.exceptions import RedisError
from config.settings import settings
from core.audit_log import build_audit_log
from core.answer_marker import mark_answers
from core.correction_engine import EngineConfig, verify_and_correct
from core.entities import GlossaryEntry, ReferenceRecord
from core.glossary import DEFAULT_GLOSSARY, merge_glossaries
from core.rules import RELATION_RULES, RuleTable
from model.api import (
    ClearLogsResponse,
    VerificationLogsResponse,
    VerifyQuizRequest,
    VerifyQuizResponse,
)
from model.audit import AuditRecord
from repository.verification_log_repository import VerificationLogRepository
from service.quran_corpus_service import QuranCorpusService
from util.enums import ErrorMessage
from util.errors import AppError
from util.functions import parse_range_label
from util.types import VerificationContext

logger = logging.getLogger(__name__)

ANONYMOUS_SUBJECT = "anonymous"


def relation_rules_from_settings(extra: List[str]) -> RuleTable:
    if not extra:
        return RELATION_RULES
    return RELATION_RULES.extended((p, "configured") for p in extra)


class QuizVerificationService:
    def __init__(
        self,
        logs: VerificationLogRepository,
        corpus: QuranCorpusService,
        config: Optional[EngineConfig] = None,
        relation_rules: Optional[RuleTable] = None,
        glossary: Optional[Iterable[GlossaryEntry]] = None,
    ) -> None:
        self._logs = logs
        self._corpus = corpus
        self._config = config or EngineConfig.from_settings(settings)
        self._relation_rules = relation_rules or relation_rules_from_settings(
            settings.EXTRA_RELATION_PATTERNS
        )
        if glossary is None:
            glossary = DEFAULT_GLOSSARY if settings.USE_DEFAULT_GLOSSARY else ()
        self._glossary = tuple(glossary)

    async def _resolve_records(self, req: VerifyQuizRequest) -> List[ReferenceRecord]:
        """
        Caller-supplied records win. Otherwise fetch the verified range when asked to;
        an unparseable range or an upstream failure leaves the corpus empty.
        """
        if req.records:
            return [r.to_entity() for r in req.records]
        if not (req.fetchCorpus and req.unitNumber):
            return []
        bounds = parse_range_label(req.rangeLabel)
        if bounds is None:
            logger.warning(
                "verify.corpus.bad_range unit=%d range=%r", req.unitNumber, req.rangeLabel
            )
            return []
        return await self._corpus.records_for_range(req.unitNumber, *bounds)

    async def verify(self, req: VerifyQuizRequest) -> VerifyQuizResponse:
        """
        Run the engine over the quiz content, build the audit record and persist it
        when the caller named a subject. Logs: counts only (no quiz payloads).
        """
        if len(req.content) > self._config.max_content_chars:
            raise AppError.of(ErrorMessage.CONTENT_TOO_LARGE)

        content = req.content
        answers_marked = None
        if req.markAnswers and req.unitNumber:
            marking = mark_answers(
                content,
                req.unitNumber,
                marker=self._config.marker,
                max_questions=self._config.max_questions,
            )
            content = marking.content
            answers_marked = marking.marked

        records = await self._resolve_records(req)
        summary = verify_and_correct(
            content,
            records,
            config=self._config,
            relation_rules=self._relation_rules,
            # Caller entries first: they override built-in terms
            glossary=merge_glossaries([g.to_entity() for g in req.glossary], self._glossary),
        )

        context: VerificationContext = {}
        if req.unitNumber is not None:
            context["unit_number"] = req.unitNumber
        if req.unitName:
            context["unit_name"] = req.unitName
        if req.rangeLabel:
            context["range_label"] = req.rangeLabel
        audit = build_audit_log(req.subjectId or ANONYMOUS_SUBJECT, summary, context=context)

        if req.subjectId:
            try:
                await self._logs.append(audit)
            except (RedisError, OSError) as e:
                logger.error(
                    "verify.log.persist.error subject=%s err=%s",
                    req.subjectId,
                    type(e).__name__,
                )
                raise AppError.of(ErrorMessage.LOG_STORE_UNAVAILABLE)

        logger.info(
            "verify.ok subject=%s records=%d total=%d related=%d corrected=%d status=%s",
            req.subjectId or ANONYMOUS_SUBJECT,
            len(records),
            summary.total_questions,
            summary.reference_related_questions,
            summary.corrections_applied,
            audit.status.value,
        )
        return VerifyQuizResponse.build(summary, audit, answers_marked=answers_marked)

    async def logs_for(self, subject_id: str, limit: int | None = None) -> VerificationLogsResponse:
        try:
            logs: List[AuditRecord] = await self._logs.recent(subject_id, limit)
        except (RedisError, OSError) as e:
            logger.error("logs.read.error subject=%s err=%s", subject_id, type(e).__name__)
            raise AppError.of(ErrorMessage.LOG_STORE_UNAVAILABLE)
        return VerificationLogsResponse(subjectId=subject_id, logs=logs)

    async def clear_logs(self, subject_id: str) -> ClearLogsResponse:
        try:
            removed = await self._logs.clear(subject_id)
        except (RedisError, OSError) as e:
            logger.error("logs.clear.error subject=%s err=%s", subject_id, type(e).__name__)
            raise AppError.of(ErrorMessage.LOG_STORE_UNAVAILABLE)
        logger.info("logs.clear subject=%s removed=%d", subject_id, removed)
        return ClearLogsResponse(subjectId=subject_id, cleared=removed > 0)
