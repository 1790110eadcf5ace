# core/correction_engine.py
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple
from core.entities import (
    GlossaryEntry,
    ParsedQuestion,
    ReferenceRecord,
    VerificationResult,
    VerificationSummary,
)
from core.glossary import check_glossary, move_marker
from core.quiz_parser import parse_questions
from core.reference_extractor import extract_reference
from core.relation_classifier import is_vocabulary_question, matched_relation
from core.rules import CITATION_RULES, RELATION_RULES, SPEECH_QUESTION, RuleTable
from core.similarity import similarity
from core.span_extractor import extract_relevant_span
from util.constants import CORRECTNESS_MARKER, Limits, Thresholds
from util.enums import CorrectionKind, SkipReason
from util.functions import preview
from util.timing import timed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    match_floor: float = Thresholds.MATCH_FLOOR
    verified_threshold: float = Thresholds.VERIFIED
    distinct_threshold: float = Thresholds.DISTINCT
    max_content_chars: int = Limits.MAX_CONTENT_CHARS
    max_questions: int = Limits.MAX_QUESTIONS
    marker: str = CORRECTNESS_MARKER

    @classmethod
    def from_settings(cls, s) -> "EngineConfig":
        return cls(
            match_floor=s.MATCH_FLOOR,
            verified_threshold=s.VERIFIED_THRESHOLD,
            distinct_threshold=s.DISTINCT_THRESHOLD,
            max_content_chars=s.MAX_CONTENT_CHARS,
            max_questions=s.MAX_QUESTIONS,
            marker=s.CORRECTNESS_MARKER,
        )


def _passthrough(content: str, reason: SkipReason) -> VerificationSummary:
    return VerificationSummary(
        total_questions=0,
        reference_related_questions=0,
        corrections_applied=0,
        corrected_content=content,
        results=[],
        skipped_reason=reason.value,
    )


def _has_speech_span(question: str, record: ReferenceRecord) -> bool:
    if not SPEECH_QUESTION.search(question or ""):
        return False
    span = extract_relevant_span(question, record)
    return bool(span) and span != record.canonical_translation


def resolve_record(
    question: str,
    answer: str,
    records: Sequence[ReferenceRecord],
    *,
    match_floor: float = Thresholds.MATCH_FLOOR,
    citation_rules: RuleTable = CITATION_RULES,
) -> Optional[ReferenceRecord]:
    """
    Find the passage a question is about.

    1) explicit citation -> record with that ordinal (and unit when both know it)
    2) no citation, a single-record corpus and a speech question whose record
       carries a quoted or "said" span -> that record
    3) best lexical match of the answer against every canonical translation,
       first record wins ties, accepted only at or above `match_floor`
    """
    citation = extract_reference(question, citation_rules)
    if citation is not None:
        for rec in records:
            if rec.ordinal != citation.ordinal:
                continue
            if citation.unit is not None and rec.unit is not None and rec.unit != citation.unit:
                continue
            return rec
    elif len(records) == 1 and _has_speech_span(question, records[0]):
        return records[0]

    best: Optional[ReferenceRecord] = None
    best_sim = -1.0
    for rec in records:
        sim = similarity(answer, rec.canonical_translation)
        if sim > best_sim:
            best, best_sim = rec, sim
    if best is None or best_sim < match_floor:
        return None
    return best


def _check_passage(
    q: ParsedQuestion,
    records: Sequence[ReferenceRecord],
    config: EngineConfig,
    citation_rules: RuleTable,
) -> Tuple[VerificationResult, Optional[str]]:
    """Verify one related question. Returns (result, replacement or None)."""
    answer = q.extracted_answer
    record = resolve_record(
        q.question_text,
        answer,
        records,
        match_floor=config.match_floor,
        citation_rules=citation_rules,
    )
    if record is None:
        logger.info("quiz.verify.unresolved answer=%r", preview(answer))
        return (
            VerificationResult(
                question_text=q.question_text,
                reference_found=None,
                original_answer=answer,
                corrected_answer=None,
                is_verified=False,
                correction_made=False,
                similarity=0.0,
            ),
            None,
        )

    sim = similarity(answer, record.canonical_translation)
    result = VerificationResult(
        question_text=q.question_text,
        reference_found=record.ordinal,
        original_answer=answer,
        corrected_answer=None,
        is_verified=sim >= config.verified_threshold,
        correction_made=False,
        similarity=sim,
    )
    if result.is_verified:
        return result, None

    candidate = extract_relevant_span(q.question_text, record)
    if not candidate or similarity(answer, candidate) >= config.distinct_threshold:
        logger.info(
            "quiz.verify.suppressed ref=%s sim=%.2f", record.composite_key, sim
        )
        return result, None

    result.corrected_answer = candidate
    result.correction_made = True
    result.correction_kind = CorrectionKind.passage.value
    logger.info(
        "quiz.verify.corrected ref=%s sim=%.2f %r -> %r",
        record.composite_key,
        sim,
        preview(answer),
        preview(candidate),
    )
    return result, candidate


def verify_and_correct(
    content: str,
    records: Sequence[ReferenceRecord],
    *,
    config: EngineConfig = EngineConfig(),
    relation_rules: RuleTable = RELATION_RULES,
    citation_rules: RuleTable = CITATION_RULES,
    glossary: Iterable[GlossaryEntry] = (),
) -> VerificationSummary:
    """
    Check every marked quiz answer in `content` against the verified `records`
    and return a summary with a corrected copy of the content.

    Pure: `content` and `records` are never mutated and nothing is cached
    between calls. Uncertainty is reported through result fields, never raised.
    """
    content = content or ""
    if len(content) > config.max_content_chars:
        logger.warning(
            "quiz.verify.skip reason=content_too_large chars=%d max=%d",
            len(content),
            config.max_content_chars,
        )
        return _passthrough(content, SkipReason.content_too_large)
    if not records:
        logger.info("quiz.verify.skip reason=empty_corpus")
        return _passthrough(content, SkipReason.empty_corpus)

    glossary = tuple(glossary)
    with timed(logger, "quiz.parse", chars=len(content)):
        questions = parse_questions(
            content, marker=config.marker, max_questions=config.max_questions
        )

    working = content
    results: List[VerificationResult] = []
    related_count = 0
    corrections = 0
    glossary_corrections = 0

    with timed(
        logger, "quiz.verify", questions=len(questions), records=len(records)
    ) as stage:
        # Last block first: edits never shift offsets of blocks still to process.
        for q in reversed(questions):
            related = matched_relation(q.question_text, relation_rules) is not None
            if related:
                related_count += 1

            if glossary and is_vocabulary_question(q.question_text):
                target = check_glossary(
                    q.question_text, q.extracted_answer, q.options, glossary
                )
                if target is not None:
                    working = move_marker(working, q, target, config.marker)
                    glossary_corrections += 1
                    logger.info(
                        "quiz.verify.glossary %s -> %s", preview(q.extracted_answer), target.letter
                    )
                    results.append(
                        VerificationResult(
                            question_text=q.question_text,
                            reference_found=None,
                            original_answer=q.extracted_answer,
                            corrected_answer=target.text,
                            is_verified=False,
                            correction_made=True,
                            similarity=0.0,
                            correction_kind=CorrectionKind.glossary.value,
                        )
                    )
                    continue

            if not related:
                results.append(
                    VerificationResult(
                        question_text=q.question_text,
                        reference_found=None,
                        original_answer=q.extracted_answer,
                        corrected_answer=None,
                        is_verified=True,
                        correction_made=False,
                        similarity=1.0,
                    )
                )
                continue

            result, replacement = _check_passage(q, records, config, citation_rules)
            if replacement is not None:
                working = working[: q.span_start] + replacement + working[q.span_end :]
                corrections += 1
            results.append(result)

        stage.update(
            related=related_count, corrected=corrections, glossary=glossary_corrections
        )

    results.reverse()
    return VerificationSummary(
        total_questions=len(questions),
        reference_related_questions=related_count,
        corrections_applied=corrections,
        corrected_content=working,
        results=results,
        glossary_corrections_applied=glossary_corrections,
    )
