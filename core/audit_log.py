# core/audit_log.py
from datetime import datetime, timezone
from typing import Optional
from core.entities import VerificationSummary
from model.audit import AuditCorrection, AuditRecord
from util.constants import Limits
from util.enums import VerificationStatus
from util.functions import clip_chars
from util.types import VerificationContext


def _status(summary: VerificationSummary) -> VerificationStatus:
    if summary.skipped_reason:
        return VerificationStatus.skipped
    if summary.any_correction:
        return VerificationStatus.auto_corrected
    return VerificationStatus.verified


def build_audit_log(
    subject_id: str,
    summary: VerificationSummary,
    *,
    context: Optional[VerificationContext] = None,
    verified_at: Optional[datetime] = None,
) -> AuditRecord:
    """
    Compact, storable record of one verification run.
    Only corrected questions are listed; question text is clipped to 100 chars.
    Nothing is written anywhere here.
    """
    ctx = context or {}
    return AuditRecord(
        subjectId=subject_id,
        verifiedAt=verified_at or datetime.now(timezone.utc),
        totalQuestions=summary.total_questions,
        referenceRelatedQuestions=summary.reference_related_questions,
        correctionsApplied=summary.corrections_applied,
        glossaryCorrectionsApplied=summary.glossary_corrections_applied,
        status=_status(summary),
        unitNumber=ctx.get("unit_number"),
        unitName=ctx.get("unit_name"),
        rangeLabel=ctx.get("range_label"),
        corrections=[
            AuditCorrection(
                question=clip_chars(r.question_text, Limits.AUDIT_QUESTION_CHARS),
                original=r.original_answer,
                corrected=r.corrected_answer,
                similarity=r.similarity,
                kind=r.correction_kind,
            )
            for r in summary.results
            if r.correction_made
        ],
    )
