# model/api.py
from pydantic import BaseModel, Field
from core.entities import (
    GlossaryEntry,
    ReferenceRecord,
    VerificationResult,
    VerificationSummary,
)
from model.audit import AuditRecord
from util.enums import VerificationStatus


class ReferenceRecordIn(BaseModel):
    ordinal: int = Field(ge=1)
    compositeKey: str = Field(min_length=1)
    leadWord: str = ""
    transliteration: str = ""
    shortTranslation: str = ""
    canonicalSourceText: str = ""
    canonicalTranslation: str = ""

    def to_entity(self) -> ReferenceRecord:
        return ReferenceRecord(
            ordinal=self.ordinal,
            composite_key=self.compositeKey,
            lead_word=self.leadWord,
            transliteration=self.transliteration,
            short_translation=self.shortTranslation,
            canonical_source_text=self.canonicalSourceText,
            canonical_translation=self.canonicalTranslation,
        )


class GlossaryEntryIn(BaseModel):
    term: str = Field(min_length=1)
    correct: str = Field(min_length=1)
    wrong: list[str] = Field(default_factory=list)

    def to_entity(self) -> GlossaryEntry:
        return GlossaryEntry(term=self.term, correct=self.correct, wrong=tuple(self.wrong))


class VerifyQuizRequest(BaseModel):
    content: str
    records: list[ReferenceRecordIn] = Field(default_factory=list)
    unitNumber: int | None = Field(default=None, ge=1)
    unitName: str | None = None
    rangeLabel: str | None = None
    subjectId: str | None = Field(default=None, min_length=1, max_length=128)
    glossary: list[GlossaryEntryIn] = Field(default_factory=list)
    fetchCorpus: bool = False
    # Strip existing markers and re-mark from the unit's built-in answer data
    markAnswers: bool = False


class VerificationResultOut(BaseModel):
    questionText: str
    referenceFound: int | None = None
    originalAnswer: str
    correctedAnswer: str | None = None
    isVerified: bool
    correctionMade: bool
    similarity: float
    correctionKind: str | None = None

    @classmethod
    def from_entity(cls, r: VerificationResult) -> "VerificationResultOut":
        return cls(
            questionText=r.question_text,
            referenceFound=r.reference_found,
            originalAnswer=r.original_answer,
            correctedAnswer=r.corrected_answer,
            isVerified=r.is_verified,
            correctionMade=r.correction_made,
            similarity=round(r.similarity, 4),
            correctionKind=r.correction_kind,
        )


class VerifyQuizResponse(BaseModel):
    status: VerificationStatus
    totalQuestions: int
    referenceRelatedQuestions: int
    correctionsApplied: int
    glossaryCorrectionsApplied: int = 0
    answersMarked: int | None = None
    skippedReason: str | None = None
    correctedContent: str
    results: list[VerificationResultOut]
    audit: AuditRecord

    @classmethod
    def build(
        cls,
        summary: VerificationSummary,
        audit: AuditRecord,
        answers_marked: int | None = None,
    ) -> "VerifyQuizResponse":
        return cls(
            status=audit.status,
            totalQuestions=summary.total_questions,
            referenceRelatedQuestions=summary.reference_related_questions,
            correctionsApplied=summary.corrections_applied,
            glossaryCorrectionsApplied=summary.glossary_corrections_applied,
            answersMarked=answers_marked,
            skippedReason=summary.skipped_reason,
            correctedContent=summary.corrected_content,
            results=[VerificationResultOut.from_entity(r) for r in summary.results],
            audit=audit,
        )


class VerificationLogsResponse(BaseModel):
    subjectId: str
    logs: list[AuditRecord]


class ClearLogsResponse(BaseModel):
    subjectId: str
    cleared: bool
