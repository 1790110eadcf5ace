# model/audit.py
from datetime import datetime
from pydantic import BaseModel, Field
from util.enums import VerificationStatus


class AuditCorrection(BaseModel):
    question: str = Field(max_length=100)
    original: str
    corrected: str | None = None
    similarity: float = Field(ge=0.0, le=1.0)
    kind: str | None = None


class AuditRecord(BaseModel):
    subjectId: str
    verifiedAt: datetime
    totalQuestions: int = Field(ge=0)
    referenceRelatedQuestions: int = Field(ge=0)
    correctionsApplied: int = Field(ge=0)
    glossaryCorrectionsApplied: int = Field(default=0, ge=0)
    status: VerificationStatus
    unitNumber: int | None = None
    unitName: str | None = None
    rangeLabel: str | None = None
    corrections: list[AuditCorrection] = Field(default_factory=list)
