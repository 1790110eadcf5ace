# core/entities.py
from dataclasses import dataclass, field, asdict
from typing import Optional, List, Tuple, NamedTuple, Dict, Any


@dataclass(frozen=True)
class ReferenceRecord:
    """
    One verified passage of the trusted corpus.

    `composite_key` is "<unit>:<ordinal>" (e.g. "79:24"); the engine only reads it.
    """

    ordinal: int
    composite_key: str
    lead_word: str = ""
    transliteration: str = ""
    short_translation: str = ""
    canonical_source_text: str = ""
    canonical_translation: str = ""

    @property
    def unit(self) -> Optional[int]:
        head, sep, _ = self.composite_key.partition(":")
        if not sep or not head.strip().isdigit():
            return None
        return int(head)


class Citation(NamedTuple):
    ordinal: int
    unit: Optional[int] = None


@dataclass(frozen=True)
class OptionSpan:
    letter: str
    text: str
    start: int  # offsets of `text` in the original content
    end: int
    marked: bool = False


@dataclass(frozen=True)
class ParsedQuestion:
    question_text: str
    extracted_answer: str
    span_start: int
    span_end: int
    options: Tuple[OptionSpan, ...] = ()
    # Glyph plus the whitespace in front of it
    marker_start: int = -1
    marker_end: int = -1


@dataclass(frozen=True)
class QuizBlock:
    question_text: str
    options: Tuple[OptionSpan, ...] = ()


@dataclass(frozen=True)
class MarkingResult:
    content: str
    blocks: int = 0
    marked: int = 0
    skipped_reason: Optional[str] = None


@dataclass(frozen=True)
class GlossaryEntry:
    term: str
    correct: str
    wrong: Tuple[str, ...] = ()


@dataclass
class VerificationResult:
    question_text: str
    reference_found: Optional[int]
    original_answer: str
    corrected_answer: Optional[str]
    is_verified: bool
    correction_made: bool
    similarity: float
    correction_kind: Optional[str] = None


@dataclass
class VerificationSummary:
    total_questions: int
    reference_related_questions: int
    corrections_applied: int
    corrected_content: str
    results: List[VerificationResult] = field(default_factory=list)
    glossary_corrections_applied: int = 0
    skipped_reason: Optional[str] = None

    @property
    def any_correction(self) -> bool:
        return self.corrections_applied + self.glossary_corrections_applied > 0


def summary_to_dict(summary: VerificationSummary) -> Dict[str, Any]:
    return asdict(summary)
