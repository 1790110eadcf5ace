# core/span_extractor.py
"""
Best-effort extraction of the part of a canonical translation a question asks about.

Heuristic chain, not a precision guarantee:
  1. speech question + quoted text in the translation -> the first quoted span
  2. speech question + "... said: ..." -> the clause after "said"
  3. otherwise the full canonical translation
"""
import re
from core.entities import ReferenceRecord
from core.rules import SPEECH_QUESTION

_QUOTED_RE = re.compile(r"\"([^\"]+)\"|“([^”]+)”")
_SAID_RE = re.compile(r"(?:he\s+)?said[,:]?\s*[\"'“‘]?(.+?)[\"'”’]?$", re.IGNORECASE)


def extract_relevant_span(question: str, record: ReferenceRecord) -> str:
    full = record.canonical_translation
    if not SPEECH_QUESTION.search(question or ""):
        return full

    quoted = _QUOTED_RE.search(full)
    if quoted:
        span = (quoted.group(1) or quoted.group(2)).strip()
        if span:
            return span

    said = _SAID_RE.search(full)
    if said and said.group(1).strip():
        return said.group(1).strip()

    return full
