# core/similarity.py
import re
from typing import FrozenSet

_STRIP_RE = re.compile(r"[^\w\s]")
MIN_TOKEN_LEN = 3


def tokenize(text: str) -> FrozenSet[str]:
    """
    Lowercased word tokens longer than two characters, punctuation removed
    (so "don't" -> "dont", "lord," -> "lord").
    """
    if not text:
        return frozenset()
    cleaned = _STRIP_RE.sub("", text.lower())
    return frozenset(w for w in cleaned.split() if len(w) >= MIN_TOKEN_LEN)


def similarity(a: str, b: str) -> float:
    """Jaccard index of the token sets; 0.0 when either side has no tokens."""
    ta, tb = tokenize(a), tokenize(b)
    if not ta or not tb:
        return 0.0
    return len(ta & tb) / len(ta | tb)
