# util/functions.py
import re
from typing import Optional, Tuple

_WS_RE = re.compile(r"\s+")
_RANGE_RE = re.compile(r"^\s*(\d+)\s*(?:[-–]\s*(\d+))?\s*$")


def clip_chars(text: str, max_chars: int = 100) -> str:
    """
    Trim `text` to at most `max_chars` characters (no ellipsis; stored verbatim).
    """
    return text[:max_chars]


def preview(text: str, max_chars: int = 50) -> str:
    """
    One-line preview for log messages. Adds an ellipsis when trimming occurs.
    """
    flat = collapse_ws(text)
    if len(flat) <= max_chars:
        return flat
    return flat[:max_chars] + "…"


def collapse_ws(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def parse_range_label(label: Optional[str]) -> Optional[Tuple[int, int]]:
    """
    - "1-10" -> (1, 10); "24" -> (24, 24); anything else -> None.
    - Reversed bounds are swapped.
    """
    if not label:
        return None
    m = _RANGE_RE.match(label)
    if not m:
        return None
    start = int(m.group(1))
    end = int(m.group(2)) if m.group(2) else start
    return (start, end) if start <= end else (end, start)
