# core/quiz_parser.py
import logging
import re
from typing import List, Optional, Tuple
from core.entities import OptionSpan, ParsedQuestion, QuizBlock
from util.constants import CORRECTNESS_MARKER
from util.functions import collapse_ws

logger = logging.getLogger(__name__)

# "Q1.", "1.", "**Q1.**" at the start of a line
_BLOCK_RE = re.compile(r"^[ \t]*(?:\*\*)?Q?(\d{1,3})\.(?:\*\*)?(?=\s)", re.MULTILINE)
# Horizontal rule, or a blank line followed by a heading / bold non-question line
_SEPARATOR_RE = re.compile(
    r"\n[ \t]*(?:-{3,}|\*{3,}|_{3,})[ \t]*(?=\n|$)"
    r"|\n[ \t]*\n[ \t]*(?:#|\*\*(?!Q?\d{1,3}\.))"
)
_OPTION_RE = re.compile(r"(?:^|(?<=\s))([A-D])\)[ \t]*")


def _block_bounds(content: str) -> List[Tuple[int, int]]:
    """(body_start, body_end) for every numbered block."""
    markers = list(_BLOCK_RE.finditer(content))
    bounds: List[Tuple[int, int]] = []
    for i, m in enumerate(markers):
        start = m.end()
        limit = markers[i + 1].start() if i + 1 < len(markers) else len(content)
        sep = _SEPARATOR_RE.search(content, start, limit)
        bounds.append((start, sep.start() if sep else limit))
    return bounds


def _strip_span(text: str, offset: int) -> Tuple[str, int, int]:
    """Trim whitespace and return (text, abs_start, abs_end)."""
    left = len(text) - len(text.lstrip())
    stripped = text.strip()
    start = offset + left
    return stripped, start, start + len(stripped)


def _split_block(
    content: str, start: int, end: int, marker: str
) -> Optional[Tuple[str, List[Tuple[OptionSpan, int]]]]:
    """
    (question_text, [(option, glyph_end)]) for one block; glyph_end is -1 for
    options without the marker. None when the block has no question or options.
    """
    body = content[start:end]
    opts = list(_OPTION_RE.finditer(body))
    if not opts:
        return None

    question = collapse_ws(body[: opts[0].start()]).strip("* ").strip()
    if not question:
        return None

    options: List[Tuple[OptionSpan, int]] = []
    for i, om in enumerate(opts):
        raw_start = om.end()
        raw_end = opts[i + 1].start() if i + 1 < len(opts) else len(body)
        raw = body[raw_start:raw_end]
        glyph_at = raw.find(marker) if marker else -1
        if glyph_at == -1:
            text, s, e = _strip_span(raw, start + raw_start)
            options.append((OptionSpan(om.group(1), text, s, e), -1))
            continue
        text, s, e = _strip_span(raw[:glyph_at], start + raw_start)
        glyph_end = start + raw_start + glyph_at + len(marker)
        options.append((OptionSpan(om.group(1), text, s, e, marked=True), glyph_end))
    return question, options


def _parse_block(
    content: str, start: int, end: int, marker: str
) -> Optional[ParsedQuestion]:
    split = _split_block(content, start, end, marker)
    if split is None:
        return None
    question, options = split

    # First non-empty marked option is the answer
    picked = next(((o, g) for o, g in options if o.marked and o.text), None)
    if picked is None:
        return None
    answer, glyph_end = picked

    return ParsedQuestion(
        question_text=question,
        extracted_answer=answer.text,
        span_start=answer.start,
        span_end=answer.end,
        options=tuple(o for o, _ in options),
        marker_start=answer.end,
        marker_end=glyph_end,
    )


def parse_blocks(content: str, marker: str = CORRECTNESS_MARKER) -> List[QuizBlock]:
    """Every numbered block with its options, marked or not."""
    out: List[QuizBlock] = []
    for start, end in _block_bounds(content or ""):
        split = _split_block(content, start, end, marker)
        if split is not None:
            question, options = split
            out.append(QuizBlock(question, tuple(o for o, _ in options)))
    return out


def parse_questions(
    content: str,
    marker: str = CORRECTNESS_MARKER,
    max_questions: Optional[int] = None,
) -> List[ParsedQuestion]:
    """
    Scan `content` for numbered quiz blocks with a marked correct option.

    Blocks without a marked option are skipped. Offsets in the returned
    questions index into `content` itself.
    """
    if not content:
        return []
    out: List[ParsedQuestion] = []
    blocks = _block_bounds(content)
    for start, end in blocks:
        if max_questions is not None and len(out) >= max_questions:
            logger.warning(
                "quiz.parse.capped max=%d blocks=%d", max_questions, len(blocks)
            )
            break
        q = _parse_block(content, start, end, marker)
        if q is not None:
            out.append(q)
    logger.debug("quiz.parse blocks=%d questions=%d", len(blocks), len(out))
    return out
