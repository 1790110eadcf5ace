# core/answer_marker.py
"""
Re-mark quiz answers from trusted per-unit data before verification.

Every existing marker is stripped, then each block's correct option is chosen by:
  1. known question/answer rules for the unit
  2. the unit's vocabulary (term or leading meaning found in the question)
  3. a few theme fallbacks
Blocks where nothing matches are left unmarked.
"""
import logging
import re
from typing import Dict, Mapping, Optional, Tuple
from core.entities import MarkingResult, OptionSpan, QuizBlock
from core.quiz_parser import parse_blocks
from core.rules import RuleTable
from util.constants import CORRECTNESS_MARKER
from util.enums import SkipReason
from util.functions import preview

logger = logging.getLogger(__name__)

# unit -> {term: "meaning/alternative"}
UNIT_VOCABULARY: Dict[int, Dict[str, str]] = {
    78: {
        "النبأ": "the news/tidings",
        "العظيم": "the great",
        "مختلفون": "in disagreement",
        "مهاد": "resting place/expanse",
        "أوتاد": "stakes/pegs",
        "أزواج": "pairs",
        "سبات": "rest",
        "لباس": "covering/clothing",
        "معاش": "livelihood",
        "شداد": "strong",
        "سراج": "lamp",
        "وهاج": "burning/blazing",
        "المعصرات": "rain clouds",
        "ثجاج": "pouring",
        "حب": "grain",
        "نبات": "vegetation",
        "جنات": "gardens",
        "ألفاف": "dense/entwined",
        "ميقات": "appointed time",
        "أفواج": "groups/multitudes",
        "سراب": "mirage",
        "مرصاد": "lying in wait",
        "مآب": "place of return",
        "أحقاب": "ages/eons",
        "حميم": "scalding water",
        "غساق": "purulence",
        "جزاء": "recompense",
        "وفاق": "appropriate",
        "حساب": "account",
        "كذاب": "denial/lies",
        "أحصيناه": "enumerated/recorded",
        "مفاز": "success/attainment",
        "حدائق": "gardens",
        "أعناب": "grapes",
        "كواعب": "full-breasted maidens",
        "أتراب": "of equal age",
        "دهاق": "full/overflowing",
        "لغو": "vain talk",
        "عطاء": "gift/reward",
        "الرحمن": "the Most Merciful",
        "خطاب": "speech/address",
    },
    67: {
        "تبارك": "blessed",
        "الملك": "dominion/sovereignty",
        "قدير": "all-powerful",
        "الموت": "death",
        "الحياة": "life",
        "ليبلوكم": "to test you",
        "أحسن": "best",
        "عملا": "in deed",
        "العزيز": "the Almighty",
        "الغفور": "the Forgiving",
        "طباق": "layers",
        "تفاوت": "inconsistency",
        "فطور": "breaks/cracks",
        "خاسئ": "humbled",
        "حسير": "fatigued",
        "مصابيح": "lamps",
        "رجوم": "missiles",
        "السعير": "the Blaze",
        "شهيق": "inhaling",
        "تفور": "boiling over",
        "تميز": "burst",
        "الغيظ": "rage",
        "فوج": "group",
        "خزنتها": "its keepers",
        "نذير": "warner",
    },
}

# unit -> rules whose tag is the text the correct option contains
KNOWN_ANSWERS: Dict[int, RuleTable] = {
    78: RuleTable(
        [
            (r"what\s+are\s+.*questioning|opening\s+of\s+surah", "day of judgment"),
            (r"mountains\s+function|mountains\s+like|mountains\s+as", "peg"),
            (r"sub[āa]t[an]*\s+(?:mean|refer)", "rest"),
            (r"miraculous|scientific\s+knowledge", "illiterate"),
            (r"النبأ\s*العظيم|great\s+news", "day of judgment"),
            (r"lib[āa]s|لباس", "cover"),
            (r"سبات", "rest"),
            (r"ma[’']?[āa]sh|معاش", "livelihood"),
            (r"wahh[āa]j|وهاج", "burn"),
            (r"thajj[āa]j|ثجاج", "pour"),
            (r"awt[āa]d|أوتاد", "stake"),
        ]
    ),
    67: RuleTable(
        [
            (r"tab[āa]raka|تبارك", "bless"),
            (r"create.*death.*life|death.*life.*create", "test"),
        ]
    ),
}

# (option contains, question contains); empty question text means any question
FALLBACK_THEMES: Tuple[Tuple[str, str], ...] = (
    ("day of judgment", ""),
    ("judgment day", ""),
    ("peg", "mountain"),
    ("rest", "sleep"),
    ("illiterate", "miraculous"),
)

MIN_OPTIONS = 2


def _by_known_answer(block: QuizBlock, known: RuleTable) -> Optional[OptionSpan]:
    for rule in known:
        if not rule.search(block.question_text):
            continue
        want = rule.tag.lower()
        for opt in block.options:
            if want in opt.text.lower():
                return opt
    return None


def _by_vocabulary(block: QuizBlock, vocab: Mapping[str, str]) -> Optional[OptionSpan]:
    q = block.question_text.lower()
    for term, meaning in vocab.items():
        parts = [p.strip() for p in meaning.lower().split("/") if p.strip()]
        if not parts or (term.lower() not in q and parts[0] not in q):
            continue
        # Longest meaning fragment found in an option wins
        best: Optional[OptionSpan] = None
        best_len = 0
        for opt in block.options:
            text = opt.text.lower()
            for part in parts:
                if part in text and len(part) > best_len:
                    best, best_len = opt, len(part)
        if best is not None:
            return best
    return None


def _by_theme(block: QuizBlock) -> Optional[OptionSpan]:
    q = block.question_text.lower()
    for opt in block.options:
        text = opt.text.lower()
        for in_option, in_question in FALLBACK_THEMES:
            if in_option in text and in_question in q:
                return opt
    return None


def choose_answer(
    block: QuizBlock,
    vocab: Mapping[str, str],
    known: RuleTable,
) -> Optional[Tuple[OptionSpan, str]]:
    """(option, method) for one block, or None when nothing decides it."""
    if len(block.options) < MIN_OPTIONS:
        return None
    opt = _by_known_answer(block, known)
    if opt is not None:
        return opt, "known_answer"
    opt = _by_vocabulary(block, vocab)
    if opt is not None:
        return opt, "vocabulary"
    opt = _by_theme(block)
    if opt is not None:
        return opt, "theme"
    return None


def mark_answers(
    content: str,
    unit: int,
    *,
    marker: str = CORRECTNESS_MARKER,
    vocabulary: Mapping[int, Mapping[str, str]] = UNIT_VOCABULARY,
    known_answers: Mapping[int, RuleTable] = KNOWN_ANSWERS,
    max_questions: Optional[int] = None,
) -> MarkingResult:
    """
    Strip every `marker` from `content` and re-mark the options the unit's data
    identifies. Content of a unit without data is returned untouched.
    """
    content = content or ""
    vocab = vocabulary.get(unit) or {}
    known = known_answers.get(unit) or RuleTable(())
    if not vocab and not len(known):
        logger.info("quiz.mark.skip reason=no_marking_data unit=%d", unit)
        return MarkingResult(content=content, skipped_reason=SkipReason.no_marking_data.value)

    stripped = re.sub(r"\s*" + re.escape(marker), "", content)
    blocks = parse_blocks(stripped, marker)
    if max_questions is not None:
        blocks = blocks[:max_questions]

    inserts = []
    for block in blocks:
        choice = choose_answer(block, vocab, known)
        if choice is None:
            logger.debug("quiz.mark.undecided q=%r", preview(block.question_text))
            continue
        opt, method = choice
        inserts.append(opt.end)
        logger.debug("quiz.mark.pick letter=%s method=%s", opt.letter, method)

    marked = stripped
    # Later offsets first so earlier ones stay valid
    for pos in sorted(inserts, reverse=True):
        marked = f"{marked[:pos]} {marker}{marked[pos:]}"

    logger.info("quiz.mark unit=%d blocks=%d marked=%d", unit, len(blocks), len(inserts))
    return MarkingResult(content=marked, blocks=len(blocks), marked=len(inserts))
