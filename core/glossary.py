# core/glossary.py
"""
Vocabulary check: when a definition question's marked answer is a known-wrong
meaning of a glossary term, point at the option carrying the correct meaning.
"""
from typing import Iterable, Optional, Sequence, Tuple
from core.entities import GlossaryEntry, OptionSpan, ParsedQuestion


def check_glossary(
    question: str,
    answer: str,
    options: Sequence[OptionSpan],
    glossary: Iterable[GlossaryEntry],
) -> Optional[OptionSpan]:
    """
    Return the option that should carry the marker, or None to leave it alone.

    Entries are tried in order; the first entry whose term occurs in the
    question and that recognises the answer (right or wrong) decides.
    """
    q = question.lower()
    a = answer.lower()
    for entry in glossary:
        if not entry.term or entry.term.lower() not in q:
            continue
        correct = entry.correct.lower()
        if any(w and w.lower() in a for w in entry.wrong):
            for opt in options:
                text = opt.text.lower()
                if correct in text and text != a:
                    return opt
        if correct and correct in a:
            return None
    return None


def move_marker(content: str, q: ParsedQuestion, target: OptionSpan, marker: str) -> str:
    """
    Remove the glyph after the current answer and append it to `target`.

    Both edits stay inside the question's block; the later one is applied first.
    """
    edits = [(q.marker_start, q.marker_end, "")]
    if not target.marked:
        edits.append((target.end, target.end, f" {marker}"))
    edits = sorted(
        edits,
        key=lambda e: e[0],
        reverse=True,
    )
    for start, end, text in edits:
        content = content[:start] + text + content[end:]
    return content


def _entries(spellings: Tuple[str, ...], correct: str, wrong: Tuple[str, ...]) -> Tuple[GlossaryEntry, ...]:
    return tuple(GlossaryEntry(term=s, correct=correct, wrong=wrong) for s in spellings)


_TABARAKA_WRONG = ("all-knowing", "knowing", "great", "mighty", "powerful", "high", "seeing")
_NABA_WRONG = ("story", "tale", "message", "warning")
_CREATION_WRONG = ("accident", "entertainment", "show his power", "for fun", "by chance")
_FLAWS_WRONG = ("experts", "find many", "special knowledge", "gain")
_STARS_WRONG = ("navigation", "time-keeping", "light and heat")

# Arabic terms (script and transliterations) with their accepted meaning,
# then verse-meaning phrases. Tried in this order.
DEFAULT_GLOSSARY: Tuple[GlossaryEntry, ...] = (
    # Al-Mulk (67)
    *_entries(("tabāraka", "tabaraka", "تبارك"), "blessed", _TABARAKA_WRONG),
    *_entries(("al-mulk", "الملك"), "dominion", ("power only", "kingdom only")),
    *_entries(("qadīr", "قدير"), "all-powerful", ("strong only", "mighty only")),
    *_entries(
        ("ar-raḥmān", "الرحمن"),
        "universal mercy",
        ("mercy only for muslims", "special mercy for believers"),
    ),
    *_entries(
        ("ar-raḥīm", "الرحيم"),
        "special mercy for believers",
        ("universal mercy", "general mercy for all"),
    ),
    *_entries(("qayyim", "قيم"), "straight", ("great", "powerful", "beautiful", "knowing")),
    # An-Naba (78)
    *_entries(("an-naba", "النبأ", "naba"), "news", _NABA_WRONG),
    *_entries(("mihād", "mihad", "مهاد"), "resting place", ("carpet", "bed", "floor", "ground")),
    *_entries(
        ("awtād", "awtad", "أوتاد"),
        "stakes",
        ("mountains only", "pillars", "supports", "anchors"),
    ),
    *_entries(("subāt", "subat", "سبات"), "rest", ("death", "unconsciousness", "peace", "comfort")),
    *_entries(("libās", "libas", "لباس"), "covering", ("darkness", "blanket", "protection", "veil")),
    *_entries(
        ("ma'āsh", "maash", "معاش"),
        "livelihood",
        ("work", "activity", "movement", "life"),
    ),
    *_entries(("sirāj", "siraj", "سراج"), "lamp", ("light", "sun only", "star", "fire")),
    *_entries(("wahhāj", "wahhaj", "وهاج"), "burning", ("bright", "shining", "glowing", "hot")),
    *_entries(
        ("thajjāj", "thajjaj", "ثجاج"),
        "pouring",
        ("heavy", "abundant", "continuous", "strong"),
    ),
    *_entries(("alfāf", "alfaf", "ألفاف"), "dense", ("beautiful", "lush", "green", "tall")),
    # Verse meanings
    *_entries(("create death and life", "created death and life"), "test", _CREATION_WRONG),
    *_entries(("flaws in allah", "look repeatedly"), "frustrated", _FLAWS_WRONG),
    *_entries(("stars in the", "dual purpose"), "beauty", _STARS_WRONG),
)


def merge_glossaries(*tables: Iterable[GlossaryEntry]) -> Tuple[GlossaryEntry, ...]:
    """Concatenate tables in priority order, dropping repeated terms after the first."""
    seen = set()
    out = []
    for table in tables:
        for entry in table:
            key = entry.term.lower()
            if key in seen:
                continue
            seen.add(key)
            out.append(entry)
    return tuple(out)
