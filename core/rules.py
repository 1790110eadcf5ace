# core/rules.py
"""
Ordered (pattern, tag) tables driving question classification and citation parsing.

Tables are immutable; `RuleTable.extended(...)` returns a new table so callers can
add phrasings without touching the engine.
"""
import re
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Pattern, Tuple, Union

PatternLike = Union[str, Pattern[str]]

_PASSAGE = r"(?:ayah|āyah|verse)"
_SPEAKER = (
    r"(?:Allah|Pharaoh|Fir(?:'|’)?awn|Musa|Moses|Ibrahim|Abraham|Isa|Jesus|Nuh|Noah"
    r"|Iblis|Satan|the\s+(?:Lord|Creator|Prophet|angels?|disbelievers))"
)
_SPEECH_VERB = r"(?:say|declare|proclaim|announce)"


@dataclass(frozen=True)
class Rule:
    pattern: Pattern[str]
    tag: str

    def search(self, text: str) -> Optional["re.Match[str]"]:
        return self.pattern.search(text)


def _compile(pattern: PatternLike) -> Pattern[str]:
    if isinstance(pattern, str):
        return re.compile(pattern, re.IGNORECASE)
    return pattern


class RuleTable:
    """Evaluated top-to-bottom; the first matching rule wins."""

    def __init__(self, rules: Iterable[Tuple[PatternLike, str]]) -> None:
        self._rules: Tuple[Rule, ...] = tuple(
            Rule(_compile(p), tag) for p, tag in rules
        )

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def extended(
        self, rules: Iterable[Tuple[PatternLike, str]], *, prepend: bool = False
    ) -> "RuleTable":
        extra = RuleTable(rules)._rules
        merged = extra + self._rules if prepend else self._rules + extra
        table = RuleTable(())
        table._rules = merged
        return table

    def first_match(self, text: str) -> Optional[Tuple[Rule, "re.Match[str]"]]:
        for rule in self._rules:
            m = rule.search(text)
            if m:
                return rule, m
        return None


# Does the question make a checkable claim about a specific passage?
RELATION_RULES = RuleTable(
    [
        (rf"what\s+(?:did|does)\s+{_SPEAKER}\s+{_SPEECH_VERB}", "speaker_speech"),
        (rf"according\s+to\s+(?:this\s+)?{_PASSAGE}", "according_to_passage"),
        (r"\bin\s+(?:(?:the\s+)?quran\s+)?\d+\s*:\s*\d+", "explicit_citation"),
        (rf"\b{_PASSAGE}\s+\d+", "ordinal_mention"),
        (rf"(?:the\s+)?meaning\s+of\s+{_PASSAGE}\s+\d+", "passage_meaning"),
        (rf"what\s+is\s+said\s+in\s+{_PASSAGE}\s+\d+", "said_in_passage"),
        (
            r"(?:Pharaoh|Fir(?:'|’)?awn)(?:'|’)?s?\s+(?:claim|declaration|statement|words)",
            "speaker_claim",
        ),
        (r"[\"'“‘]I\s+am\s+(?:your\s+)?(?:lord|god)", "first_person_quote"),
    ]
)

# Explicit citations; the fully-qualified form is tried first.
CITATION_RULES = RuleTable(
    [
        (r"\b(?P<unit>\d+)\s*:\s*(?P<ordinal>\d+)\b", "unit_ordinal"),
        (rf"\b{_PASSAGE}s?\s+(?P<ordinal>\d+)\b", "ordinal"),
    ]
)

# Vocabulary / definition questions (glossary check).
VOCABULARY_RULES = RuleTable(
    [
        (r"what\s+does\s+[\"'“‘]?[\w\-’']+[\"'”’]?\s+mean", "what_does_mean"),
        (r"what\s+is\s+the\s+(?:meaning|definition)\s+of", "definition_of"),
        (r"the\s+meaning\s+of\s+[\"'“‘]?[\w\-’']+", "meaning_of"),
        (r"[\w\-’']+[\"'”’]?\s+(?:means|refers\s+to|specifically\s+refers?)", "term_means"),
        (r"why\s+did\s+allah\s+create\s+(?:death\s+and\s+life|life\s+and\s+death)", "creation_purpose"),
        (r"according\s+to\s+the\s+verse", "verse_meaning"),
    ]
)

# "What did X say/declare ..." asks for quoted speech (span extraction).
SPEECH_QUESTION = re.compile(
    rf"what\s+(?:did|does)\s+(?:the\s+)?[\w’']+(?:\s+[\w’']+)?\s+{_SPEECH_VERB}",
    re.IGNORECASE,
)
