# core/relation_classifier.py
from typing import Optional
from core.rules import RELATION_RULES, VOCABULARY_RULES, RuleTable

# Plain substrings that also route a question to the glossary check
VOCABULARY_HINTS = ("mean", "why did allah")


def matched_relation(question: str, rules: RuleTable = RELATION_RULES) -> Optional[str]:
    """Tag of the first relation rule matching `question`, or None."""
    hit = rules.first_match(question or "")
    return hit[0].tag if hit else None


def is_reference_related(question: str, rules: RuleTable = RELATION_RULES) -> bool:
    return matched_relation(question, rules) is not None


def is_vocabulary_question(question: str, rules: RuleTable = VOCABULARY_RULES) -> bool:
    q = question or ""
    if rules.first_match(q) is not None:
        return True
    lowered = q.lower()
    return any(hint in lowered for hint in VOCABULARY_HINTS)
