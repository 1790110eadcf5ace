# core/reference_extractor.py
from typing import Optional
from core.entities import Citation
from core.rules import CITATION_RULES, RuleTable


def extract_reference(
    question: str, rules: RuleTable = CITATION_RULES
) -> Optional[Citation]:
    """
    Parse an explicit citation out of question text.

    "79:24" -> Citation(ordinal=24, unit=79); "ayah 24" -> Citation(ordinal=24);
    None when no rule matches. Rules are tried in table order.
    """
    hit = rules.first_match(question or "")
    if hit is None:
        return None
    _, m = hit
    groups = m.groupdict()
    ordinal = groups.get("ordinal")
    if ordinal is None:
        return None
    unit = groups.get("unit")
    return Citation(ordinal=int(ordinal), unit=int(unit) if unit is not None else None)
