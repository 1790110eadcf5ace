# tests/test_glossary.py
from core.correction_engine import verify_and_correct
from core.entities import GlossaryEntry
from core.glossary import DEFAULT_GLOSSARY, check_glossary, merge_glossaries
from core.quiz_parser import parse_questions

TABARAKA = GlossaryEntry(term="tabaraka", correct="blessed", wrong=("sovereignty", "dominion"))


def test_marker_moves_forward_to_correct_meaning(pharaoh_record):
    content = (
        "Q1. What does 'Tabaraka' mean?\n"
        "A) Sovereignty ✅\n"
        "B) Blessed is He\n"
        "C) Dominion\n"
    )
    summary = verify_and_correct(content, [pharaoh_record], glossary=[TABARAKA])

    assert summary.corrected_content == (
        "Q1. What does 'Tabaraka' mean?\n"
        "A) Sovereignty\n"
        "B) Blessed is He ✅\n"
        "C) Dominion\n"
    )
    assert summary.glossary_corrections_applied == 1
    assert summary.corrections_applied == 0
    assert summary.any_correction

    [r] = summary.results
    assert r.correction_made and r.correction_kind == "glossary"
    assert r.original_answer == "Sovereignty"
    assert r.corrected_answer == "Blessed is He"


def test_marker_moves_backward(pharaoh_record):
    content = "Q1. What does 'Tabaraka' mean?\nA) Blessed is He\nB) Sovereignty ✅\n"
    summary = verify_and_correct(content, [pharaoh_record], glossary=[TABARAKA])
    assert summary.corrected_content == (
        "Q1. What does 'Tabaraka' mean?\nA) Blessed is He ✅\nB) Sovereignty\n"
    )


def test_correct_answer_is_left_alone(pharaoh_record):
    content = "Q1. What does 'Tabaraka' mean?\nA) Blessed is He ✅\nB) Sovereignty\n"
    summary = verify_and_correct(content, [pharaoh_record], glossary=[TABARAKA])
    assert summary.corrected_content == content
    assert summary.glossary_corrections_applied == 0
    assert summary.results[0].is_verified


def test_no_glossary_means_no_vocabulary_check(pharaoh_record):
    content = "Q1. What does 'Tabaraka' mean?\nA) Sovereignty ✅\nB) Blessed is He\n"
    summary = verify_and_correct(content, [pharaoh_record])
    assert summary.corrected_content == content
    assert summary.glossary_corrections_applied == 0


def test_term_must_appear_in_question():
    content = "Q1. What does 'Mulk' mean?\nA) Sovereignty ✅\nB) Blessed is He\n"
    [q] = parse_questions(content)
    assert check_glossary(q.question_text, q.extracted_answer, q.options, [TABARAKA]) is None


def test_first_recognising_entry_decides():
    content = "Q1. What does 'Tabaraka' mean?\nA) Dominion ✅\nB) Blessed is He\n"
    [q] = parse_questions(content)
    other = GlossaryEntry(term="tabaraka", correct="dominion")
    assert check_glossary(q.question_text, q.extracted_answer, q.options, [other, TABARAKA]) is None
    target = check_glossary(q.question_text, q.extracted_answer, q.options, [TABARAKA, other])
    assert target is not None and target.letter == "B"


def test_creation_purpose_question_reaches_glossary(pharaoh_record):
    entry = GlossaryEntry(term="create death and life", correct="test", wrong=("entertainment",))
    content = (
        "Q1. Why did Allah create death and life?\n"
        "A) For entertainment ✅\n"
        "B) To test which of you is best in deed\n"
    )
    summary = verify_and_correct(content, [pharaoh_record], glossary=[entry])

    assert summary.glossary_corrections_applied == 1
    assert summary.corrected_content == (
        "Q1. Why did Allah create death and life?\n"
        "A) For entertainment\n"
        "B) To test which of you is best in deed ✅\n"
    )


def test_built_in_table_knows_tabaraka(pharaoh_record):
    content = "Q1. What does Tabāraka mean?\nA) All-Knowing ✅\nB) Blessed\n"
    summary = verify_and_correct(content, [pharaoh_record], glossary=DEFAULT_GLOSSARY)

    assert summary.glossary_corrections_applied == 1
    assert summary.corrected_content == "Q1. What does Tabāraka mean?\nA) All-Knowing\nB) Blessed ✅\n"


def test_merge_keeps_first_table_per_term():
    override = GlossaryEntry(term="Tabaraka", correct="sovereignty")
    merged = merge_glossaries([override], DEFAULT_GLOSSARY)

    assert merged[0] is override
    assert [e.term.lower() for e in merged].count("tabaraka") == 1
    assert len(merged) == len(DEFAULT_GLOSSARY)
