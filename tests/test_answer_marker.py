# tests/test_answer_marker.py
from core.answer_marker import KNOWN_ANSWERS, choose_answer, mark_answers
from core.entities import QuizBlock
from core.quiz_parser import parse_blocks
from core.rules import RuleTable

NABA_QUIZ = (
    "**Q1.** What are the people questioning about?\n"
    "A) The weather ✅\n"
    "B) The Day of Judgment\n"
    "C) Trade\n"
    "\n"
    "**Q2.** What does مهاد mean?\n"
    "A) Carpet\n"
    "B) Resting place\n"
    "C) Mountain\n"
    "\n"
    "**Q3.** Who wrote this?\n"
    "A) Someone\n"
    "B) Nobody\n"
)


def test_remarks_from_known_answers_and_vocabulary():
    result = mark_answers(NABA_QUIZ, 78)

    assert result.content == (
        "**Q1.** What are the people questioning about?\n"
        "A) The weather\n"
        "B) The Day of Judgment ✅\n"
        "C) Trade\n"
        "\n"
        "**Q2.** What does مهاد mean?\n"
        "A) Carpet\n"
        "B) Resting place ✅\n"
        "C) Mountain\n"
        "\n"
        "**Q3.** Who wrote this?\n"
        "A) Someone\n"
        "B) Nobody\n"
    )
    assert result.blocks == 3
    assert result.marked == 2
    assert result.skipped_reason is None


def test_marking_twice_changes_nothing():
    first = mark_answers(NABA_QUIZ, 78)
    second = mark_answers(first.content, 78)
    assert second.content == first.content
    assert second.marked == first.marked


def test_unit_without_data_is_untouched():
    result = mark_answers(NABA_QUIZ, 2)
    assert result.content == NABA_QUIZ
    assert result.marked == 0
    assert result.skipped_reason == "no_marking_data"


def test_transliterated_term_uses_known_answer():
    content = "Q1. What does Tabāraka mean?\nA) All-Knowing ✅\nB) Blessed\n"
    result = mark_answers(content, 67)
    assert result.content == "Q1. What does Tabāraka mean?\nA) All-Knowing\nB) Blessed ✅\n"


def test_theme_fallback():
    content = "Q1. What do mountains resemble?\nA) Pegs\nB) Clouds\n"
    [block] = parse_blocks(content)
    opt, method = choose_answer(block, {}, RuleTable(()))
    assert (opt.letter, method) == ("A", "theme")
    assert mark_answers(content, 78).content == "Q1. What do mountains resemble?\nA) Pegs ✅\nB) Clouds\n"


def test_known_answer_beats_vocabulary():
    content = "Q1. What does libās mean?\nA) Clothing\nB) A cover for you\n"
    [block] = parse_blocks(content)
    opt, method = choose_answer(block, {"libās": "clothing"}, KNOWN_ANSWERS[78])
    assert (opt.letter, method) == ("B", "known_answer")


def test_longest_meaning_fragment_wins():
    [parsed] = parse_blocks("1. q\nA) Gardens\nB) Dense gardens entwined\n")
    block = QuizBlock("What does X mean?", parsed.options)
    opt, method = choose_answer(block, {"x": "gardens/gardens entwined"}, RuleTable(()))
    assert method == "vocabulary"
    assert opt.letter == "B"


def test_single_option_block_is_left_unmarked():
    content = "Q1. What does سبات mean?\nA) Rest\n"
    result = mark_answers(content, 78)
    assert result.content == content
    assert result.marked == 0


def test_question_cap():
    content = "Q1. What does سبات mean?\nA) Rest\nB) Death\nQ2. What does سبات mean?\nA) Rest\nB) Death\n"
    result = mark_answers(content, 78, max_questions=1)
    assert result.marked == 1
    assert result.content.count("✅") == 1


def test_custom_tables_and_marker():
    content = "1. Which colour is the sky?\nA) Green [x]\nB) Blue\n"
    result = mark_answers(
        content,
        5,
        marker="[x]",
        vocabulary={},
        known_answers={5: RuleTable([(r"colour\s+is\s+the\s+sky", "blue")])},
    )
    assert result.content == "1. Which colour is the sky?\nA) Green\nB) Blue [x]\n"
