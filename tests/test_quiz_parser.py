# tests/test_quiz_parser.py
from core.quiz_parser import parse_blocks, parse_questions

MARKER = "✅"


def test_single_block_offsets():
    content = "Q1. What did Pharaoh declare?\nA) He denied everything ✅"
    [q] = parse_questions(content)
    assert q.question_text == "What did Pharaoh declare?"
    assert q.extracted_answer == "He denied everything"
    assert content[q.span_start : q.span_end] == "He denied everything"
    assert content[q.marker_start : q.marker_end] == " " + MARKER
    assert len(q.options) == 1 and q.options[0].marked


def test_bold_markers_multiline_and_separator():
    content = (
        "## Quiz\n\n"
        "**Q1.** What did Pharaoh say?\n"
        "A) I am your lord ✅\n"
        "B) Nothing at all\n"
        "**Q2.** What is 2 + 2?\n"
        "A) 3\n"
        "B) 4 ✅\n"
        "\n---\n"
        "1. Reflect on today's lesson.\n"
    )
    questions = parse_questions(content)
    assert [q.question_text for q in questions] == [
        "What did Pharaoh say?",
        "What is 2 + 2?",
    ]
    assert [q.extracted_answer for q in questions] == ["I am your lord", "4"]
    first = questions[0]
    assert [(o.letter, o.text, o.marked) for o in first.options] == [
        ("A", "I am your lord", True),
        ("B", "Nothing at all", False),
    ]
    for q in questions:
        assert content[q.span_start : q.span_end] == q.extracted_answer


def test_inline_options():
    content = "1. Which one is right? A) foo B) bar ✅ C) baz D) qux"
    [q] = parse_questions(content)
    assert q.question_text == "Which one is right?"
    assert q.extracted_answer == "bar"
    assert [o.letter for o in q.options] == ["A", "B", "C", "D"]
    assert content[q.options[3].start : q.options[3].end] == "qux"


def test_block_without_marked_option_is_skipped():
    content = "1. What is x?\nA) a\nB) b\n2. What is y?\nA) c ✅\nB) d"
    questions = parse_questions(content)
    assert len(questions) == 1
    assert questions[0].question_text == "What is y?"


def test_block_ends_at_bold_heading():
    content = "Q1. Is this the end?\nA) yes ✅\n\n**Summary**\nB) not an option"
    [q] = parse_questions(content)
    assert [o.letter for o in q.options] == ["A"]


def test_bold_question_text_is_cleaned():
    content = "**Q1. What did Musa say?**\nA) Peace ✅"
    [q] = parse_questions(content)
    assert q.question_text == "What did Musa say?"


def test_first_marked_option_wins():
    content = "Q1. Pick one\nA) first ✅\nB) second ✅"
    [q] = parse_questions(content)
    assert q.extracted_answer == "first"


def test_number_inside_text_is_not_a_block():
    content = "Q1. What is 2.5 doubled?\nA) 5 ✅\nB) 4.5"
    [q] = parse_questions(content)
    assert q.question_text == "What is 2.5 doubled?"
    assert [o.text for o in q.options] == ["5", "4.5"]


def test_max_questions_cap():
    content = "\n".join(f"Q{i}. Question {i}?\nA) yes ✅" for i in range(1, 6))
    assert len(parse_questions(content, max_questions=3)) == 3


def test_custom_marker():
    content = "Q1. Which?\nA) this [x]\nB) that"
    [q] = parse_questions(content, marker="[x]")
    assert q.extracted_answer == "this"


def test_empty_content():
    assert parse_questions("") == []
    assert parse_questions("No quiz here.") == []


def test_parse_blocks_keeps_unmarked_blocks():
    content = "Q1. First?\nA) One\nB) Two ✅\nQ2. Second?\nA) Three\nB) Four\n3. No options here\n"
    blocks = parse_blocks(content)

    assert [b.question_text for b in blocks] == ["First?", "Second?"]
    assert [o.text for o in blocks[1].options] == ["Three", "Four"]
    assert not any(o.marked for o in blocks[1].options)
    assert blocks[0].options[1].marked
    four = blocks[1].options[1]
    assert content[four.start : four.end] == "Four"
