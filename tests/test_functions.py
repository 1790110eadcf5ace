# tests/test_functions.py
import pytest

from util.functions import clip_chars, collapse_ws, parse_range_label, preview


@pytest.mark.parametrize(
    "label,expected",
    [
        ("1-10", (1, 10)),
        ("24", (24, 24)),
        (" 15 – 26 ", (15, 26)),
        ("10-1", (1, 10)),
        ("", None),
        (None, None),
        ("verses 1 to 5", None),
    ],
)
def test_parse_range_label(label, expected):
    assert parse_range_label(label) == expected


def test_preview_and_clip():
    assert preview("a\n  b") == "a b"
    assert preview("x" * 60, max_chars=10) == "x" * 10 + "…"
    assert clip_chars("abcdef", 3) == "abc"
    assert collapse_ws("  a \t b ") == "a b"
