# tests/test_similarity.py
import pytest

from core.similarity import similarity, tokenize


def test_tokenize_drops_short_words_and_punctuation():
    assert tokenize("He said, \"I am your Lord!\"") == {"said", "your", "lord"}


def test_tokenize_empty():
    assert tokenize("") == frozenset()
    assert tokenize("a an to") == frozenset()


def test_jaccard_value():
    # {the, lord, most, high} vs {lord, most, high, indeed}
    assert similarity("the lord most high", "lord most high indeed") == pytest.approx(0.6)


def test_no_overlap_is_zero():
    assert similarity("He denied everything", 'He said, "I am your lord, most high"') == 0.0


def test_empty_side_is_zero():
    assert similarity("", "lord most high") == 0.0
    assert similarity("a b c", "lord most high") == 0.0


@pytest.mark.parametrize(
    "a,b",
    [
        ("He denied everything", "He said he denied it"),
        ("the mountains are stakes", "And the mountains as stakes"),
        ("Patience", "patience and prayer"),
    ],
)
def test_symmetric(a, b):
    assert similarity(a, b) == similarity(b, a)


@pytest.mark.parametrize("s", ["I am your lord", "Blessed is He", "مهاد الأرض"])
def test_reflexive(s):
    assert similarity(s, s) == 1.0


def test_case_and_punctuation_insensitive():
    assert similarity("Lord,", "lord") == 1.0
