"""Unit tests for the defensive text helpers."""

import pytest

from curriculum_engine.utils.text import (
    collapse_whitespace,
    edit_distance,
    normalize_title,
    safe_lower,
    significant_words,
    strip_parenthetical,
    title_key,
)


@pytest.mark.unit
class TestNullSafety:
    def test_none_becomes_empty(self):
        assert safe_lower(None) == ""
        assert title_key(None) == ""
        assert normalize_title(None) == ""

    def test_title_key_folds_case_and_trims(self):
        assert title_key("  Pink Tower ") == "pink tower"


@pytest.mark.unit
class TestNormalization:
    def test_punctuation_folded_parentheses_kept(self):
        assert normalize_title("Pink Tower — Introduction!") == "pink tower introduction"
        assert normalize_title("Pink Tower (Extension)") == "pink tower (extension)"

    def test_strip_parenthetical(self):
        assert strip_parenthetical("pink tower (extension)") == "pink tower"
        assert strip_parenthetical("pink tower") == "pink tower"

    def test_collapse_whitespace(self):
        assert collapse_whitespace("  pink   tower \t") == "pink tower"

    def test_significant_words(self):
        assert significant_words("a set of red rods") == ["set", "red", "rods"]
        assert significant_words("pink tower - large", item_name=True) == [
            "pink",
            "tower",
            "large",
        ]


@pytest.mark.unit
class TestEditDistance:
    @pytest.mark.parametrize(
        "a,b,expected",
        [
            ("kitten", "sitting", 3),
            ("", "abc", 3),
            ("abc", "", 3),
            ("flaw", "lawn", 2),
            ("same", "same", 0),
        ],
    )
    def test_exact_values(self, a, b, expected):
        assert edit_distance(a, b) == expected

    def test_symmetric(self):
        assert edit_distance("number rods", "number cards") == edit_distance(
            "number cards", "number rods"
        )

    def test_bounded_distance_caps_at_max(self):
        assert edit_distance("short", "a much longer title", max_distance=5) == 5
        assert edit_distance("abcdefghij", "klmnopqrst", max_distance=4) == 4

    def test_bounded_distance_exact_below_max(self):
        assert edit_distance("kitten", "sitting", max_distance=5) == 3

    def test_distance_equal_to_bound_is_capped(self):
        assert edit_distance("kitten", "sitting", max_distance=3) == 3
        assert edit_distance("kitten", "sitting", max_distance=4) == 3

    def test_bound_below_one(self):
        assert edit_distance("pink tower", "pink tower", max_distance=0) == 0
        assert edit_distance("pink tower", "pink towers", max_distance=0) == 0
