"""Tests for the selector tokenizer."""

import pytest

from css2scss.selectors import (
    base_pattern,
    dangling_combinator,
    has_top_level_comma,
    normalize_selector,
    pseudo_suffix,
    specificity,
    split_compounds,
    split_selector_list,
    split_structural_suffix,
)


# ---------------------------------------------------------------------------
# Selector lists
# ---------------------------------------------------------------------------


class TestSplitSelectorList:
    def test_simple_list(self):
        assert split_selector_list(".a, .b") == [".a", ".b"]

    def test_strips_whitespace_and_newlines(self):
        assert split_selector_list("\n  .a,\n  .b  ") == [".a", ".b"]

    def test_comma_inside_attribute_is_kept(self):
        assert split_selector_list('[data-x="a,b"], .c') == ['[data-x="a,b"]', ".c"]

    def test_comma_inside_pseudo_function_is_kept(self):
        assert split_selector_list(":is(.a, .b) .c, .d") == [":is(.a, .b) .c", ".d"]

    def test_empty_parts_dropped(self):
        assert split_selector_list(".a,,") == [".a"]

    def test_has_top_level_comma(self):
        assert has_top_level_comma(".a, .b")
        assert not has_top_level_comma(":is(.a, .b)")


# ---------------------------------------------------------------------------
# Normalisation and compounds
# ---------------------------------------------------------------------------


class TestNormalizeSelector:
    def test_collapses_whitespace(self):
        assert normalize_selector(".a   .b") == ".a .b"
        assert normalize_selector(".a\n  .b") == ".a .b"

    def test_spaces_combinators(self):
        assert normalize_selector(".a>.b") == ".a > .b"
        assert normalize_selector(".a  +  .b") == ".a + .b"
        assert normalize_selector(".a~.b") == ".a ~ .b"

    def test_plus_inside_parens_untouched(self):
        assert normalize_selector("li:nth-child(2n+1)") == "li:nth-child(2n+1)"

    def test_quoted_whitespace_untouched(self):
        assert normalize_selector('a[title="x  y"]') == 'a[title="x  y"]'


class TestSplitCompounds:
    def test_descendants(self):
        assert split_compounds(".nav ul li a") == [".nav", "ul", "li", "a"]

    def test_combinator_attached_to_following_compound(self):
        assert split_compounds(".nav > ul li") == [".nav", "> ul", "li"]
        assert split_compounds(".a+.b") == [".a", "+ .b"]

    def test_attribute_with_space(self):
        assert split_compounds('a[title="x y"] b') == ['a[title="x y"]', "b"]

    def test_single_compound(self):
        assert split_compounds(".btn:hover") == [".btn:hover"]


class TestSuffixes:
    def test_structural_suffix(self):
        assert split_structural_suffix(".btn[disabled]:hover") == (".btn", "[disabled]:hover")
        assert split_structural_suffix(".btn::before") == (".btn", "::before")
        assert split_structural_suffix(".btn") == (".btn", "")

    def test_pseudo_suffix(self):
        assert pseudo_suffix(".btn:hover") == ":hover"
        assert pseudo_suffix(".btn[data-x]") == ""

    def test_escaped_colon_is_not_pseudo(self):
        assert pseudo_suffix(r".sm\:flex") == ""


class TestBasePattern:
    @pytest.mark.parametrize(
        "selector, expected",
        [
            (".btn", ".btn"),
            (".btn:hover", ".btn"),
            (".nav ul li", ".nav"),
            (".nav:hover .icon", ".nav"),
            ("a:not(.x) span", "a"),
            (":root", ":root"),
            (".a, .b", ".a, .b"),
        ],
    )
    def test_base_pattern(self, selector, expected):
        assert base_pattern(selector) == expected


# ---------------------------------------------------------------------------
# Specificity
# ---------------------------------------------------------------------------


class TestSpecificity:
    @pytest.mark.parametrize(
        "selector, expected",
        [
            ("#main .nav a:hover", (1, 2, 1)),
            ("p::before", (0, 0, 2)),
            ("ul > li.active", (0, 1, 2)),
            ('input[type="text"]', (0, 1, 1)),
            (".a.b", (0, 2, 0)),
            ("*", (0, 0, 0)),
        ],
    )
    def test_counts(self, selector, expected):
        assert specificity(selector) == expected


# ---------------------------------------------------------------------------
# Incomplete selectors
# ---------------------------------------------------------------------------


class TestDanglingCombinator:
    @pytest.mark.parametrize("selector", ["", ">", ".a >", "> .a", ".a > > .b", ".a ~"])
    def test_dangling(self, selector):
        assert dangling_combinator(selector)

    @pytest.mark.parametrize(
        "selector", [".a", ".a > .b", ".a + .b ~ .c", "li:nth-child(2n+1)", r".a\>"]
    )
    def test_complete(self, selector):
        assert not dangling_combinator(selector)
