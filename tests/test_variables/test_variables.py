"""Tests for variable categorisation, naming and extraction."""

import pytest

from css2scss.config import ConversionOptions
from css2scss.dedup import declaration_hash
from css2scss.events import EventBus, EventRecorder, VariableExtracted
from css2scss.extractor import extract_rules
from css2scss.model.variable import Category
from css2scss.variables import (
    VariableExtractor,
    categorize,
    is_color_value,
    is_size_value,
    sanitize,
    suggest_name,
)


def _values(rules):
    return [d.value for r in rules for d in r.declarations]


# ---------------------------------------------------------------------------
# Categorisation
# ---------------------------------------------------------------------------


class TestCategorize:
    @pytest.mark.parametrize(
        "prop, value, expected",
        [
            ("color", "red", Category.COLOR),
            ("background", "#333", Category.COLOR),
            ("background", "rgba(0, 0, 0, 0.5)", Category.COLOR),
            ("padding", "10px 20px", Category.SIZE),
            ("transform", "10px", Category.SIZE),
            ("font-size", "16px", Category.SIZE),
            ("line-height", "1.5", Category.SIZE),
            ("font-family", "Arial", Category.FONT),
            ("font-weight", "bold", Category.FONT),
            ("display", "flex", Category.OTHER),
            ("border", "1px solid #ddd", Category.OTHER),
        ],
    )
    def test_categories(self, prop, value, expected):
        assert categorize(prop, value) is expected

    def test_color_values(self):
        assert is_color_value("#fff")
        assert is_color_value("#FFFFFF")
        assert is_color_value("hsl(0, 0%, 0%)")
        assert is_color_value("CurrentColor")
        assert not is_color_value("#ggg")

    def test_size_values(self):
        assert is_size_value("10px")
        assert is_size_value("-1.5rem")
        assert is_size_value(".5em")
        assert is_size_value("100%")
        assert not is_size_value("10")
        assert not is_size_value("10px 20px")


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


class TestSuggestName:
    @pytest.mark.parametrize(
        "prop, value, category, expected",
        [
            ("background-color", "#007bff", Category.COLOR, "$color-primary-blue"),
            ("color", "#FFFFFF", Category.COLOR, "$color-white"),
            ("color", "#333", Category.COLOR, "$color-333"),
            ("color", "rgba(0, 0, 0, 0.5)", Category.COLOR, "$color-rgba-0-0-0-0-5"),
            ("padding", "20px", Category.SIZE, "$p-20px"),
            ("margin", "0 auto", Category.SIZE, "$m-0-auto"),
            ("border-radius", "4px", Category.SIZE, "$rounded-4px"),
            ("font-size", "16px", Category.SIZE, "$text-16px"),
            ("width", "100%", Category.SIZE, "$size-full"),
            ("height", "auto", Category.SIZE, "$size-auto"),
            ("top", "0", Category.SIZE, "$size-0"),
            ("max-width", "1200px", Category.SIZE, "$size-1200px"),
            ("gap", "8px", Category.SIZE, "$spacing-8px"),
            (
                "font-family",
                '"Helvetica Neue", Arial, sans-serif',
                Category.FONT,
                "$font-helvetica-neue-arial-sans-serif",
            ),
            ("font-weight", "700", Category.FONT, "$font-700"),
            ("display", "flex", Category.OTHER, "$display-flex"),
            ("cursor", "pointer", Category.OTHER, "$cursor-pointer"),
            ("border", "none", Category.OTHER, "$border-none"),
        ],
    )
    def test_names(self, prop, value, category, expected):
        assert suggest_name(prop, value, category) == expected

    def test_custom_prefix(self):
        assert suggest_name("color", "#fff", Category.COLOR, "@") == "@color-fff"

    def test_sanitize_fallback(self):
        assert sanitize("!!!") == "value"


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

BLUE_CSS = """
.header { background-color: #007bff; }
.nav { background-color: #007bff; }
.button { background-color: #007bff; }
"""


class TestExtraction:
    def test_repeated_color_extracted(self):
        rules = extract_rules(BLUE_CSS)
        variables = VariableExtractor(ConversionOptions(min_occurrences=2)).run(rules)
        assert len(variables) == 1
        assert variables[0].name == "$color-primary-blue"
        assert variables[0].value == "#007bff"
        assert variables[0].occurrences == 3
        assert _values(rules) == ["$color-primary-blue"] * 3
        assert all(r.declarations[0].original_value == "#007bff" for r in rules)

    def test_threshold_not_reached(self):
        rules = extract_rules(BLUE_CSS)
        variables = VariableExtractor(ConversionOptions(min_occurrences=4)).run(rules)
        assert variables == []
        assert _values(rules) == ["#007bff"] * 3

    def test_same_value_merged_across_properties(self):
        rules = extract_rules(".a { padding: 8px; } .b { margin: 8px; } .c { margin: 8px; }")
        variables = VariableExtractor().run(rules)
        assert len(variables) == 1
        assert variables[0].name == "$m-8px"
        assert variables[0].occurrences == 3
        assert _values(rules) == ["$m-8px"] * 3

    def test_threshold_applies_to_merged_total(self):
        rules = extract_rules(".a { padding: 8px; } .b { margin: 8px; }")
        variables = VariableExtractor().run(rules)
        assert [v.name for v in variables] == ["$p-8px"]

    def test_disabled_category_untouched(self):
        css = ".a { color: #fff; padding: 4px; } .b { color: #fff; padding: 4px; }"
        rules = extract_rules(css)
        variables = VariableExtractor(ConversionOptions(extract_colors=False)).run(rules)
        assert [v.category for v in variables] == [Category.SIZE]
        assert _values(rules) == ["#fff", "$p-4px", "#fff", "$p-4px"]

    def test_name_collisions_get_suffix(self):
        css = ".a{color:#FFF}.b{color:#FFF}.c{color:#fff}.d{color:#fff}"
        variables = VariableExtractor().run(extract_rules(css))
        assert sorted(v.name for v in variables) == ["$color-fff", "$color-fff-1"]

    def test_custom_properties_never_extracted(self):
        rules = extract_rules(".a { --brand: #007bff; } .b { --brand: #007bff; }")
        assert VariableExtractor().run(rules) == []
        assert _values(rules) == ["#007bff", "#007bff"]

    def test_keyframes_body_ignored(self):
        css = "@keyframes a { to { opacity: 1; } } @keyframes b { to { opacity: 1; } }"
        assert VariableExtractor().run(extract_rules(css)) == []

    def test_comments_ignored(self):
        rules = extract_rules(".a { /* red */ color: red; } .b { /* red */ }")
        assert VariableExtractor().run(rules) == []

    def test_rewrite_refreshes_rule_hash(self):
        rules = extract_rules(BLUE_CSS)
        stale = rules[0].hash
        VariableExtractor().run(rules)
        assert rules[0].hash != stale
        assert rules[0].hash == declaration_hash(rules[0].declarations)

    def test_untouched_rule_keeps_hash(self):
        rules = extract_rules(".a { color: red; } .b { color: blue; }")
        before = [r.hash for r in rules]
        VariableExtractor().run(rules)
        assert [r.hash for r in rules] == before

    def test_events_emitted(self):
        bus = EventBus()
        recorder = EventRecorder()
        bus.on_all(recorder)
        VariableExtractor(event_bus=bus).run(extract_rules(BLUE_CSS))
        extracted = recorder.of_type(VariableExtracted)
        assert extracted == [VariableExtracted("$color-primary-blue", "#007bff", "color", 3)]
