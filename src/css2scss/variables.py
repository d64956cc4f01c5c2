"""Variable extraction: promote repeated values to Sass variables.

Values are counted per exact ``(property, value)`` pair. Pairs that share a
category and literal value are merged into one variable; the pair seen most
often names it. A variable is minted once the merged total reaches
``min_occurrences``, and every matching declaration is rewritten to reference
it.
"""

from __future__ import annotations

import re

from css2scss.config import ConversionOptions
from css2scss.dedup import declaration_hash
from css2scss.events import types as events
from css2scss.events.bus import EventBus
from css2scss.model.rule import KEYFRAMES_BLOCK, RAW_BLOCK, Declaration, ParsedRule, RuleKind
from css2scss.model.variable import Category, ExtractedVariable, VariableCandidate

COLOR_PROPERTIES = frozenset(
    {
        "color",
        "background-color",
        "border-color",
        "outline-color",
        "text-decoration-color",
        "caret-color",
        "column-rule-color",
        "border-top-color",
        "border-right-color",
        "border-bottom-color",
        "border-left-color",
    }
)

SIZE_PROPERTIES = frozenset(
    {
        "width",
        "height",
        "min-width",
        "min-height",
        "max-width",
        "max-height",
        "padding",
        "padding-top",
        "padding-right",
        "padding-bottom",
        "padding-left",
        "margin",
        "margin-top",
        "margin-right",
        "margin-bottom",
        "margin-left",
        "border-width",
        "border-radius",
        "font-size",
        "line-height",
        "letter-spacing",
        "top",
        "right",
        "bottom",
        "left",
        "gap",
        "column-gap",
        "row-gap",
    }
)

# font-size and line-height are also size properties; size is checked first.
FONT_PROPERTIES = frozenset(
    {
        "font-family",
        "font-weight",
        "font-style",
        "font-variant",
        "font-stretch",
        "font-size",
        "line-height",
    }
)

NAMED_COLORS = frozenset(
    {
        "red",
        "blue",
        "green",
        "yellow",
        "orange",
        "purple",
        "pink",
        "brown",
        "black",
        "white",
        "gray",
        "grey",
        "transparent",
        "currentcolor",
    }
)

SEMANTIC_COLOR_NAMES: dict[str, str] = {
    "#000000": "black",
    "#ffffff": "white",
    "#ff0000": "red",
    "#00ff00": "green",
    "#0000ff": "blue",
    "#ffff00": "yellow",
    "#ff00ff": "magenta",
    "#00ffff": "cyan",
    "#808080": "gray",
    "#c0c0c0": "silver",
    "#800000": "maroon",
    "#008000": "dark-green",
    "#000080": "navy",
    "#808000": "olive",
    "#800080": "purple",
    "#008080": "teal",
    "#007bff": "primary-blue",
    "#28a745": "success-green",
    "#dc3545": "danger-red",
    "#ffc107": "warning-yellow",
    "#17a2b8": "info-cyan",
    "#6c757d": "secondary-gray",
    "#f8f9fa": "light-gray",
    "#343a40": "dark-gray",
}

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_COLOR_FUNCTION_RE = re.compile(r"^(?:rgba?|hsla?)\(", re.IGNORECASE)
_SIZE_VALUE_RE = re.compile(
    r"^-?(?:\d+(?:\.\d+)?|\.\d+)(?:px|em|rem|%|vh|vw|vmin|vmax|pt|pc|in|cm|mm|ex|ch)$"
)
_NON_ALNUM_RE = re.compile(r"[^a-zA-Z0-9]+")

_SKIPPED_PROPERTIES = frozenset({KEYFRAMES_BLOCK, RAW_BLOCK})


def is_color_value(value: str) -> bool:
    return bool(
        _HEX_RE.match(value)
        or _COLOR_FUNCTION_RE.match(value)
        or value.lower() in NAMED_COLORS
    )


def is_size_value(value: str) -> bool:
    return bool(_SIZE_VALUE_RE.match(value))


def categorize(property: str, value: str) -> Category:
    """Categorise a declaration: color, then size, then font, else other."""
    if property in COLOR_PROPERTIES or is_color_value(value):
        return Category.COLOR
    if property in SIZE_PROPERTIES or is_size_value(value):
        return Category.SIZE
    if property in FONT_PROPERTIES:
        return Category.FONT
    return Category.OTHER


def sanitize(value: str) -> str:
    """Lower-case hyphenated token for use inside a variable name."""
    return _NON_ALNUM_RE.sub("-", value).strip("-").lower() or "value"


def semantic_color_name(hex_color: str) -> str | None:
    return SEMANTIC_COLOR_NAMES.get(hex_color.lower())


def suggest_name(property: str, value: str, category: Category, prefix: str = "$") -> str:
    """Deterministic variable name for a (property, value) pair."""
    clean = sanitize(value)

    if category is Category.COLOR:
        if value.startswith("#"):
            return f"{prefix}color-{semantic_color_name(value) or clean}"
        return f"{prefix}color-{clean}"

    if category is Category.SIZE:
        special = {"inherit": "inherit", "auto": "auto", "0": "0", "100%": "full"}
        if value in special:
            return f"{prefix}size-{special[value]}"
        if "font-size" in property:
            return f"{prefix}text-{clean}"
        if "padding" in property:
            return f"{prefix}p-{clean}"
        if "margin" in property:
            return f"{prefix}m-{clean}"
        if "border-radius" in property:
            return f"{prefix}rounded-{clean}"
        if "width" in property or "height" in property:
            return f"{prefix}size-{clean}"
        return f"{prefix}spacing-{clean}"

    if category is Category.FONT:
        if property == "font-size":
            return f"{prefix}text-{clean}"
        return f"{prefix}font-{clean}"

    return f"{prefix}{property}-{clean}"


class VariableExtractor:
    """Per-conversion variable analysis.

    A fresh instance is used for every document so that learned values never
    leak between conversions.
    """

    def __init__(
        self, options: ConversionOptions | None = None, event_bus: EventBus | None = None
    ) -> None:
        self.options = options or ConversionOptions()
        self.event_bus = event_bus
        self.candidates: dict[tuple[str, str], VariableCandidate] = {}
        self.variables: dict[tuple[Category, str], ExtractedVariable] = {}

    def category_enabled(self, category: Category) -> bool:
        return {
            Category.COLOR: self.options.extract_colors,
            Category.SIZE: self.options.extract_sizes,
            Category.FONT: self.options.extract_fonts,
            Category.OTHER: self.options.extract_others,
        }[category]

    def _eligible(self, decl: Declaration) -> bool:
        if decl.is_comment or not decl.value:
            return False
        assert decl.property is not None
        return decl.property not in _SKIPPED_PROPERTIES and not decl.property.startswith("--")

    def analyze(self, rules: list[ParsedRule]) -> dict[tuple[str, str], VariableCandidate]:
        """Count every enabled (property, value) pair across *rules*."""
        for rule in rules:
            for decl in rule.declarations:
                if not self._eligible(decl):
                    continue
                assert decl.property is not None
                category = categorize(decl.property, decl.value)
                if not self.category_enabled(category):
                    continue
                key = (decl.property, decl.value)
                candidate = self.candidates.get(key)
                if candidate is None:
                    candidate = self.candidates[key] = VariableCandidate(
                        value=decl.value,
                        property=decl.property,
                        category=category,
                        suggested_name=suggest_name(
                            decl.property, decl.value, category, self.options.variable_prefix
                        ),
                    )
                candidate.occurrences += 1
                candidate.contexts.append(rule.selector)
        return self.candidates

    def extract(self) -> list[ExtractedVariable]:
        """Promote merged candidates that reach ``min_occurrences``."""
        groups: dict[tuple[Category, str], list[VariableCandidate]] = {}
        for candidate in self.candidates.values():
            groups.setdefault((candidate.category, candidate.value), []).append(candidate)

        taken: set[str] = set()
        for key, candidates in groups.items():
            total = sum(c.occurrences for c in candidates)
            if total < self.options.min_occurrences:
                continue
            best = max(candidates, key=lambda c: c.occurrences)
            name = best.suggested_name
            counter = 1
            while name in taken:
                name = f"{best.suggested_name}-{counter}"
                counter += 1
            taken.add(name)
            variable = ExtractedVariable(
                name=name, value=best.value, category=best.category, occurrences=total
            )
            self.variables[key] = variable
            if self.event_bus is not None:
                self.event_bus.emit(
                    events.VariableExtracted(name, variable.value, variable.category.value, total)
                )
        return list(self.variables.values())

    def rewrite(self, rules: list[ParsedRule]) -> int:
        """Replace literal values with variable references; returns the count.

        Style rules that change get their declaration hash recomputed.
        """
        replaced = 0
        for rule in rules:
            before = replaced
            for decl in rule.declarations:
                if not self._eligible(decl):
                    continue
                assert decl.property is not None
                category = categorize(decl.property, decl.value)
                if not self.category_enabled(category):
                    continue
                variable = self.variables.get((category, decl.value))
                if variable is None:
                    continue
                decl.original_value = decl.value
                decl.value = variable.name
                replaced += 1
            if replaced != before and rule.kind is RuleKind.STYLE:
                rule.hash = declaration_hash(rule.declarations)
        return replaced

    def run(self, rules: list[ParsedRule]) -> list[ExtractedVariable]:
        """Analyze, extract and rewrite in one pass."""
        self.analyze(rules)
        variables = self.extract()
        self.rewrite(rules)
        return variables
