"""Conversion pipeline: CSS text in, SCSS text out.

    extract -> variables -> duplicates -> media buckets -> trees -> text

Each step can be switched off through :class:`ConversionOptions`. All state
lives inside one :meth:`Converter.build` call.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from css2scss.config import ConversionOptions
from css2scss.dedup import detect_and_merge_duplicates, group_by_media_query
from css2scss.errors import ParseError
from css2scss.events import types as events
from css2scss.events.bus import EventBus
from css2scss.extractor import RuleExtractor
from css2scss.formatter import ScssFormatter
from css2scss.model.rule import ParsedRule
from css2scss.model.tree import MediaTree
from css2scss.model.variable import ExtractedVariable
from css2scss.nesting import TreeBuilder
from css2scss.variables import VariableExtractor


@dataclass
class ConversionResult:
    """The SCSS text together with the intermediate products that built it."""

    scss: str
    rules: list[ParsedRule] = field(default_factory=list)
    trees: list[MediaTree] = field(default_factory=list)
    variables: list[ExtractedVariable] = field(default_factory=list)

    def tree(self, query: str = "") -> MediaTree | None:
        """Return the tree for *query* ('' for the top-level scope)."""
        for tree in self.trees:
            if tree.query == query:
                return tree
        return None


class Converter:
    """Configurable CSS to SCSS converter.

    A converter holds only its options and event bus, so one instance can
    convert any number of documents independently.
    """

    def __init__(
        self,
        options: ConversionOptions | None = None,
        *,
        event_bus: EventBus | None = None,
    ) -> None:
        self.options = options or ConversionOptions()
        self.event_bus = event_bus or EventBus()

    def build(self, css: str) -> ConversionResult:
        """Run the full pipeline and return text plus intermediate products."""
        opts = self.options
        bus = self.event_bus
        bus.emit(events.ConversionStarted(source_length=len(css)))

        try:
            rules = RuleExtractor(opts, bus).extract(css)
        except ParseError as exc:
            bus.emit(events.ConversionFailed(error=str(exc)))
            raise

        variables: list[ExtractedVariable] = []
        if opts.enable_variable_extraction:
            variables = VariableExtractor(opts, bus).run(rules)

        if opts.enable_duplicate_detection:
            rules = detect_and_merge_duplicates(rules, bus)

        groups = group_by_media_query(rules, consolidate=opts.enable_media_query_grouping)
        trees = TreeBuilder(opts).build_trees(groups)
        scss = ScssFormatter(opts).format_document(trees, variables)

        bus.emit(
            events.ConversionCompleted(
                rule_count=len(rules),
                variable_count=len(variables),
                output_length=len(scss),
            )
        )
        return ConversionResult(scss=scss, rules=rules, trees=trees, variables=variables)

    def convert(self, css: str) -> str:
        """Convert *css* to SCSS text; raises ParseError on malformed input."""
        return self.build(css).scss


def convert(
    css: str,
    options: ConversionOptions | None = None,
    *,
    event_bus: EventBus | None = None,
) -> str:
    """Convert *css* with a one-off :class:`Converter`."""
    return Converter(options, event_bus=event_bus).convert(css)
