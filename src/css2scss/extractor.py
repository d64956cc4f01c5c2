"""Rule extraction: flatten a tinycss2 AST into ParsedRule records."""

from __future__ import annotations

import re
from typing import Any

import tinycss2

from css2scss.bem import parse_bem
from css2scss.config import ConversionOptions
from css2scss.dedup import declaration_hash
from css2scss.errors import ParseError
from css2scss.events import types as events
from css2scss.events.bus import EventBus
from css2scss.model.rule import (
    COMMENT_SELECTOR,
    KEYFRAMES_BLOCK,
    RAW_BLOCK,
    Declaration,
    ParsedRule,
    RuleKind,
)
from css2scss.selectors import (
    dangling_combinator,
    normalize_selector,
    specificity,
    split_selector_list,
)

# Keyframe step selectors that escaped their @keyframes block.
_ORPHAN_KEYFRAME_RE = re.compile(r"^(?:\d+(?:\.\d+)?%|from|to)$")


def _raise_parse_error(node: Any) -> None:
    raise ParseError(node.message, line=node.source_line, column=node.source_column)


def _serialize_prelude(node: Any) -> str:
    # Comment tokens inside a selector or prelude never reach the output.
    return tinycss2.serialize(t for t in node.prelude if t.type != "comment")


def _prelude_text(node: Any) -> str:
    return " ".join(_serialize_prelude(node).split())


class RuleExtractor:
    """Walks a parsed stylesheet in document order and emits flat rules.

    One ParsedRule is produced per selector of a selector list, each with its
    own copy of the declarations. ``@media`` blocks set the media scope of the
    rules they contain; keyframes and other block at-rules become single opaque
    rules.
    """

    def __init__(
        self, options: ConversionOptions | None = None, event_bus: EventBus | None = None
    ) -> None:
        self.options = options or ConversionOptions()
        self.event_bus = event_bus
        self._rules: list[ParsedRule] = []

    def extract(self, css: str) -> list[ParsedRule]:
        """Parse *css* and return its rules; raises ParseError on bad input."""
        self._rules = []
        nodes = tinycss2.parse_stylesheet(
            css,
            skip_comments=not self.options.preserve_comments,
            skip_whitespace=True,
        )
        self._walk(nodes, media_query=None)
        return self._rules

    def _emit(self, event: Any) -> None:
        if self.event_bus is not None:
            self.event_bus.emit(event)

    def _walk(self, nodes: list[Any], media_query: str | None) -> None:
        for node in nodes:
            if node.type == "error":
                _raise_parse_error(node)
            elif node.type == "comment":
                self._comment(node.value, media_query)
            elif node.type == "qualified-rule":
                self._style_rule(node, media_query)
            elif node.type == "at-rule":
                self._at_rule(node, media_query)

    def _comment(self, text: str, media_query: str | None) -> None:
        if not self.options.preserve_comments:
            return
        self._rules.append(
            ParsedRule(
                selector=COMMENT_SELECTOR,
                declarations=[Declaration.comment(text.strip())],
                media_query=media_query,
                hash=f"comment-{len(self._rules)}",
                kind=RuleKind.COMMENT,
            )
        )

    def _style_rule(self, node: Any, media_query: str | None) -> None:
        selector_text = _serialize_prelude(node)
        items = tinycss2.parse_blocks_contents(
            node.content,
            skip_comments=not self.options.preserve_comments,
            skip_whitespace=True,
        )
        declarations = self._declarations(items, selector_text.strip())
        digest = declaration_hash(declarations)

        selectors = [normalize_selector(raw) for raw in split_selector_list(selector_text)]
        for selector in selectors or [""]:
            if dangling_combinator(selector):
                raise ParseError(
                    f"Incomplete selector {selector!r}",
                    line=node.source_line,
                    column=node.source_column,
                )

        for selector in selectors:
            if _ORPHAN_KEYFRAME_RE.match(selector):
                self._emit(events.RuleSkipped(selector, "keyframe step outside @keyframes"))
                continue
            self._rules.append(
                ParsedRule(
                    selector=selector,
                    declarations=[d.copy() for d in declarations],
                    specificity=specificity(selector),
                    bem_info=parse_bem(selector) if self.options.enable_bem else None,
                    media_query=media_query,
                    hash=digest,
                )
            )

    def _declarations(self, items: list[Any], owner: str) -> list[Declaration]:
        """Build a declaration list; a repeated property (same !important) keeps the last value."""
        declarations: list[Declaration] = []
        for item in items:
            if item.type == "error":
                _raise_parse_error(item)
            elif item.type == "comment":
                declarations.append(Declaration.comment(item.value.strip()))
            elif item.type == "declaration":
                name = item.name if item.name.startswith("--") else item.lower_name
                declarations = [
                    d
                    for d in declarations
                    if d.is_comment or (d.property, d.important) != (name, item.important)
                ]
                declarations.append(
                    Declaration(
                        property=name,
                        value=tinycss2.serialize(item.value).strip(),
                        important=item.important,
                    )
                )
            else:
                self._emit(events.RuleSkipped(owner, "nested rules are not supported"))
        return declarations

    def _at_rule(self, node: Any, media_query: str | None) -> None:
        name = node.lower_at_keyword
        prelude = _prelude_text(node)
        selector = f"@{name} {prelude}" if prelude else f"@{name}"

        if node.content is None:
            self._rules.append(
                ParsedRule(
                    selector=selector,
                    media_query=media_query,
                    hash=f"statement-{len(self._rules)}",
                    kind=RuleKind.STATEMENT,
                )
            )
            return

        if name == "media":
            nested = tinycss2.parse_rule_list(
                node.content,
                skip_comments=not self.options.preserve_comments,
                skip_whitespace=True,
            )
            self._walk(nested, media_query=prelude)
            return

        if name.endswith("keyframes"):
            body = tinycss2.serialize(node.content).strip()
            self._rules.append(
                ParsedRule(
                    selector=selector,
                    declarations=[Declaration(property=KEYFRAMES_BLOCK, value=body)],
                    media_query=media_query,
                    hash=f"keyframes-{name}-{prelude}",
                    kind=RuleKind.KEYFRAMES,
                )
            )
            return

        items = tinycss2.parse_blocks_contents(
            node.content,
            skip_comments=not self.options.preserve_comments,
            skip_whitespace=True,
        )
        if any(item.type in ("qualified-rule", "at-rule") for item in items):
            body = tinycss2.serialize(node.content).strip()
            declarations = [Declaration(property=RAW_BLOCK, value=body)]
        else:
            declarations = self._declarations(items, selector)
        self._rules.append(
            ParsedRule(
                selector=selector,
                declarations=declarations,
                media_query=media_query,
                hash=f"at-rule-{len(self._rules)}",
                kind=RuleKind.AT_RULE,
            )
        )


def extract_rules(css: str, options: ConversionOptions | None = None) -> list[ParsedRule]:
    """Convenience wrapper around :class:`RuleExtractor`."""
    return RuleExtractor(options).extract(css)
