"""SCSS text emission."""

from __future__ import annotations

import re

from css2scss.config import ConversionOptions
from css2scss.model.rule import KEYFRAMES_BLOCK, RAW_BLOCK, Declaration, RuleKind
from css2scss.model.tree import MediaTree, NestedRule
from css2scss.model.variable import Category, ExtractedVariable

_KEYFRAME_SELECTOR = r"(?:\d+(?:\.\d+)?%|from|to)"
_KEYFRAME_STEP_RE = re.compile(
    rf"({_KEYFRAME_SELECTOR}(?:\s*,\s*{_KEYFRAME_SELECTOR})*)\s*\{{([^}}]*)\}}"
)
_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)


def _child_sort_key(key: str) -> str:
    # Elements (&__) sort before modifiers (&--) and other & fragments.
    if key.startswith("&__"):
        return "&\x00" + key[3:]
    if key.startswith("&--"):
        return "&\x01" + key[3:]
    return key


def parse_keyframe_steps(body: str) -> list[tuple[str, list[tuple[str, str]]]]:
    """Split a verbatim keyframes body into ``(selector, [(property, value)])`` steps.

    Repeated properties within a step keep their last value.
    """
    steps: list[tuple[str, list[tuple[str, str]]]] = []
    for match in _KEYFRAME_STEP_RE.finditer(_COMMENT_RE.sub("", body)):
        selector = ", ".join(part.strip() for part in match.group(1).split(","))
        properties: dict[str, str] = {}
        for chunk in match.group(2).split(";"):
            prop, sep, value = chunk.partition(":")
            if not sep or not prop.strip() or not value.strip():
                continue
            properties[prop.strip()] = " ".join(value.split())
        steps.append((selector, list(properties.items())))
    return steps


class ScssFormatter:
    """Depth-first, pre-order SCSS writer for nesting trees."""

    def __init__(self, options: ConversionOptions | None = None) -> None:
        self.options = options or ConversionOptions()

    def indent(self, depth: int) -> str:
        return self.options.indent_unit * depth

    # -- variables -----------------------------------------------------------

    def format_variables(self, variables: list[ExtractedVariable]) -> str:
        if not variables:
            return ""
        lines = ["// Variables"]
        for category in Category:
            members = sorted(
                (v for v in variables if v.category is category), key=lambda v: v.name
            )
            if not members:
                continue
            lines.append("")
            lines.append(category.heading)
            lines.extend(f"{v.name}: {v.value};" for v in members)
        return "\n".join(lines) + "\n"

    # -- tree ----------------------------------------------------------------

    def _declaration_line(self, decl: Declaration, depth: int) -> str:
        if decl.is_comment:
            return f"{self.indent(depth)}/* {decl.value} */"
        important = " !important" if decl.important else ""
        return f"{self.indent(depth)}{decl.property}: {decl.value}{important};"

    def _ordered_declarations(self, declarations: list[Declaration]) -> list[Declaration]:
        if not self.options.sort_properties:
            return declarations
        comments = [d for d in declarations if d.is_comment]
        props = sorted((d for d in declarations if not d.is_comment), key=lambda d: d.property)
        return comments + props

    def _ordered_children(self, node: NestedRule) -> list[NestedRule]:
        if not self.options.sort_properties:
            return list(node.children.values())
        # Statements (@use, @import, @charset) stay first, in source order.
        statements = [c for c in node.children.values() if c.kind is RuleKind.STATEMENT]
        others = sorted(
            (k for k, c in node.children.items() if c.kind is not RuleKind.STATEMENT),
            key=_child_sort_key,
        )
        return statements + [node.children[k] for k in others]

    def format_tree(self, root: NestedRule) -> str:
        """Render a whole tree; root comments first, then its children."""
        lines: list[str] = []
        comments = [d for d in root.declarations if d.is_comment]
        if comments:
            lines.extend(f"/* {d.value} */" for d in comments)
            lines.append("")
        for child in self._ordered_children(root):
            self._format_node(child, 0, lines)
        return "\n".join(lines) + "\n" if lines else ""

    def _format_node(self, node: NestedRule, depth: int, lines: list[str]) -> None:
        if node.is_empty:
            return
        if node.kind is RuleKind.STATEMENT:
            lines.append(f"{self.indent(depth)}{node.selector};")
            if depth == 0:
                lines.append("")
            return
        if node.kind is RuleKind.KEYFRAMES:
            self._format_keyframes(node, depth, lines)
            return
        if node.kind is RuleKind.AT_RULE:
            self._format_at_rule(node, depth, lines)
            return

        lines.append(f"{self.indent(depth)}{node.selector} {{")
        declarations = self._ordered_declarations(node.declarations)
        lines.extend(self._declaration_line(d, depth + 1) for d in declarations)
        children = [c for c in self._ordered_children(node) if not c.is_empty]
        if declarations and children:
            lines.append("")
        for child in children:
            self._format_node(child, depth + 1, lines)
        lines.append(f"{self.indent(depth)}}}")
        if depth == 0:
            lines.append("")

    def _format_keyframes(self, node: NestedRule, depth: int, lines: list[str]) -> None:
        lines.append(f"{self.indent(depth)}{node.selector} {{")
        for decl in node.declarations:
            if decl.property != KEYFRAMES_BLOCK:
                continue
            for selector, properties in parse_keyframe_steps(decl.value):
                lines.append(f"{self.indent(depth + 1)}{selector} {{")
                lines.extend(
                    f"{self.indent(depth + 2)}{prop}: {value};" for prop, value in properties
                )
                lines.append(f"{self.indent(depth + 1)}}}")
        lines.append(f"{self.indent(depth)}}}")
        lines.append("")

    def _format_at_rule(self, node: NestedRule, depth: int, lines: list[str]) -> None:
        lines.append(f"{self.indent(depth)}{node.selector} {{")
        for decl in node.declarations:
            if decl.property == RAW_BLOCK:
                lines.extend(self._reindent(decl.value, depth + 1))
            else:
                lines.append(self._declaration_line(decl, depth + 1))
        lines.append(f"{self.indent(depth)}}}")
        lines.append("")

    def _reindent(self, body: str, depth: int) -> list[str]:
        """Re-indent a verbatim block body by brace nesting."""
        out: list[str] = []
        level = depth
        for raw in body.splitlines():
            line = raw.strip()
            if not line:
                continue
            if line.startswith("}"):
                level = max(level - 1, depth)
            out.append(f"{self.indent(level)}{line}")
            level += line.count("{") - line.count("}") + (1 if line.startswith("}") else 0)
            level = max(level, depth)
        return out

    # -- document ------------------------------------------------------------

    def wrap_media(self, query: str, content: str) -> str:
        unit = self.indent(1)
        body = "\n".join(unit + line if line.strip() else line for line in content.split("\n"))
        return f"@media {query} {{\n{body.rstrip()}\n}}\n"

    def format_document(
        self, trees: list[MediaTree], variables: list[ExtractedVariable] | None = None
    ) -> str:
        """Variables header, then every tree (media trees wrapped in @media)."""
        parts: list[str] = []
        header = self.format_variables(variables or [])
        if header:
            parts.append(header)
        for tree in trees:
            content = self.format_tree(tree.root)
            if not content.strip():
                continue
            parts.append(self.wrap_media(tree.query, content) if tree.query else content)
        text = "\n\n".join(part.strip("\n") for part in parts).strip()
        return text + "\n" if text else ""
