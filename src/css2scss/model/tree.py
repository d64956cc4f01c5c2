"""Nesting tree model: NestedRule nodes and per-media-query trees."""

from __future__ import annotations

from dataclasses import dataclass, field

from css2scss.model.rule import BEMInfo, Declaration, RuleKind
from css2scss.selectors import split_selector_list


@dataclass
class NestedRule:
    """A tree node keyed by its selector fragment.

    Children are keyed by fragment, so each parent holds at most one node per
    fragment. Opaque at-rules sharing a prelude get distinct keys instead.
    """

    selector: str = ""
    declarations: list[Declaration] = field(default_factory=list)
    children: dict[str, NestedRule] = field(default_factory=dict)
    bem_info: BEMInfo | None = None
    kind: RuleKind = RuleKind.STYLE

    def child(self, fragment: str, bem_info: BEMInfo | None = None) -> NestedRule:
        """Return the child for *fragment*, creating it on first use."""
        node = self.children.get(fragment)
        if node is None:
            node = NestedRule(selector=fragment, bem_info=bem_info)
            self.children[fragment] = node
        return node

    def add_at_rule(self, node: NestedRule) -> None:
        """Attach an at-rule node without merging it into a same-named sibling."""
        key = node.selector
        counter = 1
        while key in self.children:
            counter += 1
            key = f"{node.selector}#{counter}"
        self.children[key] = node

    @property
    def is_empty(self) -> bool:
        if self.kind is RuleKind.STATEMENT:
            return False
        return not self.declarations and not self.children

    def depth(self) -> int:
        """Number of levels below this node (0 for a leaf)."""
        if not self.children:
            return 0
        return 1 + max(child.depth() for child in self.children.values())


@dataclass
class MediaTree:
    """The nesting tree for one media-query scope ('' for top level)."""

    query: str
    root: NestedRule


def resolve_fragment(parent: str, fragment: str) -> str:
    """Combine a nested *fragment* with its *parent* selector text.

    ``&`` is replaced by the parent; any other fragment is a descendant.
    Comma lists on either side expand to every combination.
    """
    if not parent:
        return fragment
    parents = split_selector_list(parent)
    fragments = split_selector_list(fragment)
    combined = []
    for p in parents:
        for f in fragments:
            if "&" in f:
                combined.append(f.replace("&", p))
            else:
                combined.append(f"{p} {f}")
    return ", ".join(combined)


def flatten(root: NestedRule) -> list[tuple[str, list[Declaration]]]:
    """Walk the tree and return (fully-qualified selector, declarations) pairs.

    Only style nodes carrying property declarations are reported; at-rule
    nodes are reported under their own prelude.
    """
    flat: list[tuple[str, list[Declaration]]] = []

    def walk(node: NestedRule, selector: str) -> None:
        for child in node.children.values():
            if child.kind.is_at_rule:
                flat.append((child.selector, list(child.declarations)))
                continue
            full = resolve_fragment(selector, child.selector)
            props = [d for d in child.declarations if not d.is_comment]
            if props:
                flat.append((full, props))
            walk(child, full)

    walk(root, "")
    return flat
