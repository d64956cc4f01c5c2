"""Nesting tree construction.

Every rule is turned into a path of selector fragments from the root, e.g.
``.card__body__actions__button:hover`` becomes::

    .card > &__body > &__actions > &__button > &:hover

and its declarations are attached to the node at the end of the path. Nodes
are keyed by fragment, so rules resolving to the same path share one node.

Three strategies produce paths, chosen by priority:

* BEM: single-class BEM selectors nest elements, modifiers and pseudo suffixes
  under one block node. Everything else falls through to smart nesting.
* Smart: rules are grouped under the first compound of their selector with
  pseudo-classes stripped. Extensions of that compound nest as ``&<suffix>``,
  descendants nest as plain compounds.
* Basic: the selector's compounds, one level each.

Paths longer than ``max_nesting_depth`` are folded so that the deepest node
holds the remaining fragments as one compound selector.
"""

from __future__ import annotations

from css2scss.bem import bem_suffix
from css2scss.config import ConversionOptions
from css2scss.dedup import MediaGroup
from css2scss.model.rule import BEMInfo, ParsedRule, RuleKind
from css2scss.model.tree import MediaTree, NestedRule, resolve_fragment
from css2scss.selectors import base_pattern, has_top_level_comma, split_compounds

Path = list[tuple[str, "BEMInfo | None"]]


def bem_path(rule: ParsedRule) -> Path:
    info = rule.bem_info
    assert info is not None
    path: Path = [(f".{info.block}", BEMInfo(block=info.block))]
    for index, element in enumerate(info.elements):
        path.append(
            (f"&__{element}", BEMInfo(block=info.block, elements=info.elements[: index + 1]))
        )
    if info.modifier:
        path.append((f"&--{info.modifier}", info))
    suffix = bem_suffix(rule.selector)
    if suffix:
        path.append((f"&{suffix}", None))
    return path


def smart_path(selector: str) -> Path:
    if has_top_level_comma(selector):
        return [(selector, None)]
    pattern = base_pattern(selector)
    compounds = split_compounds(selector)
    path: Path = [(pattern, None)]
    first = compounds[0]
    if first != pattern:
        path.append(("&" + first[len(pattern) :], None))
    path.extend((compound, None) for compound in compounds[1:])
    return path


def basic_path(selector: str) -> Path:
    if has_top_level_comma(selector):
        return [(selector, None)]
    return [(compound, None) for compound in split_compounds(selector)]


def fold_path(path: Path, max_depth: int) -> Path:
    """Fold fragments beyond *max_depth* into the last allowed level."""
    if len(path) <= max_depth:
        return path
    keep = path[: max_depth - 1]
    folded = path[max_depth - 1][0]
    for fragment, _ in path[max_depth:]:
        folded = resolve_fragment(folded, fragment)
    return keep + [(folded, None)]


class TreeBuilder:
    """Builds one NestedRule tree from the rules of a single media scope."""

    def __init__(self, options: ConversionOptions | None = None) -> None:
        self.options = options or ConversionOptions()

    def path_for(self, rule: ParsedRule) -> Path:
        opts = self.options
        if opts.enable_bem and rule.bem_info is not None:
            path = bem_path(rule)
        elif opts.enable_bem or opts.enable_smart_nesting:
            path = smart_path(rule.selector)
        else:
            path = basic_path(rule.selector)
        return fold_path(path, opts.max_nesting_depth)

    def build(self, rules: list[ParsedRule]) -> NestedRule:
        root = NestedRule()
        for rule in rules:
            if rule.kind is RuleKind.COMMENT:
                root.declarations.extend(d.copy() for d in rule.declarations)
            elif rule.kind.is_at_rule:
                root.add_at_rule(
                    NestedRule(
                        selector=rule.selector,
                        declarations=[d.copy() for d in rule.declarations],
                        kind=rule.kind,
                    )
                )
            else:
                self.insert(root, rule)
        return root

    def insert(self, root: NestedRule, rule: ParsedRule) -> NestedRule:
        """Place *rule* in the tree and return the node holding its declarations."""
        node = root
        for fragment, bem_info in self.path_for(rule):
            node = node.child(fragment, bem_info)
        node.declarations.extend(d.copy() for d in rule.declarations)
        return node

    def build_trees(self, groups: list[MediaGroup]) -> list[MediaTree]:
        return [MediaTree(query=group.query, root=self.build(group.rules)) for group in groups]
