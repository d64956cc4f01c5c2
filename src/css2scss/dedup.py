"""Duplicate detection and media-query bucketing.

Rules are merged only when they share a media scope and carry exactly the same
declarations, independent of order. Selector text never takes part in the
comparison.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field

from css2scss.events import types as events
from css2scss.events.bus import EventBus
from css2scss.model.rule import Declaration, ParsedRule, RuleKind


def declaration_key(declarations: list[Declaration]) -> str:
    """Sorted ``property:value[!important]`` list; comments are ignored."""
    return ";".join(sorted(d.signature for d in declarations if not d.is_comment))


def declaration_hash(declarations: list[Declaration]) -> str:
    return hashlib.sha1(declaration_key(declarations).encode("utf-8")).hexdigest()[:16]


def _same_declarations(a: ParsedRule, b: ParsedRule) -> bool:
    # Compared in full (comments included) beyond the hash bucket.
    return sorted(d.signature for d in a.declarations) == sorted(
        d.signature for d in b.declarations
    )


def _mergeable(rule: ParsedRule) -> bool:
    return rule.kind is RuleKind.STYLE and bool(rule.property_declarations)


def detect_and_merge_duplicates(
    rules: list[ParsedRule], event_bus: EventBus | None = None
) -> list[ParsedRule]:
    """Collapse same-scope rules with identical declarations into one rule.

    The merged rule takes the place of its first member and its selector is
    the comma-joined list of member selectors in source order. All other rules
    keep their relative order.
    """
    buckets: dict[tuple[str | None, str], list[int]] = {}
    for index, rule in enumerate(rules):
        if not _mergeable(rule):
            continue
        key = (rule.media_query, declaration_hash(rule.declarations))
        buckets.setdefault(key, []).append(index)

    replacements: dict[int, ParsedRule] = {}
    absorbed: set[int] = set()
    for (media_query, digest), indexes in buckets.items():
        if len(indexes) < 2:
            continue
        groups: list[list[int]] = []
        for index in indexes:
            for group in groups:
                if _same_declarations(rules[group[0]], rules[index]):
                    group.append(index)
                    break
            else:
                groups.append([index])

        for group in groups:
            if len(group) < 2:
                continue
            selectors = tuple(dict.fromkeys(rules[i].selector for i in group))
            first = rules[group[0]]
            if len(selectors) == 1:
                merged = first.clone(hash=digest)
            else:
                merged = first.clone(
                    selector=", ".join(selectors), bem_info=None, hash=digest
                )
            replacements[group[0]] = merged
            absorbed.update(group[1:])
            if event_bus is not None:
                event_bus.emit(events.DuplicatesMerged(selectors, media_query))

    return [
        replacements.get(index, rule)
        for index, rule in enumerate(rules)
        if index not in absorbed
    ]


@dataclass
class MediaGroup:
    """Rules sharing one media scope; ``query`` is '' for the top level."""

    query: str
    rules: list[ParsedRule] = field(default_factory=list)


def group_by_media_query(
    rules: list[ParsedRule], consolidate: bool = True
) -> list[MediaGroup]:
    """Bucket rules by media scope.

    With *consolidate*, all rules of a query land in one group placed at the
    query's first appearance. Without it, each contiguous run of same-scope
    rules forms its own group, keeping source interleaving.
    """
    groups: list[MediaGroup] = []
    by_query: dict[str, MediaGroup] = {}
    for rule in rules:
        query = rule.media_query or ""
        if consolidate:
            group = by_query.get(query)
            if group is None:
                group = by_query[query] = MediaGroup(query)
                groups.append(group)
        else:
            if not groups or groups[-1].query != query:
                groups.append(MediaGroup(query))
            group = groups[-1]
        group.rules.append(rule)
    return groups
