"""Selector tokenizer.

Every helper here scans selector text once, tracking quotes, escapes and
bracket/paren depth, so that commas, spaces and colons inside ``[attr="a, b"]``
or ``:not(.a .b)`` are never mistaken for structure.
"""

from __future__ import annotations

from typing import Iterator

COMBINATORS = frozenset(">+~")


def _walk(text: str) -> Iterator[tuple[int, str, bool]]:
    """Yield ``(index, char, top_level)`` for every character of *text*.

    A character is top-level when it sits outside quotes, brackets and parens
    and is not escaped. Opening ``(``/``[`` are reported as top-level.
    """
    depth = 0
    quote: str | None = None
    escaped = False
    for i, ch in enumerate(text):
        if escaped:
            escaped = False
            yield i, ch, False
        elif ch == "\\":
            escaped = True
            yield i, ch, False
        elif quote:
            if ch == quote:
                quote = None
            yield i, ch, False
        elif ch in "\"'":
            quote = ch
            yield i, ch, False
        elif ch in "([":
            yield i, ch, depth == 0
            depth += 1
        elif ch in ")]":
            depth = max(depth - 1, 0)
            yield i, ch, False
        else:
            yield i, ch, depth == 0


def split_selector_list(text: str) -> list[str]:
    """Split a selector list on top-level commas."""
    parts: list[str] = []
    start = 0
    for i, ch, top in _walk(text):
        if top and ch == ",":
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return [p.strip() for p in parts if p.strip()]


def normalize_selector(text: str) -> str:
    """Collapse whitespace and space combinators as ``a > b``."""
    out: list[str] = []
    pending_space = False
    for _, ch, top in _walk(text.strip()):
        if top and ch.isspace():
            pending_space = True
            continue
        if top and ch in COMBINATORS:
            while out and out[-1] == " ":
                out.pop()
            out.append(f" {ch} ")
            pending_space = False
            continue
        if pending_space and out and not out[-1].endswith(" "):
            out.append(" ")
        pending_space = False
        out.append(ch)
    return "".join(out).strip()


def has_top_level_comma(selector: str) -> bool:
    return any(top and ch == "," for _, ch, top in _walk(selector))


def _tokens(selector: str) -> list[str]:
    """Space-separated compounds and combinators of a normalized selector."""
    tokens: list[str] = []
    start = 0
    text = normalize_selector(selector)
    for i, ch, top in _walk(text):
        if top and ch == " ":
            tokens.append(text[start:i])
            start = i + 1
    tokens.append(text[start:])
    return [t for t in tokens if t]


def dangling_combinator(selector: str) -> bool:
    """True when the selector is empty or a combinator lacks a compound on either side.

    ``>``, ``.a >``, ``> .a`` and ``.a > > .b`` all qualify.
    """
    expect_compound = True
    for token in _tokens(selector):
        is_combinator = token in COMBINATORS
        if is_combinator and expect_compound:
            return True
        expect_compound = is_combinator
    return expect_compound


def split_compounds(selector: str) -> list[str]:
    """Split a selector into compound parts, keeping combinators attached.

    ``.nav > ul li`` becomes ``['.nav', '> ul', 'li']``.
    """
    parts: list[str] = []
    combinator = ""
    for token in _tokens(selector):
        if token in COMBINATORS:
            combinator = token
            continue
        parts.append(f"{combinator} {token}" if combinator else token)
        combinator = ""
    return parts


def split_structural_suffix(compound: str) -> tuple[str, str]:
    """Split a compound at its first top-level pseudo or attribute selector.

    ``.btn[disabled]:hover`` gives ``('.btn', '[disabled]:hover')``.
    """
    for i, ch, top in _walk(compound):
        if top and ch in ":[":
            return compound[:i], compound[i:]
    return compound, ""


def pseudo_suffix(compound: str) -> str:
    """Return the compound's text from its first top-level ``:`` onwards."""
    for i, ch, top in _walk(compound):
        if top and ch == ":":
            return compound[i:]
    return ""


def base_pattern(selector: str) -> str:
    """The grouping key used by smart nesting.

    Merged (comma-joined) selectors are their own pattern. Otherwise it is the
    first compound with its pseudo-classes stripped.
    """
    if has_top_level_comma(selector):
        return selector
    compounds = split_compounds(selector)
    if not compounds:
        return selector
    first = compounds[0]
    suffix = pseudo_suffix(first)
    head = first[: len(first) - len(suffix)] if suffix else first
    return head or first


def specificity(selector: str) -> tuple[int, int, int]:
    """Return ``(ids, classes, elements)`` counts for a single selector."""
    ids = classes = elements = 0
    for compound in split_compounds(selector):
        if compound[0] in COMBINATORS:
            compound = compound[2:]
        if compound[:1].isalpha():
            elements += 1
        skip_next = False
        for i, ch, top in _walk(compound):
            if skip_next:
                skip_next = False
                continue
            if not top:
                continue
            if ch == "#":
                ids += 1
            elif ch in ".[":
                classes += 1
            elif ch == ":":
                if compound[i + 1 : i + 2] == ":":
                    elements += 1
                    skip_next = True
                else:
                    classes += 1
    return ids, classes, elements
