"""BEM (Block__Element--Modifier) selector classification.

Grammar, matched by a single left-to-right scan::

    .block(__element)*(--modifier)?

``block``, ``element`` and ``modifier`` are ``[a-zA-Z0-9-]+`` words; ``__`` and
``--`` are separators, so ``.btn--primary`` is the ``primary`` modifier of
``btn``. Pseudo and attribute suffixes (``:hover``, ``[disabled]``) are not part
of the BEM identity and are ignored here.
"""

from __future__ import annotations

import string

from css2scss.model.rule import BEMInfo
from css2scss.selectors import has_top_level_comma, split_compounds, split_structural_suffix

_WORD_CHARS = frozenset(string.ascii_letters + string.digits + "-")


def _read_word(name: str, pos: int) -> tuple[str, int]:
    """Read word characters from *pos* up to the next ``__``/``--`` separator."""
    end = pos
    while end < len(name):
        if name.startswith("__", end) or name.startswith("--", end):
            break
        if name[end] not in _WORD_CHARS:
            return "", -1
        end += 1
    return name[pos:end], end


def parse_bem_name(name: str) -> BEMInfo | None:
    """Classify a bare class name such as ``card__header--active``."""
    block, pos = _read_word(name, 0)
    if not block:
        return None

    elements: list[str] = []
    while name.startswith("__", pos):
        element, pos = _read_word(name, pos + 2)
        if not element:
            return None
        elements.append(element)

    modifier: str | None = None
    if name.startswith("--", pos):
        modifier = name[pos + 2 :]
        if not modifier or any(ch not in _WORD_CHARS for ch in modifier):
            return None
        pos = len(name)

    if pos != len(name):
        return None
    return BEMInfo(block=block, elements=tuple(elements), modifier=modifier)


def parse_bem(selector: str) -> BEMInfo | None:
    """Return the BEM classification of a single-class selector, or None.

    Multi-class, id, tag and combinator selectors are not BEM.
    """
    if has_top_level_comma(selector):
        return None
    compounds = split_compounds(selector)
    if len(compounds) != 1:
        return None
    head, _ = split_structural_suffix(compounds[0])
    if not head.startswith("."):
        return None
    return parse_bem_name(head[1:])


def bem_suffix(selector: str) -> str:
    """The pseudo/attribute suffix that follows the BEM class, e.g. ``:hover``."""
    _, suffix = split_structural_suffix(selector.strip())
    return suffix
