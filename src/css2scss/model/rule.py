"""Flat rule model: Declaration, ParsedRule and BEM classification."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum

# Selector carried by comment pseudo-rules.
COMMENT_SELECTOR = "/* COMMENT */"

# Property key under which a keyframes block keeps its verbatim body.
KEYFRAMES_BLOCK = "@keyframes-block"

# Property key for opaque at-rule bodies that hold nested rules.
RAW_BLOCK = "@raw-block"


class RuleKind(Enum):
    """What a ParsedRule (and the tree node built from it) represents."""

    STYLE = "style"
    COMMENT = "comment"
    KEYFRAMES = "keyframes"
    AT_RULE = "at-rule"
    STATEMENT = "statement"

    @property
    def is_at_rule(self) -> bool:
        return self in (RuleKind.KEYFRAMES, RuleKind.AT_RULE, RuleKind.STATEMENT)


class BEMKind(Enum):
    BLOCK = "block"
    ELEMENT = "element"
    MODIFIER = "modifier"
    ELEMENT_MODIFIER = "element-modifier"


@dataclass
class Declaration:
    """A property/value pair, or a comment when ``property`` is None.

    ``original_value`` keeps the literal a variable reference replaced.
    """

    property: str | None
    value: str
    important: bool = False
    original_value: str | None = None

    @classmethod
    def comment(cls, text: str) -> Declaration:
        return cls(property=None, value=text)

    @property
    def is_comment(self) -> bool:
        return self.property is None

    @property
    def signature(self) -> str:
        """Canonical ``property:value[!important]`` text used for hashing."""
        if self.is_comment:
            return f"/*{self.value}*/"
        suffix = "!important" if self.important else ""
        return f"{self.property}:{self.value}{suffix}"

    def copy(self) -> Declaration:
        return copy.copy(self)


@dataclass(frozen=True)
class BEMInfo:
    """Block / element chain / modifier parts of a BEM class selector.

    ``level`` is the number of elements, plus one when a modifier is present.
    """

    block: str
    elements: tuple[str, ...] = ()
    modifier: str | None = None

    @property
    def kind(self) -> BEMKind:
        if self.elements and self.modifier:
            return BEMKind.ELEMENT_MODIFIER
        if self.elements:
            return BEMKind.ELEMENT
        if self.modifier:
            return BEMKind.MODIFIER
        return BEMKind.BLOCK

    @property
    def level(self) -> int:
        return len(self.elements) + (1 if self.modifier else 0)


@dataclass
class ParsedRule:
    """One simple selector with the declarations that apply to it."""

    selector: str
    declarations: list[Declaration] = field(default_factory=list)
    specificity: tuple[int, int, int] = (0, 0, 0)
    bem_info: BEMInfo | None = None
    media_query: str | None = None
    hash: str = ""
    kind: RuleKind = RuleKind.STYLE

    @property
    def is_comment(self) -> bool:
        return self.kind is RuleKind.COMMENT

    @property
    def property_declarations(self) -> list[Declaration]:
        return [d for d in self.declarations if not d.is_comment]

    def clone(self, **changes: object) -> ParsedRule:
        """Deep-copy the rule (declarations included), applying *changes*."""
        cloned = copy.deepcopy(self)
        for name, value in changes.items():
            setattr(cloned, name, value)
        return cloned
