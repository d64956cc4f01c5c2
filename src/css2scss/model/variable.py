"""Variable extraction model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Category(Enum):
    """Value category; declaration order is the emission order."""

    COLOR = "color"
    SIZE = "size"
    FONT = "font"
    OTHER = "other"

    @property
    def heading(self) -> str:
        return f"// {self.value.capitalize()} variables"


@dataclass
class VariableCandidate:
    """A (property, value) pair seen while scanning declarations."""

    value: str
    property: str
    category: Category
    suggested_name: str
    occurrences: int = 0
    contexts: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ExtractedVariable:
    name: str
    value: str
    category: Category
    occurrences: int
