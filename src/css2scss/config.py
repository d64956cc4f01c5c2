"""Conversion options."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum

from css2scss.errors import ConfigurationError


class IndentType(str, Enum):
    SPACES = "spaces"
    TABS = "tabs"


@dataclass(frozen=True)
class ConversionOptions:
    """Every switch the conversion pipeline understands.

    Nesting strategy is chosen by priority: BEM when ``enable_bem`` is set,
    otherwise smart nesting, otherwise basic whitespace nesting.
    """

    indent_size: int = 2
    indent_type: IndentType = IndentType.SPACES
    preserve_comments: bool = True
    sort_properties: bool = False
    enable_bem: bool = True
    enable_smart_nesting: bool = True
    max_nesting_depth: int = 5
    enable_duplicate_detection: bool = True
    enable_media_query_grouping: bool = True
    enable_variable_extraction: bool = True
    variable_prefix: str = "$"
    min_occurrences: int = 2
    extract_colors: bool = True
    extract_sizes: bool = True
    extract_fonts: bool = True
    extract_others: bool = True

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "indent_type", IndentType(self.indent_type))
        except ValueError:
            raise ConfigurationError(
                f"indent_type must be 'spaces' or 'tabs', got {self.indent_type!r}"
            ) from None
        if self.indent_size < 0:
            raise ConfigurationError(f"indent_size must be >= 0, got {self.indent_size}")
        if self.max_nesting_depth < 1:
            raise ConfigurationError(
                f"max_nesting_depth must be >= 1, got {self.max_nesting_depth}"
            )
        if self.min_occurrences < 1:
            raise ConfigurationError(
                f"min_occurrences must be >= 1, got {self.min_occurrences}"
            )

    @property
    def indent_unit(self) -> str:
        """One level of indentation."""
        if self.indent_type is IndentType.TABS:
            return "\t"
        return " " * self.indent_size

    def replace(self, **changes: object) -> ConversionOptions:
        """Return a copy with *changes* applied (validated again)."""
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]
