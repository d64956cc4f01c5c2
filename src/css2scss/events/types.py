"""Diagnostic events emitted while converting a stylesheet."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ConversionEvent:
    """Base of every event the converter emits."""


@dataclass(frozen=True)
class ConversionStarted(ConversionEvent):
    source_length: int


@dataclass(frozen=True)
class RuleSkipped(ConversionEvent):
    selector: str
    reason: str


@dataclass(frozen=True)
class DuplicatesMerged(ConversionEvent):
    selectors: tuple[str, ...]
    media_query: str | None = None

    @property
    def merged_selector(self) -> str:
        return ", ".join(self.selectors)


@dataclass(frozen=True)
class VariableExtracted(ConversionEvent):
    name: str
    value: str
    category: str
    occurrences: int


@dataclass(frozen=True)
class ConversionCompleted(ConversionEvent):
    rule_count: int
    variable_count: int
    output_length: int


@dataclass(frozen=True)
class ConversionFailed(ConversionEvent):
    error: str
