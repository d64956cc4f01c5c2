"""Event system: bus, diagnostic event types and the logging bridge."""

from css2scss.events.bus import EventBus, EventRecorder
from css2scss.events.log import logging_listener
from css2scss.events.types import (
    ConversionCompleted,
    ConversionEvent,
    ConversionFailed,
    ConversionStarted,
    DuplicatesMerged,
    RuleSkipped,
    VariableExtracted,
)

__all__ = [
    "EventBus",
    "EventRecorder",
    "ConversionCompleted",
    "ConversionEvent",
    "ConversionFailed",
    "ConversionStarted",
    "DuplicatesMerged",
    "RuleSkipped",
    "VariableExtracted",
    "logging_listener",
]
