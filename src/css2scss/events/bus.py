"""Synchronous event bus carrying conversion diagnostics."""

from __future__ import annotations

from typing import Callable

from css2scss.events.types import ConversionEvent

Listener = Callable[[ConversionEvent], None]


class EventBus:
    """Publish-subscribe bus for conversion events.

    The converter never prints; callers that want to see merges, extracted
    variables or skipped rules subscribe here. A listener registered for an
    event class also receives its subclasses, so subscribing to
    ``ConversionEvent`` receives everything. Broader subscriptions are called
    first, then registration order.
    """

    def __init__(self) -> None:
        self._listeners: dict[type[ConversionEvent], list[Listener]] = {}

    def subscribe(self, event_type: type[ConversionEvent], callback: Listener) -> None:
        if not issubclass(event_type, ConversionEvent):
            raise TypeError(f"{event_type.__name__} is not a ConversionEvent")
        self._listeners.setdefault(event_type, []).append(callback)

    def on_all(self, callback: Listener) -> None:
        """Register a callback that receives every conversion event."""
        self.subscribe(ConversionEvent, callback)

    def emit(self, event: ConversionEvent) -> None:
        for event_type in reversed(type(event).__mro__):
            for callback in self._listeners.get(event_type, ()):
                callback(event)


class EventRecorder:
    """Listener that keeps every event it receives, in order."""

    def __init__(self) -> None:
        self.events: list[ConversionEvent] = []

    def __call__(self, event: ConversionEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type[ConversionEvent]) -> list[ConversionEvent]:
        return [e for e in self.events if isinstance(e, event_type)]
