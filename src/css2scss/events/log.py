"""Bridge from diagnostic events to the standard logging module."""

from __future__ import annotations

import logging

from css2scss.events import types as events
from css2scss.events.bus import Listener


def logging_listener(logger: logging.Logger | None = None) -> Listener:
    """Create an ``EventBus.on_all`` callback that logs each event."""
    log = logger or logging.getLogger("css2scss")

    def listener(event: events.ConversionEvent) -> None:
        if isinstance(event, events.DuplicatesMerged):
            scope = f" in @media {event.media_query}" if event.media_query else ""
            log.info(
                "Merged %d duplicate rules%s: %s",
                len(event.selectors),
                scope,
                event.merged_selector,
            )
        elif isinstance(event, events.VariableExtracted):
            log.info(
                "Extracted variable: %s = %s (%d occurrences)",
                event.name,
                event.value,
                event.occurrences,
            )
        elif isinstance(event, events.RuleSkipped):
            log.warning("Skipped %s: %s", event.selector, event.reason)
        elif isinstance(event, events.ConversionFailed):
            log.error("Conversion failed: %s", event.error)
        elif isinstance(event, events.ConversionCompleted):
            log.debug(
                "Converted %d rules, %d variables, %d characters",
                event.rule_count,
                event.variable_count,
                event.output_length,
            )
        else:
            log.debug("%s", event)

    return listener
