"""Injectable trace sinks for resolver instrumentation."""

import logging
from typing import Callable, Optional

# A sink receives an event name and a dict of event fields.
TraceSink = Callable[[str, dict], None]


class NullTraceSink:
    """Discards every event."""

    def __call__(self, event_type: str, fields: dict) -> None:
        return None


class LoggingTraceSink:
    """Forwards events to a stdlib logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG):
        """
        Initialize sink.

        Args:
            logger: Target logger (default: the "mailthread" logger)
            level: Log level used for every event
        """
        self.logger = logger or logging.getLogger("mailthread")
        self.level = level

    def __call__(self, event_type: str, fields: dict) -> None:
        if self.logger.isEnabledFor(self.level):
            details = " ".join(f"{key}={value!r}" for key, value in fields.items())
            self.logger.log(self.level, "%s %s", event_type, details)


class CompositeTraceSink:
    """Fans an event out to several sinks."""

    def __init__(self, *sinks: TraceSink):
        self.sinks = list(sinks)

    def __call__(self, event_type: str, fields: dict) -> None:
        for sink in self.sinks:
            sink(event_type, fields)
