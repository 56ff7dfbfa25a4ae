"""
Progress notifications for note generation runs.
"""

from typing import List, Optional, Protocol

from notes_app.models.schemas import ProgressEvent, Severity
from notes_app.utils.logger import logging


class ProgressSink(Protocol):
    """Anything that wants to hear about a run's progress."""

    def notify(self, event: ProgressEvent) -> None:
        ...


class LoggingProgressSink:
    """Write progress events to the application log."""

    def notify(self, event: ProgressEvent) -> None:
        if event.severity == Severity.ERROR:
            logging.error(event.message)
        else:
            logging.info(event.message)


class CollectingProgressSink:
    """Keep every event in memory, e.g. to return them in an API response."""

    def __init__(self):
        self.events: List[ProgressEvent] = []

    def notify(self, event: ProgressEvent) -> None:
        self.events.append(event)


class ProgressNotifier:
    """
    Fire-and-forget dispatcher with at most one subscriber.

    Subscribing replaces any previous subscriber. A subscriber that raises is
    logged and does not interrupt the run.
    """

    def __init__(self, sink: Optional[ProgressSink] = None):
        self._sink = sink

    def subscribe(self, sink: ProgressSink) -> None:
        self._sink = sink

    def unsubscribe(self) -> None:
        self._sink = None

    def emit(self, message: str, severity: Severity = Severity.NEUTRAL) -> ProgressEvent:
        event = ProgressEvent(message=message, severity=severity)
        if self._sink is not None:
            try:
                self._sink.notify(event)
            except Exception as e:
                logging.error(f"Progress sink failed: {e}")
        return event
