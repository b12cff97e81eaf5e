"""Progress reporting for gallery operations.

Every operation emits exactly one ``Started`` event followed by exactly one
terminal event, ``Completed`` or ``Failed``.  Network failures that never
produced a response are raised instead and emit no terminal event.
"""

from dataclasses import dataclass, field
from typing import Protocol

from loguru import logger


@dataclass(frozen=True)
class Started:
    """The request is about to be sent."""

    progress: int = 0


@dataclass(frozen=True)
class Completed:
    """The gallery accepted the request."""


@dataclass(frozen=True)
class Failed:
    """The gallery answered but rejected the request."""

    error: Exception


ProgressEvent = Started | Completed | Failed


class ProgressObserver(Protocol):
    """Receives progress events for one or more gallery operations."""

    def on_event(self, event: ProgressEvent) -> None:
        """Handle a single progress event.

        Args:
            event: The event being reported.
        """
        ...


@dataclass
class EventRecorder:
    """Observer that keeps every event it receives, in order."""

    events: list[ProgressEvent] = field(default_factory=list)

    def on_event(self, event: ProgressEvent) -> None:
        self.events.append(event)

    @property
    def failures(self) -> list[Failed]:
        """All ``Failed`` events received so far."""
        return [e for e in self.events if isinstance(e, Failed)]

    @property
    def succeeded(self) -> bool:
        """True when at least one operation ran and none failed."""
        return bool(self.events) and not self.failures


class LoggingObserver:
    """Observer that writes each event to the log.

    Args:
        label: Short description of the operation, used as a log prefix.
    """

    def __init__(self, label: str) -> None:
        self.label = label

    def on_event(self, event: ProgressEvent) -> None:
        if isinstance(event, Started):
            logger.info("{}: started", self.label)
        elif isinstance(event, Completed):
            logger.info("{}: completed", self.label)
        else:
            logger.error("{}: failed: {}", self.label, event.error)
