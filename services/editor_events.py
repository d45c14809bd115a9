"""
Signals emitted by the product editor to its parent view.
"""

from enum import Enum
from typing import Callable
import structlog

logger = structlog.get_logger(__name__)

Listener = Callable[[], None]


class EditorEvent(str, Enum):
    """Editor-to-parent signals."""
    CLOSE = "close"      # editor chrome should hide
    REFRESH = "refresh"  # parent should re-fetch its product list


class EditorEvents:
    """
    Minimal publish/subscribe hub.

    Listeners run synchronously in subscription order. A failing listener
    is logged and does not stop the others.
    """

    def __init__(self):
        self._listeners: dict[EditorEvent, list[Listener]] = {event: [] for event in EditorEvent}

    def subscribe(self, event: EditorEvent, listener: Listener) -> None:
        self._listeners[event].append(listener)

    def unsubscribe(self, event: EditorEvent, listener: Listener) -> None:
        if listener in self._listeners[event]:
            self._listeners[event].remove(listener)

    def emit(self, event: EditorEvent) -> None:
        logger.debug("editor_event", signal=event.value, listeners=len(self._listeners[event]))
        for listener in list(self._listeners[event]):
            try:
                listener()
            except Exception as e:
                logger.error(
                    "editor_listener_failed",
                    signal=event.value,
                    error=str(e),
                    error_type=type(e).__name__
                )
