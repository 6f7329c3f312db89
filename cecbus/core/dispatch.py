"""Routing of driver callbacks into per-kind delivery queues.

Callbacks run on driver threads. Each one builds a value, offers it to the
subscribed queues with ``put_nowait`` and returns; a full queue drops the
event and bumps a counter, nothing ever waits on the application.
"""

from __future__ import annotations

import enum
import logging
import queue
import threading
from collections.abc import Callable
from typing import Any

from cecbus.core.errors import CecError
from cecbus.core.model import Command, KeyEvent, LogMessage, RawFrame

LOGGER = logging.getLogger(__name__)

_LOG_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "notice": logging.INFO,
    "info": logging.INFO,
    "traffic": logging.DEBUG,
    "debug": logging.DEBUG,
}


class EventKind(enum.Enum):
    LOG = "log"
    KEY_PRESS = "key_press"
    COMMAND = "command"


LogHandler = Callable[[LogMessage], None]


class EventDispatcher:
    def __init__(self, *, default_maxsize: int = 0) -> None:
        self.default_maxsize = default_maxsize
        self._lock = threading.Lock()
        self._queues: dict[EventKind, list[queue.Queue[Any]]] = {kind: [] for kind in EventKind}
        self._log_handlers: list[LogHandler] = []
        self.dropped: dict[EventKind, int] = {kind: 0 for kind in EventKind}

    def subscribe(
        self,
        kind: EventKind,
        delivery: queue.Queue[Any] | None = None,
        *,
        maxsize: int | None = None,
    ) -> queue.Queue[Any]:
        """Register a delivery queue for ``kind`` and return it.

        Passing the same queue for several kinds merges them into one stream.
        """
        if delivery is None:
            delivery = queue.Queue(maxsize=self.default_maxsize if maxsize is None else maxsize)
        with self._lock:
            if not any(existing is delivery for existing in self._queues[kind]):
                self._queues[kind].append(delivery)
        return delivery

    def unsubscribe(self, kind: EventKind, delivery: queue.Queue[Any]) -> None:
        with self._lock:
            self._queues[kind] = [q for q in self._queues[kind] if q is not delivery]

    def unsubscribe_all(self) -> None:
        with self._lock:
            for kind in EventKind:
                self._queues[kind] = []
            self._log_handlers = []

    def add_log_handler(self, handler: LogHandler) -> None:
        with self._lock:
            self._log_handlers.append(handler)

    def remove_log_handler(self, handler: LogHandler) -> None:
        with self._lock:
            self._log_handlers = [h for h in self._log_handlers if h is not handler]

    def on_log_message(self, text: str, level: str = "info") -> None:
        LOGGER.log(_LOG_LEVELS.get(level, logging.INFO), "libcec: %s", text)
        message = LogMessage(text=text, level=level)
        with self._lock:
            handlers = list(self._log_handlers)
        for handler in handlers:
            try:
                handler(message)
            except Exception:
                LOGGER.exception("Log handler %r failed", handler)
        self._deliver(EventKind.LOG, message)

    def on_key_pressed(self, code: int, duration_ms: int = 0) -> None:
        try:
            event = KeyEvent.from_code(int(code), int(duration_ms))
        except (TypeError, ValueError) as exc:
            LOGGER.warning("Dropping malformed key press %r: %s", code, exc)
            return
        LOGGER.debug("cec key pressed: %d (%s)", event.code, event.name or "unknown")
        self._deliver(EventKind.KEY_PRESS, event)

    def on_command_received(self, frame: RawFrame) -> None:
        try:
            command = Command.from_frame(frame)
        except (CecError, TypeError, ValueError) as exc:
            LOGGER.warning("Dropping malformed frame %r: %s", frame, exc)
            return
        LOGGER.debug("cec command: %s", command)
        self._deliver(EventKind.COMMAND, command)

    def _deliver(self, kind: EventKind, event: Any) -> None:
        with self._lock:
            targets = list(self._queues[kind])
        for target in targets:
            try:
                target.put_nowait(event)
            except queue.Full:
                with self._lock:
                    self.dropped[kind] += 1
