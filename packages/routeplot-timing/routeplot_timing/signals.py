"""Queued pub/sub notifications for playback events."""
from __future__ import annotations

from typing import Any, Callable

Handler = Callable[[str, dict[str, Any]], None]

ALL = "*"


class SignalBus:
    """Publish queues a signal; ``flush`` delivers everything queued so far.

    Handlers subscribed to ``"*"`` receive every signal after the handlers
    registered for that signal's name. Signals published by a handler
    during a flush are delivered on the next flush.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Handler]] = {}
        self._queue: list[tuple[str, dict[str, Any]]] = []

    @property
    def pending(self) -> int:
        return len(self._queue)

    def subscribe(self, signal_name: str, handler: Handler) -> None:
        self._subscribers.setdefault(signal_name, []).append(handler)

    def unsubscribe(self, signal_name: str, handler: Handler) -> None:
        handlers = self._subscribers.get(signal_name)
        if handlers is None:
            return
        try:
            handlers.remove(handler)
        except ValueError:
            pass

    def publish(self, signal_name: str, **data: Any) -> None:
        self._queue.append((signal_name, data))

    def flush(self) -> None:
        queued = self._queue
        self._queue = []
        for signal_name, data in queued:
            for handler in list(self._subscribers.get(signal_name, ())):
                handler(signal_name, data)
            if signal_name != ALL:
                for handler in list(self._subscribers.get(ALL, ())):
                    handler(signal_name, data)

    def clear(self) -> None:
        self._queue.clear()
