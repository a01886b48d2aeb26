"""Minimal synchronous event emitter for agent runs."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable

Listener = Callable[[dict[str, Any]], None]

EVENTS = ("error", "retry", "update")


class Emitter:
    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> None:
        if event not in EVENTS:
            raise ValueError(f"Unknown event: {event}")
        self._listeners[event].append(listener)

    def emit(self, event: str, data: dict[str, Any] | None = None) -> None:
        # Listeners run inline, in registration order.
        for listener in self._listeners.get(event, []):
            listener(data or {})
