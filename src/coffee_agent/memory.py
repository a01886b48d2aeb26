"""Conversation memory for a single agent run."""

from __future__ import annotations

from typing import Any, Callable


class UnconstrainedMemory:
    """Keeps every message of the run; never truncates."""

    def __init__(self) -> None:
        self._messages: list[dict[str, Any]] = []

    def add(self, message: dict[str, Any]) -> None:
        self._messages.append(message)

    @property
    def messages(self) -> list[dict[str, Any]]:
        return list(self._messages)


MemoryFactory = Callable[[], UnconstrainedMemory]
