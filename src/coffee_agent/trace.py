"""Step recording for a single agent run.

A ``StepRecorder`` is created per request and subscribed to the run's
emitter; it keeps steps in the exact order the runtime emits them.
"""

from __future__ import annotations

from typing import Any

from .emitter import Emitter
from .errors import AgentError
from .logging import get_logger
from .state import ConversationStep

logger = get_logger("trace")

RETRY_CONTENT = "Retrying"


class StepRecorder:
    def __init__(self, trace_id: str = "") -> None:
        self.trace_id = trace_id
        self.steps: list[ConversationStep] = []

    def observe(self, emitter: Emitter) -> None:
        emitter.on("error", self._on_error)
        emitter.on("retry", self._on_retry)
        emitter.on("update", self._on_update)

    def _on_error(self, data: dict[str, Any]) -> None:
        dump = AgentError.ensure(data["error"]).dump()
        logger.warning("agent_error", extra={"extra": {"trace_id": self.trace_id, "error": dump}})
        self.steps.append(ConversationStep(type="error", content=dump))

    def _on_retry(self, _data: dict[str, Any]) -> None:
        self.steps.append(ConversationStep(type="retry", content=RETRY_CONTENT))

    def _on_update(self, data: dict[str, Any]) -> None:
        update = data["update"]
        self.steps.append(ConversationStep(type=update.key, content=update.value))
