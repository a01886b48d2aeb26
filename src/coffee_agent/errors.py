"""Agent runtime errors.

Everything that goes wrong inside a run is raised as an ``AgentError`` so the
HTTP layer can tell runtime failures from programming errors.
"""

from __future__ import annotations

from typing import Any


class AgentError(Exception):
    def __init__(
        self,
        message: str,
        errors: list[BaseException] | None = None,
        *,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.errors = list(errors or [])
        self.context = context or {}

    @classmethod
    def ensure(cls, error: BaseException) -> "AgentError":
        """Return ``error`` itself if it already is an AgentError, else wrap it."""
        if isinstance(error, AgentError):
            return error
        return AgentError(str(error) or type(error).__name__, [error])

    def dump(self) -> str:
        """Render the error and its causes as an indented multi-line string."""
        lines = [f"{type(self).__name__}: {self.message}"]
        if self.context:
            lines.append(f"  context: {self.context}")
        for cause in self.errors:
            nested = cause.dump() if isinstance(cause, AgentError) else f"{type(cause).__name__}: {cause}"
            lines.extend(f"    {line}" for line in nested.splitlines())
        return "\n".join(lines)


class LLMError(AgentError):
    """The chat model call failed or returned something unusable."""


class ToolCallError(AgentError):
    """A tool call was rejected or its handler failed."""


class MaxRetriesExceededError(AgentError):
    pass


class MaxIterationsExceededError(AgentError):
    pass
