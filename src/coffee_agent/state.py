"""Lightweight request and run state containers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ExecutionOptions:
    """Bounds applied to a single agent run."""

    max_retries_per_step: int = 5
    total_max_retries: int = 10
    max_iterations: int = 15


@dataclass
class ConversationStep:
    type: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "content": self.content}


@dataclass(frozen=True)
class Update:
    """Intermediate progress emitted by the runtime (thought, tool call, answer)."""

    key: str
    value: str


@dataclass
class LLMToolCall:
    id: str
    name: str
    arguments: str


@dataclass
class LLMReply:
    content: str | None = None
    tool_calls: list[LLMToolCall] = field(default_factory=list)
    finish_reason: str | None = None


@dataclass
class AgentRunOutput:
    """What the runtime hands back: the final text (if any) and how long it took."""

    text: str | None
    iterations: int = 0


@dataclass
class AgentRunResult:
    answer: str | None
    steps: list[ConversationStep] = field(default_factory=list)
