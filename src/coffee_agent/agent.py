"""Single-agent tool-use loop.

Design goals:
- One process-wide ``Agent`` holding only immutable collaborators; every run
  gets its own memory from the factory and its own emitter.
- Bounded cost: retries are capped per step and per run, iterations per run.
- Make the flow testable by injecting the chat model and the broker.
"""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, Callable

from coffee_tools.adapters.database import get_engine
from coffee_tools.tools import list_tool_specs
from .emitter import Emitter
from .errors import AgentError, LLMError, MaxIterationsExceededError, MaxRetriesExceededError, ToolCallError
from .llm import ChatLLM, build_llm
from .logging import get_logger
from .memory import MemoryFactory, UnconstrainedMemory
from .prompts import SYSTEM_PROMPT
from .settings import get_settings
from .state import AgentRunOutput, ExecutionOptions, LLMReply, LLMToolCall, Update
from .tool_broker import ToolBroker

logger = get_logger("agent")

Observer = Callable[[Emitter], None]


def build_openai_tools() -> list[dict[str, Any]]:
    """Translate internal tool specs into OpenAI tool schema."""
    tools: list[dict[str, Any]] = []
    for spec in list_tool_specs():
        tools.append(
            {
                "type": "function",
                "function": {
                    "name": spec.name,
                    "description": spec.description,
                    "parameters": spec.input_model.model_json_schema(),
                },
            }
        )
    return tools


class _RetryBudget:
    def __init__(self, execution: ExecutionOptions) -> None:
        self._execution = execution
        self.step = 0
        self.total = 0

    def consume(self, error: AgentError) -> None:
        self.step += 1
        self.total += 1
        if self.step > self._execution.max_retries_per_step or self.total > self._execution.total_max_retries:
            raise MaxRetriesExceededError(
                "Maximal amount of retries has been exceeded.",
                [error],
                context={"step_retries": self.step, "total_retries": self.total},
            )

    def reset_step(self) -> None:
        self.step = 0


class Agent:
    def __init__(
        self,
        llm: ChatLLM,
        broker: ToolBroker,
        memory_factory: MemoryFactory = UnconstrainedMemory,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        self._llm = llm
        self._broker = broker
        self._memory_factory = memory_factory
        self._system_prompt = system_prompt
        self._tools = build_openai_tools()

    async def run(
        self,
        prompt: str,
        execution: ExecutionOptions | None = None,
        observe: Observer | None = None,
        trace_id: str = "",
    ) -> AgentRunOutput:
        """Run one prompt through the tool-use loop until the model answers."""
        execution = execution or ExecutionOptions()
        emitter = Emitter()
        if observe is not None:
            observe(emitter)

        memory = self._memory_factory()
        memory.add({"role": "system", "content": self._system_prompt})
        memory.add({"role": "user", "content": prompt})
        budget = _RetryBudget(execution)

        for iteration in range(1, execution.max_iterations + 1):
            reply = await self._next_reply(memory, emitter, budget)

            if not reply.tool_calls:
                text = reply.content.strip() if reply.content else None
                if text:
                    memory.add({"role": "assistant", "content": text})
                    emitter.emit("update", {"update": Update(key="final_answer", value=text)})
                logger.info(
                    "agent_finished",
                    extra={
                        "extra": {
                            "trace_id": trace_id,
                            "iterations": iteration,
                            "retries": budget.total,
                            "finish_reason": reply.finish_reason,
                        }
                    },
                )
                return AgentRunOutput(text=text or None, iterations=iteration)

            if reply.content:
                emitter.emit("update", {"update": Update(key="thought", value=reply.content)})
            # Add the assistant tool-call message so the tool responses are valid.
            memory.add(_assistant_tool_call_message(reply))

            failed = False
            for call in reply.tool_calls:
                ok = await self._run_tool_call(call, memory, emitter, budget, trace_id)
                failed = failed or not ok
            if not failed:
                budget.reset_step()

        raise MaxIterationsExceededError(
            f"Agent was not able to resolve the task in {execution.max_iterations} iterations.",
            context={"max_iterations": execution.max_iterations},
        )

    async def _next_reply(self, memory: UnconstrainedMemory, emitter: Emitter, budget: _RetryBudget) -> LLMReply:
        while True:
            try:
                return await self._llm.create(memory.messages, self._tools)
            except Exception as exc:  # noqa: BLE001
                error = exc if isinstance(exc, AgentError) else LLMError(str(exc) or type(exc).__name__, [exc])
                emitter.emit("error", {"error": error})
                budget.consume(error)
                emitter.emit("retry", {})

    async def _run_tool_call(
        self,
        call: LLMToolCall,
        memory: UnconstrainedMemory,
        emitter: Emitter,
        budget: _RetryBudget,
        trace_id: str,
    ) -> bool:
        emitter.emit("update", {"update": Update(key="tool_name", value=call.name)})
        emitter.emit("update", {"update": Update(key="tool_input", value=call.arguments)})

        try:
            args = json.loads(call.arguments or "{}")
        except json.JSONDecodeError as exc:
            args, message = {}, f"Arguments are not valid JSON: {exc}"
        else:
            message = None if isinstance(args, dict) else "Arguments must be a JSON object"

        if message is None:
            response = await self._broker.call_tool(call.name, args, trace_id)
            if response.ok:
                output = str((response.data or {}).get("text", ""))
                emitter.emit("update", {"update": Update(key="tool_output", value=output)})
                memory.add(_tool_message(call, output))
                return True
            message = response.error.message if response.error else "Tool call failed"
            code = response.error.code if response.error else "TOOL_ERROR"
        else:
            code = "INVALID_ARGUMENT"

        error = ToolCallError(
            f"Tool {call.name} failed: {message}",
            context={"tool": call.name, "code": code},
        )
        emitter.emit("error", {"error": error})
        # Feed the failure back so the model can correct itself on the next turn.
        memory.add(_tool_message(call, f"Error: {message}"))
        budget.consume(error)
        emitter.emit("retry", {})
        return False


@lru_cache(maxsize=1)
def get_agent() -> Agent:
    """Process-wide agent; per-request state lives in each run."""
    settings = get_settings()
    return Agent(llm=build_llm(settings), broker=ToolBroker(get_engine()))


def _tool_message(call: LLMToolCall, content: str) -> dict[str, Any]:
    return {"role": "tool", "tool_call_id": call.id, "name": call.name, "content": content}


def _assistant_tool_call_message(reply: LLMReply) -> dict[str, Any]:
    return {
        "role": "assistant",
        "content": reply.content or "",
        "tool_calls": [
            {
                "id": call.id,
                "type": "function",
                "function": {"name": call.name, "arguments": call.arguments},
            }
            for call in reply.tool_calls
        ],
    }
