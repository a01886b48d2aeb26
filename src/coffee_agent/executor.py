"""Protocol adapter for incoming requests.

Keep this layer thin so protocol changes do not affect core agent logic.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .agent import Agent
from .logging import get_logger
from .prompts import build_customer_prompt
from .settings import get_settings
from .state import AgentRunResult, ExecutionOptions
from .trace import StepRecorder

logger = get_logger("executor")

NO_ANSWER = "No answer available."


class AskRequest(BaseModel):
    question: str = Field(..., min_length=1)


class StepPayload(BaseModel):
    type: str
    content: str


class AskResponse(BaseModel):
    answer: str
    steps: list[StepPayload]


def execution_options() -> ExecutionOptions:
    settings = get_settings()
    return ExecutionOptions(
        max_retries_per_step=settings.max_retries_per_step,
        total_max_retries=settings.total_max_retries,
        max_iterations=settings.max_iterations,
    )


async def run_question(question: str, agent: Agent, trace_id: str) -> AgentRunResult:
    # Fresh recorder per request; the agent itself is shared.
    recorder = StepRecorder(trace_id)
    output = await agent.run(
        build_customer_prompt(question),
        execution_options(),
        observe=recorder.observe,
        trace_id=trace_id,
    )
    logger.info(
        "ask_completed",
        extra={
            "extra": {
                "trace_id": trace_id,
                "iterations": output.iterations,
                "steps": len(recorder.steps),
                "answered": output.text is not None,
            }
        },
    )
    return AgentRunResult(answer=output.text, steps=recorder.steps)


async def handle_ask(payload: AskRequest, agent: Agent, trace_id: str) -> AskResponse:
    result = await run_question(payload.question, agent, trace_id)
    return AskResponse(
        answer=result.answer or NO_ANSWER,
        steps=[StepPayload(**step.to_dict()) for step in result.steps],
    )
