import asyncio

import pytest

from coffee_agent.agent import Agent
from coffee_agent.errors import LLMError, MaxIterationsExceededError, MaxRetriesExceededError
from coffee_agent.executor import run_question
from coffee_agent.llm import MockChatLLM
from coffee_agent.memory import UnconstrainedMemory
from coffee_agent.state import ExecutionOptions
from coffee_agent.tool_broker import ToolBroker
from coffee_agent.trace import StepRecorder
from fakes import LoopingLLM, ScriptedLLM, answer, tool_reply


def _run(agent, prompt="question", execution=None):
    recorder = StepRecorder("trace")
    output = asyncio.run(agent.run(prompt, execution, observe=recorder.observe, trace_id="trace"))
    return output, [step.type for step in recorder.steps], recorder


def test_tool_call_then_answer_records_steps_in_order(engine):
    llm = ScriptedLLM(
        [
            tool_reply("GetStoreLocations", {"city": "Chicago"}, content="Look up stores."),
            answer("No Chicago stores yet."),
        ]
    )
    output, types, recorder = _run(Agent(llm, ToolBroker(engine)))

    assert output.text == "No Chicago stores yet."
    assert output.iterations == 2
    assert types == ["thought", "tool_name", "tool_input", "tool_output", "final_answer"]
    assert "don't have any store locations in Chicago" in recorder.steps[3].content
    # The tool result is fed back to the model on the next turn.
    assert llm.calls[1][-1]["role"] == "tool"
    assert llm.calls[1][-1]["tool_call_id"] == "call_1"


def test_llm_failure_is_recorded_and_retried(engine):
    llm = ScriptedLLM([LLMError("upstream 503"), answer("Hello!")])
    output, types, recorder = _run(Agent(llm, ToolBroker(engine)))

    assert output.text == "Hello!"
    assert types == ["error", "retry", "final_answer"]
    assert "upstream 503" in recorder.steps[0].content
    assert recorder.steps[1].content == "Retrying"


def test_unexpected_llm_exception_is_wrapped(engine):
    llm = ScriptedLLM([ValueError("bad payload"), answer("ok")])
    _, types, recorder = _run(Agent(llm, ToolBroker(engine)))
    assert types[:2] == ["error", "retry"]
    assert recorder.steps[0].content.startswith("LLMError: bad payload")


def test_invalid_tool_arguments_are_fed_back(engine):
    llm = ScriptedLLM(
        [
            tool_reply("GetBrewingGuide", {"method": "drip", "strength": "medium", "servings": 2}),
            tool_reply("GetBrewingGuide", {"method": "pourover", "strength": "medium", "servings": 2}, call_id="c2"),
            answer("Here is your recipe."),
        ]
    )
    output, types, _ = _run(Agent(llm, ToolBroker(engine)))

    assert output.text == "Here is your recipe."
    assert types == [
        "tool_name",
        "tool_input",
        "error",
        "retry",
        "tool_name",
        "tool_input",
        "tool_output",
        "final_answer",
    ]
    assert llm.calls[1][-1]["content"].startswith("Error: ")


def test_malformed_json_arguments_count_as_failure(engine):
    llm = ScriptedLLM([tool_reply("GetStoreLocations", "{not json"), answer("sorry")])
    _, types, _ = _run(Agent(llm, ToolBroker(engine)))
    assert types == ["tool_name", "tool_input", "error", "retry", "final_answer"]


def test_per_step_retry_ceiling(engine):
    llm = ScriptedLLM([LLMError("down")] * 3)
    agent = Agent(llm, ToolBroker(engine))
    recorder = StepRecorder()
    execution = ExecutionOptions(max_retries_per_step=2, total_max_retries=10, max_iterations=5)

    with pytest.raises(MaxRetriesExceededError):
        asyncio.run(agent.run("q", execution, observe=recorder.observe))
    assert [s.type for s in recorder.steps] == ["error", "retry", "error", "retry", "error"]


def test_total_retry_ceiling_spans_steps(engine):
    llm = LoopingLLM("GetBrewingGuide", {"method": "drip", "strength": "medium", "servings": 1})
    agent = Agent(llm, ToolBroker(engine))
    execution = ExecutionOptions(max_retries_per_step=100, total_max_retries=3, max_iterations=50)

    with pytest.raises(MaxRetriesExceededError):
        asyncio.run(agent.run("q", execution))
    assert llm.calls == 4


def test_iteration_ceiling(engine):
    llm = LoopingLLM("HandleCoffeeClub", {"action": "join"})
    agent = Agent(llm, ToolBroker(engine))

    with pytest.raises(MaxIterationsExceededError):
        asyncio.run(agent.run("q", ExecutionOptions(max_iterations=3)))
    assert llm.calls == 3


def test_empty_reply_means_no_answer(engine):
    output, types, _ = _run(Agent(ScriptedLLM([answer("")]), ToolBroker(engine)))
    assert output.text is None
    assert types == []


def test_each_run_gets_fresh_memory(engine):
    created = []

    def factory():
        memory = UnconstrainedMemory()
        created.append(memory)
        return memory

    llm = ScriptedLLM([answer("first"), answer("second")])
    agent = Agent(llm, ToolBroker(engine), memory_factory=factory)
    _run(agent, "one")
    _run(agent, "two")

    assert len(created) == 2
    assert created[0] is not created[1]
    assert len(llm.calls[1]) == 2
    assert llm.calls[1][1]["content"] == "two"


def test_concurrent_runs_keep_their_own_steps(file_engine):
    agent = Agent(MockChatLLM(), ToolBroker(file_engine))
    questions = {
        "t-ship": ("How long will shipping take to Europe?", "GetShippingEstimate", "Shipping to Europe:"),
        "t-store": ("Where is your Chicago store?", "GetStoreLocations", "in Chicago"),
        "t-club": ("How do I join the club?", "HandleCoffeeClub", "SHOW_COFFEE_CLUB_MODAL"),
        "t-brew": ("Pourover recipe for 4 please", "GetBrewingGuide", "Coffee: 60g"),
    }

    async def ask_all():
        return await asyncio.gather(
            *(run_question(question, agent, trace_id) for trace_id, (question, _, _) in questions.items())
        )

    results = asyncio.run(ask_all())

    for result, (_, tool, marker) in zip(results, questions.values()):
        assert [step.type for step in result.steps] == [
            "thought",
            "tool_name",
            "tool_input",
            "tool_output",
            "final_answer",
        ]
        assert result.steps[1].content == tool
        assert marker in result.steps[3].content
        assert marker in result.answer
