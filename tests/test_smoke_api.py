import pytest
from fastapi.testclient import TestClient

from coffee_agent.agent import Agent
from coffee_agent.app import app
from coffee_agent.errors import LLMError, MaxIterationsExceededError
from coffee_agent.executor import NO_ANSWER
from coffee_agent.llm import MockChatLLM
from coffee_agent.state import LLMReply
from coffee_agent.tool_broker import ToolBroker
from fakes import ScriptedLLM, answer, tool_reply


class RaisingAgent:
    def __init__(self, exc):
        self._exc = exc
        self.runs = 0

    async def run(self, prompt, execution=None, observe=None, trace_id=""):
        self.runs += 1
        raise self._exc


@pytest.fixture
def client():
    return TestClient(app)


@pytest.mark.parametrize("body", [{}, {"question": ""}, {"question": None}, {"prompt": "hi"}])
def test_missing_question_returns_400_without_running_agent(client, engine, override_agent, body):
    llm = ScriptedLLM([])
    override_agent(Agent(llm, ToolBroker(engine)))

    resp = client.post("/ask", json=body)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Question is required"}
    assert llm.calls == []


def test_ask_returns_answer_and_ordered_steps(client, engine, override_agent):
    llm = ScriptedLLM(
        [
            LLMError("rate limited"),
            tool_reply("GetShippingEstimate", {"region": "Europe", "method": "express"}),
            answer("Express to Europe takes 3-5 business days."),
        ]
    )
    override_agent(Agent(llm, ToolBroker(engine)))

    resp = client.post("/ask", json={"question": "How long will shipping take to Europe?"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["answer"] == "Express to Europe takes 3-5 business days."
    assert [step["type"] for step in data["steps"]] == [
        "error",
        "retry",
        "tool_name",
        "tool_input",
        "tool_output",
        "final_answer",
    ]
    assert data["steps"][1] == {"type": "retry", "content": "Retrying"}
    assert "How long will shipping take to Europe?" in llm.calls[0][1]["content"]


def test_ask_without_final_text_uses_sentinel(client, engine, override_agent):
    override_agent(Agent(ScriptedLLM([LLMReply(content=None)]), ToolBroker(engine)))

    resp = client.post("/ask", json={"question": "Hi"})

    assert resp.status_code == 200
    assert resp.json() == {"answer": NO_ANSWER, "steps": []}


def test_agent_error_maps_to_internal_server_error(client, override_agent):
    agent = RaisingAgent(MaxIterationsExceededError("secret detail"))
    override_agent(agent)

    resp = client.post("/ask", json={"question": "Hi"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}
    assert "secret" not in resp.text
    assert agent.runs == 1


def test_unexpected_error_maps_to_unknown_error(client, override_agent):
    override_agent(RaisingAgent(KeyError("boom")))

    resp = client.post("/ask", json={"question": "Hi"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Unknown error occurred"}


def test_mock_llm_end_to_end(client, engine, override_agent):
    override_agent(Agent(MockChatLLM(), ToolBroker(engine)))

    resp = client.post("/ask", json={"question": "How long will shipping take to Europe?"})

    assert resp.status_code == 200
    data = resp.json()
    assert data["answer"].startswith("Shipping to Europe:")
    assert data["steps"][-1]["type"] == "final_answer"


def test_trace_id_header_is_echoed(client, engine, override_agent):
    override_agent(Agent(ScriptedLLM([answer("ok")]), ToolBroker(engine)))

    resp = client.post("/ask", json={"question": "Hi"}, headers={"x-trace-id": "abc-123"})

    assert resp.headers["x-trace-id"] == "abc-123"


def test_health_and_tools(client):
    assert client.get("/health").json() == {"status": "ok"}
    names = {tool["name"] for tool in client.get("/tools").json()}
    assert "RequestMoreInfo" in names


def _failing_factory():
    raise RuntimeError("could not parse DATABASE_URL")


def test_agent_construction_failure_keeps_400_for_missing_question(client, override_agent_factory):
    override_agent_factory(_failing_factory)

    resp = client.post("/ask", json={})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Question is required"}


def test_agent_construction_failure_returns_json_error(client, override_agent_factory):
    override_agent_factory(_failing_factory)

    resp = client.post("/ask", json={"question": "Hi"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Unknown error occurred"}
    assert "DATABASE_URL" not in resp.text
