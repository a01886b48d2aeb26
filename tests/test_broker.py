import asyncio

from sqlalchemy import text

from coffee_agent.tool_broker import ToolBroker


def _call(engine, name, args):
    return asyncio.run(ToolBroker(engine).call_tool(name, args, "trace"))


def test_broker_runs_valid_call(engine):
    response = _call(engine, "GetShippingEstimate", {"region": "Canada", "method": "express"})
    assert response.ok
    assert "Delivery Time (express): 2-3 business days" in response.data["text"]
    assert response.meta.tool_name == "GetShippingEstimate"
    assert response.meta.trace_id == "trace"


def test_broker_unknown_tool(engine):
    response = _call(engine, "PlaceOrder", {})
    assert not response.ok
    assert response.error.code == "NOT_FOUND"


def test_broker_rejects_invalid_arguments(engine):
    response = _call(engine, "GetBrewingGuide", {"method": "espresso", "strength": "medium", "servings": 12})
    assert not response.ok
    assert response.error.code == "INVALID_ARGUMENT"


def test_broker_normalizes_retrieval_errors(engine):
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM shipping_regions"))
    response = _call(engine, "GetShippingEstimate", {"region": "Europe"})
    assert not response.ok
    assert response.error.code == "RETRIEVAL_ERROR"
    assert response.error.message == "Failed to retrieve shipping information"
    assert response.error.details["reason"] == "NOT_FOUND"
