"""Chat model clients.

``OpenAIChatLLM`` talks to any OpenAI-compatible chat-completions endpoint
(Groq by default). ``MockChatLLM`` runs the full flow without a model, picking
a tool from keywords in the question.
"""

from __future__ import annotations

import json
import re
import uuid
from typing import Any, Protocol

from openai import AsyncOpenAI, OpenAIError

from .errors import LLMError
from .settings import AgentSettings
from .state import LLMReply, LLMToolCall


class ChatLLM(Protocol):
    model: str

    async def create(self, messages: list[dict[str, Any]], tools: list[dict[str, Any]]) -> LLMReply: ...


class OpenAIChatLLM:
    def __init__(self, settings: AgentSettings) -> None:
        self.model = settings.llm_model
        self._temperature = settings.temperature
        # Retries are owned by the agent runtime.
        self._client = AsyncOpenAI(
            api_key=settings.llm_api_key,
            base_url=settings.llm_base_url,
            timeout=settings.llm_timeout_s,
            max_retries=0,
        )

    async def create(self, messages: list[dict[str, Any]], tools: list[dict[str, Any]]) -> LLMReply:
        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                tools=tools,
                tool_choice="auto",
                temperature=self._temperature,
            )
        except OpenAIError as exc:
            raise LLMError(f"Chat completion failed: {exc}", [exc], context={"model": self.model}) from exc

        if not response.choices:
            raise LLMError("Chat completion returned no choices", context={"model": self.model})
        choice = response.choices[0]
        message = choice.message
        return LLMReply(
            content=message.content,
            tool_calls=[
                LLMToolCall(id=call.id, name=call.function.name, arguments=call.function.arguments or "{}")
                for call in message.tool_calls or []
            ],
            finish_reason=choice.finish_reason,
        )


class MockChatLLM:
    """Heuristic mock: enables end-to-end flow without an external model."""

    model = "mock"

    async def create(self, messages: list[dict[str, Any]], tools: list[dict[str, Any]]) -> LLMReply:
        last = messages[-1] if messages else {}
        if last.get("role") == "tool":
            return LLMReply(content=last.get("content") or None, finish_reason="stop")

        question = _last_user_content(messages)
        name, args = _pick_tool(question)
        available = {tool["function"]["name"] for tool in tools}
        if name not in available:
            return LLMReply(content=None, finish_reason="stop")
        return LLMReply(
            content=f"I should call {name} to answer this.",
            tool_calls=[LLMToolCall(id=f"call_{uuid.uuid4().hex[:8]}", name=name, arguments=json.dumps(args))],
            finish_reason="tool_calls",
        )


def build_llm(settings: AgentSettings) -> ChatLLM:
    if settings.mock_llm or not settings.llm_api_key:
        return MockChatLLM()
    return OpenAIChatLLM(settings)


def _last_user_content(messages: list[dict[str, Any]]) -> str:
    for message in reversed(messages):
        if message.get("role") == "user":
            return str(message.get("content") or "")
    return ""


_METHODS = {
    "french": "french-press",
    "cold": "cold-brew",
    "aeropress": "aeropress",
    "moka": "moka-pot",
    "espresso": "espresso",
}
_REGIONS = {
    "europe": "Europe",
    "canada": "Canada",
    "asia": "Asia",
    "australia": "Australia",
    "south america": "South-America",
}
_CITIES = {
    "nyc": "New York",
    "new york": "New York",
    "portland": "Portland",
    "seattle": "Seattle",
    "chicago": "Chicago",
    "san francisco": "San Francisco",
}


def _pick_tool(question: str) -> tuple[str, dict[str, Any]]:
    text = question.lower()
    if re.search(r"brew|pour.?over|recipe", text):
        method = next((value for key, value in _METHODS.items() if key in text), "pourover")
        strength = next((s for s in ("light", "strong") if s in text), "medium")
        match = re.search(r"\b([1-8])\b", text)
        return "GetBrewingGuide", {
            "method": method,
            "strength": strength,
            "servings": int(match.group(1)) if match else 1,
        }
    if re.search(r"ship|deliver", text):
        region = next((value for key, value in _REGIONS.items() if key in text), "Other")
        args: dict[str, Any] = {"region": region}
        if "express" in text:
            args["method"] = "express"
        return "GetShippingEstimate", args
    if re.search(r"store|location|shop|cafe", text):
        city = next((value for key, value in _CITIES.items() if key in text), "San Francisco")
        return "GetStoreLocations", {"city": city}
    if re.search(r"club|member", text):
        return "HandleCoffeeClub", {"action": "join"}
    urgency = "high" if re.search(r"urgent|asap|immediately", text) else "medium"
    return "RequestMoreInfo", {"topic": question[:120], "urgency": urgency, "category": "other"}
