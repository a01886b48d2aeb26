"""Unified tool calling layer.

This isolates tool dispatch details (lookup by name, argument validation,
threading, error normalization) from the agent reasoning loop.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

from pydantic import ValidationError
from sqlalchemy.engine import Engine

from coffee_tools.adapters import RetrievalError
from coffee_tools.schemas import ToolError, ToolMeta, ToolResponse
from coffee_tools.tools import get_tool_handler, get_tool_spec
from .logging import get_logger

logger = get_logger("tool_broker")


class ToolBroker:
    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    async def call_tool(self, name: str, args: dict[str, Any], trace_id: str) -> ToolResponse:
        start = time.time()
        spec = get_tool_spec(name)
        handler = get_tool_handler(name)
        if not spec or not handler:
            return self._failure(name, trace_id, start, ToolError(code="NOT_FOUND", message=f"Unknown tool: {name}"))

        try:
            input_obj = spec.input_model.model_validate(args)
        except ValidationError as exc:
            return self._failure(name, trace_id, start, ToolError(code="INVALID_ARGUMENT", message=str(exc)))

        try:
            # Handlers do blocking database I/O.
            result = await asyncio.to_thread(handler, input_obj, self._engine, trace_id)
        except RetrievalError as exc:
            error = ToolError(code="RETRIEVAL_ERROR", message=exc.message, details={"reason": exc.code, **exc.details})
            return self._failure(name, trace_id, start, error)
        except Exception as exc:  # noqa: BLE001
            return self._failure(name, trace_id, start, ToolError(code="TOOL_ERROR", message=str(exc)))

        latency_ms = int((time.time() - start) * 1000)
        logger.info(
            "tool_call",
            extra={"extra": {"trace_id": trace_id, "tool": name, "latency_ms": latency_ms, "ok": True}},
        )
        return ToolResponse(
            ok=True,
            data=result.model_dump(),
            error=None,
            meta=ToolMeta(tool_name=name, trace_id=trace_id, latency_ms=latency_ms),
        )

    def _failure(self, name: str, trace_id: str, start: float, error: ToolError) -> ToolResponse:
        latency_ms = int((time.time() - start) * 1000)
        logger.info(
            "tool_call_failed",
            extra={
                "extra": {
                    "trace_id": trace_id,
                    "tool": name,
                    "latency_ms": latency_ms,
                    "ok": False,
                    "error_code": error.code,
                }
            },
        )
        return ToolResponse(
            ok=False,
            data=None,
            error=error,
            meta=ToolMeta(tool_name=name, trace_id=trace_id, latency_ms=latency_ms),
        )
