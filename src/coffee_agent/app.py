"""FastAPI entry for the agent server."""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from coffee_tools.tools import list_tool_specs
from .agent import get_agent
from .errors import AgentError
from .executor import AskRequest, AskResponse, handle_ask
from .logging import configure_logging, get_logger
from .settings import get_settings

logger = get_logger("agent_server")

QUESTION_REQUIRED = "Question is required"
INTERNAL_ERROR = "Internal server error"
UNKNOWN_ERROR = "Unknown error occurred"


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "agent_server_config",
        extra={
            "extra": {
                "llm_model": settings.llm_model,
                "llm_base_url": settings.llm_base_url,
                "llm_key_set": bool(settings.llm_api_key),
                "mock_llm": settings.mock_llm,
                "port": settings.port,
            }
        },
    )
    yield


app = FastAPI(title="Coffee Agent Server", version="0.1.0", lifespan=lifespan)
app.state.agent_factory = get_agent
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    # /ask is the only endpoint taking a body; any body problem means no usable question.
    logger.info("invalid_request", extra={"extra": {"path": request.url.path, "errors": len(exc.errors())}})
    return JSONResponse(status_code=400, content={"error": QUESTION_REQUIRED})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/tools")
def list_tools() -> list[dict[str, object]]:
    return [
        {
            "name": spec.name,
            "description": spec.description,
            "input_schema": spec.input_model.model_json_schema(),
        }
        for spec in list_tool_specs()
    ]


@app.post("/ask", response_model=AskResponse)
async def ask(payload: AskRequest, request: Request):
    # Preserve incoming trace_id if provided, else generate one.
    trace_id = request.headers.get("x-trace-id") or str(uuid.uuid4())
    headers = {"x-trace-id": trace_id}
    try:
        # Construction errors are mapped like run errors.
        agent = request.app.state.agent_factory()
        response = await handle_ask(payload, agent, trace_id)
    except AgentError as exc:
        logger.error("ask_failed", extra={"extra": {"trace_id": trace_id, "error": exc.dump()}})
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR}, headers=headers)
    except Exception:  # noqa: BLE001
        logger.exception("ask_failed_unknown", extra={"extra": {"trace_id": trace_id}})
        return JSONResponse(status_code=500, content={"error": UNKNOWN_ERROR}, headers=headers)
    return JSONResponse(status_code=200, content=response.model_dump(), headers=headers)
