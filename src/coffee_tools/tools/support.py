"""Support routing tool.

Unlike the other tools this one never fails: storage problems turn into a
canned reply pointing at the emergency line.
"""

from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..adapters import RetrievalError
from ..adapters.database import get_support_category
from ..logging import get_logger
from ..schemas import SupportRequestInput, TextOutput

logger = get_logger("tools.support")

SUPPORT_PHONE = "1-888-12345-6789"
SUPPORT_EMAIL = "support@coffeecompany.com"
SELF_SERVICE_URL = "coffeecompany.com/support"
FALLBACK_MESSAGE = (
    "Sorry, we are experiencing technical difficulties. "
    "Please call us at 1-888-URGENT-CO for immediate assistance."
)


def request_more_info(payload: SupportRequestInput, engine: Engine, trace_id: str) -> TextOutput:
    try:
        category = get_support_category(engine, payload.category)
        urgency = payload.urgency or "medium"

        if urgency == "high":
            text = (
                f"For urgent {payload.category} support, please call us at {SUPPORT_PHONE}. "
                "We'll assist you immediately."
            )
        elif urgency == "low":
            text = (
                f"For {payload.category} support, please visit our self-service portal at "
                f"{SELF_SERVICE_URL}/{payload.category}"
            )
        else:
            if category is None:
                raise RetrievalError("NOT_FOUND", "Unknown support category", {"category": payload.category})
            text = (
                f"For {payload.category} support, please email us at {SUPPORT_EMAIL}. "
                f"We'll respond within {category['timeline']}."
            )
        return TextOutput(text=text)
    except (SQLAlchemyError, RetrievalError) as exc:
        logger.error("database_error", extra={"extra": {"trace_id": trace_id, "error": str(exc)}})
        return TextOutput(text=FALLBACK_MESSAGE)
