"""Coffee club membership tool."""

from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..adapters import RetrievalError
from ..adapters.database import list_club_benefits
from ..logging import get_logger
from ..schemas import CoffeeClubInput, TextOutput

logger = get_logger("tools.club")

# Read by the storefront UI to open the membership modal.
SHOW_MODAL_MARKER = "SHOW_COFFEE_CLUB_MODAL"


def handle_coffee_club(payload: CoffeeClubInput, engine: Engine, trace_id: str) -> TextOutput:
    try:
        rows = list_club_benefits(engine)
    except SQLAlchemyError as exc:
        logger.error("database_error", extra={"extra": {"trace_id": trace_id, "error": str(exc)}})
        raise RetrievalError("QUERY_FAILED", "Failed to retrieve coffee club information") from exc

    benefits = "\n".join(f"- {row['benefit']}" for row in rows)
    return TextOutput(
        text=(
            "I'll help you join our Coffee Club! "
            "Our Coffee Club members enjoy:\n"
            f"{benefits}\n\n"
            f"{SHOW_MODAL_MARKER}"
        )
    )
