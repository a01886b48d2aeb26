"""Store locations tool."""

from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..adapters import RetrievalError
from ..adapters.database import list_store_locations
from ..logging import get_logger
from ..schemas import StoreLocationsInput, TextOutput

logger = get_logger("tools.stores")

FAILURE_MESSAGE = "Failed to retrieve store location information"


def get_store_locations(payload: StoreLocationsInput, engine: Engine, trace_id: str) -> TextOutput:
    try:
        locations = list_store_locations(engine, payload.city)
    except SQLAlchemyError as exc:
        logger.error("database_error", extra={"extra": {"trace_id": trace_id, "error": str(exc)}})
        raise RetrievalError("QUERY_FAILED", FAILURE_MESSAGE) from exc

    if not locations:
        return TextOutput(
            text=(
                f"We currently don't have any store locations in {payload.city}. "
                "Please check back later as we're expanding! "
                "You can visit our online store 24/7 at www.coffeecompany.com"
            )
        )

    return TextOutput(
        text="\n\n".join(
            f"{loc['neighborhood']} Location:\n"
            f"Address: {loc['address']}\n"
            f"Hours: {loc['hours']}\n"
            f"Specialties: {loc['specialties']}\n"
            f"Parking: {loc['parking']}\n"
            for loc in locations
        )
    )
