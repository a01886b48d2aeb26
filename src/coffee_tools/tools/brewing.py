"""Brewing guide tool."""

from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..adapters import RetrievalError
from ..adapters.database import get_brewing_method, get_brewing_ratio
from ..logging import get_logger
from ..schemas import BrewingGuideInput, TextOutput

logger = get_logger("tools.brewing")

GRAMS_PER_SERVING = 15
FAILURE_MESSAGE = "Failed to retrieve brewing guide information"


def format_quantity(value: float) -> str:
    """Render 60.0 as "60"; anything else keeps its full precision."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def get_brewing_guide(payload: BrewingGuideInput, engine: Engine, trace_id: str) -> TextOutput:
    try:
        method = get_brewing_method(engine, payload.method)
        ratio_row = get_brewing_ratio(engine, payload.strength)
    except SQLAlchemyError as exc:
        logger.error("database_error", extra={"extra": {"trace_id": trace_id, "error": str(exc)}})
        raise RetrievalError("QUERY_FAILED", FAILURE_MESSAGE) from exc

    if method is None or ratio_row is None:
        raise RetrievalError(
            "NOT_FOUND",
            FAILURE_MESSAGE,
            {"method": payload.method, "strength": payload.strength},
        )

    coffee_grams = payload.servings * GRAMS_PER_SERVING
    water_ml = coffee_grams * float(ratio_row["ratio"])

    return TextOutput(
        text=(
            f"Recipe for {format_quantity(payload.servings)} serving(s) of {payload.strength} {payload.method}:\n"
            f"Coffee: {format_quantity(coffee_grams)}g\n"
            f"Water: {format_quantity(water_ml)}ml\n"
            f"Grind Size: {method['grind_size']}\n"
            f"Water Temperature: {method['water_temp']}\n"
            f"Total Brew Time: {method['brew_time']}\n"
        )
    )
