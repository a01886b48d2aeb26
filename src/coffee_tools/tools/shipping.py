"""Shipping estimate tool."""

from __future__ import annotations

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from ..adapters import RetrievalError
from ..adapters.database import get_shipping_region
from ..logging import get_logger
from ..schemas import ShippingEstimateInput, TextOutput

logger = get_logger("tools.shipping")

FAILURE_MESSAGE = "Failed to retrieve shipping information"

ORDER_PERKS = (
    "All orders include:\n"
    "- Free tracking\n"
    "- Freshly roasted guarantee\n"
    "- Sustainable packaging\n"
    "- 30-day satisfaction guarantee"
)


def get_shipping_estimate(payload: ShippingEstimateInput, engine: Engine, trace_id: str) -> TextOutput:
    try:
        region = get_shipping_region(engine, payload.region)
    except SQLAlchemyError as exc:
        logger.error("database_error", extra={"extra": {"trace_id": trace_id, "error": str(exc)}})
        raise RetrievalError("QUERY_FAILED", FAILURE_MESSAGE) from exc

    if region is None:
        raise RetrievalError("NOT_FOUND", FAILURE_MESSAGE, {"region": payload.region})

    method = payload.method or "standard"
    # "international" has no column of its own and reads the standard one.
    delivery_time = region["express_delivery"] if method == "express" else region["standard_delivery"]

    return TextOutput(
        text=(
            f"Shipping to {payload.region}:\n"
            f"Delivery Time ({method}): {delivery_time}\n"
            f"Shipping Cost: {region['cost']}\n"
            f"Additional Information: {region['notes']}\n\n"
            f"{ORDER_PERKS}"
        )
    )
