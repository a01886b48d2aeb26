"""Tool registry for the customer-service agent."""

from __future__ import annotations

from typing import Callable

from ..schemas import (
    BrewingGuideInput,
    CoffeeClubInput,
    ShippingEstimateInput,
    StoreLocationsInput,
    SupportRequestInput,
    TextOutput,
    ToolSpec,
)
from .brewing import get_brewing_guide
from .club import handle_coffee_club
from .shipping import get_shipping_estimate
from .stores import get_store_locations
from .support import request_more_info

ToolHandler = Callable[[object, object, str], TextOutput]

TOOL_SPECS: dict[str, ToolSpec] = {
    "GetBrewingGuide": ToolSpec(
        name="GetBrewingGuide",
        description="Provides customized brewing instructions based on method and preferences",
        input_model=BrewingGuideInput,
        output_model=TextOutput,
    ),
    "GetShippingEstimate": ToolSpec(
        name="GetShippingEstimate",
        description="Provides shipping estimates and delivery information for different regions",
        input_model=ShippingEstimateInput,
        output_model=TextOutput,
    ),
    "GetStoreLocations": ToolSpec(
        name="GetStoreLocations",
        description="Provides information about store locations in different neighborhoods",
        input_model=StoreLocationsInput,
        output_model=TextOutput,
    ),
    "HandleCoffeeClub": ToolSpec(
        name="HandleCoffeeClub",
        description=(
            "Handle coffee club membership queries and signups as a component in the UI. "
            "This only shows explicitly the coffee club modal, and has nothing to do with "
            "contacting the company."
        ),
        input_model=CoffeeClubInput,
        output_model=TextOutput,
    ),
    "RequestMoreInfo": ToolSpec(
        name="RequestMoreInfo",
        description=(
            "Handles customer support inquiries with smart routing based on urgency that "
            "aren't otherwise handled by other tools. If a user is asking for contact "
            "information, use this tool to handle it."
        ),
        input_model=SupportRequestInput,
        output_model=TextOutput,
    ),
}

TOOL_HANDLERS: dict[str, ToolHandler] = {
    "GetBrewingGuide": get_brewing_guide,
    "GetShippingEstimate": get_shipping_estimate,
    "GetStoreLocations": get_store_locations,
    "HandleCoffeeClub": handle_coffee_club,
    "RequestMoreInfo": request_more_info,
}


def get_tool_spec(name: str) -> ToolSpec | None:
    return TOOL_SPECS.get(name)


def get_tool_handler(name: str) -> ToolHandler | None:
    return TOOL_HANDLERS.get(name)


def list_tool_specs() -> list[ToolSpec]:
    return list(TOOL_SPECS.values())
