"""Shared tool schemas (single source of truth).

The agent builds its tool manifest from these models, and the broker validates
model-supplied arguments against them before any handler runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ToolError(BaseModel):
    """Normalized error payload returned by tools."""
    code: str
    message: str
    details: dict[str, Any] | None = None


class ToolMeta(BaseModel):
    """Metadata attached to tool responses for observability."""
    tool_name: str
    trace_id: str
    latency_ms: int | None = None


class ToolResponse(BaseModel):
    """Unified response wrapper for all tools."""
    ok: bool
    data: Any | None = None
    error: ToolError | None = None
    meta: ToolMeta


class TextOutput(BaseModel):
    """Every tool answers with formatted text for the model to read."""
    text: str


BrewMethod = Literal["pourover", "french-press", "espresso", "cold-brew", "aeropress", "moka-pot"]
BrewStrength = Literal["light", "medium", "strong"]
ShippingRegion = Literal[
    "USA-West",
    "USA-Central",
    "USA-East",
    "Canada",
    "Europe",
    "Asia",
    "Australia",
    "South-America",
    "Other",
]
ShippingMethod = Literal["standard", "express", "international"]
StoreCity = Literal["San Francisco", "Portland", "Seattle", "Chicago", "New York"]
SupportUrgency = Literal["low", "medium", "high"]
SupportCategory = Literal["product", "shipping", "technical", "wholesale", "other"]


class BrewingGuideInput(BaseModel):
    """Input for GetBrewingGuide."""
    method: BrewMethod = Field(..., description="Brewing method")
    strength: BrewStrength = Field(..., description="Desired strength")
    servings: float = Field(..., ge=1, le=8, description="Number of servings (1-8)")


class ShippingEstimateInput(BaseModel):
    """Input for GetShippingEstimate."""
    region: ShippingRegion = Field(..., description="Destination region")
    method: ShippingMethod | None = Field(default=None, description="Shipping method, defaults to standard")


class StoreLocationsInput(BaseModel):
    """Input for GetStoreLocations."""
    city: StoreCity = Field(..., description="City to list store locations for")


class CoffeeClubInput(BaseModel):
    """Input for HandleCoffeeClub."""
    action: str = Field(..., description="What the customer wants to do, e.g. join or learn more")


class SupportRequestInput(BaseModel):
    """Input for RequestMoreInfo."""
    model_config = ConfigDict(populate_by_name=True)

    topic: str = Field(..., description="What the customer needs help with")
    urgency: SupportUrgency | None = Field(default=None, description="Urgency, defaults to medium")
    category: SupportCategory = Field(..., description="Support category")
    customer_name: str | None = Field(default=None, alias="customerName")
    order_number: str | None = Field(default=None, alias="orderNumber")


@dataclass(frozen=True)
class ToolSpec:
    """Tool registry metadata used by the agent and the broker."""
    name: str
    description: str
    input_model: type[BaseModel]
    output_model: type[BaseModel]
