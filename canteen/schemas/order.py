"""Order Schemas — kiosk submission, ticket views, printed-flag patch.

Invariants:
    - fulfillment_mode / meal_slot accept the legacy kiosk tokens and map them
      onto FulfillmentMode / MealSlot; anything else is a validation error
    - guest_names accepts a single comma-separated string or a list
    - pickup_time shape is checked here; grid membership by the intake engine
    - quantity is lenient: a leading integer is taken, anything else is None
"""

import math
import re
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from canteen.core.domain_types import FulfillmentMode, MealSlot, Tier

_FULFILLMENT_TOKENS = {
    "DINE_IN": FulfillmentMode.DINE_IN,
    "DINEIN": FulfillmentMode.DINE_IN,
    "LOCAL": FulfillmentMode.DINE_IN,
    "TAKEAWAY": FulfillmentMode.TAKEAWAY,
    "TAKE_AWAY": FulfillmentMode.TAKEAWAY,
    "LLEVAR": FulfillmentMode.TAKEAWAY,
    "PARA_LLEVAR": FulfillmentMode.TAKEAWAY,
}

_MEAL_SLOT_TOKENS = {
    "LUNCH": MealSlot.LUNCH,
    "ALMUERZO": MealSlot.LUNCH,
    "DINNER": MealSlot.DINNER,
    "CENA": MealSlot.DINNER,
}


_LEADING_INT = re.compile(r"\s*[+-]?\d+")


def _token(value: str) -> str:
    return value.strip().upper().replace("-", "_").replace(" ", "_")


class OrderCreate(BaseModel):
    """Order submission from the kiosk."""
    identity: str = Field(min_length=1, max_length=64)
    fulfillment_mode: FulfillmentMode
    meal_slot: MealSlot | None = None
    quantity: int | None = None
    pickup_time: str | None = Field(None, pattern=r"^\d{2}:\d{2}$")
    pickup_name: str | None = Field(None, max_length=200)
    guest_names: list[str] = Field(default_factory=list)
    detail: str | None = Field(None, max_length=2000)
    signature: str | None = None

    @field_validator("fulfillment_mode", mode="before")
    @classmethod
    def parse_fulfillment_mode(cls, v):
        if isinstance(v, str):
            mode = _FULFILLMENT_TOKENS.get(_token(v))
            if mode is None:
                raise ValueError(f"unknown fulfillment mode: {v}")
            return mode
        return v

    @field_validator("meal_slot", mode="before")
    @classmethod
    def parse_meal_slot(cls, v):
        if isinstance(v, str):
            if not v.strip():
                return None
            slot = _MEAL_SLOT_TOKENS.get(_token(v))
            if slot is None:
                raise ValueError(f"unknown meal slot: {v}")
            return slot
        return v

    @field_validator("quantity", mode="before")
    @classmethod
    def lenient_quantity(cls, v):
        """Unparseable quantities become None so tier clamping applies."""
        if isinstance(v, bool):
            return None
        if isinstance(v, int):
            return v
        if isinstance(v, float):
            return int(v) if math.isfinite(v) else None
        if isinstance(v, str):
            match = _LEADING_INT.match(v)
            return int(match.group()) if match else None
        return None

    @field_validator("pickup_time", mode="before")
    @classmethod
    def blank_pickup_time(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("guest_names", mode="before")
    @classmethod
    def split_guest_names(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [name.strip() for name in v.split(",") if name.strip()]
        return v


class TicketResponse(BaseModel):
    """Returned right after a successful submission."""
    id: str
    worker_name: str
    company: str
    fulfillment_mode: FulfillmentMode
    meal_slot: MealSlot
    quantity: int
    date: str
    time: str
    tier: Tier
    is_premium: bool


class OrderResponse(BaseModel):
    """Full stored order (ticket reprint and report rows)."""
    id: str
    worker_identity: str
    worker_name: str
    company: str
    fulfillment_mode: str
    meal_slot: str
    quantity: int
    date_str: str
    pickup_time: str | None = None
    pickup_name: str | None = None
    guest_names: list[str] | None = None
    order_detail: str | None = None
    printed: bool
    created_at: datetime
    cost_center: str | None = None
    company_logo: str | None = None

    model_config = {"from_attributes": True}


class PrintedPatch(BaseModel):
    printed: bool
