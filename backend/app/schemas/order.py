"""Order schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.cart import CartItem


class OrderCreate(BaseModel):
    items: list[CartItem] = Field(min_length=1)
    delivery_fee: int = Field(default=0, ge=0)
    promo_code: str | None = Field(default=None, max_length=255)


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tenant_id: UUID
    client_id: UUID
    order_number: str
    subtotal: int
    delivery_fee: int
    promo_code_id: UUID | None = None
    promo_discount: int
    grand_total: int
    status: str
    created_at: datetime
