"""Cart and checkout request schemas."""

from typing import Any

from pydantic import BaseModel, Field

from app.models.promo_code import PromoErrorKind


class CartItem(BaseModel):
    item_id: str | None = Field(default=None, max_length=64)
    name: str | None = Field(default=None, max_length=255)
    unit_price: int = Field(ge=0)
    quantity: int = Field(ge=1)

    @property
    def line_subtotal(self) -> int:
        return self.unit_price * self.quantity


def cart_subtotal(items: list[CartItem]) -> int:
    return sum(item.line_subtotal for item in items)


class ApplyPromoCodeRequest(BaseModel):
    promo_code: str = Field(min_length=1, max_length=255)
    items: list[CartItem] = Field(min_length=1)


class PromoValidationResponse(BaseModel):
    """Outcome of a promo code check, rendered by the cart and checkout UI."""

    valid: bool
    code: str | None = None
    discount_type: str | None = None
    discount_value: int | None = None
    discount_amount: int | None = None
    subtotal: int | None = None
    error_kind: PromoErrorKind | None = None
    message: str | None = None
    context: dict[str, Any] = Field(default_factory=dict)
