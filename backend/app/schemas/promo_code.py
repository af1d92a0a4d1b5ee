"""PromoCode schemas."""

from datetime import date, datetime
from typing import Self
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.models.promo_code import (
    CODE_MAX_LENGTH,
    CODE_MIN_LENGTH,
    MAX_FIXED,
    MAX_ORDER_AMOUNT,
    MAX_PER_CLIENT_USES,
    MAX_PERCENTAGE,
    MAX_TOTAL_USES,
    MIN_ORDER_AMOUNT,
    MIN_PERCENTAGE,
    DiscountType,
    PromoCodeStatus,
)


class _PromoCodeLimits(BaseModel):
    discount_value: int = Field(ge=1, le=MAX_FIXED)
    minimum_order_amount: int = Field(default=0, ge=MIN_ORDER_AMOUNT, le=MAX_ORDER_AMOUNT)
    max_uses: int = Field(default=0, ge=0, le=MAX_TOTAL_USES)
    max_uses_per_client: int = Field(default=0, ge=0, le=MAX_PER_CLIENT_USES)
    starts_at: date
    ends_at: date | None = None

    @model_validator(mode="after")
    def validate_date_window(self) -> Self:
        if self.ends_at is not None and self.ends_at < self.starts_at:
            raise ValueError("The end date must be on or after the start date.")
        return self


class PromoCodeCreate(_PromoCodeLimits):
    code: str = Field(
        min_length=CODE_MIN_LENGTH,
        max_length=CODE_MAX_LENGTH,
        pattern=r"^[A-Za-z0-9]+$",
    )
    discount_type: DiscountType

    @model_validator(mode="after")
    def validate_percentage_range(self) -> Self:
        if self.discount_type == DiscountType.PERCENTAGE and not (
            MIN_PERCENTAGE <= self.discount_value <= MAX_PERCENTAGE
        ):
            raise ValueError("Percentage discount must be between 1 and 100.")
        return self


class PromoCodeUpdate(_PromoCodeLimits):
    """Editable fields only. The code string and discount type are fixed at creation."""

    model_config = ConfigDict(extra="forbid")


class PromoCodeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tenant_id: UUID
    code: str
    discount_type: DiscountType
    discount_value: int
    minimum_order_amount: int
    max_uses: int
    max_uses_label: str
    max_uses_per_client: int
    max_uses_per_client_label: str
    times_used: int
    status: PromoCodeStatus
    display_status: str | None = None
    starts_at: date
    ends_at: date | None = None
    created_at: datetime
    updated_at: datetime


class PromoCodeDetailResponse(PromoCodeResponse):
    """Single promo code with its redemption count, as shown in the edit form."""

    usage_count: int = 0
