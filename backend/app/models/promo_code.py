"""PromoCode model for tenant-scoped discount codes."""

from datetime import date
from enum import Enum

from sqlalchemy import (
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid

CODE_MIN_LENGTH = 3
CODE_MAX_LENGTH = 20
MIN_PERCENTAGE = 1
MAX_PERCENTAGE = 100
MAX_FIXED = 100_000
MIN_ORDER_AMOUNT = 0
MAX_ORDER_AMOUNT = 100_000
MAX_TOTAL_USES = 100_000
MAX_PER_CLIENT_USES = 100


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class PromoCodeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class PromoErrorKind(str, Enum):
    """Why a promo code was refused, in check order."""

    NOT_FOUND = "NOT_FOUND"
    INACTIVE = "INACTIVE"
    NOT_YET_ACTIVE = "NOT_YET_ACTIVE"
    EXPIRED = "EXPIRED"
    FULLY_REDEEMED = "FULLY_REDEEMED"
    CLIENT_LIMIT_REACHED = "CLIENT_LIMIT_REACHED"
    BELOW_MINIMUM = "BELOW_MINIMUM"


class PromoCodeDisplayStatus(str, Enum):
    """Status shown on the cook dashboard. ``expired`` is never stored."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"


def normalize_code(raw_code: str) -> str:
    """Trim surrounding whitespace and uppercase a user-entered code."""
    return raw_code.strip().upper()


class PromoCode(Base):
    """A discount code belonging to exactly one tenant.

    ``times_used`` only moves forward, and only when an order is finalized.
    """

    __tablename__ = "promo_codes"
    __table_args__ = (UniqueConstraint("tenant_id", "code", name="uq_promo_codes_tenant_code"),)

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    tenant_id = Column(
        UUIDType,
        ForeignKey("tenants.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    code = Column(String(CODE_MAX_LENGTH), nullable=False, index=True)

    discount_type = Column(String(20), nullable=False)
    discount_value = Column(Integer, nullable=False)
    minimum_order_amount = Column(Integer, nullable=False, default=0)

    max_uses = Column(Integer, nullable=False, default=0)
    max_uses_per_client = Column(Integer, nullable=False, default=0)
    times_used = Column(Integer, nullable=False, default=0)

    status = Column(String(20), nullable=False, default=PromoCodeStatus.ACTIVE.value)
    starts_at = Column(Date, nullable=False)
    ends_at = Column(Date, nullable=True)

    created_by = Column(UUIDType, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def status_on(self, today: date) -> PromoCodeDisplayStatus:
        if self.ends_at is not None and self.ends_at < today:
            return PromoCodeDisplayStatus.EXPIRED
        return PromoCodeDisplayStatus(self.status)

    @property
    def max_uses_label(self) -> str:
        return "Unlimited" if not self.max_uses else str(self.max_uses)

    @property
    def max_uses_per_client_label(self) -> str:
        return "Unlimited" if not self.max_uses_per_client else str(self.max_uses_per_client)
