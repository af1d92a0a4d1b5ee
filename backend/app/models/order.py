"""Order model. Only the fields promo redemption touches are modelled."""

from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid


class OrderStatus(str, Enum):
    PENDING_PAYMENT = "pending_payment"
    PAID = "paid"
    CANCELLED = "cancelled"


class Order(Base):
    __tablename__ = "orders"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    tenant_id = Column(
        UUIDType, ForeignKey("tenants.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    client_id = Column(
        UUIDType, ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    order_number = Column(String(32), unique=True, index=True, nullable=False)

    subtotal = Column(Integer, nullable=False)
    delivery_fee = Column(Integer, nullable=False, default=0)
    promo_code_id = Column(
        UUIDType, ForeignKey("promo_codes.id", ondelete="SET NULL"), nullable=True
    )
    promo_discount = Column(Integer, nullable=False, default=0)
    grand_total = Column(Integer, nullable=False)

    status = Column(String(30), nullable=False, default=OrderStatus.PENDING_PAYMENT.value)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
