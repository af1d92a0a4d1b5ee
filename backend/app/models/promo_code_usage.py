"""PromoCodeUsage model: one row per redeemed promo code on an order."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, func

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid


class PromoCodeUsage(Base):
    __tablename__ = "promo_code_usages"
    __table_args__ = (
        UniqueConstraint("promo_code_id", "order_id", name="uq_promo_code_usages_code_order"),
    )

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    promo_code_id = Column(
        UUIDType,
        ForeignKey("promo_codes.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    order_id = Column(
        UUIDType, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    client_id = Column(
        UUIDType, ForeignKey("clients.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    discount_amount = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
