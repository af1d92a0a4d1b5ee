from sqlalchemy import Column, DateTime, ForeignKey, String, func

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid


class Tenant(Base):
    """A cook storefront. Promo codes, orders and audit entries hang off it.

    ``owner_id`` is the client account of the cook who runs the storefront;
    only that client may manage its promo codes.
    """

    __tablename__ = "tenants"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    slug = Column(String(63), unique=True, index=True, nullable=False)
    timezone = Column(String(50), nullable=True)
    owner_id = Column(
        UUIDType, ForeignKey("clients.id", ondelete="RESTRICT"), nullable=True, index=True
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
