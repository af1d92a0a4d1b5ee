"""Order repository for data access."""

from datetime import date
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.order import Order


class OrderRepository:
    """Repository for Order model."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, order_id: UUID, tenant_id: UUID) -> Order | None:
        return (
            self.db.query(Order)
            .filter(Order.id == order_id, Order.tenant_id == tenant_id)
            .first()
        )

    def get_by_client(self, client_id: UUID, tenant_id: UUID) -> list[Order]:
        return (
            self.db.query(Order)
            .filter(Order.client_id == client_id, Order.tenant_id == tenant_id)
            .order_by(Order.created_at.desc())
            .all()
        )

    def next_order_number(self, prefix: str, on: date) -> str:
        """Return ``{prefix}-{YYMMDD}-{NNNN}``, one past the day's highest sequence."""
        day_prefix = f"{prefix}-{on:%y%m%d}-"
        latest = (
            self.db.query(Order.order_number)
            .filter(Order.order_number.like(f"{day_prefix}%"))
            .order_by(Order.order_number.desc())
            .first()
        )
        sequence = int(latest[0][-4:]) + 1 if latest else 1
        return f"{day_prefix}{sequence:04d}"

    def add(self, order: Order) -> Order:
        """Stage an order and flush it so its id is available. The caller commits."""
        self.db.add(order)
        self.db.flush()
        return order
