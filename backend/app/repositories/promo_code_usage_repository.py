"""PromoCodeUsage repository for data access."""

from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.promo_code_usage import PromoCodeUsage


class PromoCodeUsageRepository:
    """Repository for PromoCodeUsage model."""

    def __init__(self, db: Session):
        self.db = db

    def count_by_promo_code(self, promo_code_id: UUID) -> int:
        return (
            self.db.query(func.count(PromoCodeUsage.id))
            .filter(PromoCodeUsage.promo_code_id == promo_code_id)
            .scalar()
            or 0
        )

    def count_by_promo_code_and_client(self, promo_code_id: UUID, client_id: UUID) -> int:
        """Count redemptions of one code by one client. Other clients never count."""
        return (
            self.db.query(func.count(PromoCodeUsage.id))
            .filter(
                PromoCodeUsage.promo_code_id == promo_code_id,
                PromoCodeUsage.client_id == client_id,
            )
            .scalar()
            or 0
        )

    def get_by_promo_code(self, promo_code_id: UUID) -> list[PromoCodeUsage]:
        return (
            self.db.query(PromoCodeUsage)
            .filter(PromoCodeUsage.promo_code_id == promo_code_id)
            .order_by(PromoCodeUsage.created_at.desc())
            .all()
        )

    def add(
        self,
        promo_code_id: UUID,
        order_id: UUID,
        client_id: UUID,
        discount_amount: int,
    ) -> PromoCodeUsage:
        """Stage a usage row in the current transaction. The caller commits."""
        usage = PromoCodeUsage(
            promo_code_id=promo_code_id,
            order_id=order_id,
            client_id=client_id,
            discount_amount=discount_amount,
        )
        self.db.add(usage)
        return usage
