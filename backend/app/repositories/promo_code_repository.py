"""PromoCode repository for data access.

Every lookup takes the tenant id and filters on it inside the query, so a code
owned by another tenant is never loaded.
"""

from uuid import UUID

from sqlalchemy import or_, update
from sqlalchemy.orm import Session

from app.models.promo_code import PromoCode, PromoCodeStatus
from app.schemas.promo_code import PromoCodeCreate, PromoCodeUpdate


class PromoCodeRepository:
    """Repository for PromoCode model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        tenant_id: UUID,
        skip: int = 0,
        limit: int = 100,
        status: PromoCodeStatus | None = None,
    ) -> list[PromoCode]:
        """Get a tenant's promo codes, newest first."""
        query = self.db.query(PromoCode).filter(PromoCode.tenant_id == tenant_id)
        if status:
            query = query.filter(PromoCode.status == status.value)
        return query.order_by(PromoCode.created_at.desc()).offset(skip).limit(limit).all()

    def count(self, tenant_id: UUID, status: PromoCodeStatus | None = None) -> int:
        query = self.db.query(PromoCode).filter(PromoCode.tenant_id == tenant_id)
        if status:
            query = query.filter(PromoCode.status == status.value)
        return query.count()

    def get_by_id(self, promo_code_id: UUID, tenant_id: UUID) -> PromoCode | None:
        return (
            self.db.query(PromoCode)
            .filter(PromoCode.id == promo_code_id, PromoCode.tenant_id == tenant_id)
            .first()
        )

    def get_by_code(
        self, code: str, tenant_id: UUID, for_update: bool = False
    ) -> PromoCode | None:
        """Get a promo code by its normalized code within one tenant.

        With ``for_update`` the row is locked until the surrounding
        transaction ends (no-op on SQLite) and reloaded from the database.
        """
        query = self.db.query(PromoCode).filter(
            PromoCode.tenant_id == tenant_id,
            PromoCode.code == code,
        )
        if for_update:
            query = query.with_for_update().populate_existing()
        return query.first()

    def create(
        self, tenant_id: UUID, data: PromoCodeCreate, created_by: UUID | None = None
    ) -> PromoCode:
        promo_code = PromoCode(
            tenant_id=tenant_id,
            code=data.code,
            discount_type=data.discount_type.value,
            discount_value=data.discount_value,
            minimum_order_amount=data.minimum_order_amount,
            max_uses=data.max_uses,
            max_uses_per_client=data.max_uses_per_client,
            times_used=0,
            status=PromoCodeStatus.ACTIVE.value,
            starts_at=data.starts_at,
            ends_at=data.ends_at,
            created_by=created_by,
        )
        self.db.add(promo_code)
        self.db.commit()
        self.db.refresh(promo_code)
        return promo_code

    def update(self, promo_code: PromoCode, data: PromoCodeUpdate) -> PromoCode:
        for key, value in data.model_dump().items():
            setattr(promo_code, key, value)
        self.db.commit()
        self.db.refresh(promo_code)
        return promo_code

    def set_status(self, promo_code: PromoCode, status: PromoCodeStatus) -> PromoCode:
        promo_code.status = status.value  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(promo_code)
        return promo_code

    def try_increment_usage(self, promo_code_id: UUID) -> bool:
        """Atomically bump ``times_used`` unless the total cap is reached.

        Does not commit. Returns False when the guarded update touched no row,
        meaning a concurrent redemption took the last slot.
        """
        stmt = (
            update(PromoCode)
            .where(
                PromoCode.id == promo_code_id,
                or_(PromoCode.max_uses == 0, PromoCode.times_used < PromoCode.max_uses),
            )
            .values(times_used=PromoCode.times_used + 1)
            .execution_options(synchronize_session=False)
        )
        result = self.db.execute(stmt)
        return bool(result.rowcount)
