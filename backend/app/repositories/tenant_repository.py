"""Tenant repository for data access."""

from uuid import UUID

from sqlalchemy.orm import Session

from app.models.tenant import Tenant
from app.schemas.tenant import TenantCreate


class TenantRepository:
    """Repository for Tenant model."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, tenant_id: UUID) -> Tenant | None:
        return self.db.query(Tenant).filter(Tenant.id == tenant_id).first()

    def get_by_slug(self, slug: str) -> Tenant | None:
        return self.db.query(Tenant).filter(Tenant.slug == slug.lower()).first()

    def create(self, data: TenantCreate) -> Tenant:
        tenant = Tenant(
            name=data.name, slug=data.slug, timezone=data.timezone, owner_id=data.owner_id
        )
        self.db.add(tenant)
        self.db.commit()
        self.db.refresh(tenant)
        return tenant
