"""Promo code management for cooks: create, edit and toggle."""

import logging
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.clock import today_in
from app.models.promo_code import (
    MAX_PERCENTAGE,
    MIN_PERCENTAGE,
    DiscountType,
    PromoCode,
    PromoCodeStatus,
    normalize_code,
)
from app.repositories.promo_code_repository import PromoCodeRepository
from app.repositories.promo_code_usage_repository import PromoCodeUsageRepository
from app.repositories.tenant_repository import TenantRepository
from app.schemas.promo_code import PromoCodeCreate, PromoCodeUpdate
from app.services.audit_service import AuditService

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "promo_code"
EDITABLE_FIELDS = (
    "discount_value",
    "minimum_order_amount",
    "max_uses",
    "max_uses_per_client",
    "starts_at",
    "ends_at",
)


def _snapshot(promo_code: PromoCode) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for key in EDITABLE_FIELDS:
        value = getattr(promo_code, key)
        data[key] = value.isoformat() if isinstance(value, date) else value
    return data


class PromoCodeService:
    """Service for a tenant's promo code catalogue."""

    def __init__(self, db: Session):
        self.db = db
        self.promo_code_repo = PromoCodeRepository(db)
        self.usage_repo = PromoCodeUsageRepository(db)
        self.tenant_repo = TenantRepository(db)
        self.audit = AuditService(db)

    def tenant_today(self, tenant_id: UUID) -> date:
        tenant = self.tenant_repo.get_by_id(tenant_id)
        return today_in(tenant.timezone if tenant else None)  # type: ignore[arg-type]

    def code_exists_for_tenant(self, tenant_id: UUID, code: str) -> bool:
        return self.promo_code_repo.get_by_code(normalize_code(code), tenant_id) is not None

    def create_promo_code(
        self,
        tenant_id: UUID,
        data: PromoCodeCreate,
        actor_id: UUID | None = None,
        today: date | None = None,
    ) -> PromoCode:
        """Create an active promo code for a tenant.

        Raises:
            ValueError: If the code already exists for this tenant, the
                percentage is out of range or the start date is in the past.
        """
        today = today or self.tenant_today(tenant_id)
        code = normalize_code(data.code)

        if self.code_exists_for_tenant(tenant_id, code):
            raise ValueError("A promo code with this name already exists.")
        self._check_percentage(data.discount_type.value, data.discount_value)
        if data.starts_at < today:
            raise ValueError("The start date must be today or later.")

        promo_code = self.promo_code_repo.create(
            tenant_id, data.model_copy(update={"code": code}), created_by=actor_id
        )
        self.audit.log_create(
            RESOURCE_TYPE,
            promo_code.id,  # type: ignore[arg-type]
            tenant_id,
            actor_type="cook" if actor_id else "system",
            actor_id=str(actor_id) if actor_id else None,
            data={"code": code, "discount_type": data.discount_type.value, **_snapshot(promo_code)},
        )
        logger.info("Created promo code %s for tenant %s", code, tenant_id)
        return promo_code

    def get_for_tenant(self, tenant_id: UUID, promo_code_id: UUID) -> PromoCode | None:
        return self.promo_code_repo.get_by_id(promo_code_id, tenant_id)

    def list_for_tenant(
        self,
        tenant_id: UUID,
        skip: int = 0,
        limit: int = 100,
        status: PromoCodeStatus | None = None,
    ) -> list[PromoCode]:
        return self.promo_code_repo.get_all(tenant_id, skip=skip, limit=limit, status=status)

    def count_for_tenant(self, tenant_id: UUID, status: PromoCodeStatus | None = None) -> int:
        return self.promo_code_repo.count(tenant_id, status=status)

    def usage_count(self, promo_code_id: UUID) -> int:
        return self.usage_repo.count_by_promo_code(promo_code_id)

    def update_promo_code(
        self,
        tenant_id: UUID,
        promo_code_id: UUID,
        data: PromoCodeUpdate,
        actor_id: UUID | None = None,
        today: date | None = None,
    ) -> PromoCode:
        """Edit the mutable fields of a promo code.

        ``max_uses`` may drop below ``times_used``; the code then reads as
        fully redeemed. A code that has already started may only keep or move
        back its start date; one that has not started may only move it to
        today or later.

        Raises:
            ValueError: If the code is not found or a rule is violated.
        """
        promo_code = self.promo_code_repo.get_by_id(promo_code_id, tenant_id)
        if promo_code is None:
            raise ValueError(f"Promo code {promo_code_id} not found")

        today = today or self.tenant_today(tenant_id)
        self._check_percentage(str(promo_code.discount_type), data.discount_value)

        already_started = promo_code.starts_at <= today
        if already_started and data.starts_at > today:
            raise ValueError("The start date cannot be in the future for an active code.")
        if not already_started and data.starts_at < today:
            raise ValueError("The start date must be today or later.")

        before = _snapshot(promo_code)
        promo_code = self.promo_code_repo.update(promo_code, data)
        self.audit.log_update(
            RESOURCE_TYPE,
            promo_code.id,  # type: ignore[arg-type]
            tenant_id,
            actor_type="cook" if actor_id else "system",
            actor_id=str(actor_id) if actor_id else None,
            old_data=before,
            new_data=_snapshot(promo_code),
        )
        return promo_code

    def toggle_status(
        self,
        tenant_id: UUID,
        promo_code_id: UUID,
        actor_id: UUID | None = None,
    ) -> PromoCode:
        """Flip a promo code between active and inactive."""
        promo_code = self.promo_code_repo.get_by_id(promo_code_id, tenant_id)
        if promo_code is None:
            raise ValueError(f"Promo code {promo_code_id} not found")

        old_status = str(promo_code.status)
        new_status = (
            PromoCodeStatus.INACTIVE
            if old_status == PromoCodeStatus.ACTIVE.value
            else PromoCodeStatus.ACTIVE
        )
        promo_code = self.promo_code_repo.set_status(promo_code, new_status)
        self.audit.log_status_change(
            RESOURCE_TYPE,
            promo_code.id,  # type: ignore[arg-type]
            tenant_id,
            old_status=old_status,
            new_status=new_status.value,
            actor_type="cook" if actor_id else "system",
            actor_id=str(actor_id) if actor_id else None,
        )
        logger.info("Promo code %s is now %s", promo_code.code, new_status.value)
        return promo_code

    @staticmethod
    def _check_percentage(discount_type: str, discount_value: int) -> None:
        if discount_type == DiscountType.PERCENTAGE.value and not (
            MIN_PERCENTAGE <= discount_value <= MAX_PERCENTAGE
        ):
            raise ValueError("Percentage discount must be between 1 and 100.")
