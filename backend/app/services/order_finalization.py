"""Order finalization: the write path for promo code redemption."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.clock import today_in
from app.core.config import settings
from app.models.order import Order, OrderStatus
from app.models.promo_code import PromoCode, PromoErrorKind
from app.repositories.order_repository import OrderRepository
from app.repositories.promo_code_repository import PromoCodeRepository
from app.repositories.promo_code_usage_repository import PromoCodeUsageRepository
from app.repositories.tenant_repository import TenantRepository
from app.schemas.cart import CartItem, cart_subtotal
from app.services.promo_validation import PromoCodeValidationService, ValidationResult

logger = logging.getLogger(__name__)

ORDER_NUMBER_ATTEMPTS = 3


class PromoCodeRejectedError(ValueError):
    """The promo code failed re-validation when the order was submitted."""

    def __init__(self, result: ValidationResult):
        super().__init__(result.message)
        self.result = result


class OrderFinalizationService:
    """Creates orders and redeems their promo code in one transaction."""

    def __init__(self, db: Session):
        self.db = db
        self.validator = PromoCodeValidationService(db)
        self.promo_code_repo = PromoCodeRepository(db)
        self.usage_repo = PromoCodeUsageRepository(db)
        self.order_repo = OrderRepository(db)
        self.tenant_repo = TenantRepository(db)

    def finalize(
        self,
        tenant_id: UUID,
        client_id: UUID,
        items: list[CartItem],
        delivery_fee: int = 0,
        promo_code: str | None = None,
        today: date | None = None,
    ) -> Order:
        """Place an order, re-checking and redeeming ``promo_code`` if given.

        The promo row is locked and re-validated against live data, then
        ``times_used`` is bumped with a guarded update and the usage row is
        written, all before the single commit. Any failure rolls everything
        back, so a rejected code never leaves an order behind. A clash on the
        order number retries the whole transaction with a fresh number.

        Raises:
            ValueError: If the cart is empty.
            PromoCodeRejectedError: If the promo code no longer passes
                validation or its last use was taken concurrently.
        """
        if not items:
            raise ValueError("Cannot place an order with an empty cart")

        if today is None:
            tenant = self.tenant_repo.get_by_id(tenant_id)
            today = today_in(tenant.timezone if tenant else None)  # type: ignore[arg-type]

        subtotal = cart_subtotal(items)
        for attempt in range(1, ORDER_NUMBER_ATTEMPTS + 1):
            try:
                order, redeemed, discount = self._stage_order(
                    tenant_id, client_id, subtotal, delivery_fee, promo_code, today
                )
                self.db.commit()
                break
            except IntegrityError:
                # Another order took the same number; retry the whole transaction
                self.db.rollback()
                if attempt == ORDER_NUMBER_ATTEMPTS:
                    raise
                logger.warning("Order number collision for tenant %s, retrying", tenant_id)
            except Exception:
                self.db.rollback()
                raise

        self.db.refresh(order)
        if redeemed is not None:
            logger.info(
                "Order %s redeemed promo code %s for %d",
                order.order_number,
                redeemed.code,
                discount,
            )
        return order

    def _stage_order(
        self,
        tenant_id: UUID,
        client_id: UUID,
        subtotal: int,
        delivery_fee: int,
        promo_code: str | None,
        today: date,
    ) -> tuple[Order, PromoCode | None, int]:
        """Redeem the code and stage the order and usage rows, without committing."""
        redeemed: PromoCode | None = None
        discount = 0
        if promo_code and promo_code.strip():
            redeemed, discount = self._redeem(promo_code, tenant_id, client_id, subtotal, today)

        order = self.order_repo.add(
            Order(
                tenant_id=tenant_id,
                client_id=client_id,
                order_number=self.order_repo.next_order_number(
                    settings.ORDER_NUMBER_PREFIX, today
                ),
                subtotal=subtotal,
                delivery_fee=delivery_fee,
                promo_code_id=redeemed.id if redeemed is not None else None,
                promo_discount=discount,
                grand_total=max(0, subtotal + delivery_fee - discount),
                status=OrderStatus.PENDING_PAYMENT.value,
            )
        )
        if redeemed is not None:
            self.usage_repo.add(
                promo_code_id=redeemed.id,  # type: ignore[arg-type]
                order_id=order.id,  # type: ignore[arg-type]
                client_id=client_id,
                discount_amount=discount,
            )
            self.db.flush()
        return order, redeemed, discount

    def _redeem(
        self,
        raw_code: str,
        tenant_id: UUID,
        client_id: UUID,
        subtotal: int,
        today: date,
    ) -> tuple[PromoCode, int]:
        result = self.validator.validate(
            raw_code, tenant_id, client_id, subtotal, today=today, for_update=True
        )
        if not result.valid or result.promo_code is None:
            logger.warning(
                "Promo code rejected at order submission for tenant %s: %s",
                tenant_id,
                result.error_kind.value if result.error_kind else "unknown",
            )
            raise PromoCodeRejectedError(result)

        promo_code = result.promo_code
        if not self.promo_code_repo.try_increment_usage(promo_code.id):  # type: ignore[arg-type]
            logger.warning("Promo code %s lost its last use to a concurrent order", promo_code.code)
            raise PromoCodeRejectedError(ValidationResult.failure(PromoErrorKind.FULLY_REDEEMED))
        return promo_code, result.discount_amount
