"""Promo code validation for carts and order submission.

``PromoCodeValidationService.validate`` decides whether a code may be applied
to a cart. It runs seven checks in a fixed order and stops at the first
failure:

1. the code exists for this tenant (``NOT_FOUND``)
2. the code is switched on (``INACTIVE``)
3. the start date has been reached (``NOT_YET_ACTIVE``)
4. the end date has not passed (``EXPIRED``)
5. the total usage cap is not reached (``FULLY_REDEEMED``)
6. the client's own usage cap is not reached (``CLIENT_LIMIT_REACHED``)
7. the cart meets the minimum order amount (``BELOW_MINIMUM``)

The same call serves the cart, where the result is advisory, and order
finalization, where it is re-run against live rows. It only reads: usage
counters and ledger rows are written by ``OrderFinalizationService``.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.clock import today_in
from app.core.config import settings
from app.models.promo_code import (
    DiscountType,
    PromoCode,
    PromoCodeStatus,
    PromoErrorKind,
    normalize_code,
)
from app.repositories.promo_code_repository import PromoCodeRepository
from app.repositories.promo_code_usage_repository import PromoCodeUsageRepository
from app.repositories.tenant_repository import TenantRepository

logger = logging.getLogger(__name__)


ERROR_MESSAGES: dict[PromoErrorKind, str] = {
    PromoErrorKind.NOT_FOUND: "This promo code is not valid.",
    PromoErrorKind.INACTIVE: "This promo code is currently inactive.",
    PromoErrorKind.NOT_YET_ACTIVE: "This promo code is not yet active. It starts on {starts_at}.",
    PromoErrorKind.EXPIRED: "This promo code has expired.",
    PromoErrorKind.FULLY_REDEEMED: "This promo code has been fully redeemed.",
    PromoErrorKind.CLIENT_LIMIT_REACHED: (
        "You have already used this promo code the maximum number of times."
    ),
    PromoErrorKind.BELOW_MINIMUM: (
        "A minimum order of {minimum} {currency} is required for this promo code. "
        "Add {shortfall} {currency} more."
    ),
}


def format_amount(amount: int) -> str:
    """Format an integer currency amount with thousands separators."""
    return f"{amount:,}"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a single ``validate`` call.

    ``promo_code`` and ``discount_amount`` are set only when ``valid``;
    ``error_kind``, ``message`` and ``context`` only when not.
    """

    valid: bool
    promo_code: PromoCode | None = None
    discount_amount: int = 0
    error_kind: PromoErrorKind | None = None
    message: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def success(cls, promo_code: PromoCode, discount_amount: int) -> "ValidationResult":
        return cls(valid=True, promo_code=promo_code, discount_amount=discount_amount)

    @classmethod
    def failure(cls, kind: PromoErrorKind, **context: Any) -> "ValidationResult":
        message_args = {
            key: format_amount(value) if isinstance(value, int) else value
            for key, value in context.items()
        }
        message = ERROR_MESSAGES[kind].format(currency=settings.CURRENCY, **message_args)
        return cls(valid=False, error_kind=kind, message=message, context=context)

    def to_payload(self) -> dict[str, Any]:
        """Render the result for the HTTP layer."""
        if self.valid and self.promo_code is not None:
            return {
                "valid": True,
                "code": self.promo_code.code,
                "discount_type": self.promo_code.discount_type,
                "discount_value": self.promo_code.discount_value,
                "discount_amount": self.discount_amount,
            }
        context = {
            key: value.isoformat() if isinstance(value, date) else value
            for key, value in self.context.items()
        }
        return {
            "valid": False,
            "error_kind": self.error_kind.value if self.error_kind else None,
            "message": self.message,
            "context": context,
        }


def calculate_discount(discount_type: str, discount_value: int, cart_subtotal: int) -> int:
    """Discount in whole currency units.

    Percentages round down. Fixed amounts never exceed the subtotal, so an
    order total cannot go negative.
    """
    if discount_type == DiscountType.PERCENTAGE.value:
        return (cart_subtotal * discount_value) // 100
    return min(discount_value, cart_subtotal)


class PromoCodeValidationService:
    """Read-only promo code gate shared by cart and checkout."""

    def __init__(self, db: Session):
        self.db = db
        self.promo_code_repo = PromoCodeRepository(db)
        self.usage_repo = PromoCodeUsageRepository(db)
        self.tenant_repo = TenantRepository(db)

    def validate(
        self,
        raw_code: str,
        tenant_id: UUID,
        client_id: UUID,
        cart_subtotal: int,
        today: date | None = None,
        for_update: bool = False,
    ) -> ValidationResult:
        """Run the seven ordered checks against ``raw_code``.

        Args:
            raw_code: Code as typed by the client, any case or padding.
            tenant_id: Storefront the cart belongs to.
            client_id: Authenticated client placing the order.
            cart_subtotal: Sum of line subtotals in currency units.
            today: Override for the tenant-local current date.
            for_update: Lock the promo row (used inside finalization).

        Returns:
            A ValidationResult. Rejections are values, never exceptions;
            only storage failures raise.
        """
        code = normalize_code(raw_code)

        # 1. Existence, scoped to this tenant in the query itself
        promo_code = self.promo_code_repo.get_by_code(code, tenant_id, for_update=for_update)
        if promo_code is None:
            return self._reject(PromoErrorKind.NOT_FOUND)

        # 2. Status runs before the date checks: an inactive expired code reports INACTIVE
        if promo_code.status != PromoCodeStatus.ACTIVE.value:
            return self._reject(PromoErrorKind.INACTIVE)

        if today is None:
            today = self._tenant_today(tenant_id)

        # 3. Start date, inclusive
        if today < promo_code.starts_at:
            return self._reject(PromoErrorKind.NOT_YET_ACTIVE, starts_at=promo_code.starts_at)

        # 4. End date, inclusive; null never expires
        if promo_code.ends_at is not None and today > promo_code.ends_at:
            return self._reject(PromoErrorKind.EXPIRED)

        # 5. Total cap; 0 is unlimited
        if promo_code.max_uses > 0 and promo_code.times_used >= promo_code.max_uses:
            return self._reject(PromoErrorKind.FULLY_REDEEMED)

        # 6. Per-client cap; 0 is unlimited
        if promo_code.max_uses_per_client > 0:
            client_uses = self.usage_repo.count_by_promo_code_and_client(
                promo_code.id,  # type: ignore[arg-type]
                client_id,
            )
            if client_uses >= promo_code.max_uses_per_client:
                return self._reject(PromoErrorKind.CLIENT_LIMIT_REACHED)

        # 7. Minimum order amount; 0 disables the check
        minimum = int(promo_code.minimum_order_amount or 0)
        if minimum > 0 and cart_subtotal < minimum:
            return self._reject(
                PromoErrorKind.BELOW_MINIMUM,
                minimum=minimum,
                shortfall=minimum - cart_subtotal,
            )

        discount = calculate_discount(
            str(promo_code.discount_type),
            int(promo_code.discount_value),
            cart_subtotal,
        )
        return ValidationResult.success(promo_code, discount)

    def _tenant_today(self, tenant_id: UUID) -> date:
        tenant = self.tenant_repo.get_by_id(tenant_id)
        return today_in(tenant.timezone if tenant else None)  # type: ignore[arg-type]

    @staticmethod
    def _reject(kind: PromoErrorKind, **context: Any) -> ValidationResult:
        logger.debug("Promo code rejected: %s", kind.value)
        return ValidationResult.failure(kind, **context)
