from app.models.audit_log import AuditLog
from app.models.client import Client
from app.models.order import Order, OrderStatus
from app.models.promo_code import (
    DiscountType,
    PromoCode,
    PromoCodeDisplayStatus,
    PromoCodeStatus,
    PromoErrorKind,
)
from app.models.promo_code_usage import PromoCodeUsage
from app.models.tenant import Tenant

__all__ = [
    "AuditLog",
    "Client",
    "DiscountType",
    "Order",
    "OrderStatus",
    "PromoCode",
    "PromoCodeDisplayStatus",
    "PromoCodeStatus",
    "PromoCodeUsage",
    "PromoErrorKind",
    "Tenant",
]
