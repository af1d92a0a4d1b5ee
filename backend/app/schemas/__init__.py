from app.schemas.audit_log import AuditLogResponse
from app.schemas.cart import (
    ApplyPromoCodeRequest,
    CartItem,
    PromoValidationResponse,
    cart_subtotal,
)
from app.schemas.order import OrderCreate, OrderResponse
from app.schemas.promo_code import (
    PromoCodeCreate,
    PromoCodeDetailResponse,
    PromoCodeResponse,
    PromoCodeUpdate,
)
from app.schemas.tenant import TenantCreate

__all__ = [
    "ApplyPromoCodeRequest",
    "AuditLogResponse",
    "CartItem",
    "OrderCreate",
    "OrderResponse",
    "PromoCodeCreate",
    "PromoCodeDetailResponse",
    "PromoCodeResponse",
    "PromoCodeUpdate",
    "PromoValidationResponse",
    "TenantCreate",
    "cart_subtotal",
]
