from app.repositories.audit_log_repository import AuditLogRepository
from app.repositories.client_repository import ClientRepository
from app.repositories.order_repository import OrderRepository
from app.repositories.promo_code_repository import PromoCodeRepository
from app.repositories.promo_code_usage_repository import PromoCodeUsageRepository
from app.repositories.tenant_repository import TenantRepository

__all__ = [
    "AuditLogRepository",
    "ClientRepository",
    "OrderRepository",
    "PromoCodeRepository",
    "PromoCodeUsageRepository",
    "TenantRepository",
]
