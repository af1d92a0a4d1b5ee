from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging import configure_logging
from app.routers import audit_logs, checkout, orders, promo_codes

configure_logging()

OPENAPI_TAGS = [
    {"name": "Checkout", "description": "Apply promo codes to a cart."},
    {"name": "Orders", "description": "Place orders and redeem promo codes."},
    {"name": "Promo Codes", "description": "Manage a storefront's promo codes."},
    {"name": "Audit Logs", "description": "Query the audit trail for promo code changes."},
]

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Promo codes for multi-tenant food ordering storefronts: "
        "cart-time validation, order-time redemption and cook management."
    ),
    openapi_tags=OPENAPI_TAGS,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Total-Count"],
)

app.include_router(checkout.router, prefix="/v1/checkout", tags=["Checkout"])
app.include_router(orders.router, prefix="/v1/orders", tags=["Orders"])
app.include_router(promo_codes.router, prefix="/v1/promo_codes", tags=["Promo Codes"])
app.include_router(audit_logs.router, prefix="/v1/audit_logs", tags=["Audit Logs"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "domain": settings.APP_DOMAIN,
        "status": "running",
    }
