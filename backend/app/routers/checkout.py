"""Cart-time promo code endpoint."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth import get_current_client, get_current_tenant
from app.core.database import get_db
from app.models.tenant import Tenant
from app.schemas.cart import ApplyPromoCodeRequest, PromoValidationResponse, cart_subtotal
from app.services.promo_validation import PromoCodeValidationService

router = APIRouter()


@router.post(
    "/promo/apply",
    response_model=PromoValidationResponse,
    summary="Check a promo code against the cart",
    responses={
        401: {"description": "Authentication required"},
        404: {"description": "Tenant not found"},
        422: {"description": "Validation error"},
    },
)
async def apply_promo_code(
    data: ApplyPromoCodeRequest,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(get_current_tenant),
    client_id: UUID = Depends(get_current_client),
) -> dict[str, Any]:
    """Validate a promo code for the current cart.

    Rejections are returned with ``valid=false`` and a 200 status. Nothing is
    reserved: the code is checked again when the order is placed.
    """
    subtotal = cart_subtotal(data.items)
    result = PromoCodeValidationService(db).validate(
        data.promo_code,
        tenant.id,  # type: ignore[arg-type]
        client_id,
        subtotal,
    )
    payload = result.to_payload()
    if result.valid:
        payload["subtotal"] = subtotal
    return payload
