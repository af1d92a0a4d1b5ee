"""Order submission endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.auth import get_current_client, get_current_tenant
from app.core.database import get_db
from app.models.order import Order
from app.models.tenant import Tenant
from app.repositories.order_repository import OrderRepository
from app.schemas.order import OrderCreate, OrderResponse
from app.services.order_finalization import OrderFinalizationService, PromoCodeRejectedError

router = APIRouter()


@router.post(
    "/",
    response_model=OrderResponse,
    status_code=201,
    summary="Place order",
    responses={
        400: {"description": "Invalid order"},
        401: {"description": "Authentication required"},
        404: {"description": "Tenant not found"},
        422: {"description": "Promo code rejected or validation error"},
    },
)
async def create_order(
    data: OrderCreate,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(get_current_tenant),
    client_id: UUID = Depends(get_current_client),
) -> Order | JSONResponse:
    """Place an order, re-validating and redeeming its promo code."""
    service = OrderFinalizationService(db)
    try:
        return service.finalize(
            tenant_id=tenant.id,  # type: ignore[arg-type]
            client_id=client_id,
            items=data.items,
            delivery_fee=data.delivery_fee,
            promo_code=data.promo_code,
        )
    except PromoCodeRejectedError as e:
        return JSONResponse(status_code=422, content={"detail": e.result.to_payload()})
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None


@router.get(
    "/",
    response_model=list[OrderResponse],
    summary="List my orders",
    responses={401: {"description": "Authentication required"}},
)
async def list_orders(
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(get_current_tenant),
    client_id: UUID = Depends(get_current_client),
) -> list[Order]:
    return OrderRepository(db).get_by_client(client_id, tenant.id)  # type: ignore[arg-type]


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get order",
    responses={
        401: {"description": "Authentication required"},
        404: {"description": "Order not found"},
    },
)
async def get_order(
    order_id: UUID,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(get_current_tenant),
    client_id: UUID = Depends(get_current_client),
) -> Order:
    order = OrderRepository(db).get_by_id(order_id, tenant.id)  # type: ignore[arg-type]
    if order is None or order.client_id != client_id:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
