"""Promo code management endpoints for the cook dashboard."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from app.core.auth import get_current_cook, get_current_tenant
from app.core.database import get_db
from app.models.promo_code import PromoCode, PromoCodeStatus
from app.models.tenant import Tenant
from app.schemas.promo_code import (
    PromoCodeCreate,
    PromoCodeDetailResponse,
    PromoCodeResponse,
    PromoCodeUpdate,
)
from app.services.promo_code_service import PromoCodeService

router = APIRouter()


def _to_response(
    service: PromoCodeService, tenant: Tenant, promo_code: PromoCode
) -> PromoCodeResponse:
    today = service.tenant_today(tenant.id)  # type: ignore[arg-type]
    return PromoCodeResponse.model_validate(promo_code).model_copy(
        update={"display_status": promo_code.status_on(today).value}
    )


@router.post(
    "/",
    response_model=PromoCodeResponse,
    status_code=201,
    summary="Create promo code",
    responses={
        400: {"description": "Invalid promo code"},
        401: {"description": "Authentication required"},
        403: {"description": "Not the storefront cook"},
        409: {"description": "A promo code with this name already exists"},
        422: {"description": "Validation error"},
    },
)
async def create_promo_code(
    data: PromoCodeCreate,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(get_current_tenant),
    actor_id: UUID = Depends(get_current_cook),
) -> PromoCodeResponse:
    """Create a promo code. The code is stored uppercase and starts active."""
    service = PromoCodeService(db)
    if service.code_exists_for_tenant(tenant.id, data.code):  # type: ignore[arg-type]
        raise HTTPException(status_code=409, detail="A promo code with this name already exists.")
    try:
        promo_code = service.create_promo_code(
            tenant.id, data, actor_id=actor_id  # type: ignore[arg-type]
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from None
    return _to_response(service, tenant, promo_code)


@router.get(
    "/",
    response_model=list[PromoCodeResponse],
    summary="List promo codes",
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Not the storefront cook"},
    },
)
async def list_promo_codes(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    status: PromoCodeStatus | None = None,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(get_current_tenant),
    actor_id: UUID = Depends(get_current_cook),
) -> list[PromoCodeResponse]:
    """List the current tenant's promo codes, newest first."""
    service = PromoCodeService(db)
    total = service.count_for_tenant(tenant.id, status)  # type: ignore[arg-type]
    response.headers["X-Total-Count"] = str(total)
    promo_codes = service.list_for_tenant(
        tenant.id, skip=skip, limit=limit, status=status  # type: ignore[arg-type]
    )
    return [_to_response(service, tenant, pc) for pc in promo_codes]


@router.get(
    "/{promo_code_id}",
    response_model=PromoCodeDetailResponse,
    summary="Get promo code",
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Not the storefront cook"},
        404: {"description": "Promo code not found"},
    },
)
async def get_promo_code(
    promo_code_id: UUID,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(get_current_tenant),
    actor_id: UUID = Depends(get_current_cook),
) -> PromoCodeDetailResponse:
    """Get a promo code with its usage count, for the edit form."""
    service = PromoCodeService(db)
    promo_code = service.get_for_tenant(tenant.id, promo_code_id)  # type: ignore[arg-type]
    if promo_code is None:
        raise HTTPException(status_code=404, detail="Promo code not found")
    base = _to_response(service, tenant, promo_code)
    return PromoCodeDetailResponse(
        **base.model_dump(), usage_count=service.usage_count(promo_code_id)
    )


@router.put(
    "/{promo_code_id}",
    response_model=PromoCodeResponse,
    summary="Update promo code",
    responses={
        400: {"description": "Invalid change"},
        401: {"description": "Authentication required"},
        403: {"description": "Not the storefront cook"},
        404: {"description": "Promo code not found"},
        422: {"description": "Validation error"},
    },
)
async def update_promo_code(
    promo_code_id: UUID,
    data: PromoCodeUpdate,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(get_current_tenant),
    actor_id: UUID = Depends(get_current_cook),
) -> PromoCodeResponse:
    """Update the editable fields. Code and discount type cannot change."""
    service = PromoCodeService(db)
    try:
        promo_code = service.update_promo_code(
            tenant.id, promo_code_id, data, actor_id=actor_id  # type: ignore[arg-type]
        )
    except ValueError as e:
        detail = str(e)
        if "not found" in detail:
            raise HTTPException(status_code=404, detail="Promo code not found") from None
        raise HTTPException(status_code=400, detail=detail) from None
    return _to_response(service, tenant, promo_code)


@router.post(
    "/{promo_code_id}/toggle",
    response_model=PromoCodeResponse,
    summary="Activate or deactivate promo code",
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Not the storefront cook"},
        404: {"description": "Promo code not found"},
    },
)
async def toggle_promo_code(
    promo_code_id: UUID,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(get_current_tenant),
    actor_id: UUID = Depends(get_current_cook),
) -> PromoCodeResponse:
    service = PromoCodeService(db)
    try:
        promo_code = service.toggle_status(
            tenant.id, promo_code_id, actor_id=actor_id  # type: ignore[arg-type]
        )
    except ValueError:
        raise HTTPException(status_code=404, detail="Promo code not found") from None
    return _to_response(service, tenant, promo_code)
