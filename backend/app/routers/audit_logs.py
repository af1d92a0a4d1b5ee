"""Audit log API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.auth import get_current_cook, get_current_tenant
from app.core.database import get_db
from app.models.tenant import Tenant
from app.repositories.audit_log_repository import AuditLogRepository
from app.schemas.audit_log import AuditLogResponse

router = APIRouter()


@router.get(
    "/",
    response_model=list[AuditLogResponse],
    summary="List audit logs",
    responses={
        401: {"description": "Authentication required"},
        403: {"description": "Not the storefront cook"},
    },
)
async def list_audit_logs(
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    resource_type: str | None = None,
    resource_id: UUID | None = None,
    action: str | None = None,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(get_current_tenant),
    actor_id: UUID = Depends(get_current_cook),
) -> list[AuditLogResponse]:
    """List the tenant's audit trail with optional filters."""
    repo = AuditLogRepository(db)
    if resource_id is not None and resource_type is not None:
        logs = repo.get_by_resource(
            tenant.id, resource_type, resource_id, skip=skip, limit=limit  # type: ignore[arg-type]
        )
    else:
        logs = repo.get_all(
            tenant.id,  # type: ignore[arg-type]
            skip=skip,
            limit=limit,
            resource_type=resource_type,
            action=action,
        )
    return [AuditLogResponse.model_validate(log) for log in logs]
