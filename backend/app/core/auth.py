from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.models.tenant import Tenant
from app.repositories.client_repository import ClientRepository
from app.repositories.tenant_repository import TenantRepository
from app.services.client_token_service import ClientTokenService


def _subdomain(host: str) -> str | None:
    hostname = host.split(":", 1)[0].lower()
    suffix = "." + settings.APP_DOMAIN.lower()
    if not hostname.endswith(suffix):
        return None
    slug = hostname[: -len(suffix)]
    return slug if slug and "." not in slug else None


def get_current_tenant(
    request: Request,
    db: Session = Depends(get_db),
) -> Tenant:
    """Resolve the storefront a request is addressed to.

    An explicit ``X-Tenant-Id`` header wins (used by the cook dashboard);
    otherwise the subdomain of the ``Host`` header under ``APP_DOMAIN`` is
    looked up by slug.
    """
    repo = TenantRepository(db)

    tenant_id_header = request.headers.get("X-Tenant-Id")
    if tenant_id_header:
        try:
            tenant_id = UUID(tenant_id_header)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid X-Tenant-Id header") from None
        tenant = repo.get_by_id(tenant_id)
    else:
        slug = _subdomain(request.headers.get("host", ""))
        tenant = repo.get_by_slug(slug) if slug else None

    if tenant is None:
        raise HTTPException(status_code=404, detail="Tenant not found")
    return tenant


def get_current_client(
    request: Request,
    db: Session = Depends(get_db),
) -> UUID:
    """Extract the signed-in client id from the bearer token."""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise HTTPException(status_code=401, detail="Authentication required")

    if not auth_header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header format")

    token = auth_header[7:]
    if not token:
        raise HTTPException(status_code=401, detail="Token is required")

    try:
        client_id = ClientTokenService.verify_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired") from None
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token") from None

    if ClientRepository(db).get_by_id(client_id) is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    return client_id


def get_current_cook(
    tenant: Tenant = Depends(get_current_tenant),
    client_id: UUID = Depends(get_current_client),
) -> UUID:
    """Require the signed-in client to be the cook who owns the storefront."""
    if tenant.owner_id is None or tenant.owner_id != client_id:
        raise HTTPException(status_code=403, detail="Only the cook can manage this storefront")
    return client_id
