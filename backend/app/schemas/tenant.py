from uuid import UUID

from pydantic import BaseModel, Field


class TenantCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    slug: str = Field(min_length=1, max_length=63, pattern=r"^[a-z0-9-]+$")
    timezone: str | None = Field(default=None, max_length=50)
    owner_id: UUID | None = None
