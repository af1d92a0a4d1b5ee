from datetime import UTC, datetime, timedelta
from uuid import UUID

import jwt

from app.core.config import settings

TOKEN_TYPE = "client"


class ClientTokenService:
    """Issues and checks the bearer tokens that identify a signed-in client."""

    @staticmethod
    def generate_token(client_id: UUID, ttl_hours: int | None = None) -> str:
        hours = ttl_hours if ttl_hours is not None else settings.CLIENT_TOKEN_TTL_HOURS
        payload = {
            "client_id": str(client_id),
            "type": TOKEN_TYPE,
            "exp": datetime.now(UTC) + timedelta(hours=hours),
        }
        return jwt.encode(payload, settings.CLIENT_JWT_SECRET, algorithm="HS256")

    @staticmethod
    def verify_token(token: str) -> UUID:
        """Decode a client token and return the client id.

        Raises jwt.ExpiredSignatureError or jwt.InvalidTokenError on failure.
        """
        payload = jwt.decode(token, settings.CLIENT_JWT_SECRET, algorithms=["HS256"])
        if payload.get("type") != TOKEN_TYPE:
            raise jwt.InvalidTokenError("Invalid token type")
        return UUID(payload["client_id"])
