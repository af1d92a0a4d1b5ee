"""Client repository for data access."""

from uuid import UUID

from sqlalchemy.orm import Session

from app.models.client import Client


class ClientRepository:
    """Repository for Client model."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, client_id: UUID) -> Client | None:
        return self.db.query(Client).filter(Client.id == client_id).first()

    def create(self, name: str, email: str | None = None) -> Client:
        client = Client(name=name, email=email)
        self.db.add(client)
        self.db.commit()
        self.db.refresh(client)
        return client
