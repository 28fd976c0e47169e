"""Repository for client operations."""
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from exceptions import StorageFailureError
from models import Client
from repositories.base import BaseRepository
from logging_config import get_logger

logger = get_logger(__name__)


class ClientRepository(BaseRepository[Client]):
    """Repository for client-specific database operations."""

    def __init__(self, db: Session):
        """
        Initialize client repository.

        Args:
            db: Database session
        """
        super().__init__(Client, db)

    def get_by_external_id(self, external_id: str) -> Optional[Client]:
        """
        Get client by the identifier exposed through the API.

        Args:
            external_id: External identifier

        Returns:
            Client or None
        """
        try:
            return self.db.query(Client).filter(
                Client.external_id == external_id
            ).first()
        except SQLAlchemyError as e:
            logger.error("Failed to get client", external_id=external_id, error=str(e))
            raise StorageFailureError("Failed to get Client") from e

    def get_by_code(self, client_code: str) -> Optional[Client]:
        """
        Get client by client code.

        Args:
            client_code: Client code

        Returns:
            Client or None
        """
        try:
            return self.db.query(Client).filter(
                Client.client_code == client_code.upper()
            ).first()
        except SQLAlchemyError as e:
            logger.error("Failed to get client", client_code=client_code, error=str(e))
            raise StorageFailureError("Failed to get Client") from e

    def get_active_clients(self) -> List[Client]:
        """
        Get all non-archived clients.

        Returns:
            List of active clients ordered by name
        """
        try:
            return self.db.query(Client).filter(
                Client.archived.is_(False)
            ).order_by(Client.client_name.asc()).all()
        except SQLAlchemyError as e:
            logger.error("Failed to list active clients", error=str(e))
            raise StorageFailureError("Failed to get Client list") from e
