"""Repository for audit log entries."""
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from exceptions import StorageFailureError
from models import AuditLog
from repositories.base import BaseRepository


class AuditLogRepository(BaseRepository[AuditLog]):
    """Repository for audit log database operations."""

    def __init__(self, db: Session):
        super().__init__(AuditLog, db)

    def get_by_action(self, action: str, limit: int = 100) -> List[AuditLog]:
        """Most recent entries for one action."""
        try:
            return self.db.query(AuditLog).filter(
                AuditLog.action == action.upper()
            ).order_by(AuditLog.date_added.desc(), AuditLog.id.desc()).limit(limit).all()
        except SQLAlchemyError as e:
            raise StorageFailureError("Failed to read audit log") from e
