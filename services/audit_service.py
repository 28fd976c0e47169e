"""Audit trail service."""
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from constants import DEFAULT_REQUESTED_BY
from models import AuditLog
from repositories.audit_log_repository import AuditLogRepository
from logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RequestContext:
    """Who is asking, passed explicitly from the HTTP layer."""

    requested_by: str = DEFAULT_REQUESTED_BY
    ip_address: Optional[str] = None


class AuditService:
    """Record user actions in the audit log."""

    def __init__(self, db: Session):
        self.repository = AuditLogRepository(db)

    def log(
        self,
        action: str,
        description: str,
        context: RequestContext,
        module: Optional[str] = None
    ) -> AuditLog:
        """
        Write an audit entry.

        Args:
            action: Action name, stored upper-case
            description: What happened
            context: Caller identity and address
            module: Optional module tag prefixed to the description

        Returns:
            Saved audit entry
        """
        if module:
            description = f"[{module.upper()}] {description}"

        entry = self.repository.create(
            action=action.upper(),
            description=description,
            username=context.requested_by or DEFAULT_REQUESTED_BY,
            ip_address=context.ip_address,
        )

        logger.info("Audit entry recorded", action=entry.action, user=entry.username)
        return entry
