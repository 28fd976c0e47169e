"""Repository pattern for database access."""
from repositories.base import BaseRepository
from repositories.client_repository import ClientRepository
from repositories.movement_repository import MovementRepository
from repositories.rate_repository import RateRepository
from repositories.audit_log_repository import AuditLogRepository

__all__ = [
    "BaseRepository",
    "ClientRepository",
    "MovementRepository",
    "RateRepository",
    "AuditLogRepository",
]
