"""Database models."""
from models.database import Base, SessionLocal, get_db, init_db
from models.client import Client
from models.inventory import InventoryMovement
from models.rate import RateKind, StorageRate, HandlingRate
from models.audit_log import AuditLog

__all__ = [
    "Base",
    "SessionLocal",
    "get_db",
    "init_db",
    "Client",
    "InventoryMovement",
    "RateKind",
    "StorageRate",
    "HandlingRate",
    "AuditLog",
]
