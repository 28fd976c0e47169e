"""Audit log model."""
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, Text

from models.database import Base


class AuditLog(Base):
    """Who did what, and from where."""

    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, index=True)
    action = Column(String(50), nullable=False, index=True)
    description = Column(Text, nullable=False)
    username = Column(String(100), nullable=False)
    ip_address = Column(String(45))
    date_added = Column(DateTime, default=datetime.utcnow, index=True)

    def __repr__(self):
        return f"<AuditLog(action='{self.action}', user='{self.username}')>"
