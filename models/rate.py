"""Storage and handling rate models."""
from datetime import datetime
from enum import Enum

from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from models.database import Base


class RateKind(str, Enum):
    """Kinds of yard rates."""
    STORAGE = "storage"
    HANDLING = "handling"


class StorageRate(Base):
    """
    Per-day storage rate for a container size.

    A row with client_id NULL (or 0) is the default rate
    for that size.
    """

    __tablename__ = "storage_rates"
    __table_args__ = (
        Index("idx_storage_rate_lookup", "client_id", "size"),
    )

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"))
    size = Column(String(10), nullable=False)
    rate = Column(Numeric(10, 2), nullable=False)
    free_days = Column(Integer, default=0)
    date_added = Column(DateTime, default=datetime.utcnow)

    client = relationship("Client", back_populates="storage_rates")

    def __repr__(self):
        return f"<StorageRate(client_id={self.client_id}, size='{self.size}', rate={self.rate})>"


class HandlingRate(Base):
    """Per-event handling (lift on / lift off) rate for a container size."""

    __tablename__ = "handling_rates"
    __table_args__ = (
        Index("idx_handling_rate_lookup", "client_id", "size"),
    )

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"))
    size = Column(String(10), nullable=False)
    rate = Column(Numeric(10, 2), nullable=False)
    date_added = Column(DateTime, default=datetime.utcnow)

    client = relationship("Client", back_populates="handling_rates")

    def __repr__(self):
        return f"<HandlingRate(client_id={self.client_id}, size='{self.size}', rate={self.rate})>"
