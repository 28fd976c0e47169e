"""Yard inventory models."""
import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Index
from sqlalchemy.orm import relationship

from constants import GATE_STATUS_IN
from models.database import Base


def _new_external_id() -> str:
    return str(uuid.uuid4())


class InventoryMovement(Base):
    """
    One stay of a container in the yard.

    The gate-in creates the row; the gate-out fills in date_out on the same
    row, so a container still in the yard has date_out NULL.
    """

    __tablename__ = "inventory"
    __table_args__ = (
        Index("idx_inventory_billing_date", "gate_status", "date_in"),
        Index("idx_inventory_client_status", "client_id", "gate_status"),
    )

    id = Column(Integer, primary_key=True, index=True)
    external_id = Column(String(36), unique=True, nullable=False, index=True, default=_new_external_id)

    # Container Info
    container_no = Column(String(20), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id"))
    size = Column(String(10), nullable=False)  # "20", "40", "45"
    container_type = Column(String(10))  # "DC", "HC", "RF"...

    # Gate
    gate_status = Column(String(20), nullable=False, default=GATE_STATUS_IN)
    date_in = Column(DateTime, nullable=False)
    date_out = Column(DateTime)

    remarks = Column(Text)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    client = relationship("Client", back_populates="movements")

    def __repr__(self):
        return f"<InventoryMovement(container='{self.container_no}', in='{self.date_in}', out='{self.date_out}')>"
