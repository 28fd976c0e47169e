"""Client model."""
import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship

from models.database import Base


def _new_external_id() -> str:
    return str(uuid.uuid4())


class Client(Base):
    """Yard client that owns containers and may carry its own rates."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)

    # Stable identifier exposed through the API instead of the primary key
    external_id = Column(String(36), unique=True, nullable=False, index=True, default=_new_external_id)

    # Basic Info
    client_code = Column(String(20), unique=True, nullable=False, index=True)
    client_name = Column(String(200), nullable=False)
    email = Column(String(255))
    contact_person = Column(String(200))
    phone = Column(String(50))

    # Status
    archived = Column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    movements = relationship("InventoryMovement", back_populates="client")
    storage_rates = relationship("StorageRate", back_populates="client")
    handling_rates = relationship("HandlingRate", back_populates="client")

    @property
    def display_text(self) -> str:
        """Code and name as shown in client pickers."""
        return f"{self.client_code} - {self.client_name}"

    def __repr__(self):
        return f"<Client(id={self.id}, code='{self.client_code}')>"
