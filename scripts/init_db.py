#!/usr/bin/env python
"""Initialize database with default rates and a sample client."""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from exceptions import YardBillingException
from models import init_db, RateKind
from models.database import SessionLocal
from repositories import ClientRepository, RateRepository

DEFAULT_RATES = {
    # size: (storage per day, free days, handling per event)
    "20": ("50.00", 0, "150.00"),
    "40": ("100.00", 0, "250.00"),
    "45": ("120.00", 0, "300.00"),
}


def seed_default_rates(db):
    """Create the default (client-less) storage and handling rates."""
    rates = RateRepository(db)
    for size, (storage, free_days, handling) in DEFAULT_RATES.items():
        rates.set_rate(RateKind.STORAGE, size, storage, free_days=free_days)
        rates.set_rate(RateKind.HANDLING, size, handling)
        print(f"✅ Default rates for {size}ft: storage {storage}/day, handling {handling}/move")


def create_sample_client(db):
    """Create a sample client with its own 40ft storage rate."""
    clients = ClientRepository(db)
    if clients.get_by_code("SAMPLE"):
        print("Sample client already exists")
        return

    client = clients.create(
        client_code="SAMPLE",
        client_name="Sample Shipping Line",
        email="billing@example.com",
    )
    RateRepository(db).set_rate(RateKind.STORAGE, "40", "80.00", client_id=client.id, free_days=3)

    print(f"✅ Created sample client: {client.display_text}")


def main():
    """Initialize database."""
    print("🗄️  Initializing database...")

    db = SessionLocal()
    try:
        init_db()
        print("✅ Database tables created")

        seed_default_rates(db)
        create_sample_client(db)

        print("✅ Database initialization complete!")

    except YardBillingException as e:
        print(f"❌ Error initializing database: {e}")
        sys.exit(1)
    finally:
        db.close()


if __name__ == "__main__":
    main()
