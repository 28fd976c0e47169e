"""Pytest fixtures: in-memory database, seed helpers and an API client."""
import os
from datetime import date, datetime, time
from decimal import Decimal

os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from constants import GATE_STATUS_IN
from models import Base, Client, InventoryMovement, RateKind, get_db
from repositories import RateRepository

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session():
    """Fresh schema and session for each test."""
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def add_client(db_session):
    """Create clients."""
    def _add(code="ACME", name="Acme Lines", archived=False):
        client = Client(client_code=code, client_name=name, archived=archived)
        db_session.add(client)
        db_session.commit()
        return client
    return _add


@pytest.fixture
def add_movement(db_session):
    """Create gated-in movements; plain dates are stored at 10:00."""
    def _at_ten(value):
        if value is None or isinstance(value, datetime):
            return value
        return datetime.combine(value, time(10, 0))

    def _add(
        container_no,
        date_in,
        date_out=None,
        client=None,
        size="40",
        container_type="DC",
        gate_status=GATE_STATUS_IN,
    ):
        movement = InventoryMovement(
            container_no=container_no,
            client_id=client.id if client else None,
            size=size,
            container_type=container_type,
            gate_status=gate_status,
            date_in=_at_ten(date_in),
            date_out=_at_ten(date_out),
        )
        db_session.add(movement)
        db_session.commit()
        return movement
    return _add


@pytest.fixture
def rates(db_session):
    """Rate repository bound to the test session."""
    return RateRepository(db_session)


@pytest.fixture
def default_rates(rates):
    """Default 20/40ft rates without free days."""
    rates.set_rate(RateKind.STORAGE, "20", Decimal("50.00"))
    rates.set_rate(RateKind.HANDLING, "20", Decimal("150.00"))
    rates.set_rate(RateKind.STORAGE, "40", Decimal("100.00"))
    rates.set_rate(RateKind.HANDLING, "40", Decimal("250.00"))
    return rates


@pytest.fixture
def january():
    """(start, end) of January 2024."""
    return date(2024, 1, 1), date(2024, 1, 31)


@pytest.fixture
def api_client(db_session):
    """FastAPI test client using the test session."""
    from fastapi.testclient import TestClient
    from api.main import app

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
