"""Shared fixtures: in-memory SQLite database with the default catalog, and an API client."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "false"

import pytest
from fastapi.testclient import TestClient
from app.database import Base, SessionLocal, create_tables, engine
from app.models.vehicle import Vehicle
from app.services.catalog_service import seed_catalog
from app.services.last_order_cache import LastOrderCache


@pytest.fixture
def db():
    create_tables()
    session = SessionLocal()
    seed_catalog(session)
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def vehicle_ids(db):
    """Catalog name → id."""
    return {v.name: v.id for v in db.query(Vehicle).all()}


@pytest.fixture
def client(db):
    from app.main import app
    app.state.last_orders = LastOrderCache(ttl_seconds=3600)
    return TestClient(app)
