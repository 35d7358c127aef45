"""Shared fixtures: in-memory database and a FastAPI test client."""

import os

# Keep module-level app construction away from a real server database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.db.session import Database
from app.main import create_app

FRONTEND_URL = "http://localhost:5173"


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", frontend_url=FRONTEND_URL)


@pytest.fixture
def database():
    db = Database("sqlite://")
    yield db
    db.dispose()


@pytest.fixture
def client(settings, database):
    """Test client sending the frontend Origin; startup creates the tables."""
    app = create_app(settings, database=database)
    with TestClient(app, headers={"Origin": FRONTEND_URL}) as c:
        yield c


@pytest.fixture
def product(client):
    """A product created through the API."""
    res = client.post(
        "/api/products", json={"name": "Mouse - Testing", "price": 70}
    )
    assert res.status_code == 201
    return res.json()["data"]
