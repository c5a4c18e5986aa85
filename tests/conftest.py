"""Shared fixtures: file-backed SQLite database and authenticated clients."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

# Configure before the application modules read settings
os.environ["DATABASE_URL"] = "sqlite:///./test.db"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_ADMIN"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from ems_api.auth import create_access_token  # noqa: E402
from ems_api.database import get_db, make_engine  # noqa: E402
from ems_api.main import app  # noqa: E402
from ems_api.models import Base  # noqa: E402

TEST_DATABASE_URL = "sqlite:///./test.db"
engine = make_engine(TEST_DATABASE_URL)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    """Create fresh tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def auth_headers(role: str) -> dict:
    token = create_access_token("00000000-0000-0000-0000-000000000000", f"{role}@company.com", role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def admin(client):
    client.headers.update(auth_headers("admin"))
    return client


@pytest.fixture
def manager_headers():
    return auth_headers("manager")


@pytest.fixture
def employee_headers():
    return auth_headers("employee")
