import os

# Must be set before the app (and its settings) are imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")  # bcrypt minimum, keeps tests fast

import pytest
from datetime import timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from family_loans.core.sessions import InMemorySessionStore, SessionAuthority
from family_loans.database import get_db
from family_loans.dependencies import get_session_authority
from family_loans.models.base import Base
# Import all model classes to ensure they're registered with SQLAlchemy
from family_loans.models.tenant import Tenant
from family_loans.models.family_member import FamilyMember
from family_loans.models.loan import Loan
# Import FastAPI app AFTER model imports
from family_loans.main import app
from tests.helpers import register

# Test database (SQLite in-memory for speed)
# Use StaticPool to ensure all connections share the same in-memory database
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def session_authority():
    """Fresh in-memory session authority for each test"""
    return SessionAuthority(store=InMemorySessionStore(), ttl=timedelta(hours=24))


@pytest.fixture(scope="function")
def client(db_session, session_authority):
    """FastAPI test client with test database and session store"""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_authority] = lambda: session_authority
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_client(client):
    """
    Factory for extra clients sharing the test database.

    Each client keeps its own cookie jar, so each can hold a different
    tenant's session.
    """

    def _make_client() -> TestClient:
        return TestClient(app)

    return _make_client


@pytest.fixture
def auth_client(client):
    """Client logged in as the "Smith" family"""
    register(client, "Smith")
    return client


@pytest.fixture
def tenant_a_client(make_client):
    """Client logged in as tenant A"""
    test_client = make_client()
    register(test_client, "Family A")
    return test_client


@pytest.fixture
def tenant_b_client(make_client):
    """Client logged in as tenant B"""
    test_client = make_client()
    register(test_client, "Family B")
    return test_client

