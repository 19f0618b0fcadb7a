"""
Shared pytest fixtures for all tests.
This file is automatically loaded by pytest.
"""
import os
from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# CRITICAL: Environment must be set BEFORE importing any settings
# This must happen before any Settings objects are created
os.environ["SECRET_KEY"] = "test-secret-key-do-not-use-in-production"
os.environ["DB_NAME"] = "club_training_test"
os.environ["API_BASE_URL"] = "http://localhost:8080"
os.environ["API_PREFIX"] = "/api"
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG_LEVEL"] = "0"
os.environ["LOG_DIR"] = os.environ.get("LOG_DIR", "logs")

from assemblers import AssemblerRegistry  # noqa: E402
from authentication import AuthHandler  # noqa: E402
from main import app  # noqa: E402
from services.authorization import CapabilitySet  # noqa: E402
from services.link_builder import LinkBuilder  # noqa: E402
from tests.test_config import TestSettings  # noqa: E402

API_ROOT = "http://localhost:8080/api"


# Override the lifespan to prevent a real database connection during tests
@asynccontextmanager
async def test_lifespan(app):
    """Test lifespan that doesn't connect to any database"""
    yield


app.router.lifespan_context = test_lifespan
app.state.settings = TestSettings()


@pytest.fixture
def link_builder():
    return LinkBuilder(API_ROOT)


@pytest.fixture
def registry(link_builder):
    return AssemblerRegistry(link_builder)


@pytest.fixture
def admin():
    """Capabilities of an administrator"""
    return CapabilitySet(["ADMIN"])


@pytest.fixture
def anonymous():
    """Capabilities of an unauthenticated caller"""
    return CapabilitySet.anonymous()


@pytest.fixture
def admin_token():
    """Bearer token carrying the ADMIN role"""
    return AuthHandler().encode_token(
        {"_id": "admin-user-id", "roles": ["ADMIN"], "firstName": "Admin", "lastName": "User"}
    )


@pytest.fixture
def user_token():
    """Bearer token of an authenticated caller without the ADMIN role"""
    return AuthHandler().encode_token({"_id": "plain-user-id", "roles": ["USER"]})


@pytest_asyncio.fixture
async def client():
    """HTTP client for API testing; service dependencies are overridden per test"""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
