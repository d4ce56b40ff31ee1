import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing")

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from bootcamp_directory.app import app  # noqa: E402
from bootcamp_directory.domain.models.user import Role  # noqa: E402
from bootcamp_directory.domain.ports.repositories.document_store import DocumentStore  # noqa: E402
from bootcamp_directory.domain.ports.repositories.user_repository import UserRepository  # noqa: E402
from bootcamp_directory.domain.ports.services.auth_service import AuthService  # noqa: E402
from bootcamp_directory.infrastructure.adapters.repositories.sqlalchemy_user_repository import (  # noqa: E402
    SQLAlchemyUserRepository,
)
from bootcamp_directory.infrastructure.adapters.services.jwt_auth_service import JWTAuthService  # noqa: E402
from bootcamp_directory.infrastructure.config.settings import Settings  # noqa: E402
from bootcamp_directory.infrastructure.persistence.database import build_engine, get_session  # noqa: E402
from bootcamp_directory.infrastructure.persistence.models import table_registry  # noqa: E402

from .factories import user_factory  # noqa: E402

API = "/api/v1"


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        SECRET_KEY="test-secret-key-for-testing",
        ALGORITHM="HS256",
        ACCESS_TOKEN_EXPIRE_MINUTES=30,
        UPLOAD_DIR=str(tmp_path / "uploads"),
        MAX_FILE_UPLOAD=1024,
    )


@pytest_asyncio.fixture
async def engine(test_settings):
    """Throwaway SQLite database per test"""
    engine = build_engine(test_settings)

    async with engine.begin() as conn:
        await conn.run_sync(table_registry.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(table_registry.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine):
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture
async def client(engine, test_settings):
    """HTTP client whose requests each get a fresh session on the test database"""
    from bootcamp_directory.infrastructure.config.dependencies import get_settings

    async def override_get_session():
        async with AsyncSession(engine, expire_on_commit=False) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_settings] = lambda: test_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """Register through the API and return bearer headers; the auth cookie is discarded."""

    async def _register(email: str = "publisher@example.com", role: str = "publisher", name: str = "Publisher"):
        response = await client.post(
            f"{API}/auth/register", json=user_factory.create_user_data(name=name, email=email, role=role)
        )
        assert response.status_code == 201, response.text
        client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _register


@pytest_asyncio.fixture
async def admin_headers(session, test_settings):
    """Admins cannot self-register, so the account is written straight to the database"""
    session.add(user_factory.create_sql_user(name="Admin", email="admin@example.com", role=Role.ADMIN.value))
    await session.commit()

    repository = SQLAlchemyUserRepository(session)
    admin = await repository.get_by_email("admin@example.com")
    token = JWTAuthService(repository, test_settings).create_access_token(admin)
    return {"Authorization": f"Bearer {token}"}


# Shared fixtures for use case testing
@pytest.fixture
def mock_document_store():
    """Mock document store for use case testing"""
    return AsyncMock(spec=DocumentStore)


@pytest.fixture
def mock_user_repository():
    """Mock user repository for use case testing"""
    return AsyncMock(spec=UserRepository)


@pytest.fixture
def mock_auth_service():
    """Mock auth service for use case testing"""
    return MagicMock(spec=AuthService)
