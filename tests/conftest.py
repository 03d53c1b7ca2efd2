import os

# storerate.main builds a module-level app from the environment on import.
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

import storerate.models  # noqa: F401
from storerate.core.config import Settings
from storerate.main import create_app
from storerate.models.base import Base
from storerate.models.enums import UserRole
from storerate.services.accounts import create_admin_managed_user

DEFAULT_PASSWORD = "Secret@123"
DEFAULT_ADDRESS = "42 Test Avenue, Springfield"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        JWT_SECRET_KEY="test-secret-key",
        DATABASE_URL="sqlite+aiosqlite:///:memory:",
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest_asyncio.fixture
async def app(settings):
    """Fresh app with an empty in-memory database per test."""
    app = create_app(settings)
    async with app.state.db.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield app
    await app.state.db.dispose()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def db(app):
    async with app.state.db.sessionmaker() as session:
        yield session


@pytest.fixture
def hasher(app):
    return app.state.hasher


@pytest.fixture
def tokens(app):
    return app.state.tokens


@pytest.fixture
def make_user(app):
    """Create a user of any role through the admin-managed path; returns its public dict."""

    async def _make(
        *,
        name: str,
        email: str,
        role: UserRole = UserRole.user,
        password: str = DEFAULT_PASSWORD,
        address: str = DEFAULT_ADDRESS,
    ) -> dict:
        async with app.state.db.sessionmaker() as session:
            return await create_admin_managed_user(
                session,
                app.state.hasher,
                name=name,
                email=email,
                address=address,
                password=password,
                role=role,
            )

    return _make


@pytest.fixture
def auth_header(tokens):
    def _header(user: dict) -> dict:
        token = tokens.issue(user_id=user["id"], email=user["email"], role=user["role"])
        return {"Authorization": f"Bearer {token}"}

    return _header


@pytest_asyncio.fixture
async def admin(make_user):
    return await make_user(name="System Administrator User", email="admin@storerate.com", role=UserRole.admin)


@pytest_asyncio.fixture
async def normal_user(make_user):
    return await make_user(name="Regular Shopper Account One", email="shopper@example.com")
