import os

os.environ.setdefault("MODE", "test")

import pytest
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from main import app as fastapi_app
import db as project_db
import db_models  # ensure models are imported
from db_base import Base
from db_models.equipment import DepreciationRate
from db_models.user import User
from core.security import get_password_hash, create_access_token

# Fresh in-memory database per test; StaticPool keeps the single connection alive
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_EMAIL = "admin@itops.io"
ADMIN_PASSWORD = "adminpass"
DISABLED_EMAIL = "former@itops.io"
DISABLED_PASSWORD = "formerpass"

# Hashed once per session
ADMIN_HASH = get_password_hash(ADMIN_PASSWORD)
DISABLED_HASH = get_password_hash(DISABLED_PASSWORD)

SEED_RATES = [
    ("mac_pro", 0.20, 0.10),
    ("mac_air", 0.20, 0.10),
    ("lenovo", 0.25, 0.10),
]


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def session_factory():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )

    async with factory() as session:
        session.add_all([
            DepreciationRate(model=model, rate=rate, residual_pct=residual_pct)
            for model, rate, residual_pct in SEED_RATES
        ])
        session.add_all([
            User(
                email=ADMIN_EMAIL,
                hashed_password=ADMIN_HASH,
                full_name="Test Admin",
                is_active=True,
            ),
            User(
                email=DISABLED_EMAIL,
                hashed_password=DISABLED_HASH,
                full_name="Former Employee",
                is_active=False,
            ),
        ])
        await session.commit()

    yield factory

    await engine.dispose()


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(session_factory):
    # Override the get_session dependency to create a fresh session for each request
    async def override_get_session():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[project_db.get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=fastapi_app), base_url="http://testserver") as ac:
        yield ac

    # Clean up
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def admin_token():
    """Access token for the first seeded user (id=1)."""
    return create_access_token(data={"sub": "1"})


@pytest.fixture
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}
