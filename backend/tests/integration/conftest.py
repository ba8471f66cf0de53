"""Integration fixtures — a fresh schema and an in-process HTTP client per test."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from clinic.config import get_settings
from clinic.infrastructure.database import Base, UserModel, async_session_factory, engine
from clinic.main import app


@pytest_asyncio.fixture
async def database():
    """Drop and recreate every table; dispose the pool so the next test gets a new loop."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def client(database):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def seed_user(database):
    """Insert a login account directly; returns a factory keyed by email and role."""

    async def create(email: str, role: str, status: str = "ACTIVE") -> UserModel:
        async with async_session_factory() as session:
            user = UserModel(
                id=f"user-{email}",
                email=email,
                password="not-a-real-hash",
                role=role,
                status=status,
                need_password_change=False,
            )
            session.add(user)
            await session.commit()
            return user

    return create


@pytest.fixture
def make_token():
    """Sign access tokens the way the auth service issues them."""
    settings = get_settings()

    def sign(email: str, role: str, expires_in: timedelta = timedelta(hours=1)) -> str:
        claims = {
            "email": email,
            "role": role,
            "exp": datetime.now(timezone.utc) + expires_in,
        }
        return jwt.encode(claims, settings.access_token_secret, algorithm=settings.jwt_algorithm)

    return sign
