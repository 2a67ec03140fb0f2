# Standard library imports
from collections.abc import AsyncIterator
import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

# Third-party imports
from httpx import ASGITransport, AsyncClient
import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

# Local application imports
import civictrack.models  # noqa: F401
from civictrack.core.db import get_async_session
from civictrack.core.db.create_async_engine import enable_sqlite_foreign_keys
from civictrack.models.auth.user import User, UserRole
from civictrack.models.base import Base
from civictrack.models.issues import Issue, IssueCategory
from civictrack.schemas.auth.principal_schemas import Principal
from civictrack.services.auth.token_services import create_access_token
from civictrack.services.issues import lifecycle_services

NYC = (40.7128, -74.0060)
LA = (34.0522, -118.2437)


@pytest.fixture
async def engine(tmp_path) -> AsyncIterator[AsyncEngine]:
    engine = enable_sqlite_foreign_keys(create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'civictrack_test.db'}"))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


async def create_user(db: AsyncSession, username: str, role: UserRole = UserRole.USER) -> Principal:
    # Skip bcrypt; these users never log in with a password
    user = User(
        username=username,
        email=f"{username}@example.com",
        name=username.replace("_", " ").title(),
        hashed_password="unused",
        role=role,
    )
    db.add(user)
    await db.commit()
    return Principal.from_user(user)


@pytest.fixture
async def reporter(db: AsyncSession) -> Principal:
    return await create_user(db, "reporter")


@pytest.fixture
async def neighbor(db: AsyncSession) -> Principal:
    return await create_user(db, "neighbor")


@pytest.fixture
async def admin(db: AsyncSession) -> Principal:
    return await create_user(db, "city_admin", UserRole.ADMIN)


@pytest.fixture
def issue_factory(db: AsyncSession):
    """Report an issue through the lifecycle service; keyword overrides replace the defaults."""

    async def _create(principal: Principal, **overrides) -> Issue:
        data = {
            "title": "Pothole on Main Street",
            "description": "Deep pothole next to the pedestrian crossing",
            "category": IssueCategory.ROAD,
            "latitude": NYC[0],
            "longitude": NYC[1],
            "address": "Main Street, New York",
        }
        data.update(overrides)
        return await lifecycle_services.create_issue(db, principal, **data)

    return _create


def auth_headers(principal: Principal) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(principal.id, principal.role)}"}


@pytest.fixture
async def client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncClient]:
    # Local application imports
    from main import app

    async def override_get_async_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_async_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
