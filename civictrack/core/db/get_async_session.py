# Standard library imports
from collections.abc import AsyncGenerator

# Third-party imports
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

# Local application imports
from civictrack.core.db.create_async_engine import async_engine

# Objects stay readable after commit; services return them to the API layer
AsyncSessionLocal = async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session. Work left uncommitted by a failed request is rolled back."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
