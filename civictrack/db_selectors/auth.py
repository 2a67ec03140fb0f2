# Standard library imports
from uuid import UUID

# Third-party imports
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from civictrack.models.auth.user import User


async def get_user_by_id(db: AsyncSession, user_id: UUID) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalar_one_or_none()


async def get_user_by_username_or_email(db: AsyncSession, username: str, email: str) -> User | None:
    result = await db.execute(
        select(User).where(or_(User.username == username, User.email == email.strip().lower())).limit(1)
    )
    return result.scalar_one_or_none()
