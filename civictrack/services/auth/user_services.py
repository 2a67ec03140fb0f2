# Standard library imports
from uuid import UUID

# Third-party imports
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from civictrack.core.db import atomic
from civictrack.core.exceptions import ConflictError
from civictrack.core.monitoring.logging import get_logger
from civictrack.db_selectors.auth import get_user_by_email, get_user_by_username_or_email
from civictrack.models.auth.user import User, UserRole
from civictrack.schemas.auth.user_schemas import UserCreateRequest
from civictrack.settings import settings
from civictrack.utils.password_utils import get_password_hash

logger = get_logger(__name__)

USER_EXISTS = "A user with this username or email already exists"


async def register_user(db: AsyncSession, data: UserCreateRequest) -> User:
    """
    Create a user account.

    Username and email are unique; a clash raises ConflictError whether it
    is caught by the lookup or by the database constraint.
    """
    try:
        async with atomic(db):
            if await get_user_by_username_or_email(db, data.username, data.email) is not None:
                raise ConflictError(USER_EXISTS)

            user = User(
                username=data.username,
                email=data.email,
                name=data.name,
                hashed_password=get_password_hash(data.password),
                role=data.role,
            )
            db.add(user)
            await db.flush()
    except IntegrityError:
        raise ConflictError(USER_EXISTS)

    logger.info(f"User registered: {user.username} ({user.role.value})")
    return user


async def create_default_admin_user(db: AsyncSession) -> UUID:
    """Make sure the administrator configured in settings exists."""
    existing_admin = await get_user_by_email(db, settings.ADMIN_EMAIL)
    if existing_admin is not None:
        logger.info("Admin user already exists.")
        return existing_admin.id

    admin_user = await register_user(
        db,
        UserCreateRequest.model_construct(
            username=settings.ADMIN_USERNAME,
            name="Administrator",
            email=settings.ADMIN_EMAIL,
            password=settings.ADMIN_PASSWORD,
            confirm_password=settings.ADMIN_PASSWORD,
            role=UserRole.ADMIN,
        ),
    )
    logger.info("Admin user created.")
    return admin_user.id
