# Standard library imports
from uuid import UUID

# Third-party imports
from fastapi import Depends, HTTPException, Query, status
from fastapi.security import OAuth2PasswordBearer
import jwt
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from civictrack.core.db import get_async_session
from civictrack.db_selectors.auth import get_user_by_id
from civictrack.models.auth.user import User
from civictrack.schemas.auth.principal_schemas import Principal
from civictrack.services.auth.token_services import decode_access_token
from civictrack.settings import settings

# OAuth2PasswordBearer for token extraction; tokens are issued outside this service
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/token", auto_error=False)


async def get_current_user(token: str | None = Depends(oauth2_scheme), db: AsyncSession = Depends(get_async_session)) -> User:
    """Get current user from JWT token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not token:
        raise credentials_exception

    try:
        payload = decode_access_token(token)
        user_id = UUID(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise credentials_exception

    user = await get_user_by_id(db, user_id)
    if user is None:
        raise credentials_exception

    return user


async def get_current_principal(current_user: User = Depends(get_current_user)) -> Principal:
    """The caller as a Principal; the role is read from the database, not the token."""
    return Principal.from_user(current_user)


def pagination_params(size: str = "medium"):
    """Build a dependency returning (limit, offset) bounded by PAGINATION_CONFIGS[size]."""
    config = settings.PAGINATION_CONFIGS[size]

    def _params(
        limit: int = Query(config["default_limit"], ge=config["min_limit"], le=config["max_limit"]),
        offset: int = Query(config["default_offset"], ge=0),
    ) -> tuple[int, int]:
        return limit, offset

    return _params
