# Standard library imports
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID, uuid4

# Third-party imports
import jwt

# Local application imports
from civictrack.models.auth.user import UserRole
from civictrack.settings import settings


def create_access_token(
    user_id: UUID,
    role: UserRole,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token for a user.

    Args:
        user_id: The user's ID, stored as the ``sub`` claim
        role: The user's role at issuance time
        expires_delta: Optional custom expiration time

    Returns:
        The encoded token
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

    to_encode = {
        "sub": str(user_id),  # Standard JWT claim for subject
        "role": role.value,
        "exp": expire,  # Expiration time
        "iat": now,  # Issued at time
        "token_type": "access",  # nosec B105
        "jti": str(uuid4()),  # JWT ID for tracking
    }

    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify the signature and expiry of an access token and return its claims.

    Raises:
        jwt.InvalidTokenError: if the token is malformed, expired or not an access token
    """
    payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    if payload.get("token_type") != "access":
        raise jwt.InvalidTokenError("Not an access token")
    return payload
