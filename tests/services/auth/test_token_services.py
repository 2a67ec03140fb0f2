# Standard library imports
from datetime import timedelta
from uuid import uuid4

# Third-party imports
import jwt
import pytest

# Local application imports
from civictrack.models.auth.user import UserRole
from civictrack.services.auth.token_services import create_access_token, decode_access_token
from civictrack.settings import settings


def test_token_carries_subject_and_role():
    user_id = uuid4()

    payload = decode_access_token(create_access_token(user_id, UserRole.ADMIN))

    assert payload["sub"] == str(user_id)
    assert payload["role"] == "admin"
    assert payload["token_type"] == "access"


def test_expired_token_is_rejected():
    token = create_access_token(uuid4(), UserRole.USER, expires_delta=timedelta(seconds=-1))

    with pytest.raises(jwt.ExpiredSignatureError):
        decode_access_token(token)


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode({"sub": str(uuid4()), "token_type": "access"}, "not-the-key", algorithm=settings.JWT_ALGORITHM)

    with pytest.raises(jwt.InvalidTokenError):
        decode_access_token(token)


def test_non_access_token_is_rejected():
    token = jwt.encode(
        {"sub": str(uuid4()), "token_type": "refresh"}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM
    )

    with pytest.raises(jwt.InvalidTokenError, match="Not an access token"):
        decode_access_token(token)
