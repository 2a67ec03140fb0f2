# Local application imports
from civictrack.schemas.auth.principal_schemas import Principal
from civictrack.schemas.auth.user_schemas import UserCreateRequest, UserSummary

__all__ = [
    "Principal",
    "UserCreateRequest",
    "UserSummary",
]
