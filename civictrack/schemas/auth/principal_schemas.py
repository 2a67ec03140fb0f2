# Standard library imports
from uuid import UUID

# Third-party imports
from pydantic import BaseModel, ConfigDict

# Local application imports
from civictrack.models.auth.user import User, UserRole


class Principal(BaseModel):
    """
    The authenticated caller, as yielded by the bearer-token verifier.

    Services take a Principal explicitly instead of reading an ambient
    "current user".
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(id=user.id, role=user.role)
