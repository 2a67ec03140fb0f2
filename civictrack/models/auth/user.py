# Standard library imports
import enum

# Third-party imports
from sqlalchemy import Enum as SQLEnum, String
from sqlalchemy.orm import Mapped, mapped_column, validates

# Local application imports
from civictrack.models.base import Base
from civictrack.models.mixins.uuid_timestamp import UUIDTimeStampMixin


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class User(UUIDTimeStampMixin, Base):
    __tablename__ = "user"

    username: Mapped[str] = mapped_column(String(30), index=True, unique=True, nullable=False)
    email: Mapped[str] = mapped_column(
        String,
        index=True,
        unique=True,
        nullable=False,
        comment="Stored lower-cased",
    )
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        SQLEnum(UserRole, values_callable=lambda e: [m.value for m in e]),
        default=UserRole.USER,
        nullable=False,
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @validates("email")
    def normalize_email(self, key: str, value: str) -> str:
        return value.strip().lower()

    def __str__(self) -> str:
        return f"User: {self.username} - {self.email}"
