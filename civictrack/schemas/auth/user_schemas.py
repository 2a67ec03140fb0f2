# Standard library imports
import re
from typing import Any
from uuid import UUID

# Third-party imports
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

# Local application imports
from civictrack.models.auth.user import UserRole

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
PASSWORD_PATTERN = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)[a-zA-Z\d@$!%*?&]{8,}$")


class UserSummary(BaseModel):
    """Compact user reference embedded in issue responses."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    name: str | None = None


# ============================
# ----- Request schemas ------
# ============================


class UserCreateRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=30)
    name: str | None = Field(None, min_length=2, max_length=100)
    email: EmailStr
    password: str
    confirm_password: str
    role: UserRole = UserRole.USER

    @field_validator("username")
    @classmethod
    def check_username(cls, value: str) -> str:
        if not USERNAME_PATTERN.match(value):
            raise ValueError("Username can only contain letters, numbers, and underscores")
        return value

    @field_validator("password")
    @classmethod
    def check_password_strength(cls, value: str) -> str:
        if not PASSWORD_PATTERN.match(value):
            raise ValueError(
                "Password must be at least 8 characters and contain one uppercase letter, "
                "one lowercase letter, and one number"
            )
        return value

    @model_validator(mode="before")
    @classmethod
    def check_passwords(cls, values: dict[str, Any]) -> dict[str, Any]:
        if isinstance(values, dict) and values.get("password") != values.get("confirm_password"):
            raise ValueError("Passwords do not match")
        return values

    model_config = {
        "json_schema_extra": {
            "example": {
                "username": "jane_doe",
                "name": "Jane Doe",
                "email": "jane@example.com",
                "password": "Secret123",
                "confirm_password": "Secret123",
            }
        }
    }
