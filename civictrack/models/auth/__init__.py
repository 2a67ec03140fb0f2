# Local application imports
from civictrack.models.auth.user import User, UserRole

__all__ = ["User", "UserRole"]
