"""
Database models package.

This package contains all SQLAlchemy models for the application.
"""

# Local application imports
from civictrack.models.auth import User, UserRole
from civictrack.models.issues import (
    Flag,
    Issue,
    IssueCategory,
    IssueStatus,
    Location,
    StatusLog,
    StatusRequest,
    StatusRequestAction,
    StatusRequestState,
)

__all__ = [
    # Authentication models
    "User",
    "UserRole",
    # Issue lifecycle models
    "Flag",
    "Issue",
    "IssueCategory",
    "IssueStatus",
    "Location",
    "StatusLog",
    "StatusRequest",
    "StatusRequestAction",
    "StatusRequestState",
]
