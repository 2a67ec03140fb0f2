# Local application imports
from civictrack.schemas.issues.flag_schemas import FlagCreate, FlagResponse
from civictrack.schemas.issues.issue_schemas import (
    IssueCreate,
    IssueDetailResponse,
    IssueListResponse,
    IssueResponse,
    IssueStatistics,
    IssueStatusUpdate,
    IssueUpdate,
    RecentActivity,
    StatusLogResponse,
)
from civictrack.schemas.issues.location_schemas import LocationResponse
from civictrack.schemas.issues.status_request_schemas import (
    StatusRequestCreate,
    StatusRequestListResponse,
    StatusRequestResponse,
    StatusRequestReview,
)

__all__ = [
    "FlagCreate",
    "FlagResponse",
    "IssueCreate",
    "IssueDetailResponse",
    "IssueListResponse",
    "IssueResponse",
    "IssueStatistics",
    "IssueStatusUpdate",
    "IssueUpdate",
    "LocationResponse",
    "RecentActivity",
    "StatusLogResponse",
    "StatusRequestCreate",
    "StatusRequestListResponse",
    "StatusRequestResponse",
    "StatusRequestReview",
]
