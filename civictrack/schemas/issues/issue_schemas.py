# Standard library imports
from datetime import datetime
from uuid import UUID

# Third-party imports
from pydantic import BaseModel, ConfigDict, Field

# Local application imports
from civictrack.models.issues.issue import IssueCategory, IssueStatus
from civictrack.schemas.auth.user_schemas import UserSummary
from civictrack.schemas.issues.flag_schemas import FlagResponse
from civictrack.schemas.issues.location_schemas import LocationResponse


class IssueCreate(BaseModel):
    title: str = Field(..., min_length=5, max_length=100)
    description: str = Field(..., min_length=10, max_length=2000)
    category: IssueCategory = IssueCategory.OTHER
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    address: str | None = Field(None, max_length=255)
    photos: list[str] = Field(default_factory=list)


class IssueUpdate(BaseModel):
    """
    Partial update of an issue. ``photos`` are appended to the existing
    ones. ``status`` is applied through the status-change routine, with
    ``status_comment`` as the audit comment.
    """

    title: str | None = Field(None, min_length=5, max_length=100)
    description: str | None = Field(None, min_length=10, max_length=2000)
    category: IssueCategory | None = None
    latitude: float | None = Field(None, ge=-90, le=90)
    longitude: float | None = Field(None, ge=-180, le=180)
    address: str | None = Field(None, max_length=255)
    photos: list[str] | None = None
    status: IssueStatus | None = None
    status_comment: str | None = Field(None, max_length=500)


class IssueStatusUpdate(BaseModel):
    status: IssueStatus
    comment: str | None = Field(None, max_length=500)


class StatusLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    issue_id: UUID
    actor_id: UUID
    old_status: IssueStatus | None
    new_status: IssueStatus
    comment: str | None
    created_at: datetime


class IssueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    category: IssueCategory
    status: IssueStatus
    photos: list[str]
    reporter_id: UUID
    reporter: UserSummary | None = None
    location: LocationResponse
    created_at: datetime
    updated_at: datetime


class IssueDetailResponse(IssueResponse):
    status_logs: list[StatusLogResponse] = []
    flags: list[FlagResponse] = []


class IssueListResponse(BaseModel):
    issues: list[IssueResponse]
    total: int
    limit: int
    offset: int


class RecentActivity(StatusLogResponse):
    issue_title: str | None = None


class IssueStatistics(BaseModel):
    by_status: dict[str, int]
    by_category: dict[str, int]
    recent_activity: list[RecentActivity]
