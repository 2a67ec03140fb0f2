# Standard library imports
from datetime import datetime
from uuid import UUID

# Third-party imports
from pydantic import BaseModel, ConfigDict, Field

# Local application imports
from civictrack.models.issues.issue import IssueStatus
from civictrack.models.issues.status_request import StatusRequestAction, StatusRequestState


class StatusRequestCreate(BaseModel):
    requested_status: IssueStatus
    reason: str | None = Field(None, max_length=500)


class StatusRequestReview(BaseModel):
    action: StatusRequestAction
    review_comment: str | None = Field(None, max_length=500)


class StatusRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    issue_id: UUID
    requested_by_id: UUID
    current_status: IssueStatus
    requested_status: IssueStatus
    reason: str | None
    state: StatusRequestState
    reviewed_by_id: UUID | None
    review_comment: str | None
    reviewed_at: datetime | None
    created_at: datetime
    updated_at: datetime


class StatusRequestListResponse(BaseModel):
    status_requests: list[StatusRequestResponse]
    total: int
    limit: int
    offset: int
