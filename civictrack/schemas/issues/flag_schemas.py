# Standard library imports
from datetime import datetime
from uuid import UUID

# Third-party imports
from pydantic import BaseModel, ConfigDict, Field


class FlagCreate(BaseModel):
    reason: str = Field(..., min_length=5, max_length=500)


class FlagResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    issue_id: UUID
    user_id: UUID
    reason: str
    resolved: bool
    resolved_at: datetime | None
    resolved_by_id: UUID | None
    created_at: datetime
