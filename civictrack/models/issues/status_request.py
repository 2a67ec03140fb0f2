# Standard library imports
import enum

# Third-party imports
from sqlalchemy import TIMESTAMP, Column, Enum as SQLEnum, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

# Local application imports
from civictrack.models.base import Base
from civictrack.models.issues.issue import IssueStatus, enum_values
from civictrack.models.mixins.uuid_timestamp import UUIDTimeStampMixin


class StatusRequestState(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class StatusRequestAction(str, enum.Enum):
    APPROVE = "approve"
    REJECT = "reject"


class StatusRequest(Base, UUIDTimeStampMixin):
    __tablename__ = "status_requests"

    issue_id = Column(Uuid(as_uuid=True), ForeignKey("issues.id"), nullable=False, index=True)
    requested_by_id = Column(Uuid(as_uuid=True), ForeignKey("user.id"), nullable=False, index=True)

    # Issue status at the time the request was made
    current_status = Column(SQLEnum(IssueStatus, values_callable=enum_values), nullable=False)
    requested_status = Column(SQLEnum(IssueStatus, values_callable=enum_values), nullable=False)
    reason = Column(String(500), nullable=True)

    state = Column(
        SQLEnum(StatusRequestState, values_callable=enum_values),
        nullable=False,
        default=StatusRequestState.PENDING,
        index=True,
    )
    reviewed_by_id = Column(Uuid(as_uuid=True), ForeignKey("user.id"), nullable=True)
    review_comment = Column(String(500), nullable=True)
    reviewed_at = Column(TIMESTAMP(timezone=True), nullable=True)

    issue = relationship("Issue")
    requester = relationship("User", foreign_keys=[requested_by_id])
    reviewer = relationship("User", foreign_keys=[reviewed_by_id])
