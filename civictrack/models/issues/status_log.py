# Third-party imports
from sqlalchemy import Column, Enum as SQLEnum, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

# Local application imports
from civictrack.models.base import Base
from civictrack.models.issues.issue import IssueStatus, enum_values
from civictrack.models.mixins.uuid_timestamp import UUIDTimeStampMixin


class StatusLog(Base, UUIDTimeStampMixin):
    """Append-only audit entry for one status transition of an issue."""

    __tablename__ = "status_logs"

    issue_id = Column(Uuid(as_uuid=True), ForeignKey("issues.id"), nullable=False, index=True)
    actor_id = Column(Uuid(as_uuid=True), ForeignKey("user.id"), nullable=False)

    # Null only on the entry written when the issue is reported
    old_status = Column(SQLEnum(IssueStatus, values_callable=enum_values), nullable=True)
    new_status = Column(SQLEnum(IssueStatus, values_callable=enum_values), nullable=False)
    comment = Column(String(500), nullable=True)

    issue = relationship("Issue", back_populates="status_logs")
    actor = relationship("User", foreign_keys=[actor_id])
