# Standard library imports
import enum

# Third-party imports
from sqlalchemy import JSON, Column, Enum as SQLEnum, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

# Local application imports
from civictrack.models.base import Base
from civictrack.models.mixins.uuid_timestamp import UUIDTimeStampMixin


def enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    """Persist enum values ("under_review") rather than member names."""
    return [member.value for member in enum_cls]


class IssueStatus(str, enum.Enum):
    REPORTED = "reported"
    UNDER_REVIEW = "under_review"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class IssueCategory(str, enum.Enum):
    ROAD = "road"
    WATER = "water"
    ELECTRICITY = "electricity"
    WASTE = "waste"
    SAFETY = "safety"
    OTHER = "other"


class Issue(Base, UUIDTimeStampMixin):
    __tablename__ = "issues"

    # Issue details
    title = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=False)
    category = Column(SQLEnum(IssueCategory, values_callable=enum_values), nullable=False, index=True)
    status = Column(
        SQLEnum(IssueStatus, values_callable=enum_values),
        nullable=False,
        default=IssueStatus.REPORTED,
        index=True,
    )

    # Media, opaque references handed out by the storage service
    photos = Column(JSON, nullable=False, default=list)

    reporter_id = Column(Uuid(as_uuid=True), ForeignKey("user.id"), nullable=False, index=True)
    location_id = Column(Uuid(as_uuid=True), ForeignKey("locations.id"), nullable=False, unique=True)

    # Always needed to render an issue, so loaded with it
    reporter = relationship("User", foreign_keys=[reporter_id], lazy="selectin")
    location = relationship("Location", foreign_keys=[location_id], lazy="selectin")
    status_logs = relationship("StatusLog", back_populates="issue", order_by="StatusLog.created_at.desc()")
    flags = relationship("Flag", back_populates="issue", order_by="Flag.created_at")
