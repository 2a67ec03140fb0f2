# Third-party imports
from sqlalchemy import TIMESTAMP, Boolean, Column, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

# Local application imports
from civictrack.models.base import Base
from civictrack.models.mixins.uuid_timestamp import UUIDTimeStampMixin


class Flag(Base, UUIDTimeStampMixin):
    __tablename__ = "flags"
    __table_args__ = (UniqueConstraint("issue_id", "user_id", name="unique_flag_issue_user"),)

    issue_id = Column(Uuid(as_uuid=True), ForeignKey("issues.id"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("user.id"), nullable=False)
    reason = Column(String(500), nullable=False)

    resolved = Column(Boolean, nullable=False, default=False, index=True)
    resolved_at = Column(TIMESTAMP(timezone=True), nullable=True)
    resolved_by_id = Column(Uuid(as_uuid=True), ForeignKey("user.id"), nullable=True)

    issue = relationship("Issue", back_populates="flags")
    user = relationship("User", foreign_keys=[user_id])
