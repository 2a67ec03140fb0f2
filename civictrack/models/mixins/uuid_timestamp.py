# Standard library imports
from datetime import UTC, datetime
import uuid

# Third-party imports
from sqlalchemy import TIMESTAMP, Column, Uuid, text


def utcnow() -> datetime:
    return datetime.now(UTC)


class UUIDTimeStampMixin:
    """A reusable mixin that:
    - Provides a UUID primary key named 'id'
    - Includes created_at and updated_at timestamps, set by the application
      (microsecond precision, which keeps creation order stable) with a
      database default as fallback for rows written outside the ORM

    This mixin is abstract and is not mapped as its own table.
    """

    __abstract__ = True  # Prevents SQLAlchemy from mapping this mixin as a separate table

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)

    created_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        index=True,
    )

    updated_at = Column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utcnow,
    )
