"""
Read helpers over the issue tables.

Lookups that precede a write accept ``for_update=True`` so the caller holds
the row lock for the rest of its transaction.
"""

# Standard library imports
from collections.abc import Sequence
from uuid import UUID

# Third-party imports
from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

# Local application imports
from civictrack.models.issues import Flag, Issue, Location, StatusLog, StatusRequest, StatusRequestState
from civictrack.utils.geospatial import BoundingBox


async def get_issue_by_id(db: AsyncSession, issue_id: UUID, *, for_update: bool = False) -> Issue | None:
    query = select(Issue).where(Issue.id == issue_id)
    if for_update:
        query = query.with_for_update().execution_options(populate_existing=True)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_issue_with_details(db: AsyncSession, issue_id: UUID) -> Issue | None:
    """Issue with its status logs (newest first) and flags, refreshed from the database."""
    result = await db.execute(
        select(Issue)
        .where(Issue.id == issue_id)
        .options(selectinload(Issue.status_logs), selectinload(Issue.flags))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_status_logs_in_order(db: AsyncSession, issue_id: UUID) -> Sequence[StatusLog]:
    """Status logs of an issue in creation order, oldest first."""
    result = await db.execute(
        select(StatusLog).where(StatusLog.issue_id == issue_id).order_by(StatusLog.created_at.asc())
    )
    return result.scalars().all()


async def get_locations_in_box(db: AsyncSession, box: BoundingBox) -> Sequence[Location]:
    longitude_filters = [Location.longitude.between(low, high) for low, high in box.longitude_ranges]
    result = await db.execute(
        select(Location).where(
            and_(
                Location.latitude.between(box.min_lat, box.max_lat),
                or_(*longitude_filters),
            )
        )
    )
    return result.scalars().all()


async def get_issues_by_location_ids(db: AsyncSession, location_ids: Sequence[UUID]) -> Sequence[Issue]:
    if not location_ids:
        return []
    result = await db.execute(
        select(Issue).where(Issue.location_id.in_(location_ids)).order_by(Issue.created_at.desc())
    )
    return result.scalars().all()


async def get_flag_by_id(db: AsyncSession, flag_id: UUID, *, for_update: bool = False) -> Flag | None:
    query = select(Flag).where(Flag.id == flag_id)
    if for_update:
        query = query.with_for_update().execution_options(populate_existing=True)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_flag_by_issue_and_user(db: AsyncSession, issue_id: UUID, user_id: UUID) -> Flag | None:
    result = await db.execute(select(Flag).where(and_(Flag.issue_id == issue_id, Flag.user_id == user_id)))
    return result.scalar_one_or_none()


async def get_status_request_by_id(
    db: AsyncSession, request_id: UUID, *, for_update: bool = False
) -> StatusRequest | None:
    query = select(StatusRequest).where(StatusRequest.id == request_id)
    if for_update:
        query = query.with_for_update().execution_options(populate_existing=True)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_pending_status_request(db: AsyncSession, issue_id: UUID, user_id: UUID) -> StatusRequest | None:
    result = await db.execute(
        select(StatusRequest)
        .where(
            and_(
                StatusRequest.issue_id == issue_id,
                StatusRequest.requested_by_id == user_id,
                StatusRequest.state == StatusRequestState.PENDING,
            )
        )
        .limit(1)
    )
    return result.scalar_one_or_none()
