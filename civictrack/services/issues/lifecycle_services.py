"""
Issue lifecycle: reporting, status changes with their audit trail,
field updates and deletion.

Every status change writes a StatusLog row in the same transaction as the
status update. ``apply_status_change`` is the only place that sets
``Issue.status`` after creation.
"""

# Standard library imports
from collections.abc import Iterable, Sequence
from uuid import UUID

# Third-party imports
from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from civictrack.core.db import atomic
from civictrack.core.exceptions import NotFoundError
from civictrack.core.monitoring.logging import get_contextual_logger
from civictrack.db_selectors.issues import get_issue_by_id, get_issue_with_details
from civictrack.models.issues import Flag, Issue, IssueCategory, IssueStatus, Location, StatusLog, StatusRequest
from civictrack.schemas.auth.principal_schemas import Principal
from civictrack.schemas.issues.issue_schemas import IssueStatistics, IssueUpdate, RecentActivity
from civictrack.services.issues.access_guard import ensure_can_mutate
from civictrack.services.issues.status_workflow import ensure_valid_transition, parse_status
from civictrack.utils.model_utils import update_model_fields
from civictrack.utils.validators.issue_validator import (
    parse_category,
    require_text,
    validate_latitude,
    validate_longitude,
    validate_photos,
)

REPORTED_COMMENT = "Issue reported"
RECENT_ACTIVITY_LIMIT = 10


def default_status_comment(old_status: IssueStatus, new_status: IssueStatus) -> str:
    return f"Status updated from {old_status.value} to {new_status.value}"


async def get_issue_or_404(db: AsyncSession, issue_id: UUID, *, for_update: bool = False) -> Issue:
    issue = await get_issue_by_id(db, issue_id, for_update=for_update)
    if issue is None:
        raise NotFoundError("Issue not found")
    return issue


async def get_issue(db: AsyncSession, issue_id: UUID) -> Issue:
    """Issue with location, reporter, status logs (newest first) and flags."""
    issue = await get_issue_with_details(db, issue_id)
    if issue is None:
        raise NotFoundError("Issue not found")
    return issue


async def apply_status_change(
    db: AsyncSession,
    issue: Issue,
    actor_id: UUID,
    new_status: IssueStatus,
    comment: str | None = None,
) -> StatusLog | None:
    """
    Set the issue's status and append the matching audit entry.

    Must run inside the caller's transaction with the issue row locked.
    Setting the current status again is a no-op and writes no log.

    Returns:
        The new StatusLog, or None when nothing changed.
    """
    old_status = issue.status
    if new_status == old_status:
        return None

    ensure_valid_transition(old_status, new_status)

    issue.status = new_status
    status_log = StatusLog(
        issue_id=issue.id,
        actor_id=actor_id,
        old_status=old_status,
        new_status=new_status,
        comment=comment or default_status_comment(old_status, new_status),
    )
    db.add(status_log)
    await db.flush()
    return status_log


async def create_issue(
    db: AsyncSession,
    principal: Principal,
    *,
    title: str,
    description: str,
    latitude: float,
    longitude: float,
    category: IssueCategory | str | None = IssueCategory.OTHER,
    address: str | None = None,
    photos: Iterable[str] | None = None,
) -> Issue:
    """
    Report a new issue.

    Inserts the location, the issue (status ``reported``) and the initial
    status log in one transaction.
    """
    logger = get_contextual_logger(__name__, user_id=principal.id)

    title = require_text(title, "Title")
    description = require_text(description, "Description")
    category = parse_category(category)
    latitude = validate_latitude(latitude)
    longitude = validate_longitude(longitude)
    photos = validate_photos(photos)

    async with atomic(db):
        location = Location(latitude=latitude, longitude=longitude, address=address)
        db.add(location)
        await db.flush()

        issue = Issue(
            title=title,
            description=description,
            category=category,
            status=IssueStatus.REPORTED,
            photos=photos,
            reporter_id=principal.id,
            location_id=location.id,
        )
        db.add(issue)
        await db.flush()

        db.add(
            StatusLog(
                issue_id=issue.id,
                actor_id=principal.id,
                old_status=None,
                new_status=IssueStatus.REPORTED,
                comment=REPORTED_COMMENT,
            )
        )

    logger.info(f"Issue {issue.id} reported in category {category.value}")
    return await get_issue(db, issue.id)


async def change_status(
    db: AsyncSession,
    issue_id: UUID,
    principal: Principal,
    new_status: IssueStatus | str,
    comment: str | None = None,
) -> Issue:
    """
    Move an issue to ``new_status`` and record who did it.

    Only the reporter or an administrator may change the status. Requesting
    the current status succeeds without writing a log.
    """
    logger = get_contextual_logger(__name__, issue_id=issue_id, user_id=principal.id)

    async with atomic(db):
        issue = await get_issue_or_404(db, issue_id, for_update=True)
        ensure_can_mutate(issue, principal, "change the status of")
        new_status = parse_status(new_status)
        old_status = issue.status
        status_log = await apply_status_change(db, issue, principal.id, new_status, comment)

    if status_log is None:
        logger.debug(f"Status already {new_status.value}, nothing to change")
    else:
        logger.info(f"Status changed from {old_status.value} to {new_status.value}")
    return await get_issue(db, issue_id)


async def update_fields(db: AsyncSession, issue_id: UUID, principal: Principal, patch: IssueUpdate) -> Issue:
    """
    Apply a partial update to an issue.

    Missing or None fields keep their value; photos are appended. A status
    in the patch goes through ``apply_status_change`` inside the same
    transaction as the field changes. Permission is checked before any
    field is validated.
    """
    logger = get_contextual_logger(__name__, issue_id=issue_id, user_id=principal.id)
    changes = patch.model_dump(exclude_unset=True)

    async with atomic(db):
        issue = await get_issue_or_404(db, issue_id, for_update=True)
        ensure_can_mutate(issue, principal, "update")

        issue_changes = {}
        if changes.get("title") is not None:
            issue_changes["title"] = require_text(changes["title"], "Title")
        if changes.get("description") is not None:
            issue_changes["description"] = require_text(changes["description"], "Description")
        if changes.get("category") is not None:
            issue_changes["category"] = parse_category(changes["category"])

        location_changes = {}
        if changes.get("latitude") is not None:
            location_changes["latitude"] = validate_latitude(changes["latitude"])
        if changes.get("longitude") is not None:
            location_changes["longitude"] = validate_longitude(changes["longitude"])
        if changes.get("address") is not None:
            location_changes["address"] = changes["address"]

        new_photos = validate_photos(changes.get("photos"))
        new_status = parse_status(changes["status"]) if changes.get("status") is not None else None

        changed = update_model_fields(issue, issue_changes, ("title", "description", "category"))
        if new_photos:
            issue.photos = [*issue.photos, *new_photos]
            changed.append("photos")
        changed += update_model_fields(issue.location, location_changes, ("latitude", "longitude", "address"))

        if new_status is not None:
            status_log = await apply_status_change(
                db, issue, principal.id, new_status, changes.get("status_comment")
            )
            if status_log is not None:
                changed.append("status")

    logger.info(f"Issue updated, changed fields: {', '.join(changed) or 'none'}")
    return await get_issue(db, issue_id)


async def delete_issue(db: AsyncSession, issue_id: UUID, principal: Principal) -> None:
    """
    Delete an issue together with everything it owns.

    Status logs, flags and status requests go first, then the issue, then
    its location, all in one transaction.
    """
    logger = get_contextual_logger(__name__, issue_id=issue_id, user_id=principal.id)

    async with atomic(db):
        issue = await get_issue_or_404(db, issue_id, for_update=True)
        ensure_can_mutate(issue, principal, "delete")
        location_id = issue.location_id

        await db.execute(delete(StatusLog).where(StatusLog.issue_id == issue_id))
        await db.execute(delete(Flag).where(Flag.issue_id == issue_id))
        await db.execute(delete(StatusRequest).where(StatusRequest.issue_id == issue_id))
        await db.execute(delete(Issue).where(Issue.id == issue_id))
        await db.execute(delete(Location).where(Location.id == location_id))

    logger.info("Issue deleted")


async def list_issues(
    db: AsyncSession,
    *,
    status: IssueStatus | None = None,
    category: IssueCategory | None = None,
    reporter_id: UUID | None = None,
    search: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> tuple[Sequence[Issue], int]:
    """List issues newest first, with the total count of matching issues."""
    filters = []
    if status:
        filters.append(Issue.status == status)
    if category:
        filters.append(Issue.category == category)
    if reporter_id:
        filters.append(Issue.reporter_id == reporter_id)
    if search:
        pattern = f"%{search.strip()}%"
        filters.append(or_(Issue.title.ilike(pattern), Issue.description.ilike(pattern)))

    query = select(Issue)
    count_query = select(func.count()).select_from(Issue)
    if filters:
        query = query.where(and_(*filters))
        count_query = count_query.where(and_(*filters))

    total = (await db.execute(count_query)).scalar() or 0
    result = await db.execute(query.order_by(Issue.created_at.desc()).offset(offset).limit(limit))
    return result.scalars().all(), total


async def get_issue_statistics(db: AsyncSession) -> IssueStatistics:
    """Issue counts by status and by category, plus the latest status changes."""
    status_result = await db.execute(select(Issue.status, func.count(Issue.id)).group_by(Issue.status))
    category_result = await db.execute(select(Issue.category, func.count(Issue.id)).group_by(Issue.category))
    activity_result = await db.execute(
        select(StatusLog, Issue.title)
        .join(Issue, Issue.id == StatusLog.issue_id)
        .order_by(StatusLog.created_at.desc())
        .limit(RECENT_ACTIVITY_LIMIT)
    )

    recent_activity = []
    for status_log, issue_title in activity_result.all():
        activity = RecentActivity.model_validate(status_log)
        activity.issue_title = issue_title
        recent_activity.append(activity)

    return IssueStatistics(
        by_status={row[0].value: row[1] for row in status_result.all()},
        by_category={row[0].value: row[1] for row in category_result.all()},
        recent_activity=recent_activity,
    )
