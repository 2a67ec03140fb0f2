"""
Moderated status changes.

Any authenticated user may propose a new status for an issue. An
administrator approves the proposal, which applies the status change and
its audit entry in the same transaction as the review, or rejects it,
which leaves the issue untouched. A request is reviewed exactly once.
"""

# Standard library imports
from collections.abc import Sequence
from datetime import UTC, datetime
from uuid import UUID

# Third-party imports
from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from civictrack.core.db import atomic
from civictrack.core.exceptions import ConflictError, NotFoundError, ValidationError
from civictrack.core.monitoring.logging import get_contextual_logger
from civictrack.db_selectors.issues import get_pending_status_request, get_status_request_by_id
from civictrack.models.auth.user import User
from civictrack.models.issues import Issue, IssueStatus, StatusRequest, StatusRequestAction, StatusRequestState
from civictrack.schemas.auth.principal_schemas import Principal
from civictrack.services.issues.access_guard import ensure_admin
from civictrack.services.issues.lifecycle_services import apply_status_change, get_issue_or_404
from civictrack.services.issues.status_workflow import parse_status


def parse_action(value: StatusRequestAction | str) -> StatusRequestAction:
    try:
        return StatusRequestAction(value)
    except ValueError:
        raise ValidationError(f"Invalid review action: {value}")


async def request_status_change(
    db: AsyncSession,
    issue_id: UUID,
    principal: Principal,
    requested_status: IssueStatus | str,
    reason: str | None = None,
) -> StatusRequest:
    """
    Propose a status change for an issue.

    The issue's status at this moment is stored alongside the proposal so a
    reviewer can tell whether the issue moved in the meantime.
    """
    logger = get_contextual_logger(__name__, issue_id=issue_id, user_id=principal.id)
    requested_status = parse_status(requested_status)

    async with atomic(db):
        issue = await get_issue_or_404(db, issue_id)
        if issue.status == requested_status:
            raise ValidationError(f"Issue is already {requested_status.value}")
        if await get_pending_status_request(db, issue_id, principal.id) is not None:
            raise ConflictError("You already have a pending status request for this issue")

        status_request = StatusRequest(
            issue_id=issue_id,
            requested_by_id=principal.id,
            current_status=issue.status,
            requested_status=requested_status,
            reason=reason.strip() if reason and reason.strip() else None,
            state=StatusRequestState.PENDING,
        )
        db.add(status_request)
        await db.flush()

    logger.info(
        f"Status request {status_request.id} created: "
        f"{status_request.current_status.value} -> {requested_status.value}"
    )
    return status_request


async def review_status_request(
    db: AsyncSession,
    request_id: UUID,
    principal: Principal,
    action: StatusRequestAction | str,
    review_comment: str | None = None,
) -> StatusRequest:
    """
    Approve or reject a pending status request. Administrators only.

    Approving applies the requested status with the reviewer as actor and
    the review comment as the log comment. The review and the status change
    commit together or not at all.
    """
    logger = get_contextual_logger(__name__, status_request_id=request_id, user_id=principal.id)
    ensure_admin(principal)
    action = parse_action(action)

    async with atomic(db):
        status_request = await get_status_request_by_id(db, request_id, for_update=True)
        if status_request is None:
            raise NotFoundError("Status request not found")
        if status_request.state != StatusRequestState.PENDING:
            raise ConflictError(f"Status request has already been {status_request.state.value}")

        if action == StatusRequestAction.APPROVE:
            issue = await get_issue_or_404(db, status_request.issue_id, for_update=True)
            if issue.status != status_request.current_status:
                raise ConflictError(
                    f"Issue status changed from {status_request.current_status.value} "
                    f"to {issue.status.value} since the request was made"
                )
            await apply_status_change(
                db, issue, principal.id, status_request.requested_status, review_comment
            )
            status_request.state = StatusRequestState.APPROVED
        else:
            status_request.state = StatusRequestState.REJECTED

        status_request.reviewed_by_id = principal.id
        status_request.review_comment = review_comment
        status_request.reviewed_at = datetime.now(UTC)

    logger.info(f"Status request {status_request.state.value}")
    return status_request


async def list_status_requests(
    db: AsyncSession,
    *,
    state: StatusRequestState | None = StatusRequestState.PENDING,
    search: str | None = None,
    limit: int = 50,
    offset: int = 0,
) -> tuple[Sequence[StatusRequest], int]:
    """
    Moderation view over status requests, oldest first.

    ``search`` matches the requester's username or email and the issue
    title. ``state=None`` lists requests in every state.
    """
    filters = []
    if state is not None:
        filters.append(StatusRequest.state == state)
    if search and search.strip():
        pattern = f"%{search.strip()}%"
        filters.append(or_(User.username.ilike(pattern), User.email.ilike(pattern), Issue.title.ilike(pattern)))

    query = (
        select(StatusRequest)
        .join(Issue, Issue.id == StatusRequest.issue_id)
        .join(User, User.id == StatusRequest.requested_by_id)
    )
    count_query = (
        select(func.count(StatusRequest.id))
        .join(Issue, Issue.id == StatusRequest.issue_id)
        .join(User, User.id == StatusRequest.requested_by_id)
    )
    if filters:
        query = query.where(and_(*filters))
        count_query = count_query.where(and_(*filters))

    total = (await db.execute(count_query)).scalar() or 0
    result = await db.execute(query.order_by(StatusRequest.created_at.asc()).offset(offset).limit(limit))
    return result.scalars().all(), total


async def list_issue_status_requests(db: AsyncSession, issue_id: UUID) -> Sequence[StatusRequest]:
    result = await db.execute(
        select(StatusRequest).where(StatusRequest.issue_id == issue_id).order_by(StatusRequest.created_at.desc())
    )
    return result.scalars().all()


async def list_user_status_requests(db: AsyncSession, user_id: UUID) -> Sequence[StatusRequest]:
    result = await db.execute(
        select(StatusRequest)
        .where(StatusRequest.requested_by_id == user_id)
        .order_by(StatusRequest.created_at.desc())
    )
    return result.scalars().all()
