# Standard library imports
from collections.abc import Sequence
from datetime import UTC, datetime
from uuid import UUID

# Third-party imports
from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from civictrack.core.db import atomic
from civictrack.core.exceptions import ConflictError, NotFoundError
from civictrack.core.monitoring.logging import get_contextual_logger
from civictrack.db_selectors.issues import get_flag_by_id, get_flag_by_issue_and_user, get_issue_by_id
from civictrack.models.issues import Flag
from civictrack.schemas.auth.principal_schemas import Principal
from civictrack.services.issues.access_guard import ensure_admin
from civictrack.utils.validators.issue_validator import require_text

ALREADY_FLAGGED = "You have already flagged this issue"


async def flag_issue(db: AsyncSession, issue_id: UUID, principal: Principal, reason: str) -> Flag:
    """
    Report an issue as abusive or inaccurate.

    A user can flag a given issue only once; the unique constraint on
    (issue_id, user_id) backs up the check made before the insert.
    """
    logger = get_contextual_logger(__name__, issue_id=issue_id, user_id=principal.id)
    reason = require_text(reason, "Reason")

    try:
        async with atomic(db):
            if await get_issue_by_id(db, issue_id) is None:
                raise NotFoundError("Issue not found")

            if await get_flag_by_issue_and_user(db, issue_id, principal.id) is not None:
                raise ConflictError(ALREADY_FLAGGED)

            flag = Flag(issue_id=issue_id, user_id=principal.id, reason=reason, resolved=False)
            db.add(flag)
            await db.flush()
    except IntegrityError:
        # A concurrent flag by the same user won the race
        logger.warning("Duplicate flag rejected by unique constraint")
        raise ConflictError(ALREADY_FLAGGED)

    logger.info(f"Issue flagged ({flag.id})")
    return flag


async def resolve_flag(db: AsyncSession, flag_id: UUID, principal: Principal) -> Flag:
    """
    Mark a flag as handled. Administrators only.

    The flagged issue is left as it is; acting on it is a separate status
    change.
    """
    logger = get_contextual_logger(__name__, flag_id=flag_id, user_id=principal.id)
    ensure_admin(principal)

    async with atomic(db):
        flag = await get_flag_by_id(db, flag_id, for_update=True)
        if flag is None:
            raise NotFoundError("Flag not found")
        if flag.resolved:
            raise ConflictError("Flag is already resolved")

        flag.resolved = True
        flag.resolved_at = datetime.now(UTC)
        flag.resolved_by_id = principal.id

    logger.info("Flag resolved")
    return flag


async def list_unresolved_flags(db: AsyncSession, issue_id: UUID) -> Sequence[Flag]:
    """Open flags of one issue in the order they were raised."""
    result = await db.execute(
        select(Flag)
        .where(and_(Flag.issue_id == issue_id, Flag.resolved.is_(False)))
        .order_by(Flag.created_at.asc())
    )
    return result.scalars().all()


async def list_flags(
    db: AsyncSession,
    *,
    resolved: bool | None = None,
    limit: int = 50,
    offset: int = 0,
) -> Sequence[Flag]:
    """Moderation queue across all issues, oldest first."""
    query = select(Flag)
    if resolved is not None:
        query = query.where(Flag.resolved.is_(resolved))
    result = await db.execute(query.order_by(Flag.created_at.asc()).offset(offset).limit(limit))
    return result.scalars().all()
