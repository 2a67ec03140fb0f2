# Standard library imports
from uuid import UUID

# Third-party imports
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from civictrack.core.db import get_async_session
from civictrack.dependancies.common import get_current_principal, pagination_params
from civictrack.schemas.auth.principal_schemas import Principal
from civictrack.schemas.issues import FlagResponse
from civictrack.services.issues import moderation_services
from civictrack.services.issues.access_guard import ensure_admin

router = APIRouter(prefix="/flags", tags=["Moderation"])


@router.get("", response_model=list[FlagResponse])
async def list_flags(
    resolved: bool | None = False,
    page: tuple[int, int] = Depends(pagination_params("medium")),
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_session),
):
    """Moderation queue (admin only); unresolved flags by default"""
    ensure_admin(principal)
    limit, offset = page
    return await moderation_services.list_flags(db, resolved=resolved, limit=limit, offset=offset)


@router.put("/{flag_id}/resolve", response_model=FlagResponse)
async def resolve_flag(
    flag_id: UUID,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_session),
):
    """Mark a flag as resolved (admin only)"""
    return await moderation_services.resolve_flag(db, flag_id, principal)
