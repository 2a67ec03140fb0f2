# Standard library imports
from uuid import UUID

# Third-party imports
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from civictrack.core.db import get_async_session
from civictrack.dependancies.common import get_current_principal, pagination_params
from civictrack.models.issues import IssueCategory, IssueStatus
from civictrack.schemas.auth.principal_schemas import Principal
from civictrack.schemas.common import BaseResponse
from civictrack.schemas.issues import (
    FlagCreate,
    FlagResponse,
    IssueCreate,
    IssueDetailResponse,
    IssueListResponse,
    IssueResponse,
    IssueStatistics,
    IssueStatusUpdate,
    IssueUpdate,
)
from civictrack.services.issues import lifecycle_services, moderation_services
from civictrack.services.issues.access_guard import ensure_admin
from civictrack.services.issues.nearby_services import find_nearby_issues
from civictrack.settings import settings

router = APIRouter(prefix="/issues", tags=["Issues"])


@router.post("", response_model=IssueDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_issue(
    issue_data: IssueCreate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_session),
):
    """Report a new issue"""
    return await lifecycle_services.create_issue(db, principal, **issue_data.model_dump())


@router.get("", response_model=IssueListResponse)
async def list_issues(
    status: IssueStatus | None = None,
    category: IssueCategory | None = None,
    reporter_id: UUID | None = None,
    search: str | None = Query(None, min_length=1, max_length=100),
    page: tuple[int, int] = Depends(pagination_params("medium")),
    db: AsyncSession = Depends(get_async_session),
):
    """List issues with filters, newest first"""
    limit, offset = page
    issues, total = await lifecycle_services.list_issues(
        db,
        status=status,
        category=category,
        reporter_id=reporter_id,
        search=search,
        limit=limit,
        offset=offset,
    )
    return IssueListResponse(
        issues=[IssueResponse.model_validate(issue) for issue in issues],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/nearby", response_model=list[IssueResponse])
async def get_nearby_issues(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    radius: float = Query(settings.NEARBY_DEFAULT_RADIUS_KM, gt=0, le=settings.NEARBY_MAX_RADIUS_KM),
    db: AsyncSession = Depends(get_async_session),
):
    """Issues within `radius` kilometers of a point, newest first"""
    return await find_nearby_issues(db, latitude, longitude, radius)


@router.get("/statistics", response_model=IssueStatistics)
async def get_issue_statistics(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_session),
):
    """Issue counts by status and category (admin only)"""
    ensure_admin(principal)
    return await lifecycle_services.get_issue_statistics(db)


@router.get("/{issue_id}", response_model=IssueDetailResponse)
async def get_issue(issue_id: UUID, db: AsyncSession = Depends(get_async_session)):
    """Issue details with its status history and flags"""
    return await lifecycle_services.get_issue(db, issue_id)


@router.patch("/{issue_id}", response_model=IssueDetailResponse)
async def update_issue(
    issue_id: UUID,
    update_data: IssueUpdate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_session),
):
    """Update issue (only reporter or admin can update)"""
    return await lifecycle_services.update_fields(db, issue_id, principal, update_data)


@router.put("/{issue_id}/status", response_model=IssueDetailResponse)
async def change_issue_status(
    issue_id: UUID,
    status_data: IssueStatusUpdate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_session),
):
    """Change the status of an issue (only reporter or admin)"""
    return await lifecycle_services.change_status(db, issue_id, principal, status_data.status, status_data.comment)


@router.delete("/{issue_id}", response_model=BaseResponse[dict], response_model_exclude_none=True)
async def delete_issue(
    issue_id: UUID,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_session),
):
    """Delete issue (only reporter or admin can delete)"""
    await lifecycle_services.delete_issue(db, issue_id, principal)
    return BaseResponse.success({"message": "Issue deleted successfully"}).model_dump()


@router.post("/{issue_id}/flag", response_model=FlagResponse, status_code=status.HTTP_201_CREATED)
async def flag_issue(
    issue_id: UUID,
    flag_data: FlagCreate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_session),
):
    """Flag an issue as abusive or inaccurate (once per user)"""
    return await moderation_services.flag_issue(db, issue_id, principal, flag_data.reason)


@router.get("/{issue_id}/flags", response_model=list[FlagResponse])
async def list_issue_flags(issue_id: UUID, db: AsyncSession = Depends(get_async_session)):
    """Unresolved flags of an issue"""
    await lifecycle_services.get_issue_or_404(db, issue_id)
    return await moderation_services.list_unresolved_flags(db, issue_id)
