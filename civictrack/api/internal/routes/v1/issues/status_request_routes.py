# Standard library imports
from uuid import UUID

# Third-party imports
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from civictrack.core.db import get_async_session
from civictrack.dependancies.common import get_current_principal, pagination_params
from civictrack.models.issues import StatusRequestState
from civictrack.schemas.auth.principal_schemas import Principal
from civictrack.schemas.issues import (
    StatusRequestCreate,
    StatusRequestListResponse,
    StatusRequestResponse,
    StatusRequestReview,
)
from civictrack.services.issues import lifecycle_services, status_request_services
from civictrack.services.issues.access_guard import ensure_admin

router = APIRouter(prefix="/status-requests", tags=["Status Requests"])


@router.post("/issue/{issue_id}", response_model=StatusRequestResponse, status_code=status.HTTP_201_CREATED)
async def request_status_change(
    issue_id: UUID,
    request_data: StatusRequestCreate,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_session),
):
    """Propose a new status for an issue"""
    return await status_request_services.request_status_change(
        db, issue_id, principal, request_data.requested_status, request_data.reason
    )


@router.get("/issue/{issue_id}", response_model=list[StatusRequestResponse])
async def get_issue_status_requests(issue_id: UUID, db: AsyncSession = Depends(get_async_session)):
    """Status requests made for an issue, newest first"""
    await lifecycle_services.get_issue_or_404(db, issue_id)
    return await status_request_services.list_issue_status_requests(db, issue_id)


@router.get("/user/me", response_model=list[StatusRequestResponse])
async def get_my_status_requests(
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_session),
):
    return await status_request_services.list_user_status_requests(db, principal.id)


@router.get("", response_model=StatusRequestListResponse)
async def list_status_requests(
    state: StatusRequestState | None = StatusRequestState.PENDING,
    search: str | None = Query(None, min_length=1, max_length=100),
    page: tuple[int, int] = Depends(pagination_params("medium")),
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_session),
):
    """Status requests awaiting review (admin only)"""
    ensure_admin(principal)
    limit, offset = page
    status_requests, total = await status_request_services.list_status_requests(
        db, state=state, search=search, limit=limit, offset=offset
    )
    return StatusRequestListResponse(
        status_requests=[StatusRequestResponse.model_validate(item) for item in status_requests],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.put("/{request_id}/review", response_model=StatusRequestResponse)
async def review_status_request(
    request_id: UUID,
    review_data: StatusRequestReview,
    principal: Principal = Depends(get_current_principal),
    db: AsyncSession = Depends(get_async_session),
):
    """Approve or reject a pending status request (admin only)"""
    return await status_request_services.review_status_request(
        db, request_id, principal, review_data.action, review_data.review_comment
    )
