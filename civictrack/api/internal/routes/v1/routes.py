# Third-party imports
from fastapi import APIRouter

# Local application imports
from civictrack.api.internal.routes.v1.issues import flag_router, issue_router, status_request_router

router = APIRouter()

# Include all internal v1 routers
router.include_router(issue_router)
router.include_router(flag_router)
router.include_router(status_request_router)
