# Third-party imports
from fastapi import APIRouter

# Local application imports
from civictrack.api.internal.main import router as internal_router
from civictrack.settings import settings

router = APIRouter(prefix=settings.API_V1_STR)

# Include internal API routers
router.include_router(internal_router)
