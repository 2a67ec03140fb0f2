from .flag_routes import router as flag_router
from .issue_routes import router as issue_router
from .status_request_routes import router as status_request_router

__all__ = ["issue_router", "flag_router", "status_request_router"]
