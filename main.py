# Standard library imports
from contextlib import asynccontextmanager
from uuid import uuid4

# Third-party imports
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from civictrack.api import router as api_router
from civictrack.api.internal.utils.exceptions import register_exception_handlers
from civictrack.core.db import get_async_session, run_with_new_session
from civictrack.core.monitoring import get_logger, setup_sentry
from civictrack.services.auth.user_services import create_default_admin_user
from civictrack.settings import settings

# Set up the main application logger
logger = get_logger("civictrack")

APP_VERSION = "1.0.0"


# ---- FASTAPI APP CREATION ----
def custom_generate_unique_id(route: APIRoute) -> str:
    # Handle routes without tags
    if route.tags and len(route.tags) > 0:
        return f"{route.tags[0]}-{route.name}"
    else:
        return route.name or "unnamed_route"


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Startup
    logger.info(f"Starting up {settings.PROJECT_NAME} in {settings.ENVIRONMENT} environment")
    if setup_sentry():
        logger.info("Sentry initialised")

    # Create default admin user
    try:
        admin_id = await run_with_new_session(create_default_admin_user)
        logger.info(f"Admin user ready with ID: {admin_id}")
    except Exception as e:
        logger.error(f"Failed to create admin user: {e}")

    yield

    # Shutdown
    logger.info("Shutting down FastAPI application")


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=APP_VERSION,
        description="Civic issue reporting: lifecycle, moderation and nearby search",
        openapi_url=f"{settings.API_V1_STR}/openapi.json" if settings.ENVIRONMENT != "production" else None,
        docs_url=f"{settings.API_V1_STR}/docs" if settings.ENVIRONMENT != "production" else None,
        redoc_url=f"{settings.API_V1_STR}/redoc" if settings.ENVIRONMENT != "production" else None,
        generate_unique_id_function=custom_generate_unique_id,
        lifespan=lifespan,
    )

    if settings.all_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.all_cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        request.state.request_id = request.headers.get("X-Request-ID") or uuid4().hex
        response = await call_next(request)
        response.headers["X-Request-ID"] = request.state.request_id
        return response

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    async def health_check(db: AsyncSession = Depends(get_async_session)):
        try:
            await db.execute(text("SELECT 1"))
            database = "connected"
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            database = "unavailable"
        return {"status": "healthy", "version": APP_VERSION, "database": database}

    app.include_router(api_router)

    return app


# Create the app instance
app = create_app()
