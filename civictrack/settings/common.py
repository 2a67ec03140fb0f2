# Standard library imports
from pathlib import Path
import secrets
from typing import Annotated, Any, Literal

# Third-party imports
from pydantic import AnyUrl, BeforeValidator, computed_field
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR: Path = Path(__file__).resolve().parent.parent


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",")]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


class CommonSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # General settings
    API_V1_STR: str = "/api/v1"
    SECRET_KEY: str = secrets.token_urlsafe(32)
    ENVIRONMENT: Literal["dev", "test", "staging", "production"] = "dev"
    DEBUG_MODE: bool = False
    SQL_ECHO: bool = False
    PROJECT_NAME: str = "CivicTrack"

    # Database settings
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "civictrack"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_DB: str = "civictrack"
    # Overrides the POSTGRES_* settings when present (e.g. sqlite+aiosqlite:///./civictrack.db)
    DATABASE_URL: str | None = None

    @computed_field  # type: ignore[prop-decorator, misc]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> MultiHostUrl:
        return MultiHostUrl.build(
            scheme="postgresql+psycopg",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_SERVER,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        )

    @property
    def SQLALCHEMY_ASYNC_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return str(
            MultiHostUrl.build(
                scheme="postgresql+asyncpg",  # async driver for async queries
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_SERVER,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )

    # CORS settings
    BACKEND_CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_cors)] = [
        AnyUrl("http://localhost/"),
        AnyUrl("http://localhost:3000/"),
        AnyUrl("http://localhost:8000/"),
    ]

    @computed_field  # type: ignore[prop-decorator, misc]
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # Optional settings
    SENTRY_DSN: str | None = None

    # JWT settings
    JWT_ALGORITHM: str = "HS256"
    JWT_SECRET_KEY: str = secrets.token_urlsafe(32)
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 1  # 1 day for production must be 30 min

    # Admin settings
    ADMIN_USERNAME: str = "admin"
    ADMIN_EMAIL: str = "admin@civictrack.local"
    ADMIN_PASSWORD: str = "password@1234"

    # Issue lifecycle
    STRICT_STATUS_FLOW: bool = False  # forward-only transitions when enabled

    # Nearby search
    NEARBY_DEFAULT_RADIUS_KM: float = 5.0
    NEARBY_MAX_RADIUS_KM: float = 100.0

    # Pagination configurations
    PAGINATION_CONFIGS: dict[str, dict[str, int]] = {
        "small": {
            # Flags of a single issue, status requests of a single issue
            "default_limit": 25,
            "max_limit": 100,
            "min_limit": 1,
            "default_offset": 0,
        },
        "medium": {
            # Issue listings, moderation queues
            "default_limit": 50,
            "max_limit": 500,
            "min_limit": 1,
            "default_offset": 0,
        },
    }
