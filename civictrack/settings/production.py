# Third-party imports
from pydantic import field_validator

# Local application imports
from civictrack.settings.common import CommonSettings


class ProductionSettings(CommonSettings):
    DEBUG_MODE: bool = False
    SQL_ECHO: bool = False
    STRICT_STATUS_FLOW: bool = False
    # Required from the environment
    JWT_SECRET_KEY: str

    @field_validator("DATABASE_URL")
    @classmethod
    def reject_sqlite(cls, value: str | None) -> str | None:
        if value and value.startswith("sqlite"):
            raise ValueError("SQLite is for development and tests only")
        return value
