# Local application imports
from civictrack.settings.common import CommonSettings


class DevSettings(CommonSettings):
    DEBUG_MODE: bool = True
    # Local development runs against SQLite unless DATABASE_URL/POSTGRES_* say otherwise
    DATABASE_URL: str | None = "sqlite+aiosqlite:///./civictrack.db"
