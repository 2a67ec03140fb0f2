# Third-party imports
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

# Local application imports
from civictrack.settings import settings


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> AsyncEngine:
    """SQLite ignores FOREIGN KEY clauses unless every connection turns them on."""
    if engine.dialect.name != "sqlite":
        return engine

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


# Asynchronous Engine
async_engine = enable_sqlite_foreign_keys(
    create_async_engine(
        settings.SQLALCHEMY_ASYNC_DATABASE_URI,
        echo=settings.SQL_ECHO,
        pool_pre_ping=True,
    )
)
