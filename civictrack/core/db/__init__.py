# Local application imports
from civictrack.core.db.atomic import atomic
from civictrack.core.db.create_async_engine import async_engine
from civictrack.core.db.get_async_session import AsyncSessionLocal, get_async_session
from civictrack.core.db.run_with_new_session import run_with_new_session

__all__ = [
    "AsyncSessionLocal",
    "async_engine",
    "atomic",
    "get_async_session",
    "run_with_new_session",
]
