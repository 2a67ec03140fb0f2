# Standard library imports
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

# Third-party imports
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from civictrack.core.exceptions import ServiceError
from civictrack.core.monitoring.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def atomic(db: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Run a block of reads and writes as one transaction.

    Commits when the block exits normally. Any exception, including the
    service errors raised after a failed check, rolls back everything done
    on the session since the last commit and is re-raised to the caller.
    """
    try:
        yield db
        await db.commit()
    except ServiceError as e:
        await db.rollback()
        logger.warning(f"Request refused: {e.code}: {e.message}")
        raise
    except Exception as e:
        await db.rollback()
        logger.error(f"Transaction rolled back: {type(e).__name__}: {e}")
        raise
