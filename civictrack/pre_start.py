"""
Pre-start script to check database connectivity.
"""

# Standard library imports
import asyncio
import sys

# Third-party imports
from sqlalchemy import text

# Local application imports
from civictrack.core.db import async_engine
from civictrack.core.monitoring.logging import get_logger

logger = get_logger(__name__)


async def check_database() -> bool:
    """Check if database is accessible and ready."""
    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("Database is ready!")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


async def wait_for_database(max_retries: int = 30, retry_interval: int = 2) -> bool:
    """
    Wait for database to be ready.

    Args:
        max_retries: Maximum number of connection attempts
        retry_interval: Seconds between retries

    Returns:
        True if database is ready, False otherwise
    """
    logger.info("Waiting for database to be ready...")

    for attempt in range(1, max_retries + 1):
        logger.info(f"Database connection attempt {attempt}/{max_retries}")

        if await check_database():
            return True

        if attempt < max_retries:
            logger.info(f"Retrying in {retry_interval} seconds...")
            await asyncio.sleep(retry_interval)

    logger.error(f"Failed to connect to database after {max_retries} attempts")
    return False


async def main() -> None:
    logger.info("Starting pre-start checks...")

    if not await wait_for_database():
        logger.error("Pre-start checks failed: Database is not available")
        sys.exit(1)

    await async_engine.dispose()
    logger.info("All pre-start checks passed!")


if __name__ == "__main__":
    asyncio.run(main())
