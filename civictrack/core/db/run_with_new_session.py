# Standard library imports
from collections.abc import Awaitable, Callable
from typing import Any

# Local application imports
from civictrack.core.db.get_async_session import get_async_session


async def run_with_new_session(
    func: Callable[..., Awaitable[Any]],
    *args: Any,
    **kwargs: Any,
) -> Any:
    """
    Run any coroutine function with a fresh DB session.

    Used outside of request handling, e.g. seeding the default
    administrator during application startup.

    Args:
        func: The function to run, which must accept an
        AsyncSession as its first argument.
        *args: Positional arguments to pass to the function.
        **kwargs: Keyword arguments to pass to the function.

    Returns:
        Any: The result of the function execution.
    """
    async for session in get_async_session():
        return await func(session, *args, **kwargs)
    raise RuntimeError("Failed to obtain database session")
