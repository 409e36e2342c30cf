"""
First-success race over interchangeable fetch strategies.

All strategies start together; the first one to return wins and the
others are cancelled. Failures only matter when every strategy fails.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from loguru import logger

T = TypeVar("T")


class AllStrategiesFailed(Exception):
    """Raised when every strategy of a race failed."""

    def __init__(self, errors: Sequence[BaseException]):
        self.errors = list(errors)
        super().__init__(f"All {len(self.errors)} strategies failed")


async def _cancel_all(tasks: set[asyncio.Task]) -> None:
    for task in tasks:
        task.cancel()
    if tasks:
        await asyncio.gather(*tasks, return_exceptions=True)


async def first_success(strategies: Sequence[Callable[[], Awaitable[T]]]) -> T:
    """
    Run strategies concurrently and return the first successful result.

    Args:
        strategies: Zero-argument callables returning awaitables

    Returns:
        Result of the first strategy to complete without raising

    Raises:
        AllStrategiesFailed: If there are no strategies or all of them raise
    """
    if not strategies:
        raise AllStrategiesFailed([])

    pending: set[asyncio.Task] = {asyncio.ensure_future(s()) for s in strategies}
    errors: list[BaseException] = []

    try:
        while pending:
            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
            winner = None
            # Failures finishing alongside the winner must still be retrieved
            for task in done:
                if task.cancelled():
                    errors.append(asyncio.CancelledError())
                    continue
                error = task.exception()
                if error is None:
                    winner = winner or task
                    continue
                logger.debug(f"Strategy failed: {error!r}")
                errors.append(error)
            if winner is not None:
                return winner.result()
    finally:
        # Losers are aborted, not merely ignored
        await _cancel_all(pending)

    raise AllStrategiesFailed(errors)


def summarize_errors(error: AllStrategiesFailed) -> str:
    """One-line summary of race errors for log messages."""
    return "; ".join(str(e) or type(e).__name__ for e in error.errors) or "no strategies"
