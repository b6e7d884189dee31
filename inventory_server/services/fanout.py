"""Join helper shared by the zone fan-out services."""

import asyncio
import logging
from typing import Optional

logger = logging.getLogger(__name__)


async def join_with_deadline(
    tasks: list[asyncio.Task],
    deadline_seconds: Optional[float] = None,
) -> set[asyncio.Task]:
    """
    Wait for every task, cancelling whatever is still running at the deadline.

    Without a deadline this is a plain barrier: it returns only once every
    task has finished, successful or not. With one, tasks still pending when
    it expires are cancelled and awaited so that no task outlives the
    request.

    Args:
        tasks: Tasks spawned for one request
        deadline_seconds: Seconds to wait before cancelling (None or 0 waits forever)

    Returns:
        The tasks that were cancelled because of the deadline
    """
    if not tasks:
        return set()

    _, pending = await asyncio.wait(tasks, timeout=deadline_seconds or None)
    if pending:
        logger.warning(
            f"Request deadline of {deadline_seconds}s expired with "
            f"{len(pending)}/{len(tasks)} tasks outstanding; cancelling"
        )
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
    return pending
