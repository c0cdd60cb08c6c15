"""Concurrent fan-out helpers."""

import asyncio
from typing import Awaitable, Iterable, TypeVar

T = TypeVar("T")


async def gather_or_cancel(aws: Iterable[Awaitable[T]]) -> list[T]:
    """Run awaitables concurrently and return their results in input order.

    If any of them fails, or the caller is cancelled, the others are
    cancelled and awaited before the exception propagates, so no task
    outlives the call.

    Args:
        aws: Coroutines or futures to run

    Returns:
        list: Results in the same order as aws
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
