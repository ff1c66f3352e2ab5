"""In-flight request bookkeeping for a thread view."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

T = TypeVar("T")


class ViewClosedError(Exception):
    """The view was unmounted while a request was pending."""

    pass


class RequestTracker:
    """Runs a view's remote calls as tasks so they can be cancelled together.

    Once closed, pending calls are cancelled and results that arrive late
    raise ViewClosedError instead of reaching the view's state.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Future] = set()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def run(self, call: Awaitable[T]) -> T:
        """Await ``call`` as a tracked task.

        Raises:
            ViewClosedError: If the tracker is closed before or while waiting
        """
        if self._closed:
            if asyncio.iscoroutine(call):
                call.close()
            raise ViewClosedError()

        task = asyncio.ensure_future(call)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        try:
            result = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            # Only swallow the cancellation we caused, never our caller's
            if self._closed and (current is None or not current.cancelling()):
                raise ViewClosedError() from None
            raise
        if self._closed:
            raise ViewClosedError()
        return result

    def close(self) -> None:
        """Cancel every pending call and refuse new ones."""
        self._closed = True
        for task in list(self._tasks):
            task.cancel()
