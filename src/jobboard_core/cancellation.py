"""Caller-supplied cancellation / deadline token for store calls."""

import asyncio
import time
from typing import Awaitable, Optional, TypeVar

from jobboard_core.errors import OperationCancelled

T = TypeVar("T")


class CancelToken:
    """
    Cooperative cancellation shared by every store call of one dashboard load.
    cancel() withdraws the request; an optional timeout cancels automatically.
    """

    def __init__(self, timeout: Optional[float] = None):
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = False
        self._waiters: set[asyncio.Future] = set()

    def cancel(self) -> None:
        self._cancelled = True
        for waiter in self._waiters:
            if not waiter.done():
                waiter.set_result(None)

    @property
    def cancelled(self) -> bool:
        if not self._cancelled and self._deadline is not None and time.monotonic() >= self._deadline:
            self._cancelled = True
        return self._cancelled

    def remaining(self) -> Optional[float]:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise OperationCancelled("request cancelled by caller")

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """
        Await awaitable unless the token fires first.
        On cancellation the in-flight call is cancelled and OperationCancelled raised.
        """
        self.raise_if_cancelled()
        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.get_running_loop().create_future()
        self._waiters.add(waiter)
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
            if task in done:
                return task.result()
            self._cancelled = True
            task.cancel()
            raise OperationCancelled("request cancelled by caller")
        except asyncio.CancelledError:
            task.cancel()
            raise
        finally:
            self._waiters.discard(waiter)
            if not waiter.done():
                waiter.cancel()
