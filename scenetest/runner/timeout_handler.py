"""Per-invocation timeout for test methods and hooks."""

import asyncio
from typing import Awaitable, Optional, TypeVar

T = TypeVar("T")


class TestTimeoutError(TimeoutError):
    """A test method did not finish within its time limit."""

    __test__ = False

    def __init__(self, name: str, timeout_milliseconds: int):
        self.name = name
        self.timeout_milliseconds = timeout_milliseconds
        super().__init__(f"{name} timed out after {timeout_milliseconds}ms")


class TimeoutHandler:
    """Bounds a single awaited invocation."""

    def __init__(self, timeout_milliseconds: int):
        """Initialize timeout handler.

        Args:
            timeout_milliseconds: Time limit per invocation. Zero or less
                disables the limit.
        """
        self.timeout_milliseconds = timeout_milliseconds

    @property
    def timeout(self) -> Optional[float]:
        """Limit in seconds, None when unbounded."""
        if self.timeout_milliseconds <= 0:
            return None
        return self.timeout_milliseconds / 1000

    async def run(self, awaitable: Awaitable[T], name: str = "invocation") -> T:
        """Await `awaitable`, giving up once the limit has passed.

        The abandoned invocation is cancelled; a synchronous test running
        in a worker thread is left to finish on its own. Only the limit
        running out becomes a TestTimeoutError: a TimeoutError raised by
        the invocation itself propagates unchanged.

        Raises:
            TestTimeoutError: If the limit is reached first.
        """
        task = asyncio.ensure_future(awaitable)
        try:
            done, _ = await asyncio.wait({task}, timeout=self.timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise

        if task not in done:
            task.cancel()
            raise TestTimeoutError(name, self.timeout_milliseconds)
        return task.result()
