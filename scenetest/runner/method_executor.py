"""Default method executor - invokes one test method."""

import asyncio
import inspect
import threading
from typing import Any, Optional

from ..discovery.registry import TestMethod


class TestMethodExecutor:
    """Runs a single test or hook method on a test class instance.

    Coroutine methods are awaited on the running loop. Plain methods run
    in a daemon thread so the timeout can abandon them if they block; an
    abandoned thread holds up neither loop shutdown nor interpreter exit.
    """

    __test__ = False

    async def run(self, method: TestMethod, instance: Any) -> Any:
        if method.is_async:
            return await method.invoke(instance)

        result = await self._run_in_thread(method, instance)
        if inspect.isawaitable(result):
            return await result
        return result

    async def _run_in_thread(self, method: TestMethod, instance: Any) -> Any:
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        def resolve(result: Any, error: Optional[BaseException]) -> None:
            # The waiter may have timed out and cancelled the future
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(result)

        def target() -> None:
            result, error = None, None
            try:
                result = method.invoke(instance)
            except BaseException as e:
                error = e
            try:
                loop.call_soon_threadsafe(resolve, result, error)
            except RuntimeError:
                # Loop already closed; nobody is waiting any more
                pass

        thread = threading.Thread(
            target=target,
            name=f"scenetest-{method.name}",
            daemon=True,
        )
        thread.start()
        return await future
