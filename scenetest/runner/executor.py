"""Test executor - runs discovered suites against a host scene.

For every suite:
1. Create the test class with the scene
2. Run setup_all hooks
3. Run each test between its setup and cleanup hooks
4. Run failure hooks for failed tests
5. Run cleanup_all hooks (always, exactly once)

Suites run concurrently unless `sequential` is set. Tests inside one suite
always run in declaration order since they share an instance.
"""

import asyncio
import time
from typing import Any, Optional, Sequence

from ..discovery.registry import TestClass, TestMethod, TestSuite
from ..log import get_logger
from ..reporting.reporter import Outcome
from .timeout_handler import TestTimeoutError, TimeoutHandler

logger = get_logger(__name__)

DEFAULT_TIMEOUT_MILLISECONDS = 10000


def describe_error(error: BaseException) -> str:
    """One-line diagnostic for a failed invocation."""
    if isinstance(error, TestTimeoutError):
        return str(error)
    message = str(error)
    if not message:
        return type(error).__name__
    return f"{type(error).__name__}: {message}"


class TestExecutor:
    """Runs test suites and records their outcomes in a reporter."""

    __test__ = False

    def __init__(
        self,
        method_executor: Any,
        stop_on_error: bool = False,
        sequential: bool = False,
        timeout_milliseconds: int = DEFAULT_TIMEOUT_MILLISECONDS,
    ):
        """Initialize test executor.

        Args:
            method_executor: Object with `async run(method, instance)`.
            stop_on_error: Skip tests not yet started once one fails.
            sequential: Run suites one at a time instead of concurrently.
            timeout_milliseconds: Limit for each test and hook invocation.
        """
        self.method_executor = method_executor
        self.stop_on_error = stop_on_error
        self.sequential = sequential
        self.timeout_milliseconds = timeout_milliseconds
        self._stopped = False

    @property
    def stopped(self) -> bool:
        """Whether a failure stopped the current run early."""
        return self._stopped

    async def run(self, scene: Any, suites: Sequence[TestSuite], reporter: Any) -> None:
        """Run all suites, then write the reporter's summary."""
        self._stopped = False
        suites = list(suites)
        logger.debug(
            f"Running {len(suites)} suite(s) "
            f"(sequential={self.sequential}, stop_on_error={self.stop_on_error}, "
            f"timeout={self.timeout_milliseconds}ms)"
        )

        if self.sequential:
            for suite in suites:
                await self._run_suite(scene, suite, reporter)
        else:
            await asyncio.gather(*(self._run_suite(scene, suite, reporter) for suite in suites))

        reporter.finish()

    async def _run_suite(self, scene: Any, suite: TestSuite, reporter: Any) -> None:
        if self._stopped:
            for method in suite.tests:
                reporter.test_skipped(suite, method)
            return

        reporter.suite_started(suite)

        try:
            instance = suite.create(scene)
        except Exception as e:
            logger.debug(f"Could not create {suite.name}", exc_info=True)
            self._fail_all(suite, reporter, f"Could not create {suite.name}: {describe_error(e)}")
            reporter.suite_finished(suite)
            return

        try:
            setup_error = await self._run_setup_all(suite, instance)
            if setup_error is not None:
                self._fail_all(suite, reporter, setup_error)
            else:
                for method in suite.tests:
                    if self._stopped:
                        reporter.test_skipped(suite, method)
                        continue
                    self._record(reporter, await self._run_test(suite, method, instance))
        finally:
            await self._run_cleanup_all(suite, instance, reporter)
            reporter.suite_finished(suite)

    async def _run_setup_all(self, suite: TestSuite, instance: TestClass) -> Optional[str]:
        for hook in suite.setup_alls:
            try:
                await self._invoke(suite, hook, instance)
            except Exception as e:
                logger.debug(f"{suite.name}.{hook.name} failed", exc_info=True)
                return f"{hook.name} failed: {describe_error(e)}"
        return None

    async def _run_cleanup_all(self, suite: TestSuite, instance: TestClass, reporter: Any) -> None:
        for hook in suite.cleanup_alls:
            start_time = time.monotonic()
            try:
                await self._invoke(suite, hook, instance)
            except Exception as e:
                logger.debug(f"{suite.name}.{hook.name} failed", exc_info=True)
                self._record(reporter, Outcome.failed(
                    suite=suite.name,
                    name=hook.name,
                    diagnostic=describe_error(e),
                    duration_ms=_elapsed_ms(start_time),
                    timed_out=isinstance(e, TestTimeoutError),
                ))

    async def _run_test(self, suite: TestSuite, method: TestMethod, instance: TestClass) -> Outcome:
        start_time = time.monotonic()
        error: Optional[Exception] = None

        try:
            for hook in suite.setups:
                await self._invoke(suite, hook, instance)
            await self._invoke(suite, method, instance)
        except Exception as e:
            error = e

        for hook in suite.cleanups:
            try:
                await self._invoke(suite, hook, instance)
            except Exception as e:
                if error is None:
                    error = e

        duration_ms = _elapsed_ms(start_time)

        if error is None:
            return Outcome.success(suite.name, method.name, duration_ms)

        logger.debug(f"{suite.name}.{method.name} failed", exc_info=error)

        for hook in suite.failures:
            try:
                await self._invoke(suite, hook, instance)
            except Exception as e:
                logger.warning(f"Failure hook {suite.name}.{hook.name} raised: {describe_error(e)}")

        return Outcome.failed(
            suite=suite.name,
            name=method.name,
            diagnostic=describe_error(error),
            duration_ms=duration_ms,
            timed_out=isinstance(error, TestTimeoutError),
        )

    async def _invoke(self, suite: TestSuite, method: TestMethod, instance: TestClass) -> Any:
        handler = TimeoutHandler(self.timeout_milliseconds)
        return await handler.run(
            self.method_executor.run(method, instance),
            name=f"{suite.name}.{method.name}",
        )

    def _fail_all(self, suite: TestSuite, reporter: Any, diagnostic: str) -> None:
        for method in suite.tests:
            self._record(reporter, Outcome.failed(suite.name, method.name, diagnostic))

    def _record(self, reporter: Any, outcome: Outcome) -> None:
        reporter.record_outcome(outcome)
        if not outcome.passed and self.stop_on_error:
            self._stopped = True


def _elapsed_ms(start_time: float) -> int:
    return int((time.monotonic() - start_time) * 1000)
