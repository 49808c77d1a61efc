"""Test orchestration entry point.

Coordinates a run inside a host application:
1. Resolve the test environment (nothing happens without --run-tests)
2. Build log, provider, reporter and executor through the adapter
3. Discover suites matching the run pattern
4. Execute them, with the trace listener installed if requested
5. Compute the exit code and hand it to the exit callback
"""

import logging
import os
import sys
import time
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional, Sequence, Union

from .adapter import DEFAULT_ADAPTER, TestAdapter
from .diagnostics import listen_trace
from .environment.schema import TestEnvironment
from .log import TestLog, get_logger
from .runner.executor import DEFAULT_TIMEOUT_MILLISECONDS
from .runner.method_executor import TestMethodExecutor

logger = get_logger(__name__)

ExitCallback = Callable[[Any, int], None]


def default_on_exit(scene: Any, exit_code: int) -> None:
    """Terminate through normal interpreter shutdown."""
    sys.exit(exit_code)


def default_on_force_exit(scene: Any, exit_code: int) -> None:
    """Terminate immediately, skipping atexit handlers and finalizers."""
    logging.shutdown()
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(exit_code)


class TestRuntime:
    """Process-wide seams of the orchestrator.

    Anything substituted here (usually by tests of the runner itself) must
    be put back afterwards, either with `reset()` or by scoping the change
    with `override()`.
    """

    __test__ = False

    def __init__(
        self,
        adapter: Optional[TestAdapter] = None,
        on_exit: Optional[ExitCallback] = None,
        on_force_exit: Optional[ExitCallback] = None,
        timeout_milliseconds: int = DEFAULT_TIMEOUT_MILLISECONDS,
    ):
        self.adapter = adapter or DEFAULT_ADAPTER
        self.on_exit = on_exit or default_on_exit
        self.on_force_exit = on_force_exit or default_on_force_exit
        self.timeout_milliseconds = timeout_milliseconds

    def reset(self) -> None:
        """Restore the default adapter, exit callbacks and timeout."""
        self.adapter = DEFAULT_ADAPTER
        self.on_exit = default_on_exit
        self.on_force_exit = default_on_force_exit
        self.timeout_milliseconds = DEFAULT_TIMEOUT_MILLISECONDS

    @contextmanager
    def override(self, **values: Any) -> Iterator["TestRuntime"]:
        """Temporarily replace attributes, restoring the previous values on exit.

        Raises:
            AttributeError: For names that aren't runtime settings.
        """
        saved = {}
        for name in values:
            if name not in ("adapter", "on_exit", "on_force_exit", "timeout_milliseconds"):
                raise AttributeError(f"Unknown runtime setting: {name}")
            saved[name] = getattr(self, name)

        for name, value in values.items():
            setattr(self, name, value)
        try:
            yield self
        finally:
            for name, value in saved.items():
                setattr(self, name, value)


runtime = TestRuntime()


async def run_tests(
    module: Any,
    scene: Any,
    env: Union[TestEnvironment, Sequence[str], None],
    log: Union[TestLog, logging.Logger, None] = None,
    method_executor: Any = None,
    test_runtime: Optional[TestRuntime] = None,
) -> Optional[int]:
    """Discover and run the tests of `module` against `scene`.

    Args:
        module: Module object or dotted name to discover suites in.
        scene: Host scene handed to every test class and exit callback.
        env: TestEnvironment or raw command line arguments.
        log: Sink for progress output. None = default runner logger.
        method_executor: Invokes test methods. None = TestMethodExecutor.
        test_runtime: Seams to use. None = the process-wide runtime.

    Returns:
        The computed exit code, or None when no run was requested.

    Raises:
        Exception: Discovery or construction faults propagate unchanged.
    """
    test_runtime = test_runtime or runtime
    adapter = test_runtime.adapter

    env = adapter.create_test_environment(env)
    if not env.should_run_tests:
        return None

    log = adapter.create_log(log)
    provider = adapter.create_provider()
    reporter = adapter.create_reporter(log)
    executor = adapter.create_executor(
        method_executor or TestMethodExecutor(),
        env.stop_on_error,
        env.sequential,
        test_runtime.timeout_milliseconds,
    )

    start_time = time.monotonic()
    with listen_trace(log, enabled=env.should_listen_trace):
        suites = provider.get_test_suites_by_pattern(module, env.run_pattern)
        await executor.run(scene, suites, reporter)

    exit_code = 1 if reporter.had_error else 0
    logger.debug(f"Run finished with exit code {exit_code}")

    if env.report_path:
        duration_ms = int((time.monotonic() - start_time) * 1000)
        path = reporter.save_report(env.report_path, env.run_pattern, duration_ms)
        log.print(f"Report saved: {path}")

    if env.should_quit_on_finish:
        if env.should_run_coverage:
            test_runtime.on_force_exit(scene, exit_code)
        else:
            test_runtime.on_exit(scene, exit_code)

    return exit_code
