"""Test adapter - builds every collaborator of a run.

The orchestrator only talks to the objects an adapter hands back, so
substituting the adapter replaces environment parsing, discovery,
execution and reporting without touching `run_tests`.
"""

import logging
from typing import Any, Sequence, Union

from .discovery.provider import TestProvider
from .environment.schema import TestEnvironment
from .log import TestLog
from .reporting.reporter import TestReporter
from .runner.executor import TestExecutor


class TestAdapter:
    """Default factory for run collaborators. Subclass to substitute any of them."""

    __test__ = False

    def create_test_environment(
        self, env: Union[TestEnvironment, Sequence[str], None]
    ) -> TestEnvironment:
        """Return `env` as a TestEnvironment, parsing raw arguments if needed."""
        if isinstance(env, TestEnvironment):
            return env
        return TestEnvironment.from_args(env or [])

    def create_log(self, log: Union[TestLog, logging.Logger, None]) -> TestLog:
        return TestLog.wrap(log)

    def create_provider(self) -> TestProvider:
        return TestProvider()

    def create_reporter(self, log: TestLog) -> TestReporter:
        return TestReporter(log)

    def create_executor(
        self,
        method_executor: Any,
        stop_on_error: bool,
        sequential: bool,
        timeout_milliseconds: int,
    ) -> TestExecutor:
        return TestExecutor(
            method_executor=method_executor,
            stop_on_error=stop_on_error,
            sequential=sequential,
            timeout_milliseconds=timeout_milliseconds,
        )


DEFAULT_ADAPTER = TestAdapter()
