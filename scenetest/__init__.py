"""scenetest - test orchestration for host applications.

Usage inside a host:

    from scenetest import run_tests

    await run_tests("game.tests", scene, sys.argv[1:])
"""

from .adapter import DEFAULT_ADAPTER, TestAdapter
from .discovery import (
    TestClass,
    TestProvider,
    TestSuite,
    cleanup,
    cleanup_all,
    failure,
    setup,
    setup_all,
    test,
)
from .environment import TestEnvironment, parse_args
from .log import TestLog, get_logger
from .orchestrator import TestRuntime, run_tests, runtime
from .reporting import Outcome, TestReporter
from .runner import DEFAULT_TIMEOUT_MILLISECONDS, TestExecutor, TestMethodExecutor

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_ADAPTER",
    "DEFAULT_TIMEOUT_MILLISECONDS",
    "Outcome",
    "TestAdapter",
    "TestClass",
    "TestEnvironment",
    "TestExecutor",
    "TestLog",
    "TestMethodExecutor",
    "TestProvider",
    "TestReporter",
    "TestRuntime",
    "TestSuite",
    "cleanup",
    "cleanup_all",
    "failure",
    "get_logger",
    "parse_args",
    "run_tests",
    "runtime",
    "setup",
    "setup_all",
    "test",
]
