"""Runner module - test execution."""

from .executor import DEFAULT_TIMEOUT_MILLISECONDS, TestExecutor, describe_error
from .method_executor import TestMethodExecutor
from .timeout_handler import TestTimeoutError, TimeoutHandler

__all__ = [
    "DEFAULT_TIMEOUT_MILLISECONDS",
    "TestExecutor",
    "TestMethodExecutor",
    "TestTimeoutError",
    "TimeoutHandler",
    "describe_error",
]
