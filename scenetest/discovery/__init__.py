"""Discovery module - test suite registration and lookup."""

from .registry import (
    MethodKind,
    SuiteRegistry,
    TestClass,
    TestMethod,
    TestSuite,
    cleanup,
    cleanup_all,
    failure,
    registry,
    setup,
    setup_all,
    test,
)
from .provider import TestProvider, matches

__all__ = [
    "MethodKind",
    "SuiteRegistry",
    "TestClass",
    "TestMethod",
    "TestSuite",
    "TestProvider",
    "cleanup",
    "cleanup_all",
    "failure",
    "matches",
    "registry",
    "setup",
    "setup_all",
    "test",
]
