"""Test suite provider.

Finds the registered suites of a module, optionally filtered by a name
pattern.

Pattern rules (case-sensitive):
    "Player"          suites whose name contains "Player"
    "Player*Test"     glob, matched anywhere in the suite name
    "PlayerTest.jump" suites matching "PlayerTest", narrowed to tests
                      whose name contains "jump"
    ""                every suite
"""

import importlib
import pkgutil
from fnmatch import fnmatchcase
from types import ModuleType
from typing import Union

from ..log import get_logger
from .registry import SuiteRegistry, TestSuite, registry as default_registry

logger = get_logger(__name__)

ModuleHandle = Union[ModuleType, str]


def matches(name: str, pattern: str) -> bool:
    """Case-sensitive glob match anywhere in `name`."""
    if not pattern:
        return True
    return fnmatchcase(name, f"*{pattern}*")


class TestProvider:
    """Discovers test suites registered by a module or package."""

    __test__ = False

    def __init__(self, registry: SuiteRegistry = default_registry):
        self.registry = registry

    def get_test_suites(self, module: ModuleHandle) -> list[TestSuite]:
        """All suites of a module, in declaration order.

        Args:
            module: Module object or dotted module name. Packages have
                their submodules imported so their suites register.

        Raises:
            ImportError: If the module (or one of its submodules) can't be imported.
        """
        module = self._load(module)
        is_package = hasattr(module, "__path__")

        if is_package:
            self._import_submodules(module)

        suites = self.registry.suites_for(module.__name__, include_submodules=is_package)
        logger.debug(f"Found {len(suites)} suite(s) in {module.__name__}")
        return suites

    def get_test_suites_by_pattern(self, module: ModuleHandle, pattern: str) -> list[TestSuite]:
        """Suites of a module whose name matches `pattern`."""
        suites = self.get_test_suites(module)
        if not pattern:
            return suites

        suite_pattern, _, method_pattern = pattern.rpartition(".")
        if not suite_pattern:
            suite_pattern, method_pattern = method_pattern, ""

        selected = []
        for suite in suites:
            if not matches(suite.name, suite_pattern):
                continue
            if method_pattern:
                tests = [t for t in suite.tests if matches(t.name, method_pattern)]
                if not tests:
                    continue
                suite = suite.with_tests(tests)
            selected.append(suite)

        logger.debug(f"Pattern '{pattern}' selected {len(selected)} of {len(suites)} suite(s)")
        return selected

    def _load(self, module: ModuleHandle) -> ModuleType:
        if isinstance(module, str):
            return importlib.import_module(module)
        return module

    def _import_submodules(self, package: ModuleType) -> None:
        for info in pkgutil.walk_packages(package.__path__, prefix=f"{package.__name__}."):
            importlib.import_module(info.name)
