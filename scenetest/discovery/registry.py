"""Test suite registration.

Test classes register themselves when their class body runs, so discovery
never has to scan arbitrary objects. Methods are tagged with decorators:

    class PlayerTest(TestClass):
        @setup
        def spawn(self):
            self.player = Player(self.scene)

        @test
        async def jumps(self):
            await self.player.jump()
            assert self.player.airborne
"""

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional

MARKER_ATTRIBUTE = "__scenetest_kind__"


class MethodKind(str, Enum):
    """Role of a method inside a test class."""
    TEST = "test"
    SETUP = "setup"
    CLEANUP = "cleanup"
    SETUP_ALL = "setup_all"
    CLEANUP_ALL = "cleanup_all"
    FAILURE = "failure"


def _marker(kind: MethodKind) -> Callable[[Callable], Callable]:
    def decorate(function: Callable) -> Callable:
        setattr(function, MARKER_ATTRIBUTE, kind)
        return function

    decorate.__name__ = kind.value
    # Keeps pytest from collecting `test` when it is imported into a test module
    decorate.__test__ = False
    return decorate


test = _marker(MethodKind.TEST)
setup = _marker(MethodKind.SETUP)
cleanup = _marker(MethodKind.CLEANUP)
setup_all = _marker(MethodKind.SETUP_ALL)
cleanup_all = _marker(MethodKind.CLEANUP_ALL)
failure = _marker(MethodKind.FAILURE)


@dataclass
class TestMethod:
    """A decorated method of a test class."""
    __test__ = False

    name: str
    function: Callable
    kind: MethodKind = MethodKind.TEST

    @property
    def is_async(self) -> bool:
        return inspect.iscoroutinefunction(self.function)

    def invoke(self, instance: Any) -> Any:
        """Call the method on an instance (returns a coroutine if async)."""
        return self.function(instance)


@dataclass
class TestSuite:
    """A registered test class and its methods in declaration order."""
    __test__ = False

    name: str
    module: str
    test_class: type
    tests: list[TestMethod] = field(default_factory=list)
    setups: list[TestMethod] = field(default_factory=list)
    cleanups: list[TestMethod] = field(default_factory=list)
    setup_alls: list[TestMethod] = field(default_factory=list)
    cleanup_alls: list[TestMethod] = field(default_factory=list)
    failures: list[TestMethod] = field(default_factory=list)

    @property
    def total_tests(self) -> int:
        return len(self.tests)

    def create(self, scene: Any) -> "TestClass":
        """Instantiate the test class for a run."""
        return self.test_class(scene)

    def with_tests(self, tests: list[TestMethod]) -> "TestSuite":
        """Copy of this suite restricted to the given tests."""
        return TestSuite(
            name=self.name,
            module=self.module,
            test_class=self.test_class,
            tests=list(tests),
            setups=self.setups,
            cleanups=self.cleanups,
            setup_alls=self.setup_alls,
            cleanup_alls=self.cleanup_alls,
            failures=self.failures,
        )


_HOOK_LISTS = {
    MethodKind.TEST: "tests",
    MethodKind.SETUP: "setups",
    MethodKind.CLEANUP: "cleanups",
    MethodKind.SETUP_ALL: "setup_alls",
    MethodKind.CLEANUP_ALL: "cleanup_alls",
    MethodKind.FAILURE: "failures",
}


class SuiteRegistry:
    """Module name -> suites, in the order the classes were defined."""

    def __init__(self):
        self._suites: dict[str, list[TestSuite]] = {}

    def register(self, test_class: type) -> TestSuite:
        suite = build_suite(test_class)
        suites = self._suites.setdefault(suite.module, [])

        # Reloading a module redefines its classes; keep the latest definition
        for i, existing in enumerate(suites):
            if existing.name == suite.name:
                suites[i] = suite
                break
        else:
            suites.append(suite)

        return suite

    def suites_for(self, module_name: str, include_submodules: bool = False) -> list[TestSuite]:
        result = list(self._suites.get(module_name, []))
        if include_submodules:
            prefix = f"{module_name}."
            for name in sorted(self._suites):
                if name.startswith(prefix):
                    result.extend(self._suites[name])
        return result

    def clear(self, module_name: Optional[str] = None) -> None:
        if module_name is None:
            self._suites.clear()
        else:
            self._suites.pop(module_name, None)


def build_suite(test_class: type) -> TestSuite:
    """Collect a class's decorated methods into a TestSuite.

    Methods inherited from TestClass bases are included in base-first
    declaration order. A subclass redefining a method replaces it in place;
    redefining it without a marker removes it.
    """
    suite = TestSuite(
        name=test_class.__name__,
        module=test_class.__module__,
        test_class=test_class,
    )

    members: dict[str, Any] = {}
    for klass in reversed(test_class.__mro__):
        if klass is TestClass or not issubclass(klass, TestClass):
            continue
        for name, member in vars(klass).items():
            if getattr(member, MARKER_ATTRIBUTE, None) is None:
                members.pop(name, None)
            else:
                members[name] = member

    for name, member in members.items():
        kind = getattr(member, MARKER_ATTRIBUTE)
        getattr(suite, _HOOK_LISTS[kind]).append(
            TestMethod(name=name, function=member, kind=kind)
        )

    return suite


registry = SuiteRegistry()


class TestClass:
    """Base class for test suites.

    Each instance receives the host scene it runs against. Subclasses are
    registered on definition unless their body sets `abstract = True`.
    """

    __test__ = False
    abstract = True

    def __init__(self, scene: Any):
        self.scene = scene

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if not cls.__dict__.get("abstract", False):
            registry.register(cls)
