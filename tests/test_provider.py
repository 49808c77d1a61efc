"""Tests for suite registration and discovery."""

import importlib

import pytest

from scenetest.discovery import (
    MethodKind,
    SuiteRegistry,
    TestClass,
    TestProvider,
    cleanup,
    cleanup_all,
    failure,
    matches,
    registry,
    setup,
    setup_all,
    test,
)
from scenetest.discovery.registry import build_suite

PLAYER_MODULE = "sample_suites.player_suites"


def names(suites):
    return [suite.name for suite in suites]


@pytest.fixture
def provider():
    return TestProvider()


def test_suites_follow_declaration_order(provider):
    suites = provider.get_test_suites(PLAYER_MODULE)

    assert names(suites) == ["PlayerMovementTest", "PlayerInventoryTest", "EnemyTest"]


def test_accepts_module_objects(provider):
    module = importlib.import_module(PLAYER_MODULE)

    assert names(provider.get_test_suites(module)) == names(provider.get_test_suites(PLAYER_MODULE))


def test_abstract_base_classes_are_not_registered(provider):
    assert "BaseSceneTest" not in names(provider.get_test_suites(PLAYER_MODULE))


def test_package_discovery_imports_submodules(provider):
    found = names(provider.get_test_suites("sample_suites"))

    assert "LevelLoadingTest" in found
    assert "BrokenDoorTest" in found
    assert "PlayerMovementTest" in found


def test_substring_pattern(provider):
    suites = provider.get_test_suites_by_pattern(PLAYER_MODULE, "Player")

    assert names(suites) == ["PlayerMovementTest", "PlayerInventoryTest"]


def test_pattern_is_case_sensitive(provider):
    assert provider.get_test_suites_by_pattern(PLAYER_MODULE, "player") == []


def test_glob_pattern(provider):
    suites = provider.get_test_suites_by_pattern(PLAYER_MODULE, "Player*yTest")

    assert names(suites) == ["PlayerInventoryTest"]


def test_empty_pattern_selects_all(provider):
    assert len(provider.get_test_suites_by_pattern(PLAYER_MODULE, "")) == 3


def test_no_match_returns_empty_list(provider):
    assert provider.get_test_suites_by_pattern(PLAYER_MODULE, "ahem") == []


def test_suite_and_method_pattern_narrows_tests(provider):
    suites = provider.get_test_suites_by_pattern(PLAYER_MODULE, "PlayerMovementTest.jump")

    assert names(suites) == ["PlayerMovementTest"]
    assert [t.name for t in suites[0].tests] == ["jumps"]
    # Narrowing keeps hooks and leaves the registered suite untouched
    assert [h.name for h in suites[0].setups] == ["place_player"]
    full = provider.get_test_suites_by_pattern(PLAYER_MODULE, "PlayerMovementTest")[0]
    assert [t.name for t in full.tests] == ["walks", "jumps"]


def test_method_pattern_without_matching_tests_drops_suite(provider):
    assert provider.get_test_suites_by_pattern(PLAYER_MODULE, "Enemy.fly") == []


def test_missing_module_raises(provider):
    with pytest.raises(ModuleNotFoundError):
        provider.get_test_suites("sample_suites_that_do_not_exist")


def test_provider_uses_its_own_registry():
    local = SuiteRegistry()
    provider = TestProvider(registry=local)

    assert provider.get_test_suites(PLAYER_MODULE) == []


def test_build_suite_sorts_methods_by_kind():
    class Hooked(TestClass):
        abstract = True

        @setup_all
        def open_level(self):
            pass

        @setup
        def spawn(self):
            pass

        @test
        def second(self):
            pass

        @test
        def first(self):
            pass

        @cleanup
        def despawn(self):
            pass

        @failure
        def screenshot(self):
            pass

        @cleanup_all
        def close_level(self):
            pass

        def helper(self):
            pass

    suite = build_suite(Hooked)

    assert [t.name for t in suite.tests] == ["second", "first"]
    assert [t.kind for t in suite.tests] == [MethodKind.TEST, MethodKind.TEST]
    assert [h.name for h in suite.setup_alls] == ["open_level"]
    assert [h.name for h in suite.setups] == ["spawn"]
    assert [h.name for h in suite.cleanups] == ["despawn"]
    assert [h.name for h in suite.failures] == ["screenshot"]
    assert [h.name for h in suite.cleanup_alls] == ["close_level"]


def test_redefined_class_replaces_registration():
    local = SuiteRegistry()

    class Twice(TestClass):
        abstract = True

        @test
        def old(self):
            pass

    local.register(Twice)

    class Twice(TestClass):  # noqa: F811
        abstract = True

        @test
        def new(self):
            pass

    local.register(Twice)

    suites = local.suites_for(__name__)
    assert len(suites) == 1
    assert [t.name for t in suites[0].tests] == ["new"]


def test_subclasses_register_in_global_registry():
    class RegisteredHere(TestClass):
        @test
        def works(self):
            pass

    assert "RegisteredHere" in names(registry.suites_for(__name__))
    registry.clear(__name__)


@pytest.mark.parametrize("name, pattern, expected", [
    ("PlayerTest", "", True),
    ("PlayerTest", "Player", True),
    ("PlayerTest", "Test", True),
    ("PlayerTest", "P*Test", True),
    ("PlayerTest", "player", False),
    ("PlayerTest", "Enemy", False),
])
def test_matches(name, pattern, expected):
    assert matches(name, pattern) is expected


def test_inherited_tests_and_hooks_are_collected(provider):
    (suite,) = provider.get_test_suites("sample_suites.shared_suites")

    assert suite.name == "CastleLevelTest"
    assert [t.name for t in suite.tests] == ["shared_check", "replaced_check", "uses_setup"]
    assert [h.name for h in suite.setups] == ["prepare"]


def test_override_without_marker_removes_inherited_test():
    class Base(TestClass):
        abstract = True

        @test
        def kept(self):
            pass

        @test
        def dropped(self):
            pass

    class Child(Base):
        abstract = True

        def dropped(self):
            pass

    assert [t.name for t in build_suite(Child).tests] == ["kept"]
