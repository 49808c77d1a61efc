"""
Pytest configuration and shared fakes for scenetest tests.

The orchestrator is verified by substituting narrow fakes for each
collaborator through a TestAdapter subclass.
"""

import sys
from pathlib import Path

# Project root for the scenetest package, tests dir for the sample_suites package
PROJECT_ROOT = Path(__file__).parent.parent
for path in (PROJECT_ROOT, Path(__file__).parent):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

import pytest

from scenetest.adapter import TestAdapter
from scenetest.log import get_logger
from scenetest.orchestrator import TestRuntime, runtime

# The runner console handler keeps the stdout it was created with; bind it to
# the session stream, not to one a CliRunner closes after its invocation
get_logger("runner")


class FakeLog:
    """Collects every line written through the TestLog interface."""

    def __init__(self):
        self.lines = []

    def print(self, message):
        self.lines.append(("print", message))

    def warn(self, message):
        self.lines.append(("warn", message))

    def err(self, message):
        self.lines.append(("err", message))

    @property
    def text(self):
        return "\n".join(message for _, message in self.lines)


class FakeProvider:
    def __init__(self, suites=None, error=None):
        self.suites = list(suites or [])
        self.error = error
        self.calls = []

    def get_test_suites_by_pattern(self, module, pattern):
        self.calls.append((module, pattern))
        if self.error:
            raise self.error
        return self.suites


class FakeReporter:
    def __init__(self, had_error=False):
        self.had_error = had_error
        self.saved = []

    def save_report(self, path, run_pattern="", duration_ms=0):
        self.saved.append(path)
        return path


class FakeExecutor:
    def __init__(self, on_run=None):
        self.on_run = on_run
        self.runs = []

    async def run(self, scene, suites, reporter):
        self.runs.append((scene, list(suites), reporter))
        if self.on_run:
            self.on_run(scene, suites, reporter)


class RecordingAdapter(TestAdapter):
    """Hands out fakes and records every factory call."""

    def __init__(self, provider=None, reporter=None, executor=None, log=None):
        self.provider = provider or FakeProvider()
        self.reporter = reporter or FakeReporter()
        self.executor = executor or FakeExecutor()
        self.log = log or FakeLog()
        self.calls = []
        self.executor_args = None

    def create_test_environment(self, env):
        self.calls.append("create_test_environment")
        return super().create_test_environment(env)

    def create_log(self, log):
        self.calls.append("create_log")
        return self.log

    def create_provider(self):
        self.calls.append("create_provider")
        return self.provider

    def create_reporter(self, log):
        self.calls.append("create_reporter")
        assert log is self.log
        return self.reporter

    def create_executor(self, method_executor, stop_on_error, sequential, timeout_milliseconds):
        self.calls.append("create_executor")
        self.executor_args = (method_executor, stop_on_error, sequential, timeout_milliseconds)
        return self.executor


class ExitRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, scene, exit_code):
        self.calls.append((scene, exit_code))


@pytest.fixture
def fake_log():
    return FakeLog()


@pytest.fixture
def adapter():
    return RecordingAdapter()


@pytest.fixture
def exits():
    """Normal and forced exit recorders."""
    return ExitRecorder(), ExitRecorder()


@pytest.fixture
def runner_runtime(adapter, exits):
    on_exit, on_force_exit = exits
    return TestRuntime(adapter=adapter, on_exit=on_exit, on_force_exit=on_force_exit)


@pytest.fixture(autouse=True)
def restore_global_runtime():
    """Put the process-wide runtime back once a test is done with it."""
    yield
    runtime.reset()


@pytest.fixture
def scene():
    return {"name": "main", "speed": 5}
