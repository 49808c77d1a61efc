"""Test reporter - aggregates outcomes and formats progress output.

One reporter is created per run. The executor writes into it, possibly
from several suites at once; the orchestrator reads `had_error` once the
executor has finished.
"""

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from ..discovery.registry import TestMethod, TestSuite
from ..log import TestLog
from .json_reporter import JsonReporter


@dataclass(frozen=True)
class Outcome:
    """Result of a single executed test."""
    suite: str
    name: str
    passed: bool
    diagnostic: Optional[str] = None
    duration_ms: int = 0
    timed_out: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.suite}.{self.name}"

    @classmethod
    def success(cls, suite: str, name: str, duration_ms: int = 0) -> "Outcome":
        return cls(suite=suite, name=name, passed=True, duration_ms=duration_ms)

    @classmethod
    def failed(
        cls,
        suite: str,
        name: str,
        diagnostic: str,
        duration_ms: int = 0,
        timed_out: bool = False,
    ) -> "Outcome":
        return cls(
            suite=suite,
            name=name,
            passed=False,
            diagnostic=diagnostic,
            duration_ms=duration_ms,
            timed_out=timed_out,
        )


class TestReporter:
    """Collects outcomes and writes human-readable progress to a TestLog."""

    __test__ = False

    def __init__(self, log: TestLog):
        self.log = log
        self._lock = threading.Lock()
        self._outcomes: list[Outcome] = []
        self._skipped: list[str] = []
        self._had_error = False

    @property
    def had_error(self) -> bool:
        """True once any recorded outcome has failed."""
        return self._had_error

    @property
    def outcomes(self) -> list[Outcome]:
        with self._lock:
            return list(self._outcomes)

    @property
    def passed_count(self) -> int:
        return sum(1 for o in self.outcomes if o.passed)

    @property
    def failed_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.passed)

    @property
    def skipped_count(self) -> int:
        return len(self._skipped)

    @property
    def total_count(self) -> int:
        return len(self.outcomes)

    def suite_started(self, suite: TestSuite) -> None:
        self.log.print(f"> {suite.name} ({suite.total_tests} tests)")

    def suite_finished(self, suite: TestSuite) -> None:
        self.log.print(f"< {suite.name}")

    def record_outcome(self, outcome: Outcome) -> None:
        """Record one test's result. Each test is recorded once."""
        with self._lock:
            self._outcomes.append(outcome)
            if not outcome.passed:
                self._had_error = True

        if outcome.passed:
            self.log.print(f"  [PASS] {outcome.full_name} ({outcome.duration_ms}ms)")
        else:
            self.log.err(f"  [FAIL] {outcome.full_name}: {outcome.diagnostic}")

    def test_skipped(self, suite: TestSuite, method: TestMethod) -> None:
        """Note a test that was not started because the run stopped early."""
        name = f"{suite.name}.{method.name}"
        with self._lock:
            self._skipped.append(name)
        self.log.warn(f"  [SKIP] {name}")

    def finish(self) -> None:
        """Write the run summary."""
        outcomes = self.outcomes
        passed = sum(1 for o in outcomes if o.passed)
        summary = f"Results: {passed}/{len(outcomes)} passed, {self.skipped_count} skipped"

        if self.had_error:
            self.log.err(summary)
            for outcome in outcomes:
                if not outcome.passed:
                    self.log.err(f"  [FAIL] {outcome.full_name}: {outcome.diagnostic}")
        else:
            self.log.print(summary)

    def to_report(self, run_pattern: str = "", duration_ms: int = 0) -> dict[str, Any]:
        """Build the JSON report for this run."""
        return JsonReporter().generate(
            run_pattern=run_pattern,
            outcomes=self.outcomes,
            skipped=list(self._skipped),
            duration_ms=duration_ms,
        )

    def save_report(self, path: Union[str, Path], run_pattern: str = "", duration_ms: int = 0) -> Path:
        """Write the JSON report for this run to `path`."""
        return JsonReporter().save(self.to_report(run_pattern, duration_ms), path)
