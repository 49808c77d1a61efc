"""Test environment data model.

Describes what a single run should do, as requested on the command line.
"""

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class TestEnvironment:
    """Immutable run settings parsed from command line arguments."""

    __test__ = False

    run_pattern: Optional[str] = None
    should_quit_on_finish: bool = False
    should_listen_trace: bool = False
    should_run_coverage: bool = False
    stop_on_error: bool = False
    sequential: bool = False
    report_path: Optional[str] = None

    @property
    def should_run_tests(self) -> bool:
        """Whether `--run-tests` was given at all."""
        return self.run_pattern is not None

    @classmethod
    def from_args(cls, args: Sequence[str]) -> "TestEnvironment":
        from .parser import parse_args

        return parse_args(args)
