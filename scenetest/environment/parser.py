"""Command line argument parser for the test environment.

Turns the host's raw argument list into a TestEnvironment. Unknown
arguments belong to the host application and are ignored.
"""

from typing import Any, Sequence

from .schema import TestEnvironment

RUN_TESTS_FLAG = "--run-tests"
REPORT_FLAG = "--report"

# flag -> TestEnvironment field
BOOLEAN_FLAGS = {
    "--quit-on-finish": "should_quit_on_finish",
    "--listen-trace": "should_listen_trace",
    "--coverage": "should_run_coverage",
    "--stop-on-error": "stop_on_error",
    "--sequential": "sequential",
}


def parse_args(args: Sequence[str]) -> TestEnvironment:
    """Parse raw arguments into a TestEnvironment.

    Recognized:
        --run-tests[=<pattern>]  Run suites matching pattern (all if bare).
        --quit-on-finish         Exit the host when the run completes.
        --listen-trace           Forward log records to the test log.
        --coverage               Use the force-exit path.
        --stop-on-error          Skip remaining tests after a failure.
        --sequential             Run suites one at a time.
        --report=<path>          Write a JSON report.

    Never raises; malformed values fall back to defaults.
    """
    values: dict[str, Any] = {}

    for arg in args or ():
        if not isinstance(arg, str):
            continue

        flag, has_value, value = arg.partition("=")

        if flag == RUN_TESTS_FLAG:
            values["run_pattern"] = value if has_value else ""
        elif flag == REPORT_FLAG:
            if value:
                values["report_path"] = value
        elif flag in BOOLEAN_FLAGS and not has_value:
            values[BOOLEAN_FLAGS[flag]] = True

    return TestEnvironment(**values)
