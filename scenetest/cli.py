"""CLI entry point for running scenetest suites without a host scene.

    scenetest <module> [--config scenetest.yaml] [--log-level debug] --run-tests=Player
"""

import asyncio
import logging
import sys

import click

from .environment.config import load_config
from .environment.parser import parse_args
from .log import get_logger, set_level
from .orchestrator import run_tests, runtime


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("module")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML config file (default: ./scenetest.yaml if present).",
)
@click.option("--log-level", default=None, help="Log level for runner output.")
@click.argument("test_args", nargs=-1, type=click.UNPROCESSED)
def main(module, config_path, log_level, test_args):
    """Run the test suites registered by MODULE.

    TEST_ARGS are the runner flags: --run-tests[=<pattern>], --stop-on-error,
    --sequential, --listen-trace, --coverage, --quit-on-finish, --report=<path>.
    """
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))

    level = (log_level or config.log_level).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise click.BadParameter(f"Unknown log level {log_level!r}", param_hint="'--log-level'")

    # Runner loggers must exist before their level can be changed
    get_logger("runner")
    set_level(level)

    args = [*config.args, *test_args]
    env = parse_args(args)
    if not env.should_run_tests:
        click.echo("Nothing to run. Pass --run-tests or --run-tests=<pattern>.")
        return

    if "" not in sys.path and "." not in sys.path:
        sys.path.insert(0, ".")

    overrides = {}
    if config.timeout_ms is not None:
        overrides["timeout_milliseconds"] = config.timeout_ms

    with runtime.override(**overrides):
        exit_code = asyncio.run(run_tests(module, None, env))

    sys.exit(exit_code or 0)


if __name__ == "__main__":
    main()
