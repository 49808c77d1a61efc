"""Environment module - run settings from arguments and config files."""

from .schema import TestEnvironment
from .parser import parse_args
from .config import RunnerConfig, load_config, parse_config_data

__all__ = [
    "TestEnvironment",
    "parse_args",
    "RunnerConfig",
    "load_config",
    "parse_config_data",
]
