"""YAML configuration for the scenetest command line.

Example scenetest.yaml:

    timeout_ms: 5000
    log_level: debug
    args:
      - --stop-on-error
      - --sequential
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

import yaml

DEFAULT_CONFIG_FILE = "scenetest.yaml"


@dataclass
class RunnerConfig:
    """Settings loaded from a config file."""
    timeout_ms: Optional[int] = None
    log_level: str = "INFO"
    args: list[str] = field(default_factory=list)


def load_config(file_path: Union[str, Path, None] = None) -> RunnerConfig:
    """Load a RunnerConfig from YAML.

    Args:
        file_path: Config file. None = scenetest.yaml in the current
            directory if present, defaults otherwise.

    Returns:
        Parsed RunnerConfig.

    Raises:
        FileNotFoundError: If an explicit file_path doesn't exist.
        ValueError: If the YAML is malformed or a field has the wrong type.
    """
    if file_path is None:
        file_path = Path.cwd() / DEFAULT_CONFIG_FILE
        if not file_path.exists():
            return RunnerConfig()

    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed config file {file_path}: {e}") from e

    if data is None:
        return RunnerConfig()

    return parse_config_data(data, source=str(file_path))


def parse_config_data(data: dict, source: str = "<inline>") -> RunnerConfig:
    """Build a RunnerConfig from already loaded YAML data."""
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a YAML mapping, got {type(data).__name__} in {source}")

    config = RunnerConfig()

    if "timeout_ms" in data:
        timeout = data["timeout_ms"]
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
            raise ValueError(f"'timeout_ms' must be a positive integer in {source}, got {timeout!r}")
        config.timeout_ms = timeout

    if "log_level" in data:
        level = str(data["log_level"]).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown 'log_level' {data['log_level']!r} in {source}")
        config.log_level = level

    if "args" in data:
        args = data["args"]
        if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
            raise ValueError(f"'args' must be a list of strings in {source}")
        config.args = list(args)

    return config
