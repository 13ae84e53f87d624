"""YAML configuration parser for steptools.

This module parses steptools.yaml files and environment overrides into a
StepToolsConfig. Example file::

    tools_dir: ~/.steptools/tools
    log_level: debug
    stepman: /usr/local/bin/stepman
    envman: envman
    download_timeout: 120
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional

import yaml

from steptools.core.directory import get_global_tools_dir
from steptools.core.exceptions import ConfigError

LOG_LEVELS = ("debug", "info", "warning", "error", "fatal", "panic")

ENV_TOOLS_DIR = "STEPTOOLS_TOOLS_DIR"
ENV_LOG_LEVEL = "STEPTOOLS_LOG_LEVEL"
ENV_STEPMAN = "STEPTOOLS_STEPMAN"
ENV_ENVMAN = "STEPTOOLS_ENVMAN"

_KNOWN_KEYS = {"tools_dir", "log_level", "stepman", "envman", "download_timeout"}


@dataclass(frozen=True)
class StepToolsConfig:
    """Complete steptools configuration."""

    tools_dir: Path = field(default_factory=get_global_tools_dir)
    log_level: str = "info"  # passed to invoked tools as --loglevel
    stepman: str = "stepman"
    envman: str = "envman"
    download_timeout: Optional[float] = None  # None: no timeout


def parse_config(config_path: Path) -> StepToolsConfig:
    """
    Parse a steptools.yaml configuration file.

    Args:
        config_path: Path to the YAML file

    Returns:
        Parsed and validated configuration

    Raises:
        ConfigError: If the file is missing or invalid
    """
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML syntax: {e}") from e

    if data is None:
        raise ConfigError("Configuration file is empty")

    return _parse_and_validate(data)


def load_config(
    config_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> StepToolsConfig:
    """
    Build the effective configuration.

    Starts from defaults (or ``config_path`` when given) and applies
    STEPTOOLS_* environment variables on top.

    Args:
        config_path: Optional YAML file to read
        environ: Environment mapping (defaults to os.environ)

    Raises:
        ConfigError: If the file or an override is invalid
    """
    config = parse_config(config_path) if config_path else StepToolsConfig()
    env = os.environ if environ is None else environ

    overrides = {}
    if env.get(ENV_TOOLS_DIR):
        overrides["tools_dir"] = _expand_path(env[ENV_TOOLS_DIR])
    if env.get(ENV_LOG_LEVEL):
        overrides["log_level"] = _validate_log_level(env[ENV_LOG_LEVEL])
    if env.get(ENV_STEPMAN):
        overrides["stepman"] = env[ENV_STEPMAN]
    if env.get(ENV_ENVMAN):
        overrides["envman"] = env[ENV_ENVMAN]

    return replace(config, **overrides) if overrides else config


def _parse_and_validate(data) -> StepToolsConfig:
    """Parse and validate configuration data."""
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

    values = {}

    if "tools_dir" in data:
        if not isinstance(data["tools_dir"], str) or not data["tools_dir"]:
            raise ConfigError("tools_dir must be a non-empty string")
        values["tools_dir"] = _expand_path(data["tools_dir"])

    if "log_level" in data:
        values["log_level"] = _validate_log_level(data["log_level"])

    for key in ("stepman", "envman"):
        if key in data:
            if not isinstance(data[key], str) or not data[key]:
                raise ConfigError(f"{key} must be a non-empty string")
            values[key] = data[key]

    if data.get("download_timeout") is not None:
        timeout = data["download_timeout"]
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
            raise ConfigError("download_timeout must be a number")
        if timeout <= 0:
            raise ConfigError("download_timeout must be positive")
        values["download_timeout"] = float(timeout)

    return StepToolsConfig(**values)


def _validate_log_level(value) -> str:
    if not isinstance(value, str) or value.lower() not in LOG_LEVELS:
        raise ConfigError(
            f"Invalid log_level: {value!r} (expected one of {', '.join(LOG_LEVELS)})"
        )
    return value.lower()


def _expand_path(value: str) -> Path:
    return Path(os.path.expanduser(value))
