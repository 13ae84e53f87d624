"""Configuration loading for steptools."""

from steptools.config.parser import (
    LOG_LEVELS,
    StepToolsConfig,
    load_config,
    parse_config,
)
from steptools.core.exceptions import ConfigError

__all__ = [
    "LOG_LEVELS",
    "StepToolsConfig",
    "ConfigError",
    "load_config",
    "parse_config",
]
