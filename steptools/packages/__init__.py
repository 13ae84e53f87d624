"""
Tool integrations for steptools.

Available Components:
--------------------
- ToolInstaller: Install release binaries into a tools directory
- ExternalTool: Base class for command-line tool facades
- Stepman: Step manager facade
- Envman: Environment manager facade

Example Usage:
-------------
    from steptools.config import load_config
    from steptools.packages import Envman, Stepman, ToolInstaller

    config = load_config()
    ToolInstaller.from_config(config).install_from_github(
        "stepman", "bitrise-io", "0.9.18"
    )
    stepman = Stepman.from_config(config)
    print(stepman.json_step_list(collection))
"""

from steptools.packages.base import ExternalTool, log_level_for
from steptools.packages.envman import Envman
from steptools.packages.stepman import Stepman
from steptools.packages.tool_installer import ToolInstaller

__all__ = [
    "ExternalTool",
    "log_level_for",
    "Envman",
    "Stepman",
    "ToolInstaller",
]
