"""
Directory locations used by steptools.

Layout:
    Global home (~/.steptools/ or %USERPROFILE%\\.steptools\\):
        - tools/ : Installed tool binaries (one executable per tool)
"""

import os
from pathlib import Path

from steptools.core.exceptions import StepToolsError


class DirectoryError(StepToolsError):
    """Base exception for directory-related errors."""

    pass


def get_global_home_dir() -> Path:
    """
    Get the platform-specific steptools home directory.

    Returns:
        Path: %USERPROFILE%\\.steptools on Windows, ~/.steptools elsewhere

    Raises:
        DirectoryError: If USERPROFILE is unset on Windows
    """
    if os.name == "nt":
        user_profile = os.environ.get("USERPROFILE")
        if not user_profile:
            raise DirectoryError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine steptools home directory."
            )
        return Path(user_profile) / ".steptools"
    return Path.home() / ".steptools"


def get_global_tools_dir() -> Path:
    """Get the default directory tool binaries are installed into."""
    return get_global_home_dir() / "tools"


__all__ = [
    "DirectoryError",
    "get_global_home_dir",
    "get_global_tools_dir",
]
