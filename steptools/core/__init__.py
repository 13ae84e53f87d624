"""
Core functionality for steptools.

This package contains the foundational modules that the installer and the
tool facades depend on.
"""

from .directory import (
    get_global_home_dir,
    get_global_tools_dir,
    DirectoryError,
)

from .platform import (
    PlatformDescriptor,
    identify_os,
    identify_arch,
    identify_platform,
    get_supported_platforms,
)

from .download import download_file

from .runner import (
    OutputMode,
    InvocationSpec,
    InvocationResult,
    ToolRunner,
    SubprocessRunner,
)

from .exceptions import (
    StepToolsError,
    ConfigError,
    PlatformError,
    UnsupportedPlatformError,
    UnsupportedArchitectureError,
    DownloadError,
    FileCreateError,
    NetworkError,
    CopyError,
    InstallError,
    EmptyNameError,
    InvalidNameError,
    ChmodError,
    InvocationError,
)

__all__ = [
    "get_global_home_dir",
    "get_global_tools_dir",
    "DirectoryError",
    "PlatformDescriptor",
    "identify_os",
    "identify_arch",
    "identify_platform",
    "get_supported_platforms",
    "download_file",
    "OutputMode",
    "InvocationSpec",
    "InvocationResult",
    "ToolRunner",
    "SubprocessRunner",
    "StepToolsError",
    "ConfigError",
    "PlatformError",
    "UnsupportedPlatformError",
    "UnsupportedArchitectureError",
    "DownloadError",
    "FileCreateError",
    "NetworkError",
    "CopyError",
    "InstallError",
    "EmptyNameError",
    "InvalidNameError",
    "ChmodError",
    "InvocationError",
]
