"""
Platform detection for steptools.

Release artifacts are published as ``{tool}-{OS}-{ARCH}`` where the OS and
architecture follow ``uname`` conventions (``Darwin``/``Linux`` and
``x86_64``/``arm64``). This module maps what the running interpreter reports
onto that naming scheme.

Usage:
    from steptools.core.platform import identify_platform

    descriptor = identify_platform()
    print(descriptor.artifact_suffix())  # e.g. 'Linux-x86_64'
"""

import platform
from dataclasses import dataclass
from typing import List, Optional

from steptools.core.exceptions import (
    UnsupportedArchitectureError,
    UnsupportedPlatformError,
)

_OS_NAMES = {
    "darwin": "Darwin",
    "linux": "Linux",
}

_ARCH_NAMES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "arm64": "arm64",
    "aarch64": "arm64",
}


@dataclass(frozen=True)
class PlatformDescriptor:
    """
    Operating system and architecture in release-artifact naming.

    Attributes:
        os_name: Canonical OS name ('Darwin', 'Linux')
        arch_name: Canonical architecture name ('x86_64', 'arm64')
    """

    os_name: str
    arch_name: str

    def artifact_suffix(self) -> str:
        """
        Get the suffix used in release asset names.

        Example:
            >>> PlatformDescriptor("Linux", "x86_64").artifact_suffix()
            'Linux-x86_64'
        """
        return f"{self.os_name}-{self.arch_name}"

    def __str__(self) -> str:
        return self.artifact_suffix()


def identify_os(system: Optional[str] = None) -> str:
    """
    Map the reported operating system to its canonical name.

    Args:
        system: Raw OS name; defaults to ``platform.system()``

    Returns:
        'Darwin' or 'Linux'

    Raises:
        UnsupportedPlatformError: For any other operating system
    """
    raw = platform.system() if system is None else system
    try:
        return _OS_NAMES[raw.lower()]
    except KeyError:
        raise UnsupportedPlatformError(raw) from None


def identify_arch(machine: Optional[str] = None) -> str:
    """
    Map the reported CPU architecture to its canonical name.

    Args:
        machine: Raw machine name; defaults to ``platform.machine()``

    Returns:
        'x86_64' or 'arm64'

    Raises:
        UnsupportedArchitectureError: For any other architecture
    """
    raw = platform.machine() if machine is None else machine
    try:
        return _ARCH_NAMES[raw.lower()]
    except KeyError:
        raise UnsupportedArchitectureError(raw) from None


def identify_platform() -> PlatformDescriptor:
    """Detect the current platform. Not cached; each call re-reads the host."""
    return PlatformDescriptor(os_name=identify_os(), arch_name=identify_arch())


def get_supported_platforms() -> List[str]:
    """List every artifact suffix this module can produce."""
    return [
        f"{os_name}-{arch_name}"
        for os_name in sorted(set(_OS_NAMES.values()))
        for arch_name in sorted(set(_ARCH_NAMES.values()))
    ]


__all__ = [
    "PlatformDescriptor",
    "identify_os",
    "identify_arch",
    "identify_platform",
    "get_supported_platforms",
]
