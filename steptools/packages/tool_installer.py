"""
Tool installer.

Installs single-binary tools published as GitHub release assets named
``{tool}-{OS}-{ARCH}`` into a tools directory.
"""

import logging
import os
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Optional

import requests

from steptools.core.download import download_file
from steptools.core.exceptions import (
    ChmodError,
    EmptyNameError,
    FileCreateError,
    InvalidNameError,
)
from steptools.core.platform import PlatformDescriptor, identify_platform

logger = logging.getLogger(__name__)

GITHUB_RELEASE_URL = (
    "https://github.com/{publisher}/{tool}/releases/download/{version}/{tool}-{suffix}"
)

EXECUTABLE_MODE = 0o755


class ToolInstaller:
    """
    Download release binaries into a tools directory.

    Attributes:
        tools_dir: Directory binaries are installed into
        timeout: Optional download timeout in seconds
        session: Optional requests session used for downloads

    Example:
        installer = ToolInstaller(Path.home() / ".steptools" / "tools")
        installer.install_from_github("envman", "bitrise-io", "1.1.0")
    """

    def __init__(
        self,
        tools_dir: Path,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.tools_dir = Path(tools_dir)
        self.timeout = timeout
        self.session = session

    @classmethod
    def from_config(cls, config, session=None) -> "ToolInstaller":
        """Create from a StepToolsConfig."""
        return cls(config.tools_dir, timeout=config.download_timeout, session=session)

    def destination_for(self, bin_name: str) -> Path:
        return self.tools_dir / bin_name

    def release_url(
        self,
        tool_name: str,
        publisher: str,
        version: str,
        platform: Optional[PlatformDescriptor] = None,
    ) -> str:
        """
        Build the release asset URL for the current (or given) platform.

        Raises:
            UnsupportedPlatformError: If the OS has no release assets
            UnsupportedArchitectureError: If the CPU has no release assets

        Example:
            >>> installer.release_url("stepman", "bitrise-io", "0.9.18",
            ...                       PlatformDescriptor("Linux", "x86_64"))
            'https://github.com/bitrise-io/stepman/releases/download/0.9.18/stepman-Linux-x86_64'
        """
        platform = platform or identify_platform()
        return GITHUB_RELEASE_URL.format(
            publisher=publisher,
            tool=tool_name,
            version=version,
            suffix=platform.artifact_suffix(),
        )

    def install_from_github(self, tool_name: str, publisher: str, version: str) -> Path:
        """
        Install ``tool_name`` from ``publisher``'s GitHub releases.

        Args:
            tool_name: Repository and binary name
            publisher: GitHub user or organization
            version: Release tag

        Returns:
            Path to the installed binary

        Raises:
            UnsupportedPlatformError: If the OS is not supported
            UnsupportedArchitectureError: If the CPU is not supported
            DownloadError: If the download fails
            ChmodError: If the binary cannot be made executable
        """
        url = self.release_url(tool_name, publisher, version)
        logger.debug(f"{tool_name} release URL: {url}")
        return self.install_from_url(tool_name, url)

    def install_from_url(self, bin_name: str, url: str) -> Path:
        """
        Download ``url`` to ``tools_dir/bin_name`` and make it executable.

        Re-installing overwrites the previous binary.

        Returns:
            Path to the installed binary

        Raises:
            EmptyNameError: If bin_name is empty (nothing is touched)
            InvalidNameError: If bin_name is not a plain file name (nothing is
                touched)
            DownloadError: If the download fails
            ChmodError: If setting mode 0755 fails; the file stays in place
        """
        if not bin_name or not bin_name.strip():
            raise EmptyNameError(url)
        if not _is_plain_name(bin_name):
            raise InvalidNameError(bin_name, url)

        destination = self.destination_for(bin_name)
        logger.info(f"Installing {bin_name} to {destination}")

        try:
            self.tools_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileCreateError(destination, e) from e

        download_file(url, destination, timeout=self.timeout, session=self.session)

        try:
            os.chmod(destination, EXECUTABLE_MODE)
        except OSError as e:
            raise ChmodError(destination, e) from e

        logger.info(f"{bin_name} installed successfully")
        return destination


def _is_plain_name(bin_name: str) -> bool:
    """True if bin_name has no directory part on any platform."""
    if bin_name in (".", ".."):
        return False
    return (
        PurePosixPath(bin_name).name == bin_name
        and PureWindowsPath(bin_name).name == bin_name
    )
