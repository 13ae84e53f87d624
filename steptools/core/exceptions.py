"""
Centralized exception hierarchy for steptools.

Every error raised by the installer and the tool facades derives from
StepToolsError, so callers can catch one type and still inspect the
attached context (raw platform value, path, URL or captured output).
"""

from typing import List, Optional, Sequence


# ============================================================================
# Base Exceptions
# ============================================================================


class StepToolsError(Exception):
    """Base exception for all steptools errors."""

    pass


class ConfigError(StepToolsError):
    """Configuration parsing or validation error."""

    pass


# ============================================================================
# Platform Exceptions
# ============================================================================


class PlatformError(StepToolsError):
    """Base exception for platform detection errors."""

    def __init__(self, message: str, value: str):
        self.value = value
        super().__init__(message)


class UnsupportedPlatformError(PlatformError):
    """Raised when the running operating system has no release artifacts."""

    def __init__(self, value: str):
        super().__init__(f"Unsupported platform ({value})", value)


class UnsupportedArchitectureError(PlatformError):
    """Raised when the CPU architecture has no release artifacts."""

    def __init__(self, value: str):
        super().__init__(f"Unsupported architecture ({value})", value)


# ============================================================================
# Download Exceptions
# ============================================================================


class DownloadError(StepToolsError):
    """Base exception for download failures."""

    pass


class FileCreateError(DownloadError):
    """The destination file could not be created before downloading."""

    def __init__(self, path, reason):
        self.path = path
        super().__init__(f"Failed to create ({path}), error: {reason}")


class NetworkError(DownloadError):
    """The download source could not be reached or refused the request."""

    def __init__(self, url: str, reason):
        self.url = url
        super().__init__(f"Failed to download from ({url}), error: {reason}")


class CopyError(DownloadError):
    """Streaming the response body to disk failed part way."""

    def __init__(self, url: str, path, reason):
        self.url = url
        self.path = path
        super().__init__(
            f"Failed to write download from ({url}) to ({path}), error: {reason}"
        )


# ============================================================================
# Installation Exceptions
# ============================================================================


class InstallError(StepToolsError):
    """Base exception for tool installation errors."""

    pass


class EmptyNameError(InstallError):
    """No binary name was given for an installation."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"No tool (bin) name provided! URL was: {url}")


class InvalidNameError(InstallError):
    """The binary name would place the binary outside the tools directory."""

    def __init__(self, name: str, url: str):
        self.name = name
        self.url = url
        super().__init__(
            f"Invalid tool (bin) name ({name}): must be a plain file name. URL was: {url}"
        )


class ChmodError(InstallError):
    """The installed binary could not be made executable."""

    def __init__(self, path, reason):
        self.path = path
        super().__init__(f"Failed to make file ({path}) executable, error: {reason}")


# ============================================================================
# Invocation Exceptions
# ============================================================================


class InvocationError(StepToolsError):
    """
    An external tool could not be run or exited unsuccessfully.

    Attributes:
        command: Full command line that was executed
        exit_code: Exit code of the process, or None if it never started
        output: Captured diagnostic text (combined output or stderr), if any
        stdout: Captured standard output for split-capture invocations
    """

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        exit_code: Optional[int] = None,
        output: str = "",
        stdout: str = "",
    ):
        self.command: List[str] = list(command)
        self.exit_code = exit_code
        self.output = output
        self.stdout = stdout
        if output:
            message = f"{message}, details: {output}"
        super().__init__(message)


__all__ = [
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
