"""
Base class for external tool facades.

Classes:
    ExternalTool: Shared invocation logic for command-line tools such as
        stepman and envman

Every invocation built here starts with the ``--loglevel <level>`` pair so
the invoked tool logs at the same verbosity as its caller. The level is an
explicit constructor argument; use ``log_level_for`` to derive it from a
Python logger.
"""

import logging
import shutil
from pathlib import Path
from typing import List, Optional, Sequence

from steptools.config.parser import LOG_LEVELS
from steptools.core.exceptions import InvocationError
from steptools.core.runner import (
    InvocationResult,
    InvocationSpec,
    OutputMode,
    SubprocessRunner,
    ToolRunner,
)

logger = logging.getLogger(__name__)


def log_level_for(py_logger: Optional[logging.Logger] = None) -> str:
    """
    Translate a Python logger's effective level into a tool log level.

    Args:
        py_logger: Logger to inspect (root logger if None)

    Returns:
        One of 'debug', 'info', 'warning', 'error', 'fatal'

    Example:
        >>> logging.getLogger().setLevel(logging.DEBUG)
        >>> log_level_for()
        'debug'
    """
    level = (py_logger or logging.getLogger()).getEffectiveLevel()
    if level <= logging.DEBUG:
        return "debug"
    if level <= logging.INFO:
        return "info"
    if level <= logging.WARNING:
        return "warning"
    if level <= logging.ERROR:
        return "error"
    return "fatal"


class ExternalTool:
    """
    Typed call surface over one external executable.

    Subclasses set ``default_executable`` and add one method per
    sub-command, each delegating to one of the ``run_*`` helpers.

    Attributes:
        executable: Executable name or path
        log_level: Verbosity passed to the tool
        runner: ToolRunner used to launch processes
    """

    default_executable: str = ""

    def __init__(
        self,
        executable: Optional[str] = None,
        log_level: str = "info",
        runner: Optional[ToolRunner] = None,
    ):
        """
        Initialize the tool facade.

        Args:
            executable: Executable to run (defaults to ``default_executable``)
            log_level: Tool log level ('debug', 'info', ...)
            runner: Process runner (defaults to SubprocessRunner)

        Raises:
            ValueError: If no executable is known or log_level is invalid
        """
        executable = executable or self.default_executable
        if not executable:
            raise ValueError("Executable cannot be empty")
        if log_level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {log_level!r} "
                f"(expected one of {', '.join(LOG_LEVELS)})"
            )

        self.executable = executable
        self.log_level = log_level
        self.runner = runner or SubprocessRunner()

    def verbosity_args(self) -> List[str]:
        return ["--loglevel", self.log_level]

    def build_args(self, *args: str) -> List[str]:
        """Prefix sub-command arguments with the verbosity flags."""
        return self.verbosity_args() + list(args)

    def find_executable(self) -> Optional[Path]:
        """Resolve the executable on PATH, or None if it is not there."""
        found = shutil.which(self.executable)
        return Path(found) if found else None

    def is_available(self) -> bool:
        return self.find_executable() is not None

    # ------------------------------------------------------------------
    # Invocation helpers, one per output mode
    # ------------------------------------------------------------------

    def run_inherited(self, args: Sequence[str], input: Optional[str] = None) -> None:
        """
        Run with inherited stdout/stderr.

        Args:
            args: Full argument list (already prefixed)
            input: Optional text fed to the tool's stdin

        Raises:
            InvocationError: If the tool cannot be started or exits non-zero
        """
        result = self._invoke(args, OutputMode.INHERITED, input=input)
        if not result.succeeded:
            raise InvocationError(
                f"{self.executable} failed with exit status {result.exit_code}",
                command=result.command,
                exit_code=result.exit_code,
            )

    def run_combined(self, args: Sequence[str]) -> str:
        """
        Run capturing stdout and stderr into one text.

        Returns:
            The combined output

        Raises:
            InvocationError: On failure, with ``output`` set to the combined text
        """
        result = self._invoke(args, OutputMode.COMBINED)
        if not result.succeeded:
            raise InvocationError(
                f"{self.executable} failed with exit status {result.exit_code}",
                command=result.command,
                exit_code=result.exit_code,
                output=result.output,
            )
        return result.output

    def run_split(self, args: Sequence[str]) -> str:
        """
        Run capturing stdout and stderr separately.

        Returns:
            The stdout text only

        Raises:
            InvocationError: On failure, with ``output`` set to the stderr text
                and ``stdout`` to whatever was printed before failing
        """
        result = self._invoke(args, OutputMode.SPLIT)
        if not result.succeeded:
            raise InvocationError(
                f"{self.executable} failed with exit status {result.exit_code}",
                command=result.command,
                exit_code=result.exit_code,
                output=result.stderr,
                stdout=result.stdout,
            )
        return result.stdout

    def run_exit_code(self, args: Sequence[str], cwd: Optional[Path] = None) -> int:
        """
        Run with inherited streams and return the exit code.

        A non-zero exit code is a result, not an error. A tool killed by
        signal N reports 128 + N.

        Raises:
            InvocationError: Only if the tool cannot be started
        """
        return self._invoke(args, OutputMode.EXIT_CODE, cwd=cwd).exit_code

    def _invoke(
        self,
        args: Sequence[str],
        mode: OutputMode,
        cwd: Optional[Path] = None,
        input: Optional[str] = None,
    ) -> InvocationResult:
        spec = InvocationSpec(
            executable=self.executable,
            args=tuple(args),
            mode=mode,
            cwd=cwd,
            input=input,
        )
        return self.runner.run(spec)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(executable={self.executable!r}, "
            f"log_level={self.log_level!r})"
        )
