"""
External tool runner.

Every call into ``stepman``/``envman`` goes through a ToolRunner. The runner
launches a process described by an InvocationSpec and reports what happened
in an InvocationResult; it never interprets exit codes. How a non-zero exit
is turned into an error is up to the caller (see
``steptools.packages.base.ExternalTool``).

The output mode decides where the child's standard streams go:

    INHERITED  stdout/stderr go to this process's streams
    COMBINED   stdout and stderr are captured into one interleaved text
    SPLIT      stdout and stderr are captured into separate texts
    EXIT_CODE  streams are inherited; only the exit code matters

Commands are always passed as argument lists, never through a shell.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

from steptools.core.exceptions import InvocationError

logger = logging.getLogger(__name__)


class OutputMode(Enum):
    """How the standard streams of an invoked tool are handled."""

    INHERITED = "inherited"
    COMBINED = "combined"
    SPLIT = "split"
    EXIT_CODE = "exit_code"


@dataclass(frozen=True)
class InvocationSpec:
    """
    Description of a single tool invocation.

    Attributes:
        executable: Executable name (resolved on PATH) or path
        args: Arguments passed after the executable
        mode: Output handling policy
        cwd: Optional working directory for the child process
        input: Optional text written verbatim to the child's stdin
    """

    executable: str
    args: Tuple[str, ...] = ()
    mode: OutputMode = OutputMode.INHERITED
    cwd: Optional[Path] = None
    input: Optional[str] = None

    def __post_init__(self):
        if not self.executable:
            raise ValueError("Executable cannot be empty")
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, "args", tuple(str(arg) for arg in self.args))

    @property
    def command(self) -> List[str]:
        """Full command line as an argument list."""
        return [self.executable, *self.args]


@dataclass
class InvocationResult:
    """
    Outcome of a finished invocation.

    ``output`` is only filled for COMBINED, ``stdout``/``stderr`` only for SPLIT.
    A child killed by signal N reports ``exit_code`` 128 + N.
    """

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    output: str = ""
    command: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class ToolRunner(ABC):
    """Abstract interface for launching external tools."""

    @abstractmethod
    def run(self, spec: InvocationSpec) -> InvocationResult:
        """
        Run the invocation and wait for it to finish.

        Args:
            spec: What to run and how to treat its streams

        Returns:
            InvocationResult with the exit code and any captured text

        Raises:
            InvocationError: If the process could not be started
        """
        pass


class SubprocessRunner(ToolRunner):
    """ToolRunner backed by ``subprocess.run``."""

    def run(self, spec: InvocationSpec) -> InvocationResult:
        command = spec.command
        logger.debug(f"Running: {' '.join(command)}")

        kwargs = {}
        if spec.cwd is not None:
            kwargs["cwd"] = str(spec.cwd)
        if spec.input is not None:
            # Bytes, so no newline translation happens on the way in
            kwargs["input"] = spec.input.encode("utf-8")

        if spec.mode is OutputMode.COMBINED:
            kwargs["stdout"] = subprocess.PIPE
            kwargs["stderr"] = subprocess.STDOUT
        elif spec.mode is OutputMode.SPLIT:
            kwargs["stdout"] = subprocess.PIPE
            kwargs["stderr"] = subprocess.PIPE

        try:
            completed = subprocess.run(command, **kwargs)
        except OSError as e:
            raise InvocationError(
                f"Failed to execute {spec.executable}: {e}", command=command
            ) from e

        result = InvocationResult(
            exit_code=_shell_exit_code(completed.returncode), command=command
        )
        if spec.mode is OutputMode.COMBINED:
            result.output = _decode(completed.stdout)
        elif spec.mode is OutputMode.SPLIT:
            result.stdout = _decode(completed.stdout)
            result.stderr = _decode(completed.stderr)

        logger.debug(f"{spec.executable} exited with code {result.exit_code}")
        return result


def _shell_exit_code(returncode: int) -> int:
    """Report death by signal N as 128 + N, like a POSIX shell."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def _decode(data: Optional[bytes]) -> str:
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


__all__ = [
    "OutputMode",
    "InvocationSpec",
    "InvocationResult",
    "ToolRunner",
    "SubprocessRunner",
]
