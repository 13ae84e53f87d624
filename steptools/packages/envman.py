"""
Environment manager (envman) integration.

envman keeps key/value environment variables in an on-disk envstore and can
run commands with those variables applied. The envstore format belongs to
envman; this module only passes its path along.

Example:
    from steptools.packages.envman import Envman

    envman = Envman()
    envman.init_at_path(envstore)
    envman.add(envstore, "GREETING", "hello\\nworld")
    exit_code = envman.run(envstore, Path("."), ["bash", "step.sh"])
"""

import logging
from pathlib import Path
from typing import Sequence, Union

from steptools.core.exceptions import InvocationError
from steptools.packages.base import ExternalTool

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class Envman(ExternalTool):
    """Typed facade over the ``envman`` executable."""

    default_executable = "envman"

    @classmethod
    def from_config(cls, config, runner=None) -> "Envman":
        """Create from a StepToolsConfig."""
        return cls(executable=config.envman, log_level=config.log_level, runner=runner)

    def init(self) -> None:
        """Initialize envman's default envstore."""
        self.run_inherited(self.build_args("init"))

    def init_at_path(self, envstore: PathLike) -> None:
        """Initialize (and clear) the envstore at ``envstore``."""
        self.run_inherited(self.build_args("--path", str(envstore), "init", "--clear"))

    def add(
        self,
        envstore: PathLike,
        key: str,
        value: str,
        expand: bool = True,
        skip_if_empty: bool = False,
    ) -> None:
        """
        Append a variable to the envstore.

        The value is written to envman's stdin rather than passed as an
        argument, so it can be arbitrarily long and contain any characters.

        Args:
            envstore: Envstore path
            key: Variable name
            value: Variable value, passed byte-for-byte
            expand: If False, envman stores the value without expanding it
            skip_if_empty: If True, envman ignores an empty value

        Raises:
            InvocationError: If envman fails
        """
        args = self.build_args("--path", str(envstore), "add", "--key", key, "--append")
        if not expand:
            args.append("--no-expand")
        if skip_if_empty:
            args.append("--skip-if-empty")

        self.run_inherited(args, input=value)

    def clear(self, envstore: PathLike) -> None:
        """
        Remove every variable from the envstore.

        Raises:
            InvocationError: With envman's trimmed output as the detail when
                it printed anything
        """
        args = self.build_args("--path", str(envstore), "clear")
        try:
            self.run_combined(args)
        except InvocationError as e:
            output = e.output.strip()
            if e.exit_code is not None and output:
                raise InvocationError(
                    f"Failed to clear envstore ({envstore})",
                    command=e.command,
                    exit_code=e.exit_code,
                    output=output,
                ) from e
            raise InvocationError(
                f"Failed to clear envstore ({envstore}), error: {e}",
                command=e.command,
                exit_code=e.exit_code,
            ) from e

    def run(self, envstore: PathLike, work_dir: PathLike, cmd: Sequence[str]) -> int:
        """
        Run ``cmd`` through envman with the envstore applied.

        Args:
            envstore: Envstore path
            work_dir: Working directory for the command
            cmd: Command and its arguments

        Returns:
            Exit code of ``cmd``; non-zero codes are returned, not raised

        Raises:
            InvocationError: If envman itself cannot be started
        """
        if not cmd:
            raise ValueError("Command cannot be empty")

        args = self.build_args("--path", str(envstore), "run", *cmd)
        exit_code = self.run_exit_code(args, cwd=Path(work_dir))
        if exit_code != 0:
            logger.debug(f"Command {cmd[0]} exited with code {exit_code}")
        return exit_code

    def json_print(self, envstore: PathLike) -> str:
        """
        Print the envstore as expanded JSON.

        Returns:
            envman's stdout (a JSON document)
        """
        return self.run_split(
            self.build_args(
                "--path", str(envstore), "print", "--format", "json", "--expand"
            )
        )
