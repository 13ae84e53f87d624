"""
Fake ToolRunner for testing tool facades without spawning processes.
"""

from typing import List, Optional

from steptools.core.exceptions import InvocationError
from steptools.core.runner import InvocationResult, InvocationSpec, ToolRunner


class RecordingRunner(ToolRunner):
    """
    ToolRunner that records every spec and replays canned results.

    Args:
        exit_code: Exit code reported for every run
        stdout: Text reported as stdout (SPLIT mode)
        stderr: Text reported as stderr (SPLIT mode)
        output: Text reported as combined output (COMBINED mode)
        launch_error: If set, run() raises InvocationError with this message
    """

    def __init__(
        self,
        exit_code: int = 0,
        stdout: str = "",
        stderr: str = "",
        output: str = "",
        launch_error: Optional[str] = None,
    ):
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        self.output = output
        self.launch_error = launch_error
        self.specs: List[InvocationSpec] = []

    @property
    def last_spec(self) -> InvocationSpec:
        assert self.specs, "runner was never called"
        return self.specs[-1]

    @property
    def last_args(self) -> List[str]:
        return list(self.last_spec.args)

    def run(self, spec: InvocationSpec) -> InvocationResult:
        self.specs.append(spec)
        if self.launch_error:
            raise InvocationError(self.launch_error, command=spec.command)
        return InvocationResult(
            exit_code=self.exit_code,
            stdout=self.stdout,
            stderr=self.stderr,
            output=self.output,
            command=spec.command,
        )
