"""
Step manager (stepman) integration.

stepman resolves versioned step definitions from a step collection. This
module wraps its sub-commands; payloads are returned as opaque text for the
caller to parse.

Example:
    from steptools.packages.stepman import Stepman

    stepman = Stepman(log_level="debug")
    stepman.setup("https://github.com/org/steplib.git")
    info_json = stepman.json_steplib_step_info(collection, "script", "1.1.0")
"""

from pathlib import Path
from typing import List, Union

from steptools.packages.base import ExternalTool


class Stepman(ExternalTool):
    """
    Typed facade over the ``stepman`` executable.

    Collection, step and share commands map one-to-one onto methods.
    Raw formats use combined capture (diagnostics included); JSON formats
    use split capture so stderr never pollutes the payload.
    """

    default_executable = "stepman"

    @classmethod
    def from_config(cls, config, runner=None) -> "Stepman":
        """Create from a StepToolsConfig."""
        return cls(executable=config.stepman, log_level=config.log_level, runner=runner)

    def _debug_args(self, *args: str) -> List[str]:
        return self.build_args("--debug", *args)

    # ------------------------------------------------------------------
    # Collection management
    # ------------------------------------------------------------------

    def setup(self, collection: str) -> None:
        """Set up a step collection locally."""
        self.run_inherited(self._debug_args("setup", "--collection", collection))

    def activate(
        self,
        collection: str,
        step_id: str,
        step_version: str,
        path: Union[str, Path],
        copy_yml: Union[str, Path],
    ) -> None:
        """
        Activate a step: copy its sources to ``path`` and its step.yml to
        ``copy_yml``.
        """
        self.run_inherited(
            self._debug_args(
                "activate",
                "--collection",
                collection,
                "--id",
                step_id,
                "--version",
                step_version,
                "--path",
                str(path),
                "--copyyml",
                str(copy_yml),
            )
        )

    def update(self, collection: str) -> None:
        """Update a locally set up collection."""
        self.run_inherited(self._debug_args("update", "--collection", collection))

    # ------------------------------------------------------------------
    # Step info / list
    # ------------------------------------------------------------------

    def raw_steplib_step_info(
        self, collection: str, step_id: str, step_version: str
    ) -> str:
        return self.run_combined(
            self._steplib_step_info_args(collection, step_id, step_version, "raw")
        )

    def raw_local_step_info(self, step_yml: Union[str, Path]) -> str:
        return self.run_combined(self._local_step_info_args(step_yml, "raw"))

    def json_steplib_step_info(
        self, collection: str, step_id: str, step_version: str
    ) -> str:
        """
        Get step info from a collection as JSON.

        Returns:
            stdout of stepman (a JSON document)

        Raises:
            InvocationError: With stepman's stderr attached as ``output``
        """
        return self.run_split(
            self._steplib_step_info_args(collection, step_id, step_version, "json")
        )

    def json_local_step_info(self, step_yml: Union[str, Path]) -> str:
        return self.run_split(self._local_step_info_args(step_yml, "json"))

    def raw_step_list(self, collection: str) -> str:
        return self.run_combined(self._step_list_args(collection, "raw"))

    def json_step_list(self, collection: str) -> str:
        return self.run_split(self._step_list_args(collection, "json"))

    def _steplib_step_info_args(
        self, collection: str, step_id: str, step_version: str, fmt: str
    ) -> List[str]:
        return self._debug_args(
            "step-info",
            "--collection",
            collection,
            "--id",
            step_id,
            "--version",
            step_version,
            "--format",
            fmt,
        )

    def _local_step_info_args(self, step_yml: Union[str, Path], fmt: str) -> List[str]:
        return self._debug_args("step-info", "--step-yml", str(step_yml), "--format", fmt)

    def _step_list_args(self, collection: str, fmt: str) -> List[str]:
        return self._debug_args(
            "step-list", "--collection", collection, "--format", fmt
        )

    # ------------------------------------------------------------------
    # Share (always in tool mode)
    # ------------------------------------------------------------------

    def share(self) -> None:
        self.run_inherited(self.build_args("share", "--toolmode"))

    def share_audit(self) -> None:
        self.run_inherited(self.build_args("share", "audit", "--toolmode"))

    def share_create(self, tag: str, git: str, step_id: str) -> None:
        """Register a step version (``tag`` of ``git``) in the shared collection."""
        self.run_inherited(
            self.build_args(
                "share",
                "create",
                "--tag",
                tag,
                "--git",
                git,
                "--stepid",
                step_id,
                "--toolmode",
            )
        )

    def share_finish(self) -> None:
        self.run_inherited(self.build_args("share", "finish", "--toolmode"))

    def share_start(self, collection: str) -> None:
        self.run_inherited(
            self.build_args("share", "start", "--collection", collection, "--toolmode")
        )
