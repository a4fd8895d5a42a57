# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import shlex
from pathlib import Path

from lljob_lib.core.config import CFG
from lljob_lib.core.error import LLJobError
from lljob_lib.core.logger import get_logger
from lljob_lib.job.spec import JobSpec

logger = get_logger(__name__)


class Renderer:
    """
    Renders a `JobSpec` into the text of a LoadLeveler job script.
    """

    def __init__(self, spec: JobSpec):
        """
        Initialize the renderer.

        Args:
            spec (JobSpec): The job description to render.
        """
        self._spec = spec

    def render(self) -> str:
        """
        Validate the job description and render the job script.

        The output depends only on the job description and the configuration,
        so rendering the same description twice yields identical text.
        A `bg_size` below the scheduler minimum is rendered unchanged
        and only reported as a warning.

        Returns:
            str: The job script, terminated by a newline.

        Raises:
            LLJobConfigError: If the job description is invalid.
        """
        self._spec.validate()

        if self._spec.belowMinimumSize():
            logger.warning(
                f"Requested bg_size '{self._spec.bg_size}' is below the scheduler minimum of {CFG.scheduler.min_bg_size}. "
                f"The scheduler will allocate {CFG.scheduler.min_bg_size} nodes instead."
            )

        sections = [
            self._renderHeader(),
            self._renderDirectives(),
            [self._renderExport()],
            [self._renderLaunchCommand()],
        ]

        text = "\n\n".join("\n".join(lines) for lines in sections) + "\n"
        logger.debug(f"Rendered job script for '{self._spec.job_name}':\n{text}")
        return text

    def write(self, path: Path, overwrite: bool = False) -> None:
        """
        Render the job script and write it into a file.

        Nothing is written if rendering fails.

        Args:
            path (Path): Path of the file to create.
            overwrite (bool): Replace the file if it already exists.

        Raises:
            LLJobConfigError: If the job description is invalid.
            LLJobError: If the file exists and `overwrite` is False,
                or if the file cannot be written.
        """
        text = self.render()

        if path.exists() and not overwrite:
            raise LLJobError(
                f"File '{path}' already exists. Use --force to overwrite it."
            )

        try:
            with path.open("w", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            raise LLJobError(f"Could not write job script '{path}': {e}.") from e

        logger.info(f"Job script written to '{path}'.")

    def _renderHeader(self) -> list[str]:
        """Return plain comment lines explaining how to use the script."""
        return [
            "# This job script can be submitted to LoadLeveler via",
            f"# {CFG.scheduler.submit_command} [script]",
            "#",
            f"# Notice that bg_size={CFG.scheduler.min_bg_size} is the smallest possible number of nodes.",
            f"# Any smaller input is automatically set to {CFG.scheduler.min_bg_size}.",
            "#",
            "# Do not forget to put your email address in the",
            "# notify_user field.",
            "#",
            "# This script has to be submitted from within the folder",
            "# of the executable.",
        ]

    def _renderDirectives(self) -> list[str]:
        """Return the directive lines including the closing terminator."""
        spec = self._spec

        directives: list[tuple[str, object]] = [("job_name", spec.job_name)]
        if spec.comment is not None:
            directives.append(("comment", f'"{spec.comment}"'))
        directives += [
            ("error", spec.error),
            ("output", spec.output),
            ("environment", spec.environment),
            ("wall_clock_limit", spec.wall_clock_limit),
            ("notification", spec.notification),
            ("notify_user", spec.notify_user),
            ("job_type", spec.job_type),
            ("bg_size", spec.bg_size),
        ]

        lines = [
            f"{CFG.directives.prefix}{key} = {value}"
            for key, value in directives
        ]
        lines.append(f"{CFG.directives.prefix}{CFG.directives.terminator}")
        return lines

    def _renderExport(self) -> str:
        return f"export {CFG.launcher.thread_variable}={self._spec.thread_count}"

    def _renderLaunchCommand(self) -> str:
        """Return the launcher invocation, e.g. `runjob --ranks-per-node 16 --exp-env OMP_NUM_THREADS : ./app`."""
        spec = self._spec
        return shlex.join(
            [
                spec.launcher,
                CFG.launcher.ranks_flag,
                str(spec.ranks_per_node),
                CFG.launcher.exp_env_flag,
                CFG.launcher.thread_variable,
                CFG.launcher.separator,
                spec.executable or "",
                *spec.arguments,
            ]
        )
