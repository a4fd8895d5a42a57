# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import shlex

from rich.console import Console, Group
from rich.padding import Padding
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from lljob_lib.core.common import format_duration, get_panel_width, hhmmss_to_duration
from lljob_lib.core.config import CFG
from lljob_lib.core.error import LLJobError
from lljob_lib.job.spec import JobSpec


class Presenter:
    """
    Presentation layer for job descriptions extracted from job scripts.
    """

    def __init__(self, spec: JobSpec):
        """
        Initialize the presenter.

        Args:
            spec (JobSpec): The job description to present.
        """
        self._spec = spec

    def createInfoPanel(self, console: Console | None = None) -> Group:
        """
        Create a panel with the directives, resources and launch command of the job.

        Args:
            console (Console | None): Optional Rich console.
                If not provided, a new Console is created.

        Returns:
            Group: A Rich Group containing the panel.
        """
        console = console or Console()

        content = Group(
            Padding(self._createDirectivesTable(), (0, 2)),
            Text(""),
            self._createRule("RESOURCES"),
            Text(""),
            Padding(self._createResourcesTable(), (0, 2)),
            Text(""),
            self._createRule("LAUNCH"),
            Text(""),
            Padding(self._createLaunchTable(), (0, 2)),
        )

        panel = Panel(
            content,
            title=Text(
                f"JOB SCRIPT: {self._spec.job_name or '?'}",
                style=CFG.presenter.title_style,
                justify="center",
            ),
            border_style=CFG.presenter.border_style,
            padding=(1, 2),
            width=get_panel_width(
                console, 2, CFG.presenter.min_width, CFG.presenter.max_width
            ),
        )

        return Group(Text(""), panel, Text(""))

    def _createRule(self, title: str) -> Rule:
        return Rule(
            title=Text(title, style=CFG.presenter.title_style),
            style=CFG.presenter.rule_style,
        )

    def _createTable(self) -> Table:
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column(justify="right", style=CFG.presenter.key_style)
        table.add_column(
            justify="left", overflow="fold", style=CFG.presenter.value_style
        )
        return table

    def _createDirectivesTable(self) -> Table:
        """
        Create a table with the job metadata specified by the directives.
        """
        spec = self._spec
        table = self._createTable()

        table.add_row("Job name:", Text(spec.job_name or ""))
        if spec.comment:
            table.add_row("Comment:", Text(spec.comment))
        table.add_row("Job type:", Text(str(spec.job_type)))
        table.add_row("Wall-clock limit:", self._formatWallClockLimit())
        table.add_row("Notify user:", Text(spec.notify_user or ""))
        table.add_row("Notification:", Text(str(spec.notification)))
        table.add_row("Environment:", Text(spec.environment))
        table.add_row("Output:", Text(spec.output))
        table.add_row("Error:", Text(spec.error))

        return table

    def _createResourcesTable(self) -> Table:
        """
        Create a table with the requested nodes, ranks and threads.
        """
        spec = self._spec
        table = self._createTable()

        bg_size = Text(str(spec.bg_size))
        if spec.belowMinimumSize():
            bg_size.append(
                f"  (raised to {CFG.scheduler.min_bg_size} by the scheduler)",
                style=CFG.presenter.warning_style,
            )
        table.add_row("Nodes (bg_size):", bg_size)
        table.add_row("Ranks per node:", Text(str(spec.ranks_per_node)))
        table.add_row("Threads per rank:", Text(str(spec.thread_count)))
        table.add_row(
            "Total ranks:",
            Text(str(max(spec.bg_size, CFG.scheduler.min_bg_size) * spec.ranks_per_node)),
        )

        return table

    def _createLaunchTable(self) -> Table:
        spec = self._spec
        table = self._createTable()

        table.add_row("Launcher:", Text(spec.launcher))
        table.add_row("Executable:", Text(spec.executable or ""))
        if spec.arguments:
            table.add_row("Arguments:", Text(shlex.join(spec.arguments)))

        return table

    def _formatWallClockLimit(self) -> Text:
        """
        Return the wall-clock limit followed by a human-readable duration.
        """
        limit = self._spec.wall_clock_limit or ""
        text = Text(limit)
        try:
            duration = hhmmss_to_duration(limit)
        except LLJobError:
            return text

        text.append(f"  ({format_duration(duration)})", style=CFG.presenter.notes_style)
        return text
