# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Structured representation of a LoadLeveler job description.

This module defines the `JobSpec` dataclass, which captures the directives,
the thread count and the launch command of a job script for a Blue Gene
system, together with structural validation of these values.
"""

import shlex
from dataclasses import dataclass, field, fields
from typing import Any, Self

from lljob_lib.core.common import (
    is_hhmmss,
    normalize_wall_clock_limit,
    wdhms_to_hhmmss,
)
from lljob_lib.core.config import CFG
from lljob_lib.core.error import LLJobConfigError
from lljob_lib.core.logger import get_logger
from lljob_lib.properties.job_type import JobType
from lljob_lib.properties.notification import Notification

logger = get_logger(__name__)


@dataclass
class JobSpec:
    """
    Dataclass representing a job script to be consumed by LoadLeveler.

    Required fields default to None so that a missing value is reported
    by `validate` as a configuration error.
    """

    # Label of the job used in logs and output file names
    job_name: str | None = None

    # Maximum runtime of the job in HH:MM:SS format
    wall_clock_limit: str | None = None

    # Address notified about the job
    notify_user: str | None = None

    # Path to the executable started by the launcher
    executable: str | None = None

    # Free-form description of the job
    comment: str | None = None

    # Path template for captured stderr
    error: str = field(default_factory=lambda: CFG.defaults.error)

    # Path template for captured stdout
    output: str = field(default_factory=lambda: CFG.defaults.output)

    # Environment passed to the job (e.g., COPY_ALL)
    environment: str = field(default_factory=lambda: CFG.defaults.environment)

    # When to notify `notify_user`
    notification: Notification = field(
        default_factory=lambda: Notification.fromStr(CFG.defaults.notification)
    )

    # Execution environment class
    job_type: JobType = field(
        default_factory=lambda: JobType.fromStr(CFG.defaults.job_type)
    )

    # Number of Blue Gene nodes to allocate
    bg_size: int = field(default_factory=lambda: CFG.defaults.bg_size)

    # Number of OpenMP threads per rank
    thread_count: int = field(default_factory=lambda: CFG.defaults.thread_count)

    # Number of MPI ranks per node
    ranks_per_node: int = field(default_factory=lambda: CFG.defaults.ranks_per_node)

    # Arguments passed to the executable
    arguments: list[str] = field(default_factory=list)

    # Program used to start the executable
    launcher: str = field(default_factory=lambda: CFG.defaults.launcher)

    # fields that must be provided by the user
    REQUIRED = ("job_name", "wall_clock_limit", "notify_user", "executable")

    # fields that must be positive integers
    POSITIVE_INTEGERS = ("bg_size", "thread_count", "ranks_per_node")

    # fields rendered as bare directive values
    UNQUOTED_DIRECTIVES = (
        "job_name",
        "wall_clock_limit",
        "notify_user",
        "error",
        "output",
        "environment",
    )

    @classmethod
    def fromDict(cls, data: dict[str, Any]) -> Self:
        """
        Construct a JobSpec from a dictionary of raw values.

        Enumeration values, integers and arguments may be given as strings.
        Wall-clock limits may be given in HH:MM:SS or wdhms format
        (e.g., '30m'). Keys with a value of None are ignored, so the
        corresponding defaults apply.

        Args:
            data (dict[str, Any]): Mapping of field names to values.

        Returns:
            JobSpec: The constructed job description (not yet validated).

        Raises:
            LLJobConfigError: If the dictionary contains an unknown key or a
                value that cannot be converted.
        """
        known = {f.name for f in fields(cls)}
        if unknown := sorted(set(data) - known):
            raise LLJobConfigError(
                f"Unknown job field(s): {', '.join(unknown)}. Known fields are: {', '.join(sorted(known))}."
            )

        values: dict[str, Any] = {}
        for key, value in data.items():
            if value is None:
                continue

            match key:
                case "notification" if isinstance(value, str):
                    value = Notification.fromStr(value)
                case "job_type" if isinstance(value, str):
                    value = JobType.fromStr(value)
                case "wall_clock_limit" if isinstance(value, int) and not isinstance(
                    value, bool
                ):
                    # YAML reads unquoted values such as 1:30:00 as base-60 integers
                    value = wdhms_to_hhmmss(f"{value}s")
                case "wall_clock_limit":
                    value = normalize_wall_clock_limit(str(value))
                case "arguments" if isinstance(value, str):
                    value = shlex.split(value)
                case "arguments" if isinstance(value, list):
                    value = [str(x) for x in value]
                case _ if key in cls.POSITIVE_INTEGERS and isinstance(value, str):
                    try:
                        value = int(value)
                    except ValueError:
                        raise LLJobConfigError(
                            f"Invalid value '{value}' for '{key}': expected an integer."
                        ) from None

            values[key] = value

        logger.debug(f"Constructing JobSpec from {values}.")
        return cls(**values)

    def toDict(self) -> dict[str, Any]:
        """
        Return the job description as a dictionary of plain values.

        Enumerations are converted to their lowercase names.
        """
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (Notification, JobType)):
                value = str(value)
            elif isinstance(value, list):
                value = list(value)
            result[f.name] = value

        return result

    def validate(self) -> None:
        """
        Check that the job description is structurally valid.

        Only structurally obvious problems are detected: missing required fields,
        non-positive integers, a malformed wall-clock limit, a malformed notify
        address, and values that would break the line-based script format.
        Values accepted by this method may still be rejected by the scheduler.

        Raises:
            LLJobConfigError: Listing every problem found.
        """
        problems = []

        for name in JobSpec.REQUIRED:
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                problems.append(f"missing required field '{name}'")

        for name in JobSpec.POSITIVE_INTEGERS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                problems.append(
                    f"'{name}' must be a positive integer, got '{value}'"
                )

        if (
            isinstance(self.wall_clock_limit, str)
            and self.wall_clock_limit.strip()
            and not is_hhmmss(self.wall_clock_limit)
        ):
            problems.append(
                f"invalid wall-clock limit '{self.wall_clock_limit}' (expected HH:MM:SS)"
            )

        if (
            isinstance(self.notify_user, str)
            and self.notify_user.strip()
            and "@" not in self.notify_user
        ):
            problems.append(f"invalid notify address '{self.notify_user}'")

        if not isinstance(self.notification, Notification):
            problems.append(f"invalid notification policy '{self.notification}'")

        if not isinstance(self.job_type, JobType):
            problems.append(f"invalid job type '{self.job_type}'")

        for name in ("error", "output", "environment", "launcher"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                problems.append(f"'{name}' must not be empty")

        if not isinstance(self.arguments, list) or not all(
            isinstance(arg, str) for arg in self.arguments
        ):
            problems.append("'arguments' must be a list of strings")

        # unquoted directive values are read back without surrounding whitespace
        for name in JobSpec.UNQUOTED_DIRECTIVES:
            value = getattr(self, name)
            if isinstance(value, str) and value.strip() and value != value.strip():
                problems.append(
                    f"'{name}' must not start or end with whitespace"
                )

        if self.comment is not None and '"' in self.comment:
            problems.append("'comment' must not contain double quotes")

        for f in fields(self):
            value = getattr(self, f.name)
            values = value if isinstance(value, list) else [value]
            if any(isinstance(v, str) and ("\n" in v or "\r" in v) for v in values):
                problems.append(f"'{f.name}' must not contain line breaks")

        if problems:
            raise LLJobConfigError(
                f"Invalid job configuration: {'; '.join(problems)}."
            )

        logger.debug(f"JobSpec '{self.job_name}' is valid.")

    def belowMinimumSize(self) -> bool:
        """
        Return True if `bg_size` is smaller than the scheduler's minimal allocation.

        The scheduler raises such values to the minimum on its own.
        """
        return self.bg_size < CFG.scheduler.min_bg_size
