# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Configuration system for lljob.

This module defines dataclasses representing all configurable aspects of lljob,
including environment variables, directive syntax, launcher flags, default
values of job fields, scheduler limits, and presentation settings.

The `Config` class loads user configuration from a TOML file (if available)
and provides a globally accessible `CFG` instance.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Self


@dataclass
class EnvironmentVariables:
    """Environment variable names used by lljob."""

    # Enables lljob debug mode.
    debug_mode: str = "LLJOB_DEBUG"
    # Explicit path to the lljob config file.
    config: str = "LLJOB_CONFIG"


@dataclass
class DirectiveSettings:
    """Syntax of LoadLeveler directives."""

    # Prefix introducing a directive line.
    prefix: str = "# @ "
    # Keyword closing the directive block.
    terminator: str = "queue"


@dataclass
class LauncherSettings:
    """Shape of the launch command."""

    # Environment variable holding the number of OpenMP threads.
    thread_variable: str = "OMP_NUM_THREADS"
    # Flag specifying the number of ranks per node.
    ranks_flag: str = "--ranks-per-node"
    # Flag exporting an environment variable to the ranks.
    exp_env_flag: str = "--exp-env"
    # Token separating launcher arguments from the executable.
    separator: str = ":"


@dataclass
class JobDefaults:
    """Default values of optional job fields."""

    # Path template for captured stderr.
    error: str = "$(job_name).$(jobid).out"
    # Path template for captured stdout.
    output: str = "$(job_name).$(jobid).out"
    # Environment passed to the job.
    environment: str = "COPY_ALL"
    # When to send a notification to `notify_user`.
    notification: str = "error"
    # LoadLeveler job type.
    job_type: str = "bluegene"
    # Number of Blue Gene nodes to allocate.
    bg_size: int = 32
    # Number of OpenMP threads per rank.
    thread_count: int = 4
    # Number of MPI ranks per node.
    ranks_per_node: int = 16
    # Program used to start the executable.
    launcher: str = "runjob"


@dataclass
class SchedulerSettings:
    """Properties of the target scheduler."""

    # Smallest allocation accepted by the scheduler. Smaller values are raised to it.
    min_bg_size: int = 32
    # Command used to submit a job script.
    submit_command: str = "llsubmit"


@dataclass
class ExitCodes:
    """Exit codes used for various errors."""

    # Default error code for failures of lljob commands.
    default: int = 91
    # Returned when an unexpected error occurs.
    unexpected_error: int = 99


@dataclass
class DateFormats:
    """Date and time format strings."""

    # Standard date format used in log records.
    standard: str = "%Y-%m-%d %H:%M:%S"


@dataclass
class PresenterSettings:
    """Settings for the job script presenter."""

    # Maximal width of the panel.
    max_width: int | None = None
    # Minimal width of the panel.
    min_width: int | None = 60
    # Style of the border lines.
    border_style: str = "white"
    # Style of the title.
    title_style: str = "white bold"
    # Style of the separators between sections of the panel.
    rule_style: str = "white"
    # Style used for the keys.
    key_style: str = "default bold"
    # Style used for the values.
    value_style: str = "white"
    # Style used for notes.
    notes_style: str = "grey50"
    # Style used for warnings.
    warning_style: str = "bright_yellow"


@dataclass
class Config:
    """Main configuration for lljob."""

    env_vars: EnvironmentVariables = field(default_factory=EnvironmentVariables)
    directives: DirectiveSettings = field(default_factory=DirectiveSettings)
    launcher: LauncherSettings = field(default_factory=LauncherSettings)
    defaults: JobDefaults = field(default_factory=JobDefaults)
    scheduler: SchedulerSettings = field(default_factory=SchedulerSettings)
    exit_codes: ExitCodes = field(default_factory=ExitCodes)
    date_formats: DateFormats = field(default_factory=DateFormats)
    presenter: PresenterSettings = field(default_factory=PresenterSettings)

    # Name of the lljob binary.
    binary_name: str = "lljob"

    @classmethod
    def load(cls, config_path: Path | None = None) -> Self:
        """
        Load configuration from TOML file or use defaults.

        Args:
            config_path: Explicit path to config file. If None, searches standard locations.

        Returns:
            Config instance with loaded or default values.
        """
        if config_path is None:
            config_path = Config._get_config_path()

        try:
            if config_path and config_path.exists():
                with config_path.open("rb") as f:
                    config_data = tomllib.load(f)
                return _dict_to_dataclass(cls, config_data)
        except Exception as e:
            raise ValueError(f"Could not read lljob config '{config_path}': {e}.")

        # no config found - use defaults
        return cls()

    @staticmethod
    def _get_config_path() -> Path | None:
        """
        Search for config file in standard locations (XDG compliant).
        Returns the first existing config file, or None.
        """
        config_locations: list[Path | None] = [
            # 1. Explicit environment variable (highest priority)
            Path(env_path)
            if (env_path := os.getenv(EnvironmentVariables.config))
            else None,
            # 2. Current working directory
            Path.cwd() / "lljob_config.toml",
            # 3. XDG config home
            Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
            / "lljob"
            / "config.toml",
        ]

        for path in config_locations:
            if path and path.is_file():
                return path

        return None


def _dict_to_dataclass(cls, data: dict[str, Any]):
    """
    Recursively convert a dictionary to a dataclass instance.
    Keys that are not fields of the dataclass are ignored.
    """
    if not is_dataclass(cls):
        return data

    field_values = {}
    for field_info in fields(cls):
        if field_info.name not in data:
            continue

        value = data[field_info.name]
        if is_dataclass(field_info.type) and isinstance(value, dict):
            field_values[field_info.name] = _dict_to_dataclass(field_info.type, value)
        else:
            field_values[field_info.name] = value

    return cls(**field_values)


# Global configuration for lljob.
CFG = Config.load()
