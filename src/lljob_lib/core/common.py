# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
General utility functions for the lljob library.

This module provides helpers for converting wall-clock limits between formats,
YAML loading, string normalization, and panel sizing.
"""

import re
from datetime import timedelta
from functools import lru_cache

import yaml
from rich.console import Console

from .error import LLJobConfigError
from .logger import get_logger

logger = get_logger(__name__)

_HHMMSS_PATTERN = re.compile(r"^\s*(\d+):([0-5]?\d):([0-5]?\d)\s*$")


@lru_cache(maxsize=1)
def load_yaml_loader() -> type[yaml.SafeLoader]:
    """Return the fastest available safe YAML loader (CSafeLoader if possible)."""
    try:
        from yaml import (
            CSafeLoader as SafeLoader,  # ty: ignore[possibly-missing-import]
        )

        logger.debug("Loaded YAML CLoader.")
    except ImportError:
        from yaml import SafeLoader

        logger.debug("Loaded default YAML loader.")

    return SafeLoader


def format_duration(td: timedelta) -> str:
    """
    Convert a timedelta into a human-readable string showing only relevant units.

    Args:
        td (timedelta): The duration to format.

    Returns:
        str: A formatted string representing the duration, e.g., '1d 2h 3m 4s'.
    """
    total_seconds = int(td.total_seconds())

    days_total, remainder = divmod(total_seconds, 86400)
    weeks, days = divmod(days_total, 7)
    hours, remainder = divmod(remainder, 3600)
    minutes, seconds = divmod(remainder, 60)

    parts = []
    if weeks > 0:
        parts.append(f"{weeks}w")
    if days > 0:
        parts.append(f"{days}d")
    if hours > 0:
        parts.append(f"{hours}h")
    if minutes > 0:
        parts.append(f"{minutes}m")
    if seconds > 0 or total_seconds == 0:
        parts.append(f"{seconds}s")

    return " ".join(parts)


def is_hhmmss(timestr: str) -> bool:
    """Return True if `timestr` is a valid (H)HH:MM:SS time string."""
    return _HHMMSS_PATTERN.fullmatch(timestr) is not None


def hhmmss_to_duration(timestr: str) -> timedelta:
    """
    Convert a time string in HH:MM:SS (or HHH:MM:SS) format to a timedelta object.

    Examples:
        "0:00:00"   -> 0 seconds
        "00:30:00"  -> 30 minutes
        "100:00:00" -> 100 hours

    Raises:
        LLJobConfigError: If the input string is not in a valid HH:MM:SS format.
    """
    match = _HHMMSS_PATTERN.fullmatch(timestr)
    if not match:
        raise LLJobConfigError(f"Invalid HH:MM:SS time string '{timestr}'.")

    hours, minutes, seconds = map(int, match.groups())

    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def wdhms_to_hhmmss(timestr: str) -> str:
    """
    Convert a time specification in the wdhms format into HH:MM:SS.

    The accepted format is a sequence of one or more integer + unit tokens,
    where unit is one of:
      w = weeks, d = days, h = hours, m = minutes, s = seconds

    Tokens may be compact (e.g. "1h30m") or space-separated
    (e.g. "1h 30m"). The function is case-insensitive. Hours are
    zero-padded to at least two digits.

    Examples:
      "30m"         -> "00:30:00"
      "1w2d3h4m5s"  -> "195:04:05"

    Raises:
        LLJobConfigError: If the string is empty or does not conform to the token pattern.
    """
    full_pattern = re.compile(r"^\s*(?:\d+\s*[wdhms]\s*)+$", re.IGNORECASE)
    if not full_pattern.fullmatch(timestr):
        raise LLJobConfigError(f"Invalid time string '{timestr}'.")

    multipliers = {"w": 7 * 24 * 3600, "d": 24 * 3600, "h": 3600, "m": 60, "s": 1}
    total_seconds = sum(
        int(value) * multipliers[unit.lower()]
        for value, unit in re.findall(r"(\d+)\s*([wdhms])", timestr, re.IGNORECASE)
    )

    h, remainder = divmod(total_seconds, 3600)
    m, s = divmod(remainder, 60)

    return f"{h:02}:{m:02}:{s:02}"


def normalize_wall_clock_limit(timestr: str) -> str:
    """
    Return a wall-clock limit in the HH:MM:SS form understood by LoadLeveler.

    Strings already in (H)HH:MM:SS form are returned stripped but otherwise
    unchanged. Strings in the wdhms form (e.g. '30m', '1h30m') are converted.

    Raises:
        LLJobConfigError: If the string is in neither form.
    """
    if is_hhmmss(timestr):
        return timestr.strip()

    try:
        return wdhms_to_hhmmss(timestr)
    except LLJobConfigError:
        raise LLJobConfigError(
            f"Invalid wall-clock limit '{timestr}'. Use HH:MM:SS (e.g., 00:30:00) or a duration like '30m' or '2h'."
        ) from None


def to_snake_case(s: str) -> str:
    """
    Convert a string from PascalCase or kebab-case to snake_case.

    Args:
        s (str): Input string in PascalCase or kebab-case.

    Returns:
        str: Converted string in snake_case.
    """
    # replace hyphens with underscores
    s = s.replace("-", "_")

    # SCREAMING_SNAKE_CASE only needs lowercasing
    if s.isupper():
        return s.lower()

    # convert PascalCase to snake_case
    return re.sub(r"(?<!^)(?=[A-Z])", "_", s).lower()


def get_panel_width(
    console: Console, factor: int, min_width: int | None, max_width: int | None
) -> int:
    """
    Calculate the width of a panel relative to the console width, constrained by
    optional minimum and maximum width values.
    """
    panel_width = console.size.width // factor
    if min_width is not None:
        panel_width = max(panel_width, min_width)
    if max_width is not None:
        panel_width = min(panel_width, max_width)

    return panel_width
