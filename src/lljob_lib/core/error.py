# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout lljob.

Each exception carries an associated exit code used by lljob commands
to report failures consistently.
"""

from lljob_lib.core.config import CFG


class LLJobError(Exception):
    """Common exception type for all recoverable lljob errors."""

    exit_code = CFG.exit_codes.default


class LLJobConfigError(LLJobError):
    """Raised when a job configuration is missing a field or contains an invalid value."""

    pass
