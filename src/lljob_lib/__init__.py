# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the lljob command-line tool.

This package renders LoadLeveler job scripts for Blue Gene systems from a
job-description record, validates such records, and parses existing job
scripts back into records. The `lljob` CLI commands delegate to the
functionality implemented here.
"""

from .lljob import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "core",
    "inspector",
    "job",
    "properties",
    "render",
]
