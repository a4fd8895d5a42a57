# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Rendering and parsing of LoadLeveler job scripts.

`Renderer` turns a validated `JobSpec` into the text of a job script: a block
of `# @ key = value` directives closed by `# @ queue`, the export of the
OpenMP thread count, and the launcher invocation.

`Parser` extracts the same information back from the text of a job script.

`JobSpecFactory` merges command-line options, values from a YAML job file
and configured defaults into a single `JobSpec`.
"""

from .factory import JobSpecFactory
from .parser import Parser
from .renderer import Renderer

__all__ = ["JobSpecFactory", "Parser", "Renderer"]
