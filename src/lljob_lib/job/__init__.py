# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
The job-description record rendered into LoadLeveler job scripts.
"""

from .spec import JobSpec

__all__ = ["JobSpec"]
