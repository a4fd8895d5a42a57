# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Presentation of job scripts.

The `Presenter` class formats a `JobSpec` extracted from a job script into a
Rich panel listing its directives, requested resources and launch command.
"""

from .presenter import Presenter

__all__ = ["Presenter"]
