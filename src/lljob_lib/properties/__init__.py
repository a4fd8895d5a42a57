# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Enumerations of LoadLeveler keyword values used in lljob job scripts.
"""

from .job_type import JobType
from .notification import Notification

__all__ = ["JobType", "Notification"]
