# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Enumeration of LoadLeveler job types.

This module defines `JobType`, the execution environment class requested
by the `job_type` directive.
"""

from enum import Enum
from typing import Self

from lljob_lib.core.error import LLJobConfigError


class JobType(Enum):
    """
    Type of the LoadLeveler job.
    """

    SERIAL = 1
    PARALLEL = 2
    BLUEGENE = 3
    MPICH = 4

    def __str__(self):
        return self.name.lower()

    @classmethod
    def fromStr(cls, s: str) -> Self:
        """
        Convert a string to the corresponding JobType enum variant.

        Args:
            s (str): String representation of the job type (case-insensitive).

        Returns:
            JobType variant.

        Raises:
            LLJobConfigError if the string corresponds to no JobType.
        """
        try:
            return cls[s.strip().upper()]
        except KeyError:
            raise LLJobConfigError(
                f"Could not recognize a job type '{s}'. Known job types: {', '.join(str(t) for t in cls)}."
            ) from None
