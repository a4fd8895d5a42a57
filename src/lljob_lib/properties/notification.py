# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Enumeration of LoadLeveler notification policies.
"""

from enum import Enum
from typing import Self

from lljob_lib.core.error import LLJobConfigError


class Notification(Enum):
    """
    When LoadLeveler notifies `notify_user` about the job.
    """

    ALWAYS = 1
    ERROR = 2
    START = 3
    NEVER = 4
    COMPLETE = 5

    def __str__(self):
        return self.name.lower()

    @classmethod
    def fromStr(cls, s: str) -> Self:
        """
        Convert a string to the corresponding Notification enum variant.

        Raises:
            LLJobConfigError if the string corresponds to no Notification.
        """
        try:
            return cls[s.strip().upper()]
        except KeyError:
            raise LLJobConfigError(
                f"Could not recognize a notification policy '{s}'. Known policies: {', '.join(str(n) for n in cls)}."
            ) from None
