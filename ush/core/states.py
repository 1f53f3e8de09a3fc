"""
Loop States Module

Defines the status each dispatched command hands back to the main loop.

Author: YSNRFD
Version: 1.0.0
"""

from enum import Enum, auto


EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class LoopStatus(Enum):
    """
    Result of executing one command line.

    State transitions of the main loop:
        CONTINUE -> prompt again
        TERMINATE_SUCCESS -> leave the loop, exit code 0
        TERMINATE_ERROR -> leave the loop, exit code 1
    """

    CONTINUE = auto()
    """Keep prompting."""

    TERMINATE_SUCCESS = auto()
    """The user asked to leave (exit builtin or end of input)."""

    TERMINATE_ERROR = auto()
    """A fatal error occurred (allocation failure)."""

    @property
    def terminates(self) -> bool:
        return self is not LoopStatus.CONTINUE

    @property
    def exit_code(self) -> int:
        """Process exit code for a terminal status."""
        if self is LoopStatus.TERMINATE_ERROR:
            return EXIT_FAILURE
        return EXIT_SUCCESS
