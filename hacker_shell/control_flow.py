"""
Loop control signals returned by every dispatched command.
"""

from enum import Enum


class LoopSignal(Enum):
    """Outcome of a command: keep reading lines, or leave the loop."""

    TERMINATE = 0
    CONTINUE = 1
