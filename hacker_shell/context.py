"""
CommandContext - Encapsulates what a builtin may reach while it runs.

This module provides the CommandContext dataclass that decouples builtin
handlers from the Shell class, making commands more testable.
"""

from dataclasses import dataclass, field
from typing import List

from .commands import BUILTINS, BuiltinRegistry


@dataclass
class CommandContext:
    """
    Encapsulates all context needed for builtin execution.

    Builtins reach the registry through the context (help lists it)
    instead of importing the global one.

    Example:
        >>> from hacker_shell.commands import load_all_commands
        >>> from hacker_shell.context import CommandContext
        >>> ctx = CommandContext(builtins=load_all_commands())
        >>> ctx.builtin_names()
        ['help', 'exit']
    """

    builtins: BuiltinRegistry = field(default_factory=lambda: BUILTINS)

    def builtin_names(self) -> List[str]:
        """Builtin names in registration order"""
        return self.builtins.names()

    def __repr__(self):
        """String representation for debugging"""
        return f"CommandContext(builtins={self.builtins.count()})"
