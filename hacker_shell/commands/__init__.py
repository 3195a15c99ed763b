"""Builtin command registry.

Each module in this package registers its handler with @register_command.
load_all_commands() imports them in a fixed order, which is the order the
help builtin lists them in, and then freezes the registry.
"""

import importlib
from typing import Callable, Dict, Iterator, List, Optional

from ..exceptions import DuplicateCommandError, RegistryFrozenError

# Registration order; also the order shown by help
COMMAND_MODULES = (
    'help',
    'exit',
)


class BuiltinRegistry:
    """Ordered, closed mapping from builtin name to handler.

    Names are matched exactly (case-sensitive). Once frozen the registry
    rejects further registration.

    Attributes:
        _commands: Internal dictionary mapping names to handlers, in
            registration order
    """

    def __init__(self):
        """Initialize an empty, unfrozen registry."""
        self._commands: Dict[str, Callable] = {}
        self._frozen = False

    def register(self, name: str, handler: Callable) -> None:
        """Register a handler under name.

        Args:
            name: Builtin command name
            handler: Callable taking a Process and returning a LoopSignal

        Raises:
            RegistryFrozenError: If the registry has been frozen
            DuplicateCommandError: If name is already registered
        """
        if self._frozen:
            raise RegistryFrozenError(name)
        if name in self._commands:
            raise DuplicateCommandError(name)
        self._commands[name] = handler

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: Optional[str]) -> Optional[Callable]:
        """Get a handler by exact name.

        Returns:
            Handler if found, None otherwise
        """
        if name is None:
            return None
        return self._commands.get(name)

    def exists(self, name: str) -> bool:
        return name in self._commands

    def names(self) -> List[str]:
        """Builtin names in registration order"""
        return list(self._commands)

    def count(self) -> int:
        """Get the number of registered builtins."""
        return len(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def __contains__(self, name: str) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._commands))

    def __repr__(self):
        return f"BuiltinRegistry({self.names()!r})"


BUILTINS = BuiltinRegistry()


def register_command(name: str, registry: Optional[BuiltinRegistry] = None):
    """
    Decorator registering a builtin handler.

    Args:
        name: Command name as typed by the user
        registry: Registry to add to (default: the global BUILTINS)

    Example:
        @register_command('help')
        def cmd_help(process):
            ...
    """
    target = BUILTINS if registry is None else registry

    def decorator(func: Callable) -> Callable:
        target.register(name, func)
        return func

    return decorator


def load_all_commands() -> BuiltinRegistry:
    """Import every command module in order and freeze the global registry"""
    for module_name in COMMAND_MODULES:
        importlib.import_module(f'{__name__}.{module_name}')
    BUILTINS.freeze()
    return BUILTINS


__all__ = [
    'BUILTINS',
    'BuiltinRegistry',
    'COMMAND_MODULES',
    'load_all_commands',
    'register_command',
]
