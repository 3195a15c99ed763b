"""
Custom exception hierarchy for hacker-shell.

This module defines a structured exception hierarchy that provides:
- A single fatal class for resource exhaustion
- Recoverable command errors that are reported and skipped
- Registry errors raised while the builtin table is being built

Usage:
    from hacker_shell.exceptions import AllocationError, CommandError

    try:
        signal = dispatcher.execute(args)
    except CommandError as e:
        stderr.write(f"hsh: {e}\\n")
"""

from typing import Optional


class ShellError(Exception):
    """
    Base class for all shell errors.

    All custom exceptions should inherit from this class.
    This allows catching all shell-specific errors with a single except clause.

    Attributes:
        message: Error message
        exit_code: Suggested exit code (default: 1)
    """

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code

    def __str__(self):
        return self.message


# =============================================================================
# Resource Errors
# =============================================================================

class ResourceError(ShellError):
    """
    Base class for resource exhaustion errors.

    These are never recovered from: the shell's own bookkeeping
    structures cannot be trusted once one has been raised.
    """
    pass


class AllocationError(ResourceError):
    """
    Raised when memory for a line buffer or token array cannot be obtained.

    Example:
        raise AllocationError("line buffer", 2048)
    """

    def __init__(self, what: Optional[str] = None, requested: Optional[int] = None):
        super().__init__("allocation error", exit_code=1)
        self.what = what
        self.requested = requested


class BufferReleasedError(ShellError):
    """
    Raised when a line, or a token view borrowed from it, is used after
    the line has been released.

    Example:
        raise BufferReleasedError()
    """

    def __init__(self, message: Optional[str] = None):
        if message is None:
            message = "input line used after release"
        super().__init__(message, exit_code=1)


# =============================================================================
# Command Errors
# =============================================================================

class CommandError(ShellError):
    """
    Base class for command-related errors.

    Raised when command execution fails. The loop reports these and continues.
    """

    def __init__(self, command: str, message: str, exit_code: int = 1):
        super().__init__(message, exit_code)
        self.command = command


class CommandNotFoundError(CommandError):
    """
    Raised when a command is not found.

    Example:
        raise CommandNotFoundError("frobnicate")
    """

    def __init__(self, command: str):
        message = f"Command '{command}' not supported."
        super().__init__(command, message, exit_code=127)


class ProcessLaunchError(CommandError):
    """
    Raised when a child process cannot be created or loaded.

    Example:
        raise ProcessLaunchError("ls", "Resource temporarily unavailable")
    """

    def __init__(self, command: str, details: str):
        message = f"{command}: {details}"
        super().__init__(command, message, exit_code=126)
        self.details = details


# =============================================================================
# Registry Errors
# =============================================================================

class RegistryError(ShellError):
    """
    Base class for builtin registry errors.

    Raised at import time while the builtin table is being populated.
    """
    pass


class DuplicateCommandError(RegistryError):
    """
    Raised when a builtin name is registered twice.

    Example:
        raise DuplicateCommandError("help")
    """

    def __init__(self, name: str):
        super().__init__(f"{name}: builtin already registered")
        self.name = name


class RegistryFrozenError(RegistryError):
    """
    Raised when registering into a registry that has been frozen.

    Example:
        raise RegistryFrozenError("cd")
    """

    def __init__(self, name: str):
        super().__init__(f"{name}: builtin registry is frozen")
        self.name = name


__all__ = [
    'ShellError',
    'ResourceError',
    'AllocationError',
    'BufferReleasedError',
    'CommandError',
    'CommandNotFoundError',
    'ProcessLaunchError',
    'RegistryError',
    'DuplicateCommandError',
    'RegistryFrozenError',
]
