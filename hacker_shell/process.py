"""Process class for builtin command execution"""

from typing import Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .context import CommandContext
    from .tokenizer import ArgumentVector

from loguru import logger

from .control_flow import LoopSignal
from .exceptions import ResourceError, ShellError
from .streams import ErrorStream, InputStream, OutputStream


class Process:
    """Represents a single builtin invocation"""

    def __init__(
        self,
        command: str,
        args: 'ArgumentVector',
        executor: Callable,
        stdin: Optional[InputStream] = None,
        stdout: Optional[OutputStream] = None,
        stderr: Optional[ErrorStream] = None,
        context: Optional['CommandContext'] = None,
    ):
        """
        Initialize a process

        Args:
            command: Command name (argument 0)
            args: Full argument vector, including argument 0
            executor: Builtin handler taking this process and returning
                a LoopSignal
            stdin: Input stream
            stdout: Output stream
            stderr: Error stream
            context: CommandContext with the builtin registry
        """
        self.command = command
        self.args = args
        self.stdin = stdin or InputStream.from_bytes(b'')
        self.stdout = stdout or OutputStream.to_buffer()
        self.stderr = stderr or ErrorStream.to_buffer()
        self.executor = executor

        if context is None:
            from .context import CommandContext
            context = CommandContext()
        self.context = context

        self.signal: Optional[LoopSignal] = None

    def execute(self) -> LoopSignal:
        """
        Execute the process

        Recoverable shell errors are reported on stderr and the loop keeps
        going. Resource errors propagate to the caller.

        Returns:
            The handler's LoopSignal
        """
        try:
            self.signal = self.executor(self)
        except KeyboardInterrupt:
            raise
        except ResourceError:
            raise
        except ShellError as e:
            logger.debug("builtin {} failed: {}", self.command, e)
            self.stderr.write(f"hsh: {e}\n")
            self.signal = LoopSignal.CONTINUE

        self.stdout.flush()
        self.stderr.flush()

        return self.signal

    def get_stdout(self) -> bytes:
        """Get stdout contents"""
        return self.stdout.get_value()

    def get_stderr(self) -> bytes:
        """Get stderr contents"""
        return self.stderr.get_value()

    def __repr__(self):
        return f"Process({self.command})"
