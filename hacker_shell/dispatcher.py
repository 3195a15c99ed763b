"""Command dispatch: builtins first, then the unknown-command policy.

Known names run their builtin handler. Anything else is reported and
followed by the help text, or, when the dispatcher is configured with the
"launch" policy, handed to the ProcessLauncher.
"""

from typing import Optional

from loguru import logger

from .commands import BuiltinRegistry
from .context import CommandContext
from .control_flow import LoopSignal
from .exceptions import CommandNotFoundError
from .launcher import ProcessLauncher
from .process import Process
from .streams import ErrorStream, InputStream, OutputStream
from .tokenizer import ArgumentVector

UNKNOWN_COMMAND_POLICIES = ('help', 'launch')
HELP_COMMAND = 'help'


class Dispatcher:
    """Routes argument vectors to builtins or the process launcher"""

    def __init__(
        self,
        registry: BuiltinRegistry,
        stdout: Optional[OutputStream] = None,
        stderr: Optional[ErrorStream] = None,
        launcher: Optional[ProcessLauncher] = None,
        unknown_command: str = 'help',
        stdin: Optional[InputStream] = None,
        context: Optional[CommandContext] = None,
    ):
        if unknown_command not in UNKNOWN_COMMAND_POLICIES:
            raise ValueError(f"unknown_command must be one of {UNKNOWN_COMMAND_POLICIES}")
        if unknown_command == 'launch' and launcher is None:
            raise ValueError("the 'launch' policy needs a ProcessLauncher")
        if unknown_command == 'help' and HELP_COMMAND not in registry:
            raise ValueError("the 'help' policy needs a 'help' builtin")

        self.registry = registry
        self.stdin = stdin or InputStream.from_bytes(b'')
        self.stdout = stdout or OutputStream.to_stdout()
        self.stderr = stderr or ErrorStream.to_stderr()
        self.launcher = launcher
        self.unknown_command = unknown_command
        self.context = context or CommandContext(builtins=registry)

    def execute(self, args: ArgumentVector) -> LoopSignal:
        """
        Run one command.

        Args:
            args: Argument vector for the line; may be empty

        Returns:
            LoopSignal from the builtin or launcher, CONTINUE for empty lines
        """
        name = args.argv0
        if name is None:
            return LoopSignal.CONTINUE

        handler = self.registry.get(name)
        if handler is not None:
            logger.debug("dispatching builtin {}", name)
            return self._run_builtin(name, handler, args)

        if self.unknown_command == 'launch':
            logger.debug("delegating {} to launcher", name)
            return self.launcher.launch(args)

        logger.debug("{} is not a builtin; falling back to help", name)
        self.stdout.write(f"{CommandNotFoundError(name)}\n")
        return self._run_builtin(HELP_COMMAND, self.registry.get(HELP_COMMAND), args)

    def _run_builtin(self, name: str, handler, args: ArgumentVector) -> LoopSignal:
        process = Process(
            command=name,
            args=args,
            stdin=self.stdin,
            stdout=self.stdout,
            stderr=self.stderr,
            executor=handler,
            context=self.context,
        )
        return process.execute()
