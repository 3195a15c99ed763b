"""The read-eval loop driver."""

from typing import Optional

from loguru import logger

from .builtins import BUILTINS
from .commands import BuiltinRegistry
from .config import Settings, get_settings
from .context import CommandContext
from .control_flow import LoopSignal
from .dispatcher import Dispatcher
from .exceptions import AllocationError
from .exit_codes import EXIT_FAILURE, EXIT_SUCCESS
from .launcher import ProcessLauncher
from .line_reader import InputLine, LineReader
from .streams import ErrorStream, InputStream, OutputStream, default_streams
from .tokenizer import Tokenizer


class Shell:
    """Interactive shell: prompt, read a line, split it, dispatch it.

    Each iteration owns its InputLine and the ArgumentVector borrowed from
    it; both are released before the next prompt.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        stdin: Optional[InputStream] = None,
        stdout: Optional[OutputStream] = None,
        stderr: Optional[ErrorStream] = None,
        registry: Optional[BuiltinRegistry] = None,
    ):
        self.settings = settings or get_settings()
        self.stdin, self.stdout, self.stderr = default_streams(stdin, stdout, stderr)
        self.registry = registry if registry is not None else BUILTINS

        self.line_reader = LineReader(self.stdin, self.settings.line_buffer_size)
        self.tokenizer = Tokenizer(self.settings.token_buffer_size)
        self.launcher = ProcessLauncher(self.stdout, self.stderr)
        self.context = CommandContext(builtins=self.registry)
        self.dispatcher = Dispatcher(
            self.registry,
            stdout=self.stdout,
            stderr=self.stderr,
            launcher=self.launcher,
            unknown_command=self.settings.unknown_command,
            stdin=self.stdin,
            context=self.context,
        )

    @property
    def prompt(self) -> str:
        return self.settings.prompt

    def run(self) -> int:
        """
        Run the loop until a command says stop or input ends.

        Returns:
            EXIT_SUCCESS on normal termination, EXIT_FAILURE if a buffer
            could not be allocated
        """
        try:
            return self._loop()
        except AllocationError as e:
            logger.debug("fatal: {} ({}, {} slots)", e, e.what, e.requested)
            self.stdout.flush()
            self.stderr.write(f"hsh: {e}\n")
            self.stderr.flush()
            return EXIT_FAILURE

    def _loop(self) -> int:
        while True:
            self._write_prompt()
            try:
                line = self.line_reader.read_line()
            except KeyboardInterrupt:
                self.stdout.write("\n")
                continue

            with line:
                signal = self._dispatch_line(line)

            if signal is LoopSignal.TERMINATE:
                logger.debug("loop terminated by command")
                return EXIT_SUCCESS
            if line.eof:
                logger.debug("end of input")
                self.stdout.flush()
                return EXIT_SUCCESS

    def execute(self, text: str) -> LoopSignal:
        """
        Split and dispatch a single line of text.

        Args:
            text: Command line (a trailing newline is treated as whitespace)

        Returns:
            LoopSignal from the dispatched command
        """
        with InputLine.from_text(text, self.settings.line_buffer_size) as line:
            return self._dispatch_line(line)

    def _dispatch_line(self, line: InputLine) -> LoopSignal:
        args = self.tokenizer.split_line(line)
        signal = self.dispatcher.execute(args)
        self.stdout.flush()
        return signal

    def _write_prompt(self) -> None:
        self.stdout.write(self.prompt)
        self.stdout.flush()
