"""External program launcher.

Runs a command in the foreground: fork, exec the named program in the child,
and wait in the parent until the child has exited or been killed by a
signal. Stopped children are waited on again.
"""

import os
from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from .control_flow import LoopSignal
from .exceptions import ProcessLaunchError
from .exit_codes import EXIT_FAILURE
from .streams import ErrorStream, OutputStream
from .tokenizer import ArgumentVector


@dataclass(frozen=True)
class ChildStatus:
    """Classified state change reported by waitpid"""

    pid: int
    kind: str  # "exited" | "signaled" | "stopped" | "continued"
    code: Optional[int] = None
    signal: Optional[int] = None

    @classmethod
    def from_wait_status(cls, pid: int, status: int) -> 'ChildStatus':
        if os.WIFEXITED(status):
            return cls(pid, 'exited', code=os.WEXITSTATUS(status))
        if os.WIFSIGNALED(status):
            return cls(pid, 'signaled', signal=os.WTERMSIG(status))
        if os.WIFSTOPPED(status):
            return cls(pid, 'stopped', signal=os.WSTOPSIG(status))
        return cls(pid, 'continued')

    @property
    def terminal(self) -> bool:
        return self.kind in ('exited', 'signaled')

    def __str__(self):
        if self.kind == 'exited':
            return f"pid {self.pid} exited with status {self.code}"
        if self.kind in ('signaled', 'stopped'):
            return f"pid {self.pid} {self.kind} by signal {self.signal}"
        return f"pid {self.pid} continued"


class ProcessLauncher:
    """Launches external programs and waits for them.

    Attributes:
        last_status: Terminal status of the most recently reaped child,
            or None if no child has been waited for
    """

    def __init__(self, stdout: Optional[OutputStream] = None,
                 stderr: Optional[ErrorStream] = None):
        self.stdout = stdout or OutputStream.to_stdout()
        self.stderr = stderr or ErrorStream.to_stderr()
        self.last_status: Optional[ChildStatus] = None

    def launch(self, args: ArgumentVector) -> LoopSignal:
        """
        Run args[0] with the full argument vector and wait for it.

        Creation and exec failures are reported on stderr; the loop always
        continues.

        Args:
            args: Argument vector; argument 0 names the program

        Returns:
            LoopSignal.CONTINUE
        """
        if len(args) == 0:
            return LoopSignal.CONTINUE

        # Owned copies: the child must not depend on the line buffer
        argv = args.to_list()

        self.stdout.flush()
        self.stderr.flush()

        try:
            pid = os.fork()
        except OSError as e:
            self._report(ProcessLaunchError(argv[0], e.strerror or str(e)))
            return LoopSignal.CONTINUE

        if pid == 0:
            self._exec_child(argv)

        logger.debug("started {} as pid {}", argv[0], pid)
        self.last_status = self._wait(pid)
        logger.debug("{}", self.last_status)
        return LoopSignal.CONTINUE

    def _exec_child(self, argv: List[str]) -> None:
        """Replace the child image; never returns"""
        try:
            os.execvp(argv[0], argv)
        except OSError as e:
            self._report(ProcessLaunchError(argv[0], e.strerror or str(e)))
        finally:
            os._exit(EXIT_FAILURE)

    def _wait(self, pid: int) -> ChildStatus:
        while True:
            try:
                _, status = os.waitpid(pid, os.WUNTRACED)
            except KeyboardInterrupt:
                # The child received the same SIGINT; keep waiting for it
                logger.debug("interrupted while waiting for pid {}", pid)
                continue
            result = ChildStatus.from_wait_status(pid, status)
            if result.terminal:
                return result
            logger.debug("{}; still waiting", result)

    def _report(self, error: ProcessLaunchError) -> None:
        logger.debug("launch failed: {}", error)
        self.stderr.write(f"hsh: {error}\n")
        self.stderr.flush()
