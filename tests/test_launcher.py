"""
Tests for the external process launcher.

Tests cover:
- Running a real program and waiting for it exactly once
- Exec failure in the child
- Fork failure in the parent
- Waiting through stopped states
- Wait status classification
"""

import errno
import os
import shutil
import signal

import pytest
from unittest.mock import patch

from hacker_shell.control_flow import LoopSignal
from hacker_shell.launcher import ChildStatus, ProcessLauncher

posix_only = pytest.mark.skipif(not hasattr(os, 'fork'), reason="requires fork")


def exited(code: int) -> int:
    """Raw wait status for a normal exit"""
    return (code & 0xff) << 8


def stopped(signum: int) -> int:
    """Raw wait status for a stopped child"""
    return (signum << 8) | 0x7f


@pytest.fixture
def launcher(capture_output):
    stdout, stderr = capture_output
    return ProcessLauncher(stdout=stdout, stderr=stderr)


@posix_only
class TestLaunchRealPrograms:
    """Tests that fork real children."""

    @pytest.mark.skipif(shutil.which('true') is None, reason="needs true(1)")
    def test_true_waits_exactly_once(self, launcher, make_args):
        with patch('hacker_shell.launcher.os.waitpid', wraps=os.waitpid) as waitpid:
            result = launcher.launch(make_args('true'))

        assert result is LoopSignal.CONTINUE
        assert waitpid.call_count == 1
        assert launcher.last_status.kind == 'exited'
        assert launcher.last_status.code == 0

    @pytest.mark.skipif(shutil.which('false') is None, reason="needs false(1)")
    def test_failing_program_still_continues(self, launcher, make_args):
        result = launcher.launch(make_args('false'))

        assert result is LoopSignal.CONTINUE
        assert launcher.last_status.code != 0

    @pytest.mark.skipif(shutil.which('test') is None, reason="needs test(1)")
    def test_arguments_are_passed(self, launcher, make_args):
        launcher.launch(make_args('test 1 = 1'))
        assert launcher.last_status.code == 0

        launcher.launch(make_args('test 1 = 2'))
        assert launcher.last_status.code == 1

    def test_missing_executable_exits_with_failure(self, launcher, make_args):
        result = launcher.launch(make_args('/nonexistent/hsh-no-such-program'))

        assert result is LoopSignal.CONTINUE
        assert launcher.last_status == ChildStatus(launcher.last_status.pid, 'exited', code=1)


class TestLaunchWithMockedSystemCalls:
    """Tests that patch fork and waitpid."""

    def test_empty_vector_is_noop(self, launcher, make_args):
        with patch('hacker_shell.launcher.os.fork') as fork:
            assert launcher.launch(make_args('')) is LoopSignal.CONTINUE

        fork.assert_not_called()

    def test_fork_failure_reports_and_does_not_wait(self, launcher, make_args):
        error = OSError(errno.EAGAIN, "Resource temporarily unavailable")

        with patch('hacker_shell.launcher.os.fork', side_effect=error), \
                patch('hacker_shell.launcher.os.waitpid') as waitpid:
            result = launcher.launch(make_args('ls -l'))

        assert result is LoopSignal.CONTINUE
        waitpid.assert_not_called()
        assert launcher.last_status is None
        assert pytest.stream_text(launcher.stderr) == "hsh: ls: Resource temporarily unavailable\n"

    def test_waits_through_stopped_state(self, launcher, make_args):
        statuses = [(4242, stopped(signal.SIGTSTP)), (4242, exited(3))]

        with patch('hacker_shell.launcher.os.fork', return_value=4242), \
                patch('hacker_shell.launcher.os.waitpid', side_effect=statuses) as waitpid:
            result = launcher.launch(make_args('vim'))

        assert result is LoopSignal.CONTINUE
        assert waitpid.call_count == 2
        waitpid.assert_called_with(4242, os.WUNTRACED)
        assert launcher.last_status == ChildStatus(4242, 'exited', code=3)

    def test_signaled_child_ends_wait(self, launcher, make_args):
        with patch('hacker_shell.launcher.os.fork', return_value=99), \
                patch('hacker_shell.launcher.os.waitpid', return_value=(99, signal.SIGKILL)) as waitpid:
            launcher.launch(make_args('sleep 100'))

        assert waitpid.call_count == 1
        assert launcher.last_status == ChildStatus(99, 'signaled', signal=signal.SIGKILL)

    def test_interrupt_while_waiting_keeps_waiting(self, launcher, make_args):
        statuses = [KeyboardInterrupt, (4242, signal.SIGINT)]

        with patch('hacker_shell.launcher.os.fork', return_value=4242), \
                patch('hacker_shell.launcher.os.waitpid', side_effect=statuses) as waitpid:
            result = launcher.launch(make_args('sleep 100'))

        assert result is LoopSignal.CONTINUE
        assert waitpid.call_count == 2
        assert launcher.last_status == ChildStatus(4242, 'signaled', signal=signal.SIGINT)

    def test_pending_output_flushed_before_fork(self, launcher, make_args):
        calls = []
        launcher.stdout.flush = lambda: calls.append('flush')

        def fake_fork():
            calls.append('fork')
            return 7

        with patch('hacker_shell.launcher.os.fork', side_effect=fake_fork), \
                patch('hacker_shell.launcher.os.waitpid', return_value=(7, exited(0))):
            launcher.launch(make_args('true'))

        assert calls == ['flush', 'fork']


class TestChildStatus:
    """Tests for wait status classification."""

    def test_exited(self):
        status = ChildStatus.from_wait_status(1, exited(5))
        assert status.kind == 'exited'
        assert status.code == 5
        assert status.terminal
        assert str(status) == "pid 1 exited with status 5"

    def test_signaled(self):
        status = ChildStatus.from_wait_status(1, signal.SIGTERM)
        assert status.kind == 'signaled'
        assert status.signal == signal.SIGTERM
        assert status.terminal

    def test_stopped_is_not_terminal(self):
        status = ChildStatus.from_wait_status(1, stopped(signal.SIGSTOP))
        assert status.kind == 'stopped'
        assert status.signal == signal.SIGSTOP
        assert not status.terminal
