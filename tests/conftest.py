"""
Pytest configuration and shared fixtures for hacker-shell tests.

This module provides reusable test fixtures for:
- In-memory input and output streams
- Builtin registries and settings
- Shell instances wired to captured streams
- Output helper utilities
"""

import io

import pytest

from hacker_shell.builtins import BUILTINS
from hacker_shell.config import Settings
from hacker_shell.line_reader import InputLine
from hacker_shell.streams import ErrorStream, InputStream, OutputStream
from hacker_shell.tokenizer import split_line


# ============================================================================
# Pytest Fixtures
# ============================================================================

@pytest.fixture
def capture_output():
    """
    Provides in-memory streams for capturing command output.

    Returns:
        tuple: (stdout, stderr) streams backed by BytesIO

    Example:
        def test_command_output(capture_output):
            stdout, stderr = capture_output
            dispatcher = Dispatcher(registry, stdout=stdout, stderr=stderr)
            # ... run command ...
            assert stdout.get_value() == b"expected output"
    """
    stdout = OutputStream(io.BytesIO())
    stderr = ErrorStream(io.BytesIO())
    return stdout, stderr


@pytest.fixture
def make_input():
    """
    Provides a factory for input streams.

    Example:
        def test_read(make_input):
            stdin = make_input("help\\nexit\\n")
    """
    def factory(data):
        if isinstance(data, str):
            return InputStream.from_text(data)
        return InputStream.from_bytes(data)
    return factory


@pytest.fixture
def registry():
    """The loaded, frozen builtin registry"""
    return BUILTINS


@pytest.fixture
def settings():
    """Default settings, ignoring any .env file"""
    return Settings(_env_file=None, prompt="HS> ", unknown_command="help", log_level="WARNING")


@pytest.fixture
def make_shell(settings, capture_output, make_input):
    """
    Provides a factory building a Shell over the given input text.

    Returns:
        Callable[[str], Shell]

    Example:
        def test_loop(make_shell):
            shell = make_shell("exit\\n")
            assert shell.run() == 0
    """
    from hacker_shell.shell import Shell

    stdout, stderr = capture_output

    def factory(text: str = "", **overrides):
        shell_settings = settings.model_copy(update=overrides) if overrides else settings
        return Shell(
            settings=shell_settings,
            stdin=make_input(text),
            stdout=stdout,
            stderr=stderr,
        )

    return factory


@pytest.fixture
def make_args():
    """
    Provides a factory turning text into an ArgumentVector.

    The backing lines are released when the test finishes.
    """
    lines = []

    def factory(text: str):
        line = InputLine.from_text(text)
        lines.append(line)
        return split_line(line)

    yield factory

    for line in lines:
        line.release()


@pytest.fixture
def mock_process(capture_output, registry, make_args):
    """
    Provides a Process instance for builtin testing.

    Returns:
        Process: Process with captured output and the global registry

    Example:
        def test_help_command(mock_process):
            result = cmd_help(mock_process)
            assert result is LoopSignal.CONTINUE
    """
    from hacker_shell.commands.help import cmd_help
    from hacker_shell.context import CommandContext
    from hacker_shell.process import Process

    stdout, stderr = capture_output

    return Process(
        command='test',
        args=make_args('test'),
        executor=cmd_help,
        stdin=InputStream.from_bytes(b''),
        stdout=stdout,
        stderr=stderr,
        context=CommandContext(builtins=registry),
    )


# ============================================================================
# Helper Functions
# ============================================================================

class ExhaustedList(list):
    """A list whose in-place growth fails as if memory ran out"""

    def extend(self, items):
        raise MemoryError


def expected_help_text(names) -> str:
    """The exact text printed by the help builtin for the given names"""
    lines = ["~~~Hacker Shell~~~The following commands are available:"]
    lines.extend(f" {name}" for name in names)
    return "\n".join(lines) + "\n"


def stream_text(stream) -> str:
    """Get a captured stream's contents as a string."""
    return stream.get_value().decode('utf-8', errors='replace')


def assert_output_contains(stream, expected: str):
    """
    Assert that a captured stream contains the expected string.

    Args:
        stream: OutputStream backed by a buffer
        expected: Expected substring
    """
    output = stream_text(stream)
    assert expected in output, f"Expected '{expected}' in output, got: {output}"


# Make helper functions available as pytest helpers
pytest.ExhaustedList = ExhaustedList
pytest.expected_help_text = expected_help_text
pytest.stream_text = stream_text
pytest.assert_output_contains = assert_output_contains
