"""Line reader for the interactive loop.

This module provides:
- InputLine: a growable character buffer owned by one loop iteration
- LineReader: reads one newline-terminated line from an InputStream

The buffer starts at a fixed capacity and grows by a fixed increment; growth
keeps every character already read. Running out of memory while growing is
fatal and surfaces as AllocationError.
"""

from typing import List, Optional

from loguru import logger

from .exceptions import AllocationError, BufferReleasedError
from .streams import InputStream

DEFAULT_LINE_BUFFER_SIZE = 1024


def allocate_slots(count: int, fill=None, what: str = 'buffer') -> list:
    """Allocate a list of count slots, translating MemoryError to AllocationError"""
    try:
        return [fill] * count
    except MemoryError as e:
        raise AllocationError(what, count) from e


def grow_slots(slots: list, increment: int, fill=None, what: str = 'buffer') -> None:
    """Extend slots in place by increment, translating MemoryError to AllocationError"""
    try:
        slots.extend([fill] * increment)
    except MemoryError as e:
        raise AllocationError(what, len(slots) + increment) from e


class InputLine:
    """A single line of input with an explicit lifetime.

    The line owns its characters until release() is called (or its with
    block exits). Token views created by the tokenizer borrow from the line
    and stop working once it is released.

    Attributes:
        eof: True if end of stream was reached while reading this line
        growth_increment: Number of slots added each time the buffer fills
    """

    def __init__(self, capacity: int = DEFAULT_LINE_BUFFER_SIZE,
                 growth_increment: Optional[int] = None):
        if capacity <= 0:
            raise ValueError("line buffer capacity must be positive")
        self.growth_increment = growth_increment or capacity
        self.eof = False
        self._buffer: List[str] = allocate_slots(capacity, '', 'line buffer')
        self._length = 0
        self._text: Optional[str] = None
        self._released = False

    @classmethod
    def from_text(cls, text: str, capacity: int = DEFAULT_LINE_BUFFER_SIZE) -> 'InputLine':
        """Build a terminated line from text that has no newline in it"""
        line = cls(capacity)
        for char in text:
            line.append(char)
        line.terminate()
        return line

    @property
    def capacity(self) -> int:
        return len(self._buffer)

    @property
    def released(self) -> bool:
        return self._released

    def append(self, char: str) -> None:
        """Store one character, growing the buffer when it becomes full"""
        self._check_alive()
        self._text = None
        self._buffer[self._length] = char
        self._length += 1
        if self._length >= len(self._buffer):
            self._grow()

    def _grow(self) -> None:
        grow_slots(self._buffer, self.growth_increment, '', 'line buffer')
        logger.debug("line buffer grown to {} slots", len(self._buffer))

    def terminate(self) -> None:
        """Mark the end of the line; the text is fixed from here on"""
        self._check_alive()
        self._text = ''.join(self._buffer[:self._length])

    @property
    def text(self) -> str:
        self._check_alive()
        if self._text is None:
            self.terminate()
        return self._text

    def release(self) -> None:
        """Drop the buffer. Borrowed token views become invalid."""
        self._buffer = []
        self._text = None
        self._released = True

    def _check_alive(self) -> None:
        if self._released:
            raise BufferReleasedError()

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return self.text

    def __enter__(self) -> 'InputLine':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
        return False

    def __repr__(self):
        if self._released:
            return "InputLine(<released>)"
        return f"InputLine({self.text!r}, eof={self.eof})"


class LineReader:
    """Reads lines one character at a time from an input stream.

    Example:
        >>> reader = LineReader(InputStream.from_bytes(b'help\\n'))
        >>> with reader.read_line() as line:
        ...     line.text
        'help'
    """

    def __init__(self, stdin: InputStream,
                 initial_capacity: int = DEFAULT_LINE_BUFFER_SIZE,
                 growth_increment: Optional[int] = None):
        if initial_capacity <= 0:
            raise ValueError("initial_capacity must be positive")
        if growth_increment is not None and growth_increment <= 0:
            raise ValueError("growth_increment must be positive")
        self.stdin = stdin
        self.initial_capacity = initial_capacity
        self.growth_increment = growth_increment or initial_capacity

    def read_line(self) -> InputLine:
        """
        Read characters until newline or end of stream.

        The newline is consumed and not stored. At end of stream the
        returned line has eof set; it is empty when nothing was read.

        Returns:
            A terminated InputLine owned by the caller

        Raises:
            AllocationError: If the buffer cannot be allocated or grown
        """
        line = InputLine(self.initial_capacity, self.growth_increment)
        while True:
            char = self.stdin.read_char()
            if char == '':
                line.eof = True
                break
            if char == '\n':
                break
            line.append(char)
        line.terminate()
        return line
