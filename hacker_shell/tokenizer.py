"""Whitespace tokenizer producing argument vectors.

Tokens are views into the InputLine they came from: a TokenView records
offsets, not a copy of the text, and resolving it after the line has been
released raises BufferReleasedError.
"""

from typing import Iterator, List, Optional

from loguru import logger

from .line_reader import InputLine, allocate_slots, grow_slots

DEFAULT_TOKEN_BUFFER_SIZE = 64
TOKEN_DELIMITERS = frozenset(' \t\r\n\a')


class TokenView:
    """A borrowed slice [start, stop) of an InputLine"""

    __slots__ = ('line', 'start', 'stop')

    def __init__(self, line: InputLine, start: int, stop: int):
        self.line = line
        self.start = start
        self.stop = stop

    @property
    def value(self) -> str:
        return self.line.text[self.start:self.stop]

    def __str__(self) -> str:
        return self.value

    def __repr__(self):
        return f"TokenView({self.start}:{self.stop})"


class ArgumentVector:
    """
    Ordered argument views terminated by a None sentinel slot.

    Argument 0, when present, is the command name. An empty vector has
    argv0 of None and means the line was a no-op.

    Example:
        >>> with InputLine.from_text('help now') as line:
        ...     args = split_line(line)
        ...     args.to_list()
        ['help', 'now']
    """

    def __init__(self, line: InputLine, slots: List[Optional[TokenView]], count: int):
        self.line = line
        self._slots = slots
        self._count = count

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def sentinel(self) -> None:
        """The slot after the last argument; always None"""
        return self._slots[self._count]

    @property
    def argv0(self) -> Optional[str]:
        if self._count == 0:
            return None
        return self._slots[0].value

    @property
    def is_empty(self) -> bool:
        return self._count == 0

    def to_list(self) -> List[str]:
        """Owned copies of every argument, safe to keep after release"""
        return [self._slots[i].value for i in range(self._count)]

    def __len__(self) -> int:
        return self._count

    def __getitem__(self, index: int) -> str:
        if index < 0:
            index += self._count
        if not 0 <= index < self._count:
            raise IndexError("argument index out of range")
        return self._slots[index].value

    def __iter__(self) -> Iterator[str]:
        for i in range(self._count):
            yield self._slots[i].value

    def __eq__(self, other):
        if isinstance(other, ArgumentVector):
            return self.to_list() == other.to_list()
        if isinstance(other, (list, tuple)):
            return self.to_list() == list(other)
        return NotImplemented

    def __repr__(self):
        if self.line.released:
            return f"ArgumentVector(<released>, count={self._count})"
        return f"ArgumentVector({self.to_list()!r})"


class Tokenizer:
    """Splits InputLines on runs of whitespace delimiters"""

    def __init__(self, initial_capacity: int = DEFAULT_TOKEN_BUFFER_SIZE,
                 growth_increment: Optional[int] = None):
        if initial_capacity <= 0:
            raise ValueError("initial_capacity must be positive")
        if growth_increment is not None and growth_increment <= 0:
            raise ValueError("growth_increment must be positive")
        self.initial_capacity = initial_capacity
        self.growth_increment = growth_increment or initial_capacity

    def split_line(self, line: InputLine) -> ArgumentVector:
        """
        Split a line into non-empty tokens.

        Args:
            line: Terminated line to split; the result borrows from it

        Returns:
            ArgumentVector over the line

        Raises:
            AllocationError: If the token array cannot be allocated or grown
        """
        text = line.text
        slots = allocate_slots(self.initial_capacity, None, 'token array')
        position = 0
        i = 0
        length = len(text)

        while i < length:
            while i < length and text[i] in TOKEN_DELIMITERS:
                i += 1
            if i >= length:
                break
            start = i
            while i < length and text[i] not in TOKEN_DELIMITERS:
                i += 1
            slots[position] = TokenView(line, start, i)
            position += 1

            if position >= len(slots):
                grow_slots(slots, self.growth_increment, None, 'token array')
                logger.debug("token array grown to {} slots", len(slots))

        slots[position] = None
        return ArgumentVector(line, slots, position)


_default_tokenizer = Tokenizer()


def split_line(line: InputLine) -> ArgumentVector:
    """Split a line with the default token array sizes"""
    return _default_tokenizer.split_line(line)
