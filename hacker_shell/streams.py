"""
Byte streams for shell input and output.

Every component reads and writes through these wrappers so the whole loop
can run against in-memory buffers (tests) or the real standard streams.
"""

import codecs
import io
import sys
from typing import BinaryIO, Optional, Union


class Stream:
    """Base wrapper around a binary file object"""

    def __init__(self, fileobj: BinaryIO):
        self.fileobj = fileobj

    def flush(self):
        flush = getattr(self.fileobj, 'flush', None)
        if flush is not None:
            flush()

    def get_value(self) -> bytes:
        """
        Get buffered contents.

        Returns:
            Everything written so far when backed by an in-memory buffer,
            otherwise b''
        """
        if isinstance(self.fileobj, io.BytesIO):
            return self.fileobj.getvalue()
        return b''


class InputStream(Stream):
    """Input stream that can be consumed one character at a time"""

    def __init__(self, fileobj: BinaryIO, encoding: str = 'utf-8'):
        super().__init__(fileobj)
        self.encoding = encoding
        self._decoder = codecs.getincrementaldecoder(encoding)(errors='replace')

    @classmethod
    def from_bytes(cls, data: bytes) -> 'InputStream':
        return cls(io.BytesIO(data))

    @classmethod
    def from_text(cls, text: str) -> 'InputStream':
        return cls(io.BytesIO(text.encode('utf-8')))

    @classmethod
    def from_stdin(cls) -> 'InputStream':
        return cls(getattr(sys.stdin, 'buffer', sys.stdin))

    def read_char(self) -> str:
        """
        Read a single decoded character.

        Multi-byte sequences are assembled byte by byte; invalid or
        truncated sequences decode to U+FFFD.

        Returns:
            One character, or '' at end of stream
        """
        while True:
            byte = self.fileobj.read(1)
            if not byte:
                tail = self._decoder.decode(b'', final=True)
                self._decoder.reset()
                return tail[:1]
            char = self._decoder.decode(byte)
            if char:
                return char


class OutputStream(Stream):
    """Output stream accepting both text and bytes"""

    def __init__(self, fileobj: BinaryIO, encoding: str = 'utf-8'):
        super().__init__(fileobj)
        self.encoding = encoding

    @classmethod
    def to_buffer(cls) -> 'OutputStream':
        return cls(io.BytesIO())

    @classmethod
    def to_stdout(cls) -> 'OutputStream':
        return cls(getattr(sys.stdout, 'buffer', sys.stdout))

    def write(self, data: Union[str, bytes]) -> int:
        """
        Write text or bytes.

        Args:
            data: Text (encoded with the stream encoding) or raw bytes

        Returns:
            Number of bytes written
        """
        if isinstance(data, str):
            data = data.encode(self.encoding)
        self.fileobj.write(data)
        return len(data)


class ErrorStream(OutputStream):
    """Output stream bound to standard error by default"""

    @classmethod
    def to_stderr(cls) -> 'ErrorStream':
        return cls(getattr(sys.stderr, 'buffer', sys.stderr))


def default_streams(
    stdin: Optional[InputStream] = None,
    stdout: Optional[OutputStream] = None,
    stderr: Optional[ErrorStream] = None,
):
    """Fill in any missing stream with the matching standard stream"""
    return (
        stdin or InputStream.from_stdin(),
        stdout or OutputStream.to_stdout(),
        stderr or ErrorStream.to_stderr(),
    )
