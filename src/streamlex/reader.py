"""
Source Reader
=============

Buffered, pull-based character source for the lexer.

The reader owns the underlying stream. It hands out one character at a
time through two primitives:

- ``next()``: return the next character and advance past it
- ``peek()``: return the next character without advancing

When the staging buffer runs dry the reader refills it from the stream
in chunks. Once the stream is exhausted both primitives return the
sentinel character ``"\\0"`` forever.

Streams may be text (``read()`` returns ``str``) or binary (``read()``
returns ``bytes``). Binary input is decoded incrementally, so multibyte
sequences split across two chunks decode correctly.

Example Usage
-------------
>>> import io
>>> reader = SourceReader(io.StringIO("ab"))
>>> reader.peek(), reader.next(), reader.next(), reader.next()
('a', 'a', 'b', '\\x00')
>>> reader.at_eof
True

The reader also remembers the characters consumed on the current line,
so errors can quote the offending line without re-reading the stream.

Copyright (c) 2026 streamlex Contributors
"""

import codecs
import logging
from typing import IO, AnyStr, Optional

from streamlex.errors import SourceReadError


logger = logging.getLogger(__name__)

# Returned by next()/peek() once the stream is exhausted
SENTINEL = "\0"

DEFAULT_CHUNK_SIZE = 4096


class SourceReader:
    """
    Chunked character buffer over a text or binary stream.

    Invariants:
        - peek() twice in a row returns the same character
        - peek() followed by next() returns that character and advances
        - after exhaustion, next() and peek() keep returning SENTINEL and
          the stream is not read again

    Args:
        stream: Object with a ``read(n)`` method returning str or bytes
        chunk_size: Amount requested from the stream per refill
        encoding: Codec for binary streams
        filename: Name used in error messages

    Raises:
        SourceReadError: If the first refill fails
    """

    def __init__(
        self,
        stream: IO[AnyStr],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        encoding: str = "utf-8",
        filename: str = "<input>",
    ):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        self.filename = filename
        self._stream = stream
        self._chunk_size = chunk_size
        self._encoding = encoding
        self._decoder: Optional[codecs.IncrementalDecoder] = None

        # Staging buffer and cursor into it
        self._buffer = ""
        self._pos = 0
        self._exhausted = False

        # Text of the current line consumed so far; cleared lazily on the
        # first character after a newline
        self._line_chars: list[str] = []
        self._line_ended = False

        # Statistics, exposed for diagnostics
        self.refills = 0
        self.consumed = 0

        self._fill()

    # =========================================================================
    # Character Primitives
    # =========================================================================

    def next(self) -> str:
        """Return the next character and advance, or SENTINEL at the end."""
        if self._pos >= len(self._buffer):
            self._fill()
            if self._pos >= len(self._buffer):
                return SENTINEL

        char = self._buffer[self._pos]
        self._pos += 1
        self.consumed += 1

        if self._line_ended:
            self._line_chars.clear()
            self._line_ended = False
        if char == "\n":
            self._line_ended = True
        else:
            self._line_chars.append(char)
        return char

    def peek(self) -> str:
        """Return the next character without advancing."""
        if self._pos >= len(self._buffer):
            self._fill()
            if self._pos >= len(self._buffer):
                return SENTINEL
        return self._buffer[self._pos]

    @property
    def at_eof(self) -> bool:
        """
        True once the stream is exhausted and the buffer drained.

        Distinguishes a literal NUL character in the input from the end
        of input, since both read as SENTINEL.
        """
        if self._pos < len(self._buffer):
            return False
        self._fill()
        return self._pos >= len(self._buffer)

    @property
    def line_text(self) -> str:
        """
        Characters consumed so far on the current line, without the newline.

        Right after next() returns a newline this is still the line that
        the newline ended.
        """
        return "".join(self._line_chars)

    @property
    def column(self) -> int:
        """Number of characters consumed on the current line (0 after a newline)."""
        return 0 if self._line_ended else len(self._line_chars)

    # =========================================================================
    # Buffer Management
    # =========================================================================

    def _fill(self) -> None:
        """
        Refill the staging buffer from the stream.

        Loops because a binary chunk may decode to nothing (a partial
        multibyte sequence); stops at the first non-empty decode or at
        end of stream.
        """
        while not self._exhausted and self._pos >= len(self._buffer):
            chunk = self._read_chunk()
            if not chunk:
                self._exhausted = True
                tail = self._decode(b"", final=True) if self._decoder else ""
                self._buffer = tail
                self._pos = 0
                logger.debug(f"{self.filename}: stream exhausted after {self.refills} refill(s)")
                break

            self._buffer = self._decode(chunk) if isinstance(chunk, bytes) else chunk
            self._pos = 0
            self.refills += 1
            logger.debug(f"{self.filename}: refill #{self.refills}, {len(self._buffer)} chars buffered")

    def _read_chunk(self):
        try:
            chunk = self._stream.read(self._chunk_size)
        except OSError as e:
            raise SourceReadError(str(e), filename=self.filename) from e

        if chunk is None:
            # Non-blocking stream with no data ready
            raise SourceReadError("stream would block", filename=self.filename)
        if not isinstance(chunk, (str, bytes, bytearray)):
            raise SourceReadError(
                f"stream returned {type(chunk).__name__}, expected str or bytes",
                filename=self.filename,
            )
        if isinstance(chunk, bytearray):
            chunk = bytes(chunk)
        return chunk

    def _decode(self, data: bytes, final: bool = False) -> str:
        if self._decoder is None:
            self._decoder = codecs.getincrementaldecoder(self._encoding)()
        try:
            return self._decoder.decode(data, final=final)
        except UnicodeDecodeError as e:
            raise SourceReadError(
                f"invalid {self._encoding} data ({e.reason})",
                filename=self.filename,
            ) from e

    # =========================================================================
    # Resource Management
    # =========================================================================

    def close(self) -> None:
        """Close the underlying stream."""
        self._stream.close()

    def __enter__(self) -> "SourceReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
