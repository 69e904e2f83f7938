"""
Streaming Lexer (Tokenizer)
===========================

This module implements the scanner that turns a character stream into
tokens for a parser. The parser pulls one token at a time with
``Lexer.read()``; the lexer pulls characters from a SourceReader as
needed and never reads the raw stream itself.

Token Categories
----------------
- Integers: decimal digits, accumulated one digit at a time and
  range-checked against int64 under the overflow policy
- Floats: 3.14, 2. and .5 (can be disabled); infinite values fall under
  the same policy
- Words: keywords from the keyword table ('true', 'false'), or identifiers
- Operators: == != <= >= => =< and any other pair of = ! < >,
  otherwise a single character

Classification Order
--------------------
Each read() applies these rules in order:

1. Skip spaces, tabs and carriage returns; newlines bump the line counter
2. End of input returns END_OF_INPUT
3. '//' and '/* */' comments are skipped and scanning starts over
4. A digit, or '.' before a digit, starts a numeric literal
5. A letter starts a word
6. Anything else is an operator

Comments
--------
- Single-line: // comment
- Multi-line: /* comment */ (unterminated is fatal)

Example Usage
-------------
>>> from streamlex.lexer import Lexer
>>> lexer = Lexer.from_string("x <= 42 // limit")
>>> for token in lexer:
...     print(token.kind, token.text)
word x
op <=
num 42

Copyright (c) 2026 streamlex Contributors
"""

from dataclasses import replace
from pathlib import Path
from typing import IO, Iterator, Optional
import io
import logging

from streamlex.config import INT64_MAX, UINT64_MASK, LexerConfig
from streamlex.errors import (
    LexerError,
    SourceReadError,
    InvalidCharacterError,
    NumericOverflowError,
    UnterminatedCommentError,
)
from streamlex.reader import SENTINEL, SourceReader
from streamlex.tokens import (
    COMPARISON_CHARS,
    END_OF_INPUT,
    KeywordTable,
    Token,
)


logger = logging.getLogger(__name__)


class Lexer:
    """
    Pull-based scanner producing one token per read() call.

    The lexer takes ownership of the stream for its lifetime. Any error
    it raises is fatal: later read() calls raise the same error again and
    no further tokens are produced.

    Usage:
        lexer = Lexer(open("prog.txt", "rb"))
        token = lexer.read()
        while token is not END_OF_INPUT:
            ...
            token = lexer.read()

    Args:
        stream: Text or binary stream to tokenize
        keywords: Reserved words; shared by reference (default: true/false)
        config: Lexer settings (default: LexerConfig())
        filename: Name of the input (for error messages)

    Raises:
        SourceReadError: If the stream cannot be read at construction
    """

    # Characters that start a numeric literal
    DIGITS = "0123456789"

    # Skipped between tokens; newline is handled separately
    BLANKS = " \t\r"

    def __init__(
        self,
        stream: IO,
        keywords: Optional[KeywordTable] = None,
        config: Optional[LexerConfig] = None,
        filename: str = "<input>",
    ):
        self.config = config if config is not None else LexerConfig()
        self.keywords = keywords if keywords is not None else KeywordTable.default()
        self.filename = filename

        self._reader = SourceReader(
            stream,
            chunk_size=self.config.chunk_size,
            encoding=self.config.encoding,
            filename=filename,
        )

        self._line = self.config.first_line
        self._finished = False
        self._error: Optional[LexerError] = None

    @classmethod
    def from_string(cls, source: str, filename: str = "<string>", **kwargs) -> "Lexer":
        """Create a lexer over an in-memory string."""
        return cls(io.StringIO(source), filename=filename, **kwargs)

    @classmethod
    def from_file(cls, path: str | Path, **kwargs) -> "Lexer":
        """
        Create a lexer over a file, opened in binary mode.

        The file is decoded with the configured encoding and closed by
        Lexer.close().
        """
        stream = open(path, "rb")
        try:
            return cls(stream, filename=str(path), **kwargs)
        except Exception:
            stream.close()
            raise

    @property
    def line(self) -> int:
        """Current input line number."""
        return self._line

    # =========================================================================
    # Public Interface
    # =========================================================================

    def read(self) -> Token:
        """
        Return the next token, or END_OF_INPUT when the input is exhausted.

        Raises:
            LexerError: On malformed input or a failed buffer refill
        """
        if self._error is not None:
            raise self._error
        if self._finished:
            return END_OF_INPUT

        try:
            token = self._scan()
        except LexerError as e:
            if e.line is None:
                e.line = self._line
                e.args = (e._format_message(),)
            self._error = e
            logger.debug(f"{self.filename}:{self._line}: lexing stopped: {e.message}")
            raise

        if token is END_OF_INPUT:
            logger.debug(f"{self.filename}:{self._line}: end of input")
        else:
            logger.debug(f"{self.filename}:{token.line}: {token.kind} {token.text!r}")
        return token

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens up to and including END_OF_INPUT.

        Yields:
            Token objects in input order
        """
        while True:
            token = self.read()
            yield token
            if token is END_OF_INPUT:
                return

    def __iter__(self) -> Iterator[Token]:
        """Iterate over the real tokens, stopping before END_OF_INPUT."""
        for token in self.tokenize():
            if token is END_OF_INPUT:
                return
            yield token

    def close(self) -> None:
        """Close the underlying stream."""
        self._reader.close()

    def __enter__(self) -> "Lexer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # =========================================================================
    # Scanning
    # =========================================================================

    def _scan(self) -> Token:
        """Skip blanks and comments until a token starts, then classify it."""
        reader = self._reader

        while True:
            char = self._skip_whitespace()

            if char == SENTINEL and reader.at_eof:
                self._finished = True
                return END_OF_INPUT

            if char == "/":
                line = self._line
                column = reader.column + 1
                reader.next()  # consume /
                following = reader.peek()
                if following == "/":
                    self._skip_line_comment()
                    continue
                if following == "*":
                    reader.next()  # consume *
                    self._skip_block_comment(line, column)
                    continue
                return Token.op("/", line)

            if char in self.DIGITS:
                return self._scan_number()

            if char == "." and self.config.float_literals:
                line = self._line
                column = reader.column + 1
                reader.next()  # consume .
                if reader.peek() in self.DIGITS:
                    return self._scan_fraction(["."], line, column)
                return Token.op(".", line)

            if char.isalpha():
                return self._scan_word()

            return self._scan_operator()

    def _skip_whitespace(self) -> str:
        """Consume blanks and newlines; return the first other character."""
        reader = self._reader
        while True:
            char = reader.peek()
            if char in self.BLANKS:
                reader.next()
            elif char == "\n":
                reader.next()
                self._line += 1
            else:
                return char

    def _skip_line_comment(self) -> None:
        """
        Skip a single-line comment (// ...).

        The terminating newline is left in place for the whitespace skip
        so that it is counted exactly once.
        """
        reader = self._reader
        while reader.peek() != "\n" and not reader.at_eof:
            reader.next()

    def _skip_block_comment(self, start_line: int, start_column: int) -> None:
        """
        Skip a block comment (/* ... */) whose opener is already consumed.

        Raises:
            UnterminatedCommentError: If the input ends before '*/'
        """
        reader = self._reader
        opening_line = None
        while not reader.at_eof:
            char = reader.next()
            if char == "\n":
                if self._line == start_line:
                    opening_line = reader.line_text
                self._line += 1
            elif char == "*" and reader.peek() == "/":
                reader.next()  # consume /
                return

        if opening_line is None:
            opening_line = reader.line_text
        raise UnterminatedCommentError(
            start_line,
            self.filename,
            source_line=opening_line.rstrip("\r"),
            column=start_column,
        )

    def _scan_number(self) -> Token:
        """
        Scan an integer literal, or a float when a '.' follows the digits.

        Handles:
        - Integer: 123
        - Float: 3.14, 2.

        The integer value is built one digit at a time. Once it passes
        INT64_MAX only its low 64 bits are kept, which is all the overflow
        policy needs, so literals of any length cost constant space.
        """
        line = self._line
        reader = self._reader
        column = reader.column + 1

        chars = []
        value = 0
        overflowed = False
        while reader.peek() in self.DIGITS:
            digit = reader.next()
            chars.append(digit)
            value = value * 10 + int(digit)
            if value > INT64_MAX:
                overflowed = True
                value &= UINT64_MASK

        if self.config.float_literals and reader.peek() == ".":
            chars.append(reader.next())
            return self._scan_fraction(chars, line, column)

        if overflowed:
            value = self.config.overflow.resolve(value)
            if value is None:
                raise NumericOverflowError(
                    "".join(chars),
                    line,
                    self.filename,
                    source_line=self._rest_of_line(),
                    column=column,
                )
        return Token.num(value, line)

    def _scan_fraction(self, chars: list[str], line: int, column: int) -> Token:
        """Scan the digits after a decimal point; chars holds the prefix."""
        reader = self._reader
        while reader.peek() in self.DIGITS:
            chars.append(reader.next())

        literal = "".join(chars)
        value = self.config.overflow.apply_float(float(literal))
        if value is None:
            raise NumericOverflowError(
                literal,
                line,
                self.filename,
                source_line=self._rest_of_line(),
                column=column,
                is_float=True,
            )
        return Token.real(value, line)

    def _scan_word(self) -> Token:
        """
        Scan an identifier or keyword.

        Words start with a letter and continue with letters or digits.
        Keywords are distinguished by checking against the keyword table.
        """
        line = self._line
        reader = self._reader

        chars = []
        while reader.peek().isalnum():
            chars.append(reader.next())

        lexeme = "".join(chars)
        reserved = self.keywords.lookup(lexeme)
        if reserved is not None:
            return replace(reserved, line=line)
        return Token.ident(lexeme, line)

    def _scan_operator(self) -> Token:
        """
        Scan an operator.

        Two characters from '= ! < >' form a single operator; every other
        character stands alone. Unprintable characters are operators too,
        unless the lexer is strict.
        """
        line = self._line
        reader = self._reader
        char = reader.next()

        if char in COMPARISON_CHARS and reader.peek() in COMPARISON_CHARS:
            return Token.op(char + reader.next(), line)

        if self.config.strict and not char.isprintable():
            column = reader.column
            raise InvalidCharacterError(
                char,
                line,
                self.filename,
                source_line=self._rest_of_line(),
                column=column,
            )

        return Token.op(char, line)

    def _rest_of_line(self) -> str:
        """
        Consume the remainder of the current line and return its full text.

        Only called on the way to a fatal error, so the consumed input is
        never tokenized. A read failure here ends the line early.
        """
        reader = self._reader
        try:
            while reader.peek() != "\n" and not reader.at_eof:
                reader.next()
        except SourceReadError as e:
            logger.debug(f"{self.filename}:{self._line}: source line cut short: {e.reason}")
        return reader.line_text.rstrip("\r")
