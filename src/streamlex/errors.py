"""
streamlex Error Hierarchy
=========================

This module defines the exception hierarchy for the streamlex package.
All exceptions inherit from StreamLexError, allowing callers to catch
every lexer-related error with a single except clause if desired.

Exception Hierarchy
-------------------
StreamLexError (base)
└── LexerError (carries line, filename, hint, source line and column)
    ├── SourceReadError - I/O or decoding failure during a buffer refill
    └── LexSyntaxError - malformed input
        ├── UnterminatedCommentError - '/*' without a closing '*/'
        ├── InvalidCharacterError - unrecognized character (strict mode)
        └── NumericOverflowError - literal outside the int64 or double range

All of these are fatal: the lexer never resynchronizes after raising one.

Error messages follow this format:
    filename:line: error: description
        source_line_text
          ^ (pointer to the error column)
    hint: suggestion for fixing (when available)

Copyright (c) 2026 streamlex Contributors
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class StreamLexError(Exception):
    """
    Base exception for all streamlex errors.

        try:
            token = lexer.read()
        except StreamLexError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Lexer Exceptions
# =============================================================================

class LexerError(StreamLexError):
    """
    Base exception for errors raised while producing tokens.

    Attributes:
        message: The error description
        line: Input line where the error occurred (optional)
        filename: Name of the input (or "<input>" for anonymous streams)
        hint: A suggestion for fixing the error (optional)
        source_line: Text of the offending input line (optional)
        column: 1-based column of the error in source_line (optional)
    """

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        filename: str = "<input>",
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
        column: Optional[int] = None,
    ):
        self.message = message
        self.line = line
        self.filename = filename
        self.hint = hint
        self.source_line = source_line
        self.column = column
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            prog.txt:3: error: unterminated block comment
                x = 1 /* start
                      ^
            hint: add closing */ to terminate the comment
        """
        parts = []

        if self.line is not None:
            parts.append(f"{self.filename}:{self.line}: error: {self.message}")
        else:
            parts.append(f"{self.filename}: error: {self.message}")

        if self.source_line is not None:
            parts.append(f"    {self.source_line}")
            if self.column:
                padding = " " * (4 + self.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class SourceReadError(LexerError):
    """
    The underlying stream could not be read or decoded.

    Raised from the buffer refill; the original exception is chained
    as __cause__.
    """

    def __init__(
        self,
        reason: str,
        line: Optional[int] = None,
        filename: str = "<input>",
    ):
        self.reason = reason
        super().__init__(
            f"cannot read source: {reason}",
            line=line,
            filename=filename,
        )


class LexSyntaxError(LexerError):
    """
    Malformed input that cannot be turned into tokens.
    """
    pass


class UnterminatedCommentError(LexSyntaxError):
    """
    A block comment was opened but never closed.

    The reported line is the one holding the opening '/*'.
    """

    def __init__(
        self,
        line: Optional[int] = None,
        filename: str = "<input>",
        source_line: Optional[str] = None,
        column: Optional[int] = None,
    ):
        super().__init__(
            "unterminated block comment",
            line=line,
            filename=filename,
            hint="add closing */ to terminate the comment",
            source_line=source_line,
            column=column,
        )


class InvalidCharacterError(LexSyntaxError):
    """
    Character that no token rule accepts, rejected in strict mode.
    """

    def __init__(
        self,
        char: str,
        line: Optional[int] = None,
        filename: str = "<input>",
        source_line: Optional[str] = None,
        column: Optional[int] = None,
    ):
        self.char = char
        super().__init__(
            f"invalid character {char!r} (U+{ord(char):04X})",
            line=line,
            filename=filename,
            source_line=source_line,
            column=column,
        )


class NumericOverflowError(LexSyntaxError):
    """
    Numeric literal out of range: an integer beyond a signed 64-bit value,
    or a float beyond the double-precision range.

    The full literal is kept in ``literal``; the message abbreviates
    literals longer than LITERAL_DISPLAY_LIMIT characters.
    """

    LITERAL_DISPLAY_LIMIT = 32

    def __init__(
        self,
        literal: str,
        line: Optional[int] = None,
        filename: str = "<input>",
        source_line: Optional[str] = None,
        column: Optional[int] = None,
        is_float: bool = False,
    ):
        self.literal = literal
        self.is_float = is_float

        shown = literal
        if len(literal) > self.LITERAL_DISPLAY_LIMIT:
            shown = f"{literal[:12]}...{literal[-8:]} ({len(literal)} characters)"

        if is_float:
            message = f"float literal {shown} is too large for a double"
            hint = "use a smaller value or choose the 'saturate' overflow policy"
        else:
            message = f"integer literal {shown} does not fit in 64 bits"
            hint = "use a smaller value or choose the 'wrap' or 'saturate' overflow policy"

        super().__init__(
            message,
            line=line,
            filename=filename,
            hint=hint,
            source_line=source_line,
            column=column,
        )
