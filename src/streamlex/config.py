"""
Lexer Configuration
===================

Tunable lexer behavior. Configuration can come from:
- Default values (defined here)
- Explicit keyword arguments
- Environment variables (LexerConfig.from_env)

Environment Variables
---------------------
| Variable              | Field          | Example             |
|-----------------------|----------------|---------------------|
| STREAMLEX_CHUNK_SIZE  | chunk_size     | 8192                |
| STREAMLEX_ENCODING    | encoding       | latin-1             |
| STREAMLEX_STRICT      | strict         | 1 / true / yes      |
| STREAMLEX_FLOATS      | float_literals | 0 / false / no      |
| STREAMLEX_OVERFLOW    | overflow       | error, wrap, saturate |

Overflow
--------
The overflow policy covers both kinds of numeric literal:

| Policy   | Integer above INT64_MAX       | Float beyond the double range |
|----------|-------------------------------|-------------------------------|
| error    | NumericOverflowError          | NumericOverflowError          |
| wrap     | low 64 bits, two's complement | NumericOverflowError          |
| saturate | INT64_MAX                     | sys.float_info.max            |

Floats have no wrapped form, so 'wrap' rejects them like 'error'.

Copyright (c) 2026 streamlex Contributors
"""

from dataclasses import dataclass
from enum import Enum
import codecs
import math
import os
import sys


INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
UINT64_MASK = 0xFFFF_FFFF_FFFF_FFFF

_TRUE_WORDS = ("1", "true", "yes", "on")
_FALSE_WORDS = ("0", "false", "no", "off")


class OverflowPolicy(Enum):
    """What to do with a numeric literal that does not fit its type."""

    ERROR = "error"         # raise NumericOverflowError
    WRAP = "wrap"           # two's-complement wrap into int64
    SATURATE = "saturate"   # clamp to the largest representable value

    def apply(self, value: int) -> int | None:
        """
        Bring a non-negative literal value into the int64 range.

        Returns None when the value overflows under the ERROR policy;
        the caller turns that into an exception with source context.
        """
        if value <= INT64_MAX:
            return value
        return self.resolve(value & UINT64_MASK)

    def resolve(self, residue: int) -> int | None:
        """
        Value of a literal already known to exceed INT64_MAX.

        Args:
            residue: The literal modulo 2**64 (its low 64 bits)

        Returns:
            The int64 value under this policy, or None under ERROR
        """
        if self is OverflowPolicy.WRAP:
            return residue - 2 ** 64 if residue > INT64_MAX else residue
        if self is OverflowPolicy.SATURATE:
            return INT64_MAX
        return None

    def apply_float(self, value: float) -> float | None:
        """Finite values pass through; infinity saturates or yields None."""
        if math.isfinite(value):
            return value
        if self is OverflowPolicy.SATURATE:
            return sys.float_info.max
        return None


@dataclass
class LexerConfig:
    """
    Configuration for a Lexer and its SourceReader.

    Attributes:
        chunk_size: Characters (text streams) or bytes (binary streams)
            requested per buffer refill (default: 4096)
        encoding: Codec used to decode binary streams (default: "utf-8")
        strict: Reject unrecognized characters with InvalidCharacterError
            instead of emitting them as operators (default: False)
        float_literals: Recognize fractional literals such as 3.14, 2.
            and .5 (default: True)
        overflow: Policy for numeric literals out of range, see Overflow
            above (default: ERROR)
        first_line: Number given to the first input line (default: 1)
    """

    chunk_size: int = 4096
    encoding: str = "utf-8"
    strict: bool = False
    float_literals: bool = True
    overflow: OverflowPolicy = OverflowPolicy.ERROR
    first_line: int = 1

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if isinstance(self.overflow, str):
            self.overflow = OverflowPolicy(self.overflow.lower())
        codecs.lookup(self.encoding)

    @classmethod
    def from_env(cls) -> "LexerConfig":
        """
        Create LexerConfig from environment variables.

        Unset variables keep their defaults; invalid values are ignored.

        Returns:
            LexerConfig with values from environment variables
        """
        config = cls()

        if chunk_size := os.environ.get("STREAMLEX_CHUNK_SIZE"):
            try:
                value = int(chunk_size)
            except ValueError:
                value = 0
            if value > 0:
                config.chunk_size = value

        if encoding := os.environ.get("STREAMLEX_ENCODING"):
            try:
                codecs.lookup(encoding)
                config.encoding = encoding
            except LookupError:
                pass  # Unknown codec, keep default

        if (strict := _parse_flag(os.environ.get("STREAMLEX_STRICT"))) is not None:
            config.strict = strict

        if (floats := _parse_flag(os.environ.get("STREAMLEX_FLOATS"))) is not None:
            config.float_literals = floats

        if overflow := os.environ.get("STREAMLEX_OVERFLOW"):
            try:
                config.overflow = OverflowPolicy(overflow.strip().lower())
            except ValueError:
                pass

        return config


def _parse_flag(raw: str | None) -> bool | None:
    """Interpret a boolean environment value, or None if unset/unknown."""
    if raw is None:
        return None
    raw = raw.strip().lower()
    if raw in _TRUE_WORDS:
        return True
    if raw in _FALSE_WORDS:
        return False
    return None
