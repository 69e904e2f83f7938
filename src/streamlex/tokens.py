"""
Token Model and Keyword Table
=============================

Tokens are small immutable values handed from the lexer to the parser.
Every token carries a ``tag``: a small integer that identifies its
category or, for keywords, its identity.

Tag Space
---------
| Range      | Meaning                                      |
|------------|----------------------------------------------|
| 0 - 255    | Single-character operator (the char code)    |
| 256 - 261  | Literal, word and end-of-input categories    |
| 262+       | Two-character comparison operators           |

Characters above U+00FF are still tagged with their code point, so the
operator range is open-ended in practice; the named tags are chosen so
that every ASCII operator stays distinct from them.

Example Usage
-------------
>>> from streamlex.tokens import KeywordTable, Tag, Token
>>> table = KeywordTable.default()
>>> table.lookup("true")
Word(tag=<Tag.TRUE: 257>, lexeme='true')
>>> Token.ident("count").tag == Tag.ID
True

Copyright (c) 2026 streamlex Contributors
"""

from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Iterator, Mapping, Optional


# =============================================================================
# Tag Enumeration
# =============================================================================

class Tag(IntEnum):
    """Named tags. Operators without a named tag use their character code."""

    # === Categories ===
    NUM = 256           # Integer literal
    TRUE = 257          # keyword 'true'
    FALSE = 258         # keyword 'false'
    ID = 259            # Generic identifier
    FLOAT = 260         # Floating-point literal
    EOF = 261           # End-of-input marker

    # === Two-character operators ===
    EQ = 262            # ==
    NE = 263            # !=
    LE = 264            # <=
    GE = 265            # >=
    ARROW = 266         # =>
    LE_ALT = 267        # =<
    COMPOUND = 268      # any other pair drawn from = ! < >


# Characters that may pair up into a two-character operator
COMPARISON_CHARS = "=!<>"

TWO_CHAR_OPERATORS: dict[str, Tag] = {
    "==": Tag.EQ,
    "!=": Tag.NE,
    "<=": Tag.LE,
    ">=": Tag.GE,
    "=>": Tag.ARROW,
    "=<": Tag.LE_ALT,
}


# =============================================================================
# Token Variants
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    Base class of all token variants.

    Attributes:
        tag: Category or keyword identity (see Tag)
        line: Line the token started on; ignored by equality so tokens
            compare by tag and value alone
    """
    tag: int
    line: int = field(default=0, compare=False, repr=False, kw_only=True)

    @property
    def kind(self) -> str:
        """Short category name, used for dumps and diagnostics."""
        return type(self).__name__.lower()

    @property
    def text(self) -> str:
        """Source-like rendering of the token value."""
        return ""

    # Factories mirror the token categories the lexer produces.

    @staticmethod
    def num(value: int, line: int = 0) -> "Num":
        return Num(Tag.NUM, value, line=line)

    @staticmethod
    def real(value: float, line: int = 0) -> "Float":
        return Float(Tag.FLOAT, value, line=line)

    @staticmethod
    def word(tag: int, lexeme: str, line: int = 0) -> "Word":
        return Word(tag, lexeme, line=line)

    @staticmethod
    def ident(lexeme: str, line: int = 0) -> "Word":
        return Word(Tag.ID, lexeme, line=line)

    @staticmethod
    def op(lexeme: str, line: int = 0) -> "Op":
        """
        Build an operator token.

        Single characters are tagged with their character code; pairs get
        their named tag, or Tag.COMPOUND when they have none.
        """
        if len(lexeme) == 1:
            return Op(ord(lexeme), lexeme, line=line)
        if len(lexeme) == 2:
            return Op(TWO_CHAR_OPERATORS.get(lexeme, Tag.COMPOUND), lexeme, line=line)
        raise ValueError(f"operator lexeme must be 1 or 2 characters, got {lexeme!r}")


@dataclass(frozen=True)
class Num(Token):
    """Integer literal (signed 64-bit range)."""
    value: int

    @property
    def text(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Float(Token):
    """Floating-point literal."""
    value: float

    @property
    def text(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class Word(Token):
    """Reserved keyword or generic identifier."""
    lexeme: str

    @property
    def text(self) -> str:
        return self.lexeme

    @property
    def is_keyword(self) -> bool:
        return self.tag != Tag.ID


@dataclass(frozen=True)
class Op(Token):
    """One- or two-character operator."""
    lexeme: str

    @property
    def text(self) -> str:
        return self.lexeme


@dataclass(frozen=True)
class EndOfInput(Token):
    """Terminal marker returned once the input is exhausted."""
    tag: int = Tag.EOF

    @property
    def kind(self) -> str:
        return "eof"


END_OF_INPUT = EndOfInput()


# =============================================================================
# Keyword Table
# =============================================================================

class KeywordTable(Mapping[str, Word]):
    """
    Read-only mapping from reserved lexeme to its prebuilt Word token.

    The table is built once and then shared by reference; lexers never
    copy or mutate it. Every entry must carry a tag other than Tag.ID so
    that keywords stay distinguishable from plain identifiers.
    """

    def __init__(self, words: Mapping[str, Word]):
        for lexeme, word in words.items():
            if word.tag == Tag.ID:
                raise ValueError(f"keyword {lexeme!r} cannot use the identifier tag")
            if not lexeme or not lexeme[0].isalpha() or not lexeme.isalnum():
                raise ValueError(f"keyword {lexeme!r} is not a valid word")
            if word.lexeme != lexeme:
                raise ValueError(f"keyword {lexeme!r} maps to token for {word.lexeme!r}")
        self._words = MappingProxyType(dict(words))

    @classmethod
    def build(cls, reserved: Mapping[str, int]) -> "KeywordTable":
        """Create a table from a ``lexeme -> tag`` mapping."""
        return cls({lexeme: Token.word(tag, lexeme) for lexeme, tag in reserved.items()})

    @classmethod
    def default(cls) -> "KeywordTable":
        """Return the shared table holding 'true' and 'false'."""
        return DEFAULT_KEYWORDS

    def lookup(self, lexeme: str) -> Optional[Word]:
        return self._words.get(lexeme)

    def __getitem__(self, lexeme: str) -> Word:
        return self._words[lexeme]

    def __iter__(self) -> Iterator[str]:
        return iter(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"KeywordTable({sorted(self._words)!r})"


DEFAULT_KEYWORDS = KeywordTable.build({
    "true": Tag.TRUE,
    "false": Tag.FALSE,
})
