"""
streamlex - Streaming Lexical Analyzer
======================================

This package converts a raw character stream into typed tokens for a
downstream parser. Tokens are produced on demand: the parser calls
``Lexer.read()`` and the lexer pulls just enough characters from its
buffered source to recognize one token.

Main Components
---------------
- **reader**: SourceReader, the chunked character buffer with
    one-character lookahead and a ``"\\0"`` end sentinel

- **lexer**: Lexer, the scanner (whitespace and comment elision, numeric
    literals, words and keywords, one- and two-character operators)

- **tokens**: Token variants (Num, Float, Word, Op, EndOfInput), the Tag
    enumeration and the read-only KeywordTable

- **config**: LexerConfig and OverflowPolicy

- **cli**: the ``streamlex`` token dump command

Quick Start
-----------
    >>> from streamlex import Lexer, Tag
    >>> lexer = Lexer.from_string("flag != true")
    >>> [token.text for token in lexer]
    ['flag', '!=', 'true']

Or from the command line:
    $ streamlex program.txt

Copyright (c) 2026 streamlex Contributors
"""

__version__ = "0.3.0"

# =============================================================================
# Public API Exports
# =============================================================================

from streamlex.config import LexerConfig, OverflowPolicy
from streamlex.errors import (
    StreamLexError,
    LexerError,
    SourceReadError,
    LexSyntaxError,
    UnterminatedCommentError,
    InvalidCharacterError,
    NumericOverflowError,
)
from streamlex.lexer import Lexer
from streamlex.reader import SENTINEL, SourceReader
from streamlex.tokens import (
    END_OF_INPUT,
    DEFAULT_KEYWORDS,
    EndOfInput,
    Float,
    KeywordTable,
    Num,
    Op,
    Tag,
    Token,
    Word,
)

__all__ = [
    # Version info
    "__version__",
    # Lexer and reader
    "Lexer",
    "SourceReader",
    "SENTINEL",
    # Configuration
    "LexerConfig",
    "OverflowPolicy",
    # Tokens
    "Token",
    "Num",
    "Float",
    "Word",
    "Op",
    "EndOfInput",
    "END_OF_INPUT",
    "Tag",
    "KeywordTable",
    "DEFAULT_KEYWORDS",
    # Exception hierarchy
    "StreamLexError",
    "LexerError",
    "SourceReadError",
    "LexSyntaxError",
    "UnterminatedCommentError",
    "InvalidCharacterError",
    "NumericOverflowError",
]
