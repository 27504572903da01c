"""
jj Lexer Package

Implements the lexical analyzer (tokenizer) for the jj language.

Key Features:
- One token of lookahead (peek/advance), or the whole stream at once
- Single, tripled and raw string literals
- Native '#'-tagged operators matched longest-spelling-first
- Source locations derived from byte offsets for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, Source, SourceLocation
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import TranspileError, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "Source",
    "SourceLocation",
    "TranspileError",
    "LexerError",
    "tokenize_string",
    "tokenize_file",
]
