"""
Token definitions for the jj lexer.

This module defines the source model and every token type the jj language
knows about:
- Sources and source locations (line/column are derived from byte offsets)
- Keywords
- Operators and punctuation, including the native '#'-tagged operators
- Literals (numbers, strings) and names

Author: xwest
"""

from enum import Enum
from dataclasses import dataclass, replace
from typing import Any, Optional


class TokenType(Enum):
    """
    Enumeration of all token types in jj.

    Each member's value is the spelling used in diagnostics; keyword and
    symbol members are spelled exactly as they appear in source.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = "EOF"                     # End of file
    ERROR = "ERROR"                 # Marks the position of a lexical error

    # ========================================================================
    # Literals and names
    # ========================================================================
    NAME = "NAME"                   # foo, Bar, _x1
    NUMBER = "NUMBER"               # 42, 2.5, 1.
    STRING = "STRING"               # 'a', "b", '''c''', r"\d"

    # ========================================================================
    # Keywords
    # ========================================================================

    # Module system
    PACKAGE = "package"
    IMPORT = "import"

    # Declarations
    CLASS = "class"
    EXTENDS = "extends"
    DEF = "def"
    VAR = "var"
    LET = "let"
    CONST = "const"

    # Concurrency
    ASYNC = "async"
    AWAIT = "await"

    # Operators spelled as words
    IS = "is"
    NOT = "not"
    OR = "or"
    AND = "and"
    NEW = "new"

    # Constants
    TRUE = "true"
    FALSE = "false"
    NULL = "null"

    # Control flow
    FOR = "for"
    IF = "if"
    ELSE = "else"
    WHILE = "while"
    BREAK = "break"
    CONTINUE = "continue"
    RETURN = "return"

    # ========================================================================
    # Operators
    # ========================================================================

    # Arithmetic
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    PERCENT = "%"
    PLUS_PLUS = "++"
    MINUS_MINUS = "--"

    # Native arithmetic (bypass the polymorphic runtime)
    NATIVE_PLUS = "#+"
    NATIVE_MINUS = "#-"
    NATIVE_STAR = "#*"
    NATIVE_SLASH = "#/"
    NATIVE_PERCENT = "#%"

    # Assignment
    ASSIGN = "="
    PLUS_ASSIGN = "+="
    MINUS_ASSIGN = "-="
    STAR_ASSIGN = "*="
    SLASH_ASSIGN = "/="
    PERCENT_ASSIGN = "%="

    # Comparison
    EQUAL = "=="
    NOT_EQUAL = "!="
    LESS_THAN = "<"
    GREATER_THAN = ">"
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="

    # Native comparison
    NATIVE_LESS_THAN = "#<"
    NATIVE_LESS_EQUAL = "#<="
    NATIVE_GREATER_THAN = "#>"
    NATIVE_GREATER_EQUAL = "#>="

    # Reserved host-style logical operators
    BANG = "!"
    AMP_AMP = "&&"
    PIPE_PIPE = "||"

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    LEFT_PAREN = "("
    RIGHT_PAREN = ")"
    LEFT_BRACKET = "["
    RIGHT_BRACKET = "]"
    LEFT_BRACE = "{"
    RIGHT_BRACE = "}"

    COMMA = ","
    DOT = "."
    SEMICOLON = ";"
    HASH = "#"                      # native escape
    DOLLAR = "$"
    QUESTION = "?"
    COLON = ":"
    FAT_ARROW = "=>"


@dataclass(frozen=True)
class Source:
    """An input unit: where it came from and its full text."""
    uri: str
    text: str


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Only the byte offset is stored; line, column and the source line are
    computed on demand, since they are needed only for diagnostics.
    """
    source: Source
    offset: int  # Byte offset from start of file

    @property
    def uri(self) -> str:
        return self.source.uri

    @property
    def line(self) -> int:
        """1-based line number."""
        return self.source.text.count("\n", 0, self.offset) + 1

    @property
    def column(self) -> int:
        """1-based column number."""
        return self.offset - self._line_start() + 1

    @property
    def line_text(self) -> str:
        """Text of the line containing this location, without the newline."""
        text = self.source.text
        end = text.find("\n", self.offset)
        if end == -1:
            end = len(text)
        return text[self._line_start():end]

    def _line_start(self) -> int:
        return self.source.text.rfind("\n", 0, self.offset) + 1

    def location_message(self) -> str:
        """Format the 'in <uri>, line <n>' block used by every diagnostic."""
        return (f"\nin {self.uri}, line {self.line}"
                f"\n{self.line_text}"
                f"\n{' ' * (self.column - 1)}*")

    def __str__(self) -> str:
        return f"{self.uri}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.uri!r}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the jj language.

    Tokens come out of the lexer without a context name. The parser hands
    out copies stamped with the dotted path of the enclosing functions
    (see ``with_context``), so a token's context is fixed when it is created.
    """
    type: TokenType
    value: Any                      # name, number text or decoded string
    location: SourceLocation
    context_name: Optional[str] = None

    def __str__(self) -> str:
        return f"Token({self.type.value}, {self.value})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.value!r}, "
                f"{self.location!r}, {self.context_name!r})")

    def with_context(self, context_name: str) -> "Token":
        """Return a copy of this token carrying ``context_name``."""
        return replace(self, context_name=context_name)

    @property
    def function_name(self) -> str:
        """The context name; only available on tokens handed out by the parser."""
        if self.context_name is None:
            from .errors import TranspileError
            raise TranspileError(f"No function name for {self}")
        return self.context_name

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def is_keyword(self) -> bool:
        """Check if this token is a keyword."""
        return self.type.value in KEYWORDS

    @property
    def is_symbol(self) -> bool:
        """Check if this token is an operator or punctuation."""
        return self.type.value in SYMBOLS

    def location_message(self) -> str:
        return self.location.location_message()

    def tag_message(self, context: str) -> str:
        """The ``context@uri@line`` string recorded in the debug table."""
        return f"{context}@{self.location.uri}@{self.location.line}"


# Lookup tables used by the lexer for keyword/symbol recognition

KEYWORDS = {
    "package": TokenType.PACKAGE,
    "import": TokenType.IMPORT,
    "class": TokenType.CLASS,
    "extends": TokenType.EXTENDS,
    "def": TokenType.DEF,
    "async": TokenType.ASYNC,
    "await": TokenType.AWAIT,
    "is": TokenType.IS,
    "not": TokenType.NOT,
    "new": TokenType.NEW,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "null": TokenType.NULL,
    "or": TokenType.OR,
    "and": TokenType.AND,
    "for": TokenType.FOR,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "while": TokenType.WHILE,
    "break": TokenType.BREAK,
    "continue": TokenType.CONTINUE,
    "return": TokenType.RETURN,
    "var": TokenType.VAR,
    "let": TokenType.LET,
    "const": TokenType.CONST,
}

_SYMBOL_TYPES = [
    TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN,
    TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET,
    TokenType.LEFT_BRACE, TokenType.RIGHT_BRACE,
    TokenType.COMMA, TokenType.DOT, TokenType.SEMICOLON, TokenType.HASH,
    TokenType.DOLLAR, TokenType.ASSIGN, TokenType.QUESTION, TokenType.COLON,
    TokenType.PLUS, TokenType.MINUS, TokenType.STAR, TokenType.SLASH,
    TokenType.PERCENT, TokenType.PLUS_PLUS, TokenType.MINUS_MINUS,
    TokenType.NATIVE_LESS_THAN, TokenType.NATIVE_LESS_EQUAL,
    TokenType.NATIVE_GREATER_THAN, TokenType.NATIVE_GREATER_EQUAL,
    TokenType.NATIVE_PLUS, TokenType.NATIVE_MINUS, TokenType.NATIVE_STAR,
    TokenType.NATIVE_SLASH, TokenType.NATIVE_PERCENT,
    TokenType.EQUAL, TokenType.NOT_EQUAL, TokenType.LESS_THAN,
    TokenType.GREATER_THAN, TokenType.LESS_EQUAL, TokenType.GREATER_EQUAL,
    TokenType.BANG, TokenType.AMP_AMP, TokenType.PIPE_PIPE,
    TokenType.PLUS_ASSIGN, TokenType.MINUS_ASSIGN, TokenType.STAR_ASSIGN,
    TokenType.SLASH_ASSIGN, TokenType.PERCENT_ASSIGN,
    TokenType.FAT_ARROW,
]

SYMBOLS = {token_type.value: token_type for token_type in _SYMBOL_TYPES}

# Longest spelling first, so '=' never pre-empts '==' or '=>'
SYMBOLS_LONGEST_FIRST = sorted(SYMBOLS, key=lambda s: (-len(s), s))
