"""
Error handling for the jj compiler.

Every stage of the compiler raises a subclass of ``TranspileError``. An error
optionally carries the token it is about; when it does, the message is followed
by the uri, line number, the offending source line and a marker under the
offending column.

Author: xwest
"""

from typing import Optional
from dataclasses import dataclass

from .tokens import Token


@dataclass
class Diagnostic:
    """A single compile error: what went wrong and, if known, where."""
    message: str
    token: Optional[Token] = None
    code: Optional[str] = None

    def __str__(self) -> str:
        if self.token is None:
            return self.message
        return self.message + self.token.location_message()


class TranspileError(Exception):
    """
    Base exception for all compile errors.

    All compile errors are fatal: the first one aborts the whole compile.
    """

    def __init__(
        self,
        message: str,
        token: Optional[Token] = None,
        code: Optional[str] = None
    ):
        self.diagnostic = Diagnostic(message=message, token=token, code=code)
        super().__init__(str(self.diagnostic))

    @property
    def message(self) -> str:
        return self.diagnostic.message

    @property
    def token(self) -> Optional[Token]:
        return self.diagnostic.token

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class LexerError(TranspileError):
    """Exception raised when the lexer cannot produce the next token."""
    pass


# Error codes for every reason the compiler can fail with
ERROR_CODES = {
    # Lexical
    "L001": "UnterminatedComment",
    "L002": "UnknownEscape",
    "L003": "UnrecognizedToken",
    "L004": "UnterminatedString",
    # Syntactic
    "P001": "ExpectedToken",
    "P002": "ExpectedExpression",
    "P003": "ExpectedNamedFunction",
    "P004": "FunctionStatementMustBeNamed",
    # Code generation
    "C001": "AwaitOutsideAsync",
    "C002": "ArrowCannotBeAsync",
    "C003": "NativeCannotBeAsync",
    "C004": "UnknownOperator",
    "C005": "InvalidAssignmentTarget",
    "C006": "UnknownNode",
    # Assembly
    "A001": "DuplicatePackage",
    "A002": "DuplicateUri",
}


# Helper functions for creating common errors
def create_unterminated_comment_error(token: Token) -> LexerError:
    """Create an error for a '/*' comment that never ends."""
    return LexerError("Unterminated multiline comment", token, code="L001")


def create_unknown_escape_error(escape: str, token: Token) -> LexerError:
    """Create an error for a backslash escape the language doesn't define."""
    return LexerError(f"Unrecognized string escape '\\{escape}'", token, code="L002")


def create_unrecognized_token_error(token: Token) -> LexerError:
    """Create an error for input matching no token rule."""
    return LexerError("Unrecognized token", token, code="L003")


def create_unterminated_string_error(quote: str, token: Token) -> LexerError:
    """Create an error for a string literal without its closing quote."""
    return LexerError(f"Unterminated string literal (expected {quote})", token, code="L004")
