"""
Error handling for the jj parser.

Syntax errors are fatal; each one carries the token the parser was looking at
when it gave up.

Author: xwest
"""

from typing import Union

from ..lexer.tokens import Token, TokenType
from ..lexer.errors import TranspileError


class ParseError(TranspileError):
    """Exception raised when the parser encounters a syntax error."""
    pass


# Helper functions for creating common errors
def create_expected_token_error(expected: Union[TokenType, str], found: Token) -> ParseError:
    """Create an error for a missing token of a specific type."""
    if isinstance(expected, TokenType):
        expected = expected.value
    return ParseError(f"Expected {expected} but got {found}", found, code="P001")


def create_expected_expression_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    return ParseError(f"Expected expression but found {found}", found, code="P002")


def create_expected_named_function_error(found: Token) -> ParseError:
    """Create an error for a class body member that isn't a named function."""
    return ParseError(
        "The body of a class statement can only contain named functions",
        found,
        code="P003"
    )


def create_unnamed_function_statement_error(found: Token) -> ParseError:
    """Create an error for a function statement without a name."""
    return ParseError("Function statements must have a name", found, code="P004")
