"""
Error handling for the jj code generator.

These are the semantic errors the parser deliberately leaves alone (for
instance 'await' outside an async function) and that are only detected while
lowering the AST.

Author: xwest
"""

from ..lexer.tokens import Token
from ..lexer.errors import TranspileError


class CodeGenError(TranspileError):
    """Exception raised when an AST cannot be lowered."""
    pass


# Helper functions for creating common errors
def create_await_outside_async_error(token: Token) -> CodeGenError:
    return CodeGenError(
        "Await can only be called from inside an async function", token, code="C001")


def create_arrow_cannot_be_async_error(token: Token) -> CodeGenError:
    return CodeGenError("Arrow functions can't be async", token, code="C002")


def create_native_cannot_be_async_error(token: Token) -> CodeGenError:
    return CodeGenError("Native functions can't be async", token, code="C003")


def create_unknown_operator_error(kind: str, op: str, token: Token) -> CodeGenError:
    """``kind`` is 'prefix', 'binary', 'postfix' or 'augmented assignment'."""
    return CodeGenError(f"No such {kind} operator: {op}", token, code="C004")


def create_invalid_assignment_target_error(token: Token) -> CodeGenError:
    return CodeGenError(
        "Only variables, attributes and native items can be updated in place",
        token,
        code="C005"
    )


def create_unknown_node_error(kind: str, node) -> CodeGenError:
    """``kind`` is 'statement' or 'expression'."""
    return CodeGenError(
        f"Unrecognized {kind}: {node.node_type.value}", node.token, code="C006")
