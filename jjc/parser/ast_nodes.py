"""
Abstract Syntax Tree node definitions for jj.

Every node owns the token it was parsed from; the code generator uses that
token for diagnostics and for the debug-info entries of traced expressions.

Author: xwest
"""

from abc import ABC
from typing import List, Optional, Union, Iterator
from enum import Enum

from ..lexer.tokens import Token


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Top-level
    MODULE = "Module"

    # Statements
    CLASS = "Class"
    FUNCTION_STATEMENT = "FunctionStatement"
    BLOCK = "Block"
    RETURN = "Return"
    DECLARATION = "Declaration"
    IF = "If"
    EXPRESSION_STATEMENT = "ExpressionStatement"

    # Literals
    NUMBER = "Number"
    STRING = "String"
    LIST = "List"
    NULL = "null"
    TRUE = "true"
    FALSE = "false"

    # Variables, attributes, items
    GET_VARIABLE = "GetVariable"
    SET_VARIABLE = "SetVariable"
    GET_ATTRIBUTE = "GetAttribute"
    SET_ATTRIBUTE = "SetAttribute"
    GET_ITEM = "GetItem"
    SET_ITEM = "SetItem"

    # Calls
    FUNCTION_CALL = "FunctionCall"
    METHOD_CALL = "MethodCall"
    NEW = "New"

    # Operators
    AWAIT = "Await"
    PREFIX_OPERATOR = "PrefixOperator"
    BINARY_OPERATOR = "BinaryOperator"
    CONDITIONAL_OPERATOR = "ConditionalOperator"
    POSTFIX_OPERATOR = "PostfixOperator"
    AUGMENT_ASSIGN = "AugmentAssign"

    # Functions
    FUNCTION = "Function"

    # Helpers
    ARGUMENT_LIST = "ArgumentList"
    EXPRESSION_LIST = "ExpressionList"


class ASTNode(ABC):
    """Base class for all AST nodes."""

    def __init__(self, node_type: ASTNodeType, token: Token):
        self.node_type = node_type
        self.token = token

    def children(self) -> List['ASTNode']:
        """Get all child nodes, in source order."""
        return []

    def walk(self) -> Iterator['ASTNode']:
        """Yield this node and every node below it, depth first."""
        yield self
        for child in self.children():
            yield from child.walk()

    def __str__(self) -> str:
        return f"{self.node_type.value}@{self.token.location}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.token.location})"


class Statement(ASTNode):
    """Base class for statements."""
    pass


class Expression(ASTNode):
    """Base class for expressions."""
    pass


# ============================================================================
# Helpers
# ============================================================================

class ArgumentList(ASTNode):
    """
    Formal parameters of a function.

    Required names come first, then optional names (written '/name'), then an
    optional rest parameter (written '*name').
    """

    def __init__(self, token: Token, args: List[str], optargs: List[str],
                 vararg: Optional[str] = None):
        super().__init__(ASTNodeType.ARGUMENT_LIST, token)
        self.args = args
        self.optargs = optargs
        self.vararg = vararg


class ExpressionList(ASTNode):
    """Call arguments or list elements, with an optional trailing '*spread'."""

    def __init__(self, token: Token, exprs: List[Expression],
                 varexpr: Optional[Expression] = None):
        super().__init__(ASTNodeType.EXPRESSION_LIST, token)
        self.exprs = exprs
        self.varexpr = varexpr

    def children(self) -> List[ASTNode]:
        if self.varexpr is None:
            return list(self.exprs)
        return self.exprs + [self.varexpr]


# ============================================================================
# Top-level
# ============================================================================

class Module(Statement):
    """Root node: one input unit."""

    def __init__(self, token: Token, doc: str, packages: List[str],
                 stmts: List[Statement]):
        super().__init__(ASTNodeType.MODULE, token)
        self.doc = doc
        self.packages = packages
        self.stmts = stmts

    def children(self) -> List[ASTNode]:
        return list(self.stmts)


# ============================================================================
# Statements
# ============================================================================

class Class(Statement):
    """Class declaration; every method is a named Function."""

    def __init__(self, token: Token, name: str, base: Optional[Expression],
                 methods: List['Function']):
        super().__init__(ASTNodeType.CLASS, token)
        self.name = name
        self.base = base
        self.methods = methods

    def children(self) -> List[ASTNode]:
        children = [] if self.base is None else [self.base]
        return children + self.methods


class FunctionStatement(Statement):
    """A named function definition in statement position."""

    def __init__(self, token: Token, func: 'Function'):
        super().__init__(ASTNodeType.FUNCTION_STATEMENT, token)
        self.func = func

    def children(self) -> List[ASTNode]:
        return [self.func]


class Block(Statement):
    """Braced statement list."""

    def __init__(self, token: Token, stmts: List[Statement]):
        super().__init__(ASTNodeType.BLOCK, token)
        self.stmts = stmts

    def children(self) -> List[ASTNode]:
        return list(self.stmts)


class Return(Statement):
    """Return statement; ``expr`` is None for a bare 'return;'."""

    def __init__(self, token: Token, expr: Optional[Expression]):
        super().__init__(ASTNodeType.RETURN, token)
        self.expr = expr

    def children(self) -> List[ASTNode]:
        return [] if self.expr is None else [self.expr]


class Declaration(Statement):
    """'let' declaration with an optional initializer."""

    def __init__(self, token: Token, name: str, val: Optional[Expression]):
        super().__init__(ASTNodeType.DECLARATION, token)
        self.name = name
        self.val = val

    def children(self) -> List[ASTNode]:
        return [] if self.val is None else [self.val]


class If(Statement):
    """If statement with optional else branch."""

    def __init__(self, token: Token, cond: Expression, body: Statement,
                 other: Optional[Statement]):
        super().__init__(ASTNodeType.IF, token)
        self.cond = cond
        self.body = body
        self.other = other

    def children(self) -> List[ASTNode]:
        children = [self.cond, self.body]
        if self.other is not None:
            children.append(self.other)
        return children


class ExpressionStatement(Statement):
    """An expression evaluated for its side effects."""

    def __init__(self, token: Token, expr: Expression):
        super().__init__(ASTNodeType.EXPRESSION_STATEMENT, token)
        self.expr = expr

    def children(self) -> List[ASTNode]:
        return [self.expr]


# ============================================================================
# Literals
# ============================================================================

class NumberLiteral(Expression):
    """Number literal; ``val`` is the source text, unparsed."""

    def __init__(self, token: Token, val: str):
        super().__init__(ASTNodeType.NUMBER, token)
        self.val = val


class StringLiteral(Expression):
    """String literal; ``val`` is the decoded text."""

    def __init__(self, token: Token, val: str):
        super().__init__(ASTNodeType.STRING, token)
        self.val = val


class ListLiteral(Expression):
    def __init__(self, token: Token, exprlist: ExpressionList):
        super().__init__(ASTNodeType.LIST, token)
        self.exprlist = exprlist

    def children(self) -> List[ASTNode]:
        return [self.exprlist]


class NullLiteral(Expression):
    def __init__(self, token: Token):
        super().__init__(ASTNodeType.NULL, token)


class TrueLiteral(Expression):
    def __init__(self, token: Token):
        super().__init__(ASTNodeType.TRUE, token)


class FalseLiteral(Expression):
    def __init__(self, token: Token):
        super().__init__(ASTNodeType.FALSE, token)


# ============================================================================
# Variables, attributes and items
# ============================================================================

class GetVariable(Expression):
    def __init__(self, token: Token, name: str, is_native: bool = False):
        super().__init__(ASTNodeType.GET_VARIABLE, token)
        self.name = name
        self.is_native = is_native


class SetVariable(Expression):
    def __init__(self, token: Token, name: str, val: Expression,
                 is_native: bool = False):
        super().__init__(ASTNodeType.SET_VARIABLE, token)
        self.name = name
        self.val = val
        self.is_native = is_native

    def children(self) -> List[ASTNode]:
        return [self.val]


class GetAttribute(Expression):
    def __init__(self, token: Token, owner: Expression, name: str,
                 is_native: bool = False):
        super().__init__(ASTNodeType.GET_ATTRIBUTE, token)
        self.owner = owner
        self.name = name
        self.is_native = is_native

    def children(self) -> List[ASTNode]:
        return [self.owner]


class SetAttribute(Expression):
    def __init__(self, token: Token, owner: Expression, name: str,
                 val: Expression, is_native: bool = False):
        super().__init__(ASTNodeType.SET_ATTRIBUTE, token)
        self.owner = owner
        self.name = name
        self.val = val
        self.is_native = is_native

    def children(self) -> List[ASTNode]:
        return [self.owner, self.val]


class GetItem(Expression):
    def __init__(self, token: Token, owner: Expression, key: Expression,
                 is_native: bool = False):
        super().__init__(ASTNodeType.GET_ITEM, token)
        self.owner = owner
        self.key = key
        self.is_native = is_native

    def children(self) -> List[ASTNode]:
        return [self.owner, self.key]


class SetItem(Expression):
    def __init__(self, token: Token, owner: Expression, key: Expression,
                 val: Expression, is_native: bool = False):
        super().__init__(ASTNodeType.SET_ITEM, token)
        self.owner = owner
        self.key = key
        self.val = val
        self.is_native = is_native

    def children(self) -> List[ASTNode]:
        return [self.owner, self.key, self.val]


# ============================================================================
# Calls
# ============================================================================

class FunctionCall(Expression):
    def __init__(self, token: Token, owner: Expression,
                 exprlist: ExpressionList, is_native: bool = False):
        super().__init__(ASTNodeType.FUNCTION_CALL, token)
        self.owner = owner
        self.exprlist = exprlist
        self.is_native = is_native

    def children(self) -> List[ASTNode]:
        return [self.owner, self.exprlist]


class MethodCall(Expression):
    def __init__(self, token: Token, owner: Expression, name: str,
                 exprlist: ExpressionList, is_native: bool = False):
        super().__init__(ASTNodeType.METHOD_CALL, token)
        self.owner = owner
        self.name = name
        self.exprlist = exprlist
        self.is_native = is_native

    def children(self) -> List[ASTNode]:
        return [self.owner, self.exprlist]


class New(Expression):
    def __init__(self, token: Token, cls: Expression, exprlist: ExpressionList):
        super().__init__(ASTNodeType.NEW, token)
        self.cls = cls
        self.exprlist = exprlist

    def children(self) -> List[ASTNode]:
        return [self.cls, self.exprlist]


# ============================================================================
# Operators
# ============================================================================

class Await(Expression):
    def __init__(self, token: Token, expr: Expression):
        super().__init__(ASTNodeType.AWAIT, token)
        self.expr = expr

    def children(self) -> List[ASTNode]:
        return [self.expr]


class PrefixOperator(Expression):
    """'not', unary '+' or unary '-'."""

    def __init__(self, token: Token, op: str, expr: Expression):
        super().__init__(ASTNodeType.PREFIX_OPERATOR, token)
        self.op = op
        self.expr = expr

    def children(self) -> List[ASTNode]:
        return [self.expr]


class BinaryOperator(Expression):
    """Binary operation; ``op`` is the operator spelling ('is not' included)."""

    def __init__(self, token: Token, op: str, left: Expression, right: Expression):
        super().__init__(ASTNodeType.BINARY_OPERATOR, token)
        self.op = op
        self.left = left
        self.right = right

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


class ConditionalOperator(Expression):
    """cond ? left : right"""

    def __init__(self, token: Token, cond: Expression, left: Expression,
                 right: Expression):
        super().__init__(ASTNodeType.CONDITIONAL_OPERATOR, token)
        self.cond = cond
        self.left = left
        self.right = right

    def children(self) -> List[ASTNode]:
        return [self.cond, self.left, self.right]


class PostfixOperator(Expression):
    """expr++ or expr--"""

    def __init__(self, token: Token, op: str, expr: Expression):
        super().__init__(ASTNodeType.POSTFIX_OPERATOR, token)
        self.op = op
        self.expr = expr

    def children(self) -> List[ASTNode]:
        return [self.expr]


class AugmentAssign(Expression):
    """expr += val, and the other compound assignments."""

    def __init__(self, token: Token, op: str, expr: Expression, val: Expression):
        super().__init__(ASTNodeType.AUGMENT_ASSIGN, token)
        self.op = op
        self.expr = expr
        self.val = val

    def children(self) -> List[ASTNode]:
        return [self.expr, self.val]


# ============================================================================
# Functions
# ============================================================================

class Function(Expression):
    """
    Function definition (def, async def, native def, or arrow).

    ``body`` is a str for native functions (spliced verbatim), a Block for
    ordinary functions, and either a Block or a single Expression for arrows.
    """

    def __init__(self, token: Token, name: Optional[str], arglist: ArgumentList,
                 body: Union[str, Block, Expression], is_native: bool = False,
                 is_async: bool = False, is_arrow: bool = False):
        super().__init__(ASTNodeType.FUNCTION, token)
        self.name = name
        self.arglist = arglist
        self.body = body
        self.is_native = is_native
        self.is_async = is_async
        self.is_arrow = is_arrow

    def children(self) -> List[ASTNode]:
        if isinstance(self.body, str):
            return []
        return [self.body]
