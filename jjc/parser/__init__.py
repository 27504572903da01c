"""
jj Parser Package

Implements a recursive descent parser for the jj language, producing an AST
whose nodes all carry their originating token.

Key Features:
- Precedence climbing for binary operators
- Postfix chains (calls, indexing, attributes, ++/--, compound assignment)
- Native '#' escapes on names, calls, attributes and indexing
- Speculative arrow-function detection with cursor restore

Author: xwest
"""

from .ast_nodes import *
from .parser import Parser, parse_string, parse_file
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser", "parse_string", "parse_file",

    # AST nodes
    "ASTNode", "ASTNodeType", "Statement", "Expression",
    "ArgumentList", "ExpressionList",
    "Module", "Class", "FunctionStatement", "Block", "Return", "Declaration",
    "If", "ExpressionStatement",
    "NumberLiteral", "StringLiteral", "ListLiteral",
    "NullLiteral", "TrueLiteral", "FalseLiteral",
    "GetVariable", "SetVariable", "GetAttribute", "SetAttribute",
    "GetItem", "SetItem", "FunctionCall", "MethodCall", "New", "Await",
    "PrefixOperator", "BinaryOperator", "ConditionalOperator",
    "PostfixOperator", "AugmentAssign", "Function",

    # Error handling
    "ParseError",
]
