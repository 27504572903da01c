"""
Code Generator for jj.

Lowers a Module AST to JavaScript text in a single walk. Two pieces of state
are kept while walking:

- a stack of the Function nodes enclosing the current node, which names the
  diagnostic context (".outer.inner", "*" for anonymous functions) and
  decides whether 'await' is allowed;
- the debug-info table, which interns one ``context@uri@line`` entry per
  traced expression.

Traced ("outer") expressions push their debug index onto the runtime
diagnostic stack before evaluating and pop it right after, which is how the
emitted program prints "most recent call last" traces.

Author: xwest
"""

import json
from contextlib import contextmanager
from typing import List, Optional

from ..parser.ast_nodes import *
from .debug_info import DebugInfoTable
from .errors import (
    create_await_outside_async_error, create_arrow_cannot_be_async_error,
    create_native_cannot_be_async_error, create_unknown_operator_error,
    create_invalid_assignment_target_error, create_unknown_node_error
)


# Ordinary names get a prefix so they can never clash with host keywords or
# globals; native names are emitted as written.
VARIABLE_PREFIX = "jj"
ATTRIBUTE_PREFIX = "aa"

# Base class of classes declared without 'extends'
ROOT_CLASS = "jjObject"

# Name of the diagnostic stack parameter threaded through every call
STACK = "stack"

PREFIX_OPERATORS = {
    "not": "!",
    "+": "+",
    "-": "-",
}

# Binary operators lowered to the host's own infix operators
NATIVE_BINARY_OPERATORS = {
    "+": "+", "-": "-", "*": "*", "/": "/", "%": "%",
    "or": "||", "and": "&&", "is": "===", "is not": "!==",
    "#<": "<", "#>": ">", "#<=": "<=", "#>=": ">=",
    "#+": "+", "#-": "-", "#*": "*", "#/": "/", "#%": "%",
}

# Binary operators lowered to calls into the runtime comparison protocol
POLYMORPHIC_BINARY_OPERATORS = {
    "==": "op__eq__", "!=": "op__ne__",
    "<": "op__lt__", "<=": "op__le__", ">": "op__gt__", ">=": "op__ge__",
}

POSTFIX_OPERATORS = {"++", "--"}

AUGMENTED_OPERATORS = {"+=", "-=", "*=", "/=", "%="}


class CodeGenerator:
    """
    Translates jj ASTs to JavaScript source text.

    One generator should be used per module. Several generators may share a
    DebugInfoTable so that all modules of a program index into one table.
    """

    def __init__(self, debug_info: Optional[DebugInfoTable] = None):
        self.debug_info = debug_info if debug_info is not None else DebugInfoTable()
        self._context_stack: List[Function] = []

    # Context and debug info

    def get_debug_info(self) -> List[str]:
        return self.debug_info.entries()

    def get_context_name(self) -> str:
        return "." + ".".join(
            "*" if node.name is None else node.name for node in self._context_stack)

    def is_inside_async_function(self) -> bool:
        return bool(self._context_stack) and self._context_stack[-1].is_async

    @contextmanager
    def _function_context(self, node: Function):
        self._context_stack.append(node)
        try:
            yield
        finally:
            self._context_stack.pop()

    def get_debug_index(self, node: ASTNode) -> int:
        location = node.token.location
        return self.debug_info.intern(self.get_context_name(), location.uri, location.line)

    # Modules and statements

    def translate_module(self, module: Module) -> str:
        return "".join(self.translate_statement(stmt) for stmt in module.stmts)

    def translate_statement(self, node: Statement) -> str:
        if isinstance(node, ExpressionStatement):
            return "\n" + self.translate_outer_expression(node.expr) + ";"
        elif isinstance(node, Class):
            return self._translate_class(node)
        elif isinstance(node, FunctionStatement):
            return ("\nconst " + VARIABLE_PREFIX + node.func.name + " = " +
                    self.translate_inner_expression(node.func) + ";")
        elif isinstance(node, Block):
            stmts = [self.translate_statement(stmt).replace("\n", "\n  ")
                     for stmt in node.stmts]
            return "\n{" + "".join(stmts) + "\n}"
        elif isinstance(node, Return):
            if node.expr is None:
                return "\nreturn;"
            return "\nreturn " + self.translate_outer_expression(node.expr) + ";"
        elif isinstance(node, Declaration):
            value = ""
            if node.val is not None:
                value = " = " + self.translate_outer_expression(node.val)
            return "\nlet " + VARIABLE_PREFIX + node.name + value + ";"
        elif isinstance(node, If):
            cond = self.translate_outer_expression(node.cond)
            body = self.translate_statement(node.body)
            other = ""
            if node.other is not None:
                other = "else " + self.translate_statement(node.other)
            return "\nif (" + cond + ")" + body + other
        raise create_unknown_node_error("statement", node)

    def _translate_class(self, node: Class) -> str:
        """An empty subclass, then one prototype assignment per method."""
        base = ROOT_CLASS
        if node.base is not None:
            base = self.translate_outer_expression(node.base)
        class_name = VARIABLE_PREFIX + node.name
        text = "\nclass " + class_name + " extends " + base + "{}"
        for method in node.methods:
            text += ("\n" + class_name + ".prototype." + ATTRIBUTE_PREFIX +
                     method.name + " = " + self.translate_inner_expression(method) + ";")
        return text

    # Expressions

    def translate_outer_expression(self, node: Expression) -> str:
        """Translate ``node`` wrapped in a push/pop of its debug index."""
        index = self.get_debug_index(node)
        expr = self.translate_inner_expression(node)
        return f"({STACK}.push({index}),popStack({STACK},{expr}))"

    def translate_inner_expression(self, node: Expression) -> str:
        if isinstance(node, NullLiteral):
            return "null"
        elif isinstance(node, TrueLiteral):
            return "true"
        elif isinstance(node, FalseLiteral):
            return "false"
        elif isinstance(node, NumberLiteral):
            return node.val
        elif isinstance(node, StringLiteral):
            return json.dumps(node.val)
        elif isinstance(node, ListLiteral):
            return "[" + self._translate_expression_list(node.exprlist, True) + "]"
        elif isinstance(node, GetVariable):
            return self._variable_name(node.name, node.is_native)
        elif isinstance(node, SetVariable):
            return ("(" + self._variable_name(node.name, node.is_native) + " = " +
                    self.translate_inner_expression(node.val) + ")")
        elif isinstance(node, GetAttribute):
            return (self.translate_inner_expression(node.owner) + "." +
                    self._attribute_name(node.name, node.is_native))
        elif isinstance(node, SetAttribute):
            return ("(" + self.translate_inner_expression(node.owner) + "." +
                    self._attribute_name(node.name, node.is_native) + " = " +
                    self.translate_inner_expression(node.val) + ")")
        elif isinstance(node, GetItem):
            return self._translate_get_item(node)
        elif isinstance(node, SetItem):
            return self._translate_set_item(node)
        elif isinstance(node, FunctionCall):
            owner = self.translate_inner_expression(node.owner)
            args = self._translate_expression_list(node.exprlist, node.is_native)
            return owner + "(" + args + ")"
        elif isinstance(node, MethodCall):
            owner = self.translate_inner_expression(node.owner)
            name = self._attribute_name(node.name, node.is_native)
            args = self._translate_expression_list(node.exprlist, node.is_native)
            return owner + "." + name + "(" + args + ")"
        elif isinstance(node, New):
            cls = self.translate_inner_expression(node.cls)
            args = self._translate_expression_list(node.exprlist, False)
            return "new (" + cls + ")(" + args + ")"
        elif isinstance(node, Await):
            if not self.is_inside_async_function():
                raise create_await_outside_async_error(node.token)
            return "(yield " + self.translate_inner_expression(node.expr) + ")"
        elif isinstance(node, PrefixOperator):
            op = PREFIX_OPERATORS.get(node.op)
            if op is None:
                raise create_unknown_operator_error("prefix", node.op, node.token)
            return "(" + op + self.translate_inner_expression(node.expr) + ")"
        elif isinstance(node, BinaryOperator):
            return self._translate_binary_operator(node)
        elif isinstance(node, ConditionalOperator):
            return ("(" + self.translate_inner_expression(node.cond) +
                    "?" + self.translate_inner_expression(node.left) +
                    ":" + self.translate_inner_expression(node.right) + ")")
        elif isinstance(node, PostfixOperator):
            if node.op not in POSTFIX_OPERATORS:
                raise create_unknown_operator_error("postfix", node.op, node.token)
            return "(" + self._translate_assignment_target(node.expr) + node.op + ")"
        elif isinstance(node, AugmentAssign):
            if node.op not in AUGMENTED_OPERATORS:
                raise create_unknown_operator_error(
                    "augmented assignment", node.op, node.token)
            return ("(" + self._translate_assignment_target(node.expr) + " " +
                    node.op + " " + self.translate_inner_expression(node.val) + ")")
        elif isinstance(node, Function):
            return self._translate_function(node)
        raise create_unknown_node_error("expression", node)

    def _translate_binary_operator(self, node: BinaryOperator) -> str:
        left = self.translate_inner_expression(node.left)
        right = self.translate_inner_expression(node.right)

        op = NATIVE_BINARY_OPERATORS.get(node.op)
        if op is not None:
            return "(" + left + op + right + ")"

        function = POLYMORPHIC_BINARY_OPERATORS.get(node.op)
        if function is not None:
            return f"{function}({STACK},{left},{right})"

        raise create_unknown_operator_error("binary", node.op, node.token)

    def _translate_get_item(self, node: GetItem) -> str:
        owner = self.translate_inner_expression(node.owner)
        key = self.translate_inner_expression(node.key)
        if node.is_native:
            return owner + "[" + key + "]"
        return f"op__getitem__({STACK},{owner},{key})"

    def _translate_set_item(self, node: SetItem) -> str:
        owner = self.translate_inner_expression(node.owner)
        key = self.translate_inner_expression(node.key)
        val = self.translate_inner_expression(node.val)
        if node.is_native:
            return "(" + owner + "[" + key + "] = " + val + ")"
        return f"op__setitem__({STACK},{owner},{key},{val})"

    def _translate_assignment_target(self, node: Expression) -> str:
        """Translate an expression that ++, -- or a compound assignment updates."""
        if isinstance(node, GetVariable):
            return self._variable_name(node.name, node.is_native)
        elif isinstance(node, GetAttribute):
            return (self.translate_inner_expression(node.owner) + "." +
                    self._attribute_name(node.name, node.is_native))
        elif isinstance(node, GetItem) and node.is_native:
            return self._translate_get_item(node)
        raise create_invalid_assignment_target_error(node.token)

    def _translate_function(self, node: Function) -> str:
        name = ""
        if node.name is not None:
            name = self._variable_name(node.name, node.is_native)
        arglist = self._translate_argument_list(node.arglist, node.is_native)

        if node.is_arrow and node.is_async:
            raise create_arrow_cannot_be_async_error(node.token)
        if node.is_native and node.is_async:
            raise create_native_cannot_be_async_error(node.token)

        with self._function_context(node):
            if isinstance(node.body, str):
                body = node.body
            elif isinstance(node.body, Block):
                body = self.translate_statement(node.body)
            else:
                body = self.translate_outer_expression(node.body)

        if node.is_arrow:
            return arglist + "=>" + body
        elif node.is_async:
            return "asyncf(function* " + name + arglist + body + ")"
        return "function " + name + arglist + body

    def _translate_expression_list(self, node: ExpressionList, is_native: bool) -> str:
        exprs = [self.translate_inner_expression(expr) for expr in node.exprs]
        if not is_native:
            exprs.insert(0, STACK)
        if node.varexpr is not None:
            exprs.append("..." + self.translate_inner_expression(node.varexpr))
        return ",".join(exprs)

    def _translate_argument_list(self, node: ArgumentList, is_native: bool) -> str:
        args = [VARIABLE_PREFIX + arg for arg in node.args + node.optargs]
        if not is_native:
            args.insert(0, STACK)
        if node.vararg is not None:
            args.append("..." + VARIABLE_PREFIX + node.vararg)
        return "(" + ",".join(args) + ")"

    @staticmethod
    def _variable_name(name: str, is_native: bool) -> str:
        return name if is_native else VARIABLE_PREFIX + name

    @staticmethod
    def _attribute_name(name: str, is_native: bool) -> str:
        return name if is_native else ATTRIBUTE_PREFIX + name
