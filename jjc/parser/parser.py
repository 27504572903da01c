"""
jj Recursive Descent Parser

Turns the token list produced by the lexer into a Module AST. Binary
operators are parsed by precedence climbing over a precedence table; every
other form has its own method.

Lookahead is one token plus peeking at arbitrary offsets. The only
backtracking is the arrow-function probe, which tries an argument list
followed by '=>' and restores the cursor whatever happens.

Author: xwest
"""

from typing import List, Optional
from enum import IntEnum

from ..lexer.tokens import Token, TokenType
from .ast_nodes import *
from .errors import (
    ParseError, create_expected_token_error, create_expected_expression_error,
    create_expected_named_function_error, create_unnamed_function_statement_error
)


class Precedence(IntEnum):
    """Binary operator precedence levels, lowest first."""
    NONE = 0
    OR = 1              # or
    AND = 2             # and
    NOT = 3             # not (prefix)
    COMPARISON = 4      # == != < <= > >= is, is not, #< #<= #> #>=
    TERM = 5            # + - #+ #-
    FACTOR = 6          # * / % #* #/ #%
    UNARY = 7           # prefix + -, operand of FACTOR


BINARY_PRECEDENCE = {
    TokenType.OR: Precedence.OR,
    TokenType.AND: Precedence.AND,

    TokenType.EQUAL: Precedence.COMPARISON,
    TokenType.NOT_EQUAL: Precedence.COMPARISON,
    TokenType.LESS_THAN: Precedence.COMPARISON,
    TokenType.LESS_EQUAL: Precedence.COMPARISON,
    TokenType.GREATER_THAN: Precedence.COMPARISON,
    TokenType.GREATER_EQUAL: Precedence.COMPARISON,
    TokenType.NATIVE_LESS_THAN: Precedence.COMPARISON,
    TokenType.NATIVE_LESS_EQUAL: Precedence.COMPARISON,
    TokenType.NATIVE_GREATER_THAN: Precedence.COMPARISON,
    TokenType.NATIVE_GREATER_EQUAL: Precedence.COMPARISON,
    TokenType.IS: Precedence.COMPARISON,

    TokenType.PLUS: Precedence.TERM,
    TokenType.MINUS: Precedence.TERM,
    TokenType.NATIVE_PLUS: Precedence.TERM,
    TokenType.NATIVE_MINUS: Precedence.TERM,

    TokenType.STAR: Precedence.FACTOR,
    TokenType.SLASH: Precedence.FACTOR,
    TokenType.PERCENT: Precedence.FACTOR,
    TokenType.NATIVE_STAR: Precedence.FACTOR,
    TokenType.NATIVE_SLASH: Precedence.FACTOR,
    TokenType.NATIVE_PERCENT: Precedence.FACTOR,
}

AUGMENTED_ASSIGNMENTS = {
    TokenType.PLUS_ASSIGN,
    TokenType.MINUS_ASSIGN,
    TokenType.STAR_ASSIGN,
    TokenType.SLASH_ASSIGN,
    TokenType.PERCENT_ASSIGN,
}


class Parser:
    """
    jj recursive descent parser.

    Every token handed out by the parser is a copy stamped with the dotted
    name of the functions enclosing it (".outer.inner", "*" for anonymous
    functions, "." at module level).
    """

    def __init__(self, tokens: List[Token]):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer, ending with EOF
        """
        self.tokens = tokens
        self.current = 0
        self._context: List[str] = []

    def parse(self) -> Module:
        """Alias for parse_module()."""
        return self.parse_module()

    def parse_module(self) -> Module:
        """
        Parse the token stream into a Module.

        Raises:
            ParseError: At the first syntax error
        """
        token = self._here()

        doc = ""
        if self._check(TokenType.STRING):
            doc = self._advance().value

        packages = []
        while self._match(TokenType.PACKAGE):
            packages.append(self._consume(TokenType.STRING).value)
            self._consume(TokenType.SEMICOLON)
        if not packages:
            packages.append(token.location.uri)

        stmts = []
        while not self._check(TokenType.EOF):
            stmts.append(self._parse_statement())

        return Module(token, doc, packages, stmts)

    # Statements

    def _parse_statement(self) -> Statement:
        """Parse a statement."""
        token = self._here()

        if self._check(TokenType.CLASS):
            return self._parse_class()
        elif self._at_function():
            func = self._parse_primary()
            if func.name is None:
                raise create_unnamed_function_statement_error(func.token)
            return FunctionStatement(token, func)
        elif self._check(TokenType.LEFT_BRACE):
            return self._parse_block()
        elif self._match(TokenType.LET):
            name = self._consume(TokenType.NAME).value
            val = None
            if self._match(TokenType.ASSIGN):
                val = self._parse_expression()
            self._consume(TokenType.SEMICOLON)
            return Declaration(token, name, val)
        elif self._match(TokenType.IF):
            cond = self._parse_expression()
            body = self._parse_statement()
            other = None
            if self._match(TokenType.ELSE):
                other = self._parse_statement()
            return If(token, cond, body, other)
        elif self._match(TokenType.RETURN):
            expr = None
            if not self._check(TokenType.SEMICOLON):
                expr = self._parse_expression()
            self._consume(TokenType.SEMICOLON)
            return Return(token, expr)
        else:
            expr = self._parse_expression()
            self._consume(TokenType.SEMICOLON)
            return ExpressionStatement(token, expr)

    def _parse_class(self) -> Class:
        """Parse a class declaration; the body holds only named functions."""
        token = self._consume(TokenType.CLASS)
        name = self._consume(TokenType.NAME).value

        base = None
        if self._match(TokenType.EXTENDS):
            base = self._parse_expression()

        self._consume(TokenType.LEFT_BRACE)
        methods = []
        while not self._match(TokenType.RIGHT_BRACE):
            func = self._parse_primary()
            if not isinstance(func, Function) or func.name is None:
                raise create_expected_named_function_error(func.token)
            methods.append(func)

        return Class(token, name, base, methods)

    def _parse_block(self) -> Block:
        """Parse a braced block."""
        token = self._consume(TokenType.LEFT_BRACE)
        stmts = []
        while not self._match(TokenType.RIGHT_BRACE):
            stmts.append(self._parse_statement())
        return Block(token, stmts)

    # Expressions

    def _parse_expression(self) -> Expression:
        return self._parse_conditional()

    def _parse_conditional(self) -> Expression:
        """cond ? left : right, right associative."""
        expr = self._parse_precedence(Precedence.OR)
        token = self._here()
        if self._match(TokenType.QUESTION):
            left = self._parse_expression()
            self._consume(TokenType.COLON)
            right = self._parse_conditional()
            return ConditionalOperator(token, expr, left, right)
        return expr

    def _parse_precedence(self, precedence: Precedence) -> Expression:
        """Parse a binary expression whose operators bind at least as tightly as ``precedence``."""
        # Comparisons don't chain: 'a < b < c' is a syntax error
        compared = False

        token = self._here()
        if precedence <= Precedence.NOT and self._match(TokenType.NOT):
            operand = self._parse_precedence(Precedence.COMPARISON)
            left = PrefixOperator(token, "not", operand)
            compared = True
        else:
            left = self._parse_prefix()

        while True:
            token = self._here()
            operator_precedence = BINARY_PRECEDENCE.get(token.type)
            if operator_precedence is None or operator_precedence < precedence:
                break
            if operator_precedence == Precedence.COMPARISON:
                if compared:
                    break
                compared = True

            self._advance()
            op = token.type.value
            if token.type == TokenType.IS and self._match(TokenType.NOT):
                op = "is not"

            # Left associative
            right = self._parse_precedence(Precedence(operator_precedence + 1))
            left = BinaryOperator(token, op, left, right)

        return left

    def _parse_prefix(self) -> Expression:
        """Unary '+' and '-'."""
        token = self._here()
        if self._match(TokenType.PLUS) or self._match(TokenType.MINUS):
            return PrefixOperator(token, token.type.value, self._parse_postfix())
        return self._parse_postfix()

    def _parse_postfix(self) -> Expression:
        """Calls, indexing, attribute access, ++/-- and compound assignment."""
        expr = self._parse_primary()
        while True:
            token = self._here()
            if self._at_native_or_plain(TokenType.LEFT_PAREN):
                is_native = bool(self._match(TokenType.HASH))
                exprlist = self._parse_expression_list(
                    TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN)
                expr = FunctionCall(token, expr, exprlist, is_native)
            elif self._at_native_or_plain(TokenType.LEFT_BRACKET):
                is_native = bool(self._match(TokenType.HASH))
                self._consume(TokenType.LEFT_BRACKET)
                key = self._parse_expression()
                self._consume(TokenType.RIGHT_BRACKET)
                if self._match(TokenType.ASSIGN):
                    val = self._parse_expression()
                    expr = SetItem(token, expr, key, val, is_native)
                else:
                    expr = GetItem(token, expr, key, is_native)
            elif self._check(TokenType.PLUS_PLUS) or self._check(TokenType.MINUS_MINUS):
                op = self._advance().type.value
                expr = PostfixOperator(token, op, expr)
            elif token.type in AUGMENTED_ASSIGNMENTS:
                op = self._advance().type.value
                val = self._parse_expression()
                expr = AugmentAssign(token, op, expr, val)
            elif self._check(TokenType.DOT) or (
                    self._check(TokenType.HASH) and self._check(TokenType.NAME, 1)):
                is_native = bool(self._match(TokenType.HASH))
                if not is_native:
                    self._consume(TokenType.DOT)
                name = self._consume(TokenType.NAME).value
                if self._check(TokenType.LEFT_PAREN):
                    exprlist = self._parse_expression_list(
                        TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN)
                    expr = MethodCall(token, expr, name, exprlist, is_native)
                elif self._match(TokenType.ASSIGN):
                    val = self._parse_expression()
                    expr = SetAttribute(token, expr, name, val, is_native)
                else:
                    expr = GetAttribute(token, expr, name, is_native)
            else:
                break
        return expr

    def _parse_primary(self) -> Expression:
        """Parse literals, names, grouping, 'new', 'await' and functions."""
        token = self._here()

        # Functions first: '(x) => ...' must not be taken for a grouping
        if self._at_function() or self._at_arrow_function():
            return self._parse_function()

        if self._match(TokenType.LEFT_PAREN):
            expr = self._parse_expression()
            self._consume(TokenType.RIGHT_PAREN)
            return expr
        elif self._match(TokenType.NULL):
            return NullLiteral(token)
        elif self._match(TokenType.TRUE):
            return TrueLiteral(token)
        elif self._match(TokenType.FALSE):
            return FalseLiteral(token)
        elif self._match(TokenType.NUMBER):
            return NumberLiteral(token, token.value)
        elif self._match(TokenType.STRING):
            return StringLiteral(token, token.value)
        elif self._check(TokenType.LEFT_BRACKET):
            exprlist = self._parse_expression_list(
                TokenType.LEFT_BRACKET, TokenType.RIGHT_BRACKET)
            return ListLiteral(token, exprlist)
        elif self._match(TokenType.NEW):
            cls = self._parse_primary()
            exprlist = self._parse_expression_list(
                TokenType.LEFT_PAREN, TokenType.RIGHT_PAREN)
            return New(token, cls, exprlist)
        elif self._match(TokenType.AWAIT):
            # Whether await is allowed here is decided by the code generator
            return Await(token, self._parse_expression())
        elif self._at_native_or_plain(TokenType.NAME):
            is_native = bool(self._match(TokenType.HASH))
            name = self._consume(TokenType.NAME).value
            if self._match(TokenType.ASSIGN):
                val = self._parse_expression()
                return SetVariable(token, name, val, is_native)
            return GetVariable(token, name, is_native)

        raise create_expected_expression_error(token)

    def _parse_function(self) -> Function:
        """
        Parse a function definition.

        Forms:
            [#] [async] def [name] (args) { ... }    # native body is a string
            [async] (args) => body
            [async] name => body
        """
        token = self._here()
        is_arrow = not self._at_function()
        is_native = not is_arrow and bool(self._match(TokenType.HASH))
        is_async = bool(self._match(TokenType.ASYNC))

        name = None
        if not is_arrow:
            self._consume(TokenType.DEF)
            if self._check(TokenType.NAME):
                name = self._advance().value

        self._context.append("*" if name is None else name)

        if is_arrow and self._check(TokenType.NAME):
            name_token = self._advance()
            arglist = ArgumentList(name_token, [name_token.value], [])
        else:
            arglist = self._parse_argument_list()

        if is_arrow:
            self._consume(TokenType.FAT_ARROW)
            if self._check(TokenType.LEFT_BRACE):
                body = self._parse_block()
            else:
                body = self._parse_expression()
        elif is_native:
            body = self._consume(TokenType.STRING).value
        else:
            body = self._parse_block()

        self._context.pop()

        return Function(token, name, arglist, body,
                        is_native=is_native, is_async=is_async, is_arrow=is_arrow)

    def _parse_argument_list(self) -> ArgumentList:
        """Parse '(a, b, /opt, *rest)'."""
        token = self._consume(TokenType.LEFT_PAREN)
        args = []
        optargs = []
        vararg = None

        while self._check(TokenType.NAME):
            args.append(self._advance().value)
            if not (self._check(TokenType.SLASH) or self._check(TokenType.STAR) or
                    self._check(TokenType.RIGHT_PAREN)):
                self._consume(TokenType.COMMA)

        while self._match(TokenType.SLASH):
            optargs.append(self._consume(TokenType.NAME).value)
            if not (self._check(TokenType.STAR) or self._check(TokenType.RIGHT_PAREN)):
                self._consume(TokenType.COMMA)

        if self._match(TokenType.STAR):
            vararg = self._consume(TokenType.NAME).value

        self._consume(TokenType.RIGHT_PAREN)
        return ArgumentList(token, args, optargs, vararg)

    def _parse_expression_list(self, open_type: TokenType,
                               close_type: TokenType) -> ExpressionList:
        """Parse a delimited, comma separated list; '*expr' may only come last."""
        token = self._consume(open_type)
        exprs = []
        varexpr = None

        while not self._match(close_type):
            if self._match(TokenType.STAR):
                varexpr = self._parse_expression()
                self._consume(close_type)
                break
            exprs.append(self._parse_expression())
            if not self._check(close_type):
                self._consume(TokenType.COMMA)

        return ExpressionList(token, exprs, varexpr)

    # Lookahead predicates

    def _at_function(self) -> bool:
        """Check for '[#] [async] def'."""
        offset = 0
        if self._check(TokenType.HASH):
            offset += 1
        if self._check(TokenType.ASYNC, offset):
            offset += 1
        return self._check(TokenType.DEF, offset)

    def _at_arrow_function(self) -> bool:
        """
        Check for an arrow function without consuming anything.

        'name =>' is recognised directly. Otherwise an argument list is
        parsed speculatively; the cursor is restored afterwards, and since
        tokens are immutable nothing else can have changed.
        """
        offset = 1 if self._check(TokenType.ASYNC) else 0
        if self._check(TokenType.NAME, offset) and self._check(TokenType.FAT_ARROW, offset + 1):
            return True
        if not self._check(TokenType.LEFT_PAREN, offset):
            return False

        saved = self.current
        try:
            self.current += offset
            self._parse_argument_list()
            return self._check(TokenType.FAT_ARROW)
        except ParseError:
            return False
        finally:
            self.current = saved

    def _at_native_or_plain(self, token_type: TokenType) -> bool:
        """Check for ``token_type``, optionally preceded by the native marker '#'."""
        return self._check(token_type) or (
            self._check(TokenType.HASH) and self._check(token_type, 1))

    # Utility methods

    def _context_name(self) -> str:
        return "." + ".".join(self._context)

    def _peek(self, offset: int = 0) -> Token:
        """Return a token ahead without consuming; past the end is EOF."""
        position = min(self.current + offset, len(self.tokens) - 1)
        return self.tokens[position]

    def _here(self) -> Token:
        """Return the current token stamped with the current context."""
        return self._peek().with_context(self._context_name())

    def _check(self, token_type: TokenType, offset: int = 0) -> bool:
        """Check if a token matches type without consuming."""
        return self._peek(offset).type == token_type

    def _advance(self) -> Token:
        """Consume and return the current token (stamped)."""
        token = self._here()
        if token.type != TokenType.EOF:
            self.current += 1
        return token

    def _match(self, token_type: TokenType) -> Optional[Token]:
        """Consume and return the current token if it matches type."""
        if self._check(token_type):
            return self._advance()
        return None

    def _consume(self, token_type: TokenType) -> Token:
        """Consume token of expected type or raise error."""
        if self._check(token_type):
            return self._advance()
        raise create_expected_token_error(token_type, self._here())


def parse_string(source: str, filename: str = "<string>") -> Module:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: uri of the module; also its default package name

    Returns:
        Module AST

    Raises:
        TranspileError: If lexing or parsing fails
    """
    from ..lexer import tokenize_string

    tokens = tokenize_string(source, filename)
    parser = Parser(tokens)
    return parser.parse_module()


def parse_file(filepath: str) -> Module:
    """
    Convenience function to parse a source file.

    Raises:
        TranspileError: If lexing or parsing fails
        IOError: If file cannot be read
    """
    from ..lexer import tokenize_file

    tokens = tokenize_file(filepath)
    parser = Parser(tokens)
    return parser.parse_module()
