"""
Test suite for the jj code generator.

Tests cover:
- Lowering of operators, names, calls and assignments
- Traced (outer) expressions and the debug-info table
- Functions, async functions, arrows, native functions and classes
- Code generation errors

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from jjc.lexer import tokenize_string
from jjc.parser import parse_string, BinaryOperator, NumberLiteral, Expression, ASTNodeType
from jjc.codegen import CodeGenerator, DebugInfoTable, CodeGenError


def traced(index: int, expr: str) -> str:
    return f"(stack.push({index}),popStack(stack,{expr}))"


class CodeGenTestCase(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures."""
        self.generator = CodeGenerator()

    def _translate(self, code: str) -> str:
        return self.generator.translate_module(parse_string(code, "t.jj"))

    def _inner(self, code: str) -> str:
        """Translate one expression statement, minus its trace wrapper."""
        module = parse_string(code + ";", "t.jj")
        return self.generator.translate_inner_expression(module.stmts[0].expr)


class TestExpressions(CodeGenTestCase):
    """Test cases for expression lowering."""

    def test_expression_statement_is_traced(self):
        self.assertEqual(self._translate("1 + 2 * 3;"),
                         "\n" + traced(1, "(1+(2*3))") + ";")

    def test_native_and_polymorphic_comparison(self):
        self.assertEqual(self._inner("a #< b"), "(jja<jjb)")
        self.assertEqual(self._inner("a < b"), "op__lt__(stack,jja,jjb)")
        self.assertEqual(self._inner("a == b"), "op__eq__(stack,jja,jjb)")
        self.assertEqual(self._inner("a != b"), "op__ne__(stack,jja,jjb)")
        self.assertEqual(self._inner("a >= b"), "op__ge__(stack,jja,jjb)")

    def test_word_operators(self):
        self.assertEqual(self._inner("a is not b"), "(jja!==jjb)")
        self.assertEqual(self._inner("a is b"), "(jja===jjb)")
        self.assertEqual(self._inner("a and b or c"), "((jja&&jjb)||jjc)")
        self.assertEqual(self._inner("not a"), "(!jja)")
        self.assertEqual(self._inner("-a"), "(-jja)")

    def test_literals(self):
        self.assertEqual(self._inner("null"), "null")
        self.assertEqual(self._inner("true"), "true")
        self.assertEqual(self._inner("2.5"), "2.5")
        self.assertEqual(self._inner("x = 'a\"b'"), '(jjx = "a\\"b")')
        self.assertEqual(self._inner("[1, 2, *xs]"), "[1,2,...jjxs]")

    def test_names_are_prefixed(self):
        self.assertEqual(self._inner("x"), "jjx")
        self.assertEqual(self._inner("#x"), "x")
        self.assertEqual(self._inner("o.name"), "jjo.aaname")
        self.assertEqual(self._inner("o#name"), "jjo.name")

    def test_assignments(self):
        self.assertEqual(self._inner("x = 1"), "(jjx = 1)")
        self.assertEqual(self._inner("o.f = 1"), "(jjo.aaf = 1)")
        self.assertEqual(self._inner("xs[0] = 1"), "op__setitem__(stack,jjxs,0,1)")
        self.assertEqual(self._inner("xs#[0] = 1"), "(jjxs[0] = 1)")

    def test_items(self):
        self.assertEqual(self._inner("xs[0]"), "op__getitem__(stack,jjxs,0)")
        self.assertEqual(self._inner("xs#[0]"), "jjxs[0]")

    def test_calls_thread_the_stack(self):
        self.assertEqual(self._inner("f(1, *r)"), "jjf(stack,1,...jjr)")
        self.assertEqual(self._inner("o.m(1)"), "jjo.aam(stack,1)")
        self.assertEqual(self._inner("#console#log(1)"), "console.log(1)")
        self.assertEqual(self._inner("new Foo(1)"), "new (jjFoo)(stack,1)")

    def test_conditional(self):
        self.assertEqual(self._inner("a ? b : c"), "(jja?jjb:jjc)")

    def test_update_in_place(self):
        self.assertEqual(self._inner("x++"), "(jjx++)")
        self.assertEqual(self._inner("o.n -= 1"), "(jjo.aan -= 1)")
        self.assertEqual(self._inner("xs#[0] += 1"), "(jjxs[0] += 1)")

    def test_invalid_update_target(self):
        with self.assertRaises(CodeGenError) as cm:
            self._inner("f()++")
        self.assertEqual(cm.exception.code, "C005")

        with self.assertRaises(CodeGenError):
            self._inner("xs[0] += 1")


class TestStatements(CodeGenTestCase):
    """Test cases for statement lowering."""

    def test_declaration(self):
        self.assertEqual(self._translate("let x = 1; let y;"),
                         "\nlet jjx = " + traced(1, "1") + ";\nlet jjy;")

    def test_if_else(self):
        self.assertEqual(
            self._translate("if a { b; } else c;"),
            "\nif (" + traced(1, "jja") + ")\n{\n  " + traced(1, "jjb") + ";\n}"
            "else \n" + traced(1, "jjc") + ";")

    def test_function_statement(self):
        self.assertEqual(
            self._translate("def f(a, /b, *c) { return a; }"),
            "\nconst jjf = function jjf(stack,jja,jjb,...jjc)\n{"
            "\n  return " + traced(1, "jja") + ";\n};")
        self.assertEqual(self.generator.get_debug_info(), ["??@??@??", ".f@t.jj@1"])

    def test_bare_return(self):
        self.assertIn("\n  return;", self._translate("def f() { return; }"))

    def test_native_function(self):
        # Parameters keep their prefix; only the stack parameter is dropped
        self.assertEqual(self._translate('# def f(x, *r) "{ return jjx; }"'),
                         "\nconst jjf = function f(jjx,...jjr){ return jjx; };")

    def test_multiplicative_operators(self):
        self.assertEqual(self._inner("a % b"), "(jja%jjb)")
        self.assertEqual(self._inner("a #* b / c"), "((jja*jjb)/jjc)")
        self.assertEqual(self._translate("let y = 2 * 3;"),
                         "\nlet jjy = " + traced(1, "(2*3)") + ";")

    def test_async_function(self):
        self.assertEqual(
            self._translate("async def f() { return await g(); }"),
            "\nconst jjf = asyncf(function* jjf(stack)\n{"
            "\n  return " + traced(1, "(yield jjg(stack))") + ";\n});")

    def test_arrow_function(self):
        self.assertEqual(
            self._translate("(x) => x + 1;"),
            "\n" + traced(1, "(stack,jjx)=>" + traced(2, "(jjx+1)")) + ";")
        self.assertEqual(self.generator.get_debug_info()[1:],
                         [".@t.jj@1", ".*@t.jj@1"])

    def test_class(self):
        self.assertEqual(
            self._translate("class A { def f() { return 1; } }"),
            "\nclass jjA extends jjObject{}"
            "\njjA.prototype.aaf = function jjf(stack)\n{"
            "\n  return " + traced(1, "1") + ";\n};")

    def test_class_with_base(self):
        self.assertEqual(self._translate("class A extends B {}"),
                         "\nclass jjA extends " + traced(1, "jjB") + "{}")


class TestAsyncErrors(CodeGenTestCase):
    """await and async are checked while lowering."""

    def _error(self, code: str) -> CodeGenError:
        with self.assertRaises(CodeGenError) as cm:
            self._translate(code)
        return cm.exception

    def test_await_in_plain_function(self):
        error = self._error("def f() { await g(); }")
        self.assertEqual(error.code, "C001")
        self.assertEqual(error.message,
                         "Await can only be called from inside an async function")

    def test_await_at_module_level(self):
        self.assertEqual(self._error("await g();").code, "C001")

    def test_await_in_arrow_inside_async(self):
        """Only the innermost function counts."""
        self.assertEqual(self._error("async def f() { h(() => await g()); }").code, "C001")

    def test_async_arrow(self):
        self.assertEqual(self._error("async (x) => x;").code, "C002")

    def test_async_native(self):
        self.assertEqual(self._error('# async def f() "{}"').code, "C003")

    def test_unknown_operator(self):
        token = tokenize_string("x")[0].with_context(".")
        node = BinaryOperator(token, "^", NumberLiteral(token, "1"), NumberLiteral(token, "2"))

        with self.assertRaises(CodeGenError) as cm:
            self.generator.translate_inner_expression(node)
        self.assertEqual(cm.exception.code, "C004")
        self.assertEqual(cm.exception.message, "No such binary operator: ^")

    def test_unknown_node(self):
        token = tokenize_string("x")[0].with_context(".")

        with self.assertRaises(CodeGenError) as cm:
            self.generator.translate_inner_expression(Expression(ASTNodeType.NUMBER, token))
        self.assertEqual(cm.exception.code, "C006")


class TestDebugInfo(unittest.TestCase):
    """Test cases for the debug-info table."""

    def test_sentinel(self):
        table = DebugInfoTable()
        self.assertEqual(len(table), 1)
        self.assertEqual(table[0], "??@??@??")

    def test_interning_is_idempotent(self):
        table = DebugInfoTable()

        first = table.intern(".f", "m.jj", 3)
        second = table.intern(".g", "m.jj", 3)

        self.assertEqual(first, 1)
        self.assertEqual(second, 2)
        self.assertEqual(table.intern(".f", "m.jj", 3), first)
        self.assertEqual(table.entries(), ["??@??@??", ".f@m.jj@3", ".g@m.jj@3"])

    def test_same_line_shares_an_index(self):
        generator = CodeGenerator()
        code = generator.translate_module(parse_string("a; b;\nc;", "t.jj"))

        self.assertEqual(code.count("stack.push(1)"), 2)
        self.assertEqual(code.count("stack.push(2)"), 1)

    def test_generators_share_a_table(self):
        table = DebugInfoTable()
        CodeGenerator(table).translate_module(parse_string("a;", "one.jj"))
        code = CodeGenerator(table).translate_module(parse_string("a;", "two.jj"))

        self.assertIn("stack.push(2)", code)
        self.assertEqual(table.entries()[1:], [".@one.jj@1", ".@two.jj@1"])


if __name__ == '__main__':
    unittest.main()
