#!/usr/bin/env python3
"""
Main test runner for jj compiler tests.

Runs a quick pass of the whole pipeline on a sample program, then the unit
test suite under tests/.

Author: xwest
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


SAMPLE_PROGRAM = """
"Sample module"
package "sample.main";

class Counter {
    def increment() {
        #this.count += 1;
        return #this.count;
    }
}

async def fetchTwice(f) {
    let first = await f();
    let second = await f();
    return [first, second];
}

def main() {
    let counter = new Counter();
    // Constructors take no part in instance setup; fields are set directly
    counter#count = 0;
    counter.increment();
    assertEqual(counter.increment(), 2);
    let double = (x) => x #* 2;
    print(double(21) < 50 ? "small" : "large");
}

main();
"""


def run_all_tests():
    """Run all jj compiler tests."""

    print("🚀 jj Compiler Test Suite")
    print("=" * 60)

    # Test if basic imports work
    try:
        from jjc.lexer.lexer import Lexer
        from jjc.parser.parser import Parser
        from jjc.codegen.code_generator import CodeGenerator
        from jjc.assembler import Assembler
        from jjc.lexer.errors import TranspileError

        print("✅ All compiler modules imported successfully")
        print()

    except ImportError as e:
        print(f"❌ Failed to import compiler modules: {e}")
        return False

    # Test a simple compilation pipeline
    print("Testing compilation pipeline...")
    try:
        print("  🔧 Lexing...")
        tokens = Lexer(SAMPLE_PROGRAM, "sample.jj").tokenize()
        print(f"     Generated {len(tokens)} tokens")

        print("  🔧 Parsing...")
        module = Parser(tokens).parse()
        print(f"     Generated AST with {len(module.stmts)} top-level statements")

        print("  🔧 Code Generation...")
        generator = CodeGenerator()
        code = generator.translate_module(module)
        print(f"     Generated {len(code.splitlines())} lines, "
              f"{len(generator.get_debug_info())} debug entries")

        print("  🔧 Assembly...")
        assembler = Assembler()
        assembler.add_unit("sample.jj", SAMPLE_PROGRAM)
        program = assembler.assemble()
        print(f"     Assembled program of {len(program)} characters")

        print()
        print("✅ Full compilation pipeline test PASSED")
        print()

    except TranspileError as e:
        print(f"❌ Compilation pipeline test FAILED:\n{e}")
        return False

    # Test error handling
    print("  ❌ Testing error handling...")
    try:
        Assembler().add_unit("bad.jj", "def f() { await g(); }")
        print("     ❌ Error handling test failed: expected an error but got none")
        return False
    except TranspileError as e:
        print(f"     ✅ Error handling successful: {e.code} {e.message}")
    print()

    # Unit tests
    print("Running unit tests...")
    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"))
    result = unittest.TextTestRunner(verbosity=1).run(suite)
    if not result.wasSuccessful():
        return False

    print()
    print("🎉 All tests PASSED!")
    return True


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
