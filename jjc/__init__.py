"""
jj Compiler Package

A source-to-source compiler from jj, a small dynamically typed language, to
JavaScript. The emitted program carries its own runtime and prints jj-level
stack traces when something goes wrong.

Architecture:
    jjc/
    ├── lexer/           # Tokenization and error reporting
    ├── parser/          # Recursive-descent parser and AST
    ├── codegen/         # Lowering to JavaScript, debug-info table
    └── assembler/       # Runtime, builtin prelude, program layout

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@jj-lang.org"
__license__ = "MIT"

from .lexer import Lexer, TranspileError
from .parser import Parser
from .codegen import CodeGenerator
from .assembler import Assembler, AssemblerConfig, transpile_program, transpile_files

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "CodeGenerator",
    "Assembler",
    "AssemblerConfig",
    "TranspileError",

    # Entry points
    "transpile_program",
    "transpile_files",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
