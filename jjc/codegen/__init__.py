"""
jj Code Generation Package

Lowers jj ASTs to JavaScript text and keeps the debug-info table that the
emitted program uses to print its own stack traces.

Author: xwest
"""

from .code_generator import (
    CodeGenerator, VARIABLE_PREFIX, ATTRIBUTE_PREFIX, ROOT_CLASS,
    PREFIX_OPERATORS, NATIVE_BINARY_OPERATORS, POLYMORPHIC_BINARY_OPERATORS
)
from .debug_info import DebugInfoTable
from .errors import CodeGenError

__all__ = [
    "CodeGenerator",
    "DebugInfoTable",
    "CodeGenError",
    "VARIABLE_PREFIX",
    "ATTRIBUTE_PREFIX",
    "ROOT_CLASS",
    "PREFIX_OPERATORS",
    "NATIVE_BINARY_OPERATORS",
    "POLYMORPHIC_BINARY_OPERATORS",
]
