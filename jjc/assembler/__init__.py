"""
jj Assembler Package

Joins translated units, the runtime block and the builtin prelude into one
runnable JavaScript program.

Author: xwest
"""

from .assembler import (
    Assembler, AssemblerConfig, find_js_packages, transpile_program, transpile_files
)
from .errors import AssemblyError
from .html import wrap_html
from .runtime import RUNTIME_PRELUDE, BUILTIN_PRELUDE

__all__ = [
    "Assembler",
    "AssemblerConfig",
    "AssemblyError",
    "find_js_packages",
    "transpile_program",
    "transpile_files",
    "wrap_html",
    "RUNTIME_PRELUDE",
    "BUILTIN_PRELUDE",
]
