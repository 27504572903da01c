"""
Program assembler for jj.

Joins the translated units of one compilation into a single self-contained
JavaScript program. Each unit becomes a ``uriTable`` entry that is run at most
once, on first import; packages are aliases for uris. The runtime block and
the compiled builtin prelude come first, and the program ends by importing
the entry unit inside ``tryAndCatch`` so uncaught errors print a jj trace.

Author: xwest
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from ..codegen import CodeGenerator, DebugInfoTable
from ..parser import parse_string
from .errors import AssemblyError, create_duplicate_package_error, create_duplicate_uri_error
from .runtime import RUNTIME_PRELUDE, BUILTIN_PRELUDE

logger = logging.getLogger(__name__)

# Marker lines that let a passthrough JavaScript unit claim package names
JS_PACKAGE_PATTERN = re.compile(r"^// jj package: ([a-zA-Z0-9_.]+)\r?$", re.MULTILINE)


@dataclass
class AssemblerConfig:
    """Settings for one compilation."""
    passthrough_suffix: str = ".js"
    entry_uri: Optional[str] = None
    prelude: str = BUILTIN_PRELUDE
    prelude_uri: str = "<prelude>"


def find_js_packages(text: str) -> List[str]:
    """Package names declared by ``// jj package: name`` lines."""
    return JS_PACKAGE_PATTERN.findall(text)


class Assembler:
    """
    Collects units and produces the final program.

    All units share one debug-info table so every trace index in the program
    refers to the same ``debugInfo`` array; each unit still gets its own
    CodeGenerator.
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        self.config = config if config is not None else AssemblerConfig()
        self.debug_info = DebugInfoTable()
        self.package_table: Dict[str, str] = {}
        self.uri_table: Dict[str, str] = {}
        self.last_uri: Optional[str] = None

        # Compiled first so its debug entries come before any unit's
        self.prelude = self._translate(self.config.prelude, self.config.prelude_uri)[0]

    def _translate(self, text: str, uri: str) -> Tuple[str, List[str]]:
        module = parse_string(text, uri)
        generator = CodeGenerator(self.debug_info)
        return generator.translate_module(module), module.packages

    def add_package(self, pkg: str, uri: str):
        if pkg in self.package_table:
            raise create_duplicate_package_error(pkg, self.package_table[pkg], uri)
        logger.debug("package %s -> %s", pkg, uri)
        self.package_table[pkg] = uri

    def add_uri(self, uri: str, body: str):
        if uri in self.uri_table:
            raise create_duplicate_uri_error(uri)
        self.uri_table[uri] = body

    def add_unit(self, uri: str, text: str):
        """Translate (or pass through) one unit and register its packages."""
        if uri.endswith(self.config.passthrough_suffix):
            logger.debug("passing through %s", uri)
            body = "\n" + text
            packages = find_js_packages(text)
        else:
            logger.debug("translating %s", uri)
            body, packages = self._translate(text, uri)
            body = body.replace("\n", "\n  ")

        self.add_uri(uri, body)
        for pkg in packages:
            self.add_package(pkg, uri)
        self.last_uri = uri

    def entry_uri(self) -> str:
        uri = self.config.entry_uri if self.config.entry_uri is not None else self.last_uri
        if uri is None:
            raise AssemblyError("Nothing to assemble: no units were added")
        if uri not in self.uri_table:
            raise AssemblyError(f"Entry module {uri} is not one of the units")
        return uri

    def assemble(self) -> str:
        entry = self.entry_uri()
        logger.debug("assembling %d unit(s), entry %s, %d debug entries",
                     len(self.uri_table), entry, len(self.debug_info))

        parts = [
            "// Autogenerated from jj->javascript transpiler",
            "\n// jshint esversion: 6",
            "\n(function() {",
            '\n"use strict";',
            RUNTIME_PRELUDE,
            "\nconst moduleCache = Object.create(null);",
            "\nconst debugInfo = " + json.dumps(self.debug_info.entries()) + ";",
            "\nconst packageTable = Object.create(null);",
        ]
        for pkg, uri in self.package_table.items():
            parts.append(f"\npackageTable[{json.dumps(pkg)}] = {json.dumps(uri)};")

        parts.append("\nconst uriTable = Object.create(null);")
        for uri, body in self.uri_table.items():
            parts.append(f"\nuriTable[{json.dumps(uri)}] = function(stack, exports) {{")
            parts.append(body)
            parts.append("\n};")

        parts.extend([
            "\n// Stack used only while the builtin prelude is defined",
            "\nconst stack = [];",
            self.prelude,
            "\ntryAndCatch(stack => {",
            f"\n  importUri(stack, {json.dumps(entry)});",
            "\n});",
            "\n})();",
            "\n",
        ])
        return "".join(parts)


def transpile_program(units: Iterable[Tuple[str, str]],
                      config: Optional[AssemblerConfig] = None) -> str:
    """
    Compile ``(uri, text)`` pairs into one program.

    The last pair is the entry module unless ``config.entry_uri`` says
    otherwise.

    Raises:
        TranspileError: On the first error in any unit
    """
    assembler = Assembler(config)
    for uri, text in units:
        assembler.add_unit(uri, text)
    return assembler.assemble()


def transpile_files(paths: Iterable[str],
                    config: Optional[AssemblerConfig] = None) -> str:
    """Like transpile_program, using each path as its unit's uri."""
    units = []
    for path in paths:
        with open(path, 'r', encoding='utf-8') as f:
            units.append((path, f.read()))
    return transpile_program(units, config)
