"""
Error handling for the jj assembler.

Author: xwest
"""

from ..lexer.errors import TranspileError


class AssemblyError(TranspileError):
    """Exception raised when units cannot be joined into one program."""
    pass


def create_duplicate_package_error(pkg: str, old_uri: str, new_uri: str) -> AssemblyError:
    return AssemblyError(
        f"Duplicate package: {pkg} (defined in both {old_uri} and {new_uri})",
        code="A001"
    )


def create_duplicate_uri_error(uri: str) -> AssemblyError:
    return AssemblyError(f"Duplicate uri: {uri}", code="A002")
