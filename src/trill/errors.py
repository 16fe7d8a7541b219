"""Trill exception hierarchy.

Shared across the transpiler, walker, route emitter, and CLI so every
module raises and catches the same types.
"""

from pathlib import Path


class TrillError(Exception):
    """Base for all trill-specific errors."""


class TranspileError(TrillError):
    """A single template file could not be transpiled.

    Fatal for that file only. The directory walk logs it and moves on
    to the next sibling.
    """

    def __init__(self, path: str | Path, detail: str) -> None:
        self.path = str(path)
        self.detail = detail
        super().__init__(f"{self.path}: {detail}")


class TemplateParseError(TranspileError):
    """The template parser rejected a source file."""

    def __init__(self, path: str | Path, detail: str, lineno: int | None = None) -> None:
        self.lineno = lineno
        location = f"{path}:{lineno}" if lineno is not None else str(path)
        super().__init__(path, detail)
        self.args = (f"{location}: {detail}",)


class RouteTableError(TrillError):
    """The generated route table failed syntax re-validation."""


class StructuralError(TrillError):
    """Top-level invocation error. Aborts the build immediately.

    Each subclass carries a distinct process exit code.
    """

    exit_code: int = 3


class InvalidExtensionError(StructuralError):
    """File-mode invocation on a file without the template extension."""

    exit_code = 3


class InvalidPathError(StructuralError):
    """The input path is missing or is neither a file nor a directory."""

    exit_code = 4
