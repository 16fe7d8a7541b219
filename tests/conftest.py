"""Shared fixtures for the trill test suite."""

import re
from collections.abc import Callable
from pathlib import Path

import pytest

from trill.build.parser import ParseResult, component_id
from trill.build.types import ComponentRef
from trill.errors import TemplateParseError

_ISLAND_LINE_RE = re.compile(r"^island (\S+) (\S+)$", re.MULTILINE)


class FakeParser:
    """Line-based stand-in for the kida parser.

    ``island Name path`` lines become component references, a line
    reading ``!error`` is a syntax error, and the generated code records
    the filename and the calls made.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []

    def parse(self, source: str, *, filename: str) -> ParseResult:
        self.calls.append(filename)
        for lineno, line in enumerate(source.splitlines(), start=1):
            if line.strip() == "!error":
                raise TemplateParseError(filename, "unexpected !error", lineno)
        components = tuple(
            ComponentRef(
                id=component_id(filename, ordinal, match.group(1)),
                name=match.group(1),
                path=match.group(2),
            )
            for ordinal, match in enumerate(_ISLAND_LINE_RE.finditer(source))
        )
        return ParseResult(code=f"# transpiled\nSOURCE = {source!r}\n", components=components)


@pytest.fixture
def fake_parser() -> FakeParser:
    return FakeParser()


@pytest.fixture
def write_file() -> Callable[..., Path]:
    """Write ``content`` to ``root / rel``, creating parent directories."""

    def _write(root: Path, rel: str, content: str = "") -> Path:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write

