"""Tests for trill.build.transpiler — single-file transpilation."""

from collections.abc import Callable
from pathlib import Path

import pytest

from trill.build.transpiler import (
    entry_import_path,
    is_client_module,
    read_first_line,
    transpile_file,
    transpile_source,
)
from trill.build.types import ClientComponentRef, RawCode
from trill.config import BuildConfig
from trill.errors import TemplateParseError, TranspileError


class TestClientDirective:
    def test_first_line_is_trimmed(self) -> None:
        assert read_first_line("  'use client'\t\r\n<div/>") == "'use client'"

    def test_leading_blank_lines_are_skipped(self) -> None:
        assert read_first_line("\n\n   \n'use client'\n") == "'use client'"

    def test_empty_source(self) -> None:
        assert read_first_line("") == ""

    def test_directive_must_be_exact(self) -> None:
        assert is_client_module("'use client'\n", "'use client'")
        assert not is_client_module('"use client"\n', "'use client'")
        assert not is_client_module("<p>'use client'</p>\n", "'use client'")


class TestEntryImportPath:
    def test_path_outside_assets_climbs_out(self) -> None:
        assert entry_import_path("components/counter.tsx", BuildConfig()) == "../components/counter.tsx"

    def test_path_inside_assets_is_dot_relative(self) -> None:
        assert entry_import_path("assets/islands/x.tsx", BuildConfig()) == "./islands/x.tsx"


class TestTranspileFile:
    def test_writes_generated_code_and_creates_parents(
        self, tmp_path: Path, fake_parser, write_file: Callable[..., Path]
    ) -> None:
        src = write_file(tmp_path / "site", "pages/page.trl", "<h1>home</h1>\n")
        out = tmp_path / "out" / "deep" / "pages" / "page.py"
        components: list[ClientComponentRef] = []

        written = transpile_file(
            src, out, tmp_path / "site", components, parser=fake_parser, config=BuildConfig()
        )

        assert written is True
        assert out.read_text().startswith("# transpiled")
        assert components == []

    def test_component_paths_are_relative_to_input_root(
        self, tmp_path: Path, fake_parser, write_file: Callable[..., Path]
    ) -> None:
        root = tmp_path / "site"
        src = write_file(root, "pages/blog/page.trl", "island Counter ../../components/counter.tsx\n")
        components: list[ClientComponentRef] = []

        transpile_file(
            src, tmp_path / "out" / "page.py", root, components, parser=fake_parser, config=BuildConfig()
        )

        [ref] = components
        assert ref.name == "Counter"
        assert ref.path == "components/counter.tsx"
        assert ref.import_path == "../components/counter.tsx"
        assert isinstance(ref.import_expr, RawCode)
        assert ref.import_expr == "async () => (await import('../components/counter.tsx')).default"

    def test_appends_to_existing_list(
        self, tmp_path: Path, fake_parser, write_file: Callable[..., Path]
    ) -> None:
        root = tmp_path / "site"
        a = write_file(root, "a.trl", "island Counter ./counter.tsx\n")
        b = write_file(root, "b.trl", "island Counter ./counter.tsx\n")
        components: list[ClientComponentRef] = []

        for src in (a, b):
            transpile_file(
                src, tmp_path / "out" / src.with_suffix(".py").name, root, components,
                parser=fake_parser, config=BuildConfig(),
            )

        assert [c.path for c in components] == ["counter.tsx", "counter.tsx"]
        assert components[0].id != components[1].id

    def test_client_module_produces_nothing(
        self, tmp_path: Path, fake_parser, write_file: Callable[..., Path]
    ) -> None:
        src = write_file(tmp_path, "counter.trl", "'use client'\nisland Counter ./c.tsx\n")
        out = tmp_path / "out" / "counter.py"
        components: list[ClientComponentRef] = []

        written = transpile_file(src, out, tmp_path, components, parser=fake_parser, config=BuildConfig())

        assert written is False
        assert not out.exists()
        assert components == []
        assert fake_parser.calls == []

    def test_missing_source_raises_os_error(self, tmp_path: Path, fake_parser) -> None:
        with pytest.raises(OSError):
            transpile_file(
                tmp_path / "missing.trl", tmp_path / "out.py", tmp_path, [],
                parser=fake_parser, config=BuildConfig(),
            )

    def test_undecodable_source_raises_transpile_error(self, tmp_path: Path, fake_parser) -> None:
        src = tmp_path / "bad.trl"
        src.write_bytes(b"\xff\xfe bad")

        with pytest.raises(TranspileError) as exc_info:
            transpile_file(
                src, tmp_path / "out.py", tmp_path, [],
                parser=fake_parser, config=BuildConfig(),
            )

        assert exc_info.value.path == src
        assert "not valid UTF-8" in str(exc_info.value)
        assert not (tmp_path / "out.py").exists()

    def test_parse_error_propagates_without_output_or_components(
        self, tmp_path: Path, fake_parser, write_file: Callable[..., Path]
    ) -> None:
        src = write_file(tmp_path, "bad.trl", "island Counter ./c.tsx\n!error\n")
        out = tmp_path / "out" / "bad.py"
        components: list[ClientComponentRef] = []

        with pytest.raises(TemplateParseError) as exc_info:
            transpile_file(src, out, tmp_path, components, parser=fake_parser, config=BuildConfig())

        assert exc_info.value.lineno == 2
        assert not out.exists()
        assert components == []


class TestTranspileSource:
    def test_returns_code(self, fake_parser) -> None:
        code = transpile_source("<p/>", filename="x.trl", parser=fake_parser, config=BuildConfig())
        assert code is not None
        assert "SOURCE" in code

    def test_client_module_returns_none(self, fake_parser) -> None:
        code = transpile_source(
            "'use client'\n<p/>", filename="x.trl", parser=fake_parser, config=BuildConfig()
        )
        assert code is None
