"""Single-file transpilation.

Reads one template, hands it to the parser, writes the generated module,
and turns every component reference the parser reports into a
:class:`ClientComponentRef` relative to the input root.
"""

import logging
import os
from pathlib import Path

from trill.build.parser import Parser
from trill.build.paths import relativize, resolve, to_posix
from trill.build.types import ClientComponentRef, RawCode
from trill.config import BuildConfig
from trill.errors import TranspileError

logger = logging.getLogger("trill.build")

_LINE_TRIM = " \t\r"


def read_first_line(source: str) -> str:
    """Return the first non-blank line of *source*, trimmed."""
    for line in source.split("\n"):
        stripped = line.strip(_LINE_TRIM)
        if stripped:
            return stripped
    return ""


def read_source(path: Path) -> str:
    """Read a template as UTF-8.

    Raises:
        OSError: The file could not be read.
        TranspileError: The file is not valid UTF-8.
    """
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise TranspileError(path, f"not valid UTF-8: {exc}") from exc


def is_client_module(source: str, directive: str) -> bool:
    """True if *source* opens with the client directive."""
    return read_first_line(source) == directive


def entry_import_path(rel_path: str, config: BuildConfig) -> str:
    """Import path of an input-root-relative file, seen from the client entry.

    The client entry lives in ``<outdir>/<assets_dirname>/`` and the output
    tree mirrors the input tree, so the path only depends on *rel_path*.
    """
    rel = relativize(config.assets_dirname, rel_path, sep="/")
    if rel.startswith("../"):
        return rel
    return f"./{rel}"


def lazy_import(import_path: str) -> RawCode:
    return RawCode(f"async () => (await import('{import_path}')).default")


def transpile_source(
    source: str,
    *,
    filename: str,
    parser: Parser,
    config: BuildConfig,
) -> str | None:
    """Transpile template text without touching the filesystem.

    Returns ``None`` for client modules.
    """
    if is_client_module(source, config.client_directive):
        logger.info("Skipping client-side file: %s", filename)
        return None
    return parser.parse(source, filename=filename).code


def transpile_file(
    source_path: str | Path,
    output_path: str | Path,
    input_root: str | Path,
    components: list[ClientComponentRef],
    *,
    parser: Parser,
    config: BuildConfig,
) -> bool:
    """Transpile one template file into one output module.

    Component references are appended to *components* only after the
    parser succeeded, so a failing file contributes nothing.

    Args:
        source_path: Template file to read.
        output_path: Module to write; parent directories are created.
        input_root: Root the component paths are made relative to.
        components: Build-wide component list, extended in place.
        parser: Template parser.
        config: Build configuration.

    Returns:
        ``False`` if the file was skipped as a client module, else ``True``.

    Raises:
        OSError: The source could not be read or the output written.
        TranspileError: The source is not valid UTF-8.
        TemplateParseError: The parser rejected the source.
    """
    source_path = Path(source_path)
    output_path = Path(output_path)

    source = read_source(source_path)
    if is_client_module(source, config.client_directive):
        logger.info("Skipping client-side file: %s", source_path)
        return False

    result = parser.parse(source, filename=str(source_path))

    source_dir = os.path.dirname(os.path.abspath(source_path))
    root = os.path.abspath(input_root)
    for component in result.components:
        resolved = resolve(source_dir, component.path)
        rel_path = to_posix(relativize(root, resolved))
        import_path = entry_import_path(rel_path, config)
        components.append(
            ClientComponentRef(
                id=component.id,
                name=component.name,
                path=rel_path,
                import_path=import_path,
                import_expr=lazy_import(import_path),
            )
        )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.code, encoding="utf-8")

    if config.verbose:
        logger.info("Transpiled: %s -> %s", source_path, output_path)
    return True
