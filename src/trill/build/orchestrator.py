"""Build orchestration: walk, route table, client manifest.

Chooses single-file or directory mode, runs the steps in order, and
applies the error policy: structural errors abort, per-file errors are
recorded, and the route table and bundler steps are best-effort.
"""

import logging
import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from trill.build.manifest import Runner, emit_manifest
from trill.build.parser import Parser, TemplateParser
from trill.build.paths import swap_extension
from trill.build.routes import generate_route_table
from trill.build.transpiler import read_source, transpile_file, transpile_source
from trill.build.types import BundleOutcome, ClientComponentRef, Route
from trill.build.walker import copy_directories, transpile_directory
from trill.config import BuildConfig
from trill.errors import InvalidExtensionError, InvalidPathError, RouteTableError

logger = logging.getLogger("trill.build")


@dataclass(slots=True)
class BuildResult:
    """Summary of one build.

    Attributes:
        output_dir: Output root written to.
        transpiled: Modules written.
        copied: Files copied verbatim from ``pages/``.
        failures: ``(path, error)`` pairs tolerated during the walk.
        routes: Route table, empty if it was not generated.
        components: Client manifest, in discovery order.
        bundle: Bundler outcome, ``None`` if the bundler was not run.
    """

    output_dir: Path
    transpiled: list[Path] = field(default_factory=list)
    copied: list[Path] = field(default_factory=list)
    failures: list[tuple[Path, Exception]] = field(default_factory=list)
    routes: list[Route] = field(default_factory=list)
    components: list[ClientComponentRef] = field(default_factory=list)
    bundle: BundleOutcome | None = None

    @property
    def ok(self) -> bool:
        """True when every file transpiled."""
        return not self.failures


def transpile_path(
    path: str | Path,
    *,
    config: BuildConfig | None = None,
    parser: Parser | None = None,
    runner: Runner | None = None,
) -> BuildResult:
    """Transpile a template file or a directory tree into ``config.outdir``.

    Raises:
        InvalidPathError: *path* is missing or not a file or directory.
        InvalidExtensionError: *path* is a file without the template extension.
        OSError, TemplateParseError: File mode only; the single file failed.
    """
    config = config or BuildConfig()
    parser = parser or TemplateParser()
    runner = runner or subprocess.run
    path = Path(path)
    output_dir = Path(config.outdir)
    result = BuildResult(output_dir=output_dir)

    if path.is_dir():
        if config.verbose:
            logger.info("Transpiling directory: %s", path)
        walk = transpile_directory(path, output_dir, parser=parser, config=config)
        result.transpiled = walk.transpiled
        result.copied = walk.copied
        result.failures = walk.failures
        result.components = walk.components
    elif path.is_file():
        _require_template(path, config)
        target = output_dir / swap_extension(path.name, config.template_ext, config.output_ext)
        input_root = path.parent
        if transpile_file(path, target, input_root, result.components, parser=parser, config=config):
            result.transpiled.append(target)
        copy_directories(path, output_dir, config.copy_dirs, verbose=config.verbose)
    elif path.exists():
        raise InvalidPathError(f"Path must be a file or directory: {path}")
    else:
        raise InvalidPathError(f"Could not access path: {path}")

    result.routes = _generate_routes(output_dir, config)
    result.bundle = _emit_manifest(result.components, output_dir, config, runner)

    if config.verbose:
        logger.info(
            "Done: %d transpiled, %d copied, %d failed, %d route(s), %d component(s)",
            len(result.transpiled),
            len(result.copied),
            len(result.failures),
            len(result.routes),
            len(result.components),
        )
    return result


def _require_template(path: Path, config: BuildConfig) -> None:
    if not path.name.endswith(config.template_ext):
        raise InvalidExtensionError(f"File must have {config.template_ext} extension: {path}")


def _generate_routes(output_dir: Path, config: BuildConfig) -> list[Route]:
    try:
        return generate_route_table(output_dir, config=config)
    except FileNotFoundError as exc:
        logger.warning("Skipped %s generation: %s", config.meta_filename, exc)
    except RouteTableError as exc:
        logger.warning("Failed to generate %s: %s", config.meta_filename, exc)
    except OSError as exc:
        logger.warning("Failed to write route table in %s: %s", output_dir, exc)
    return []


def _emit_manifest(
    components: list[ClientComponentRef],
    output_dir: Path,
    config: BuildConfig,
    runner: Runner,
) -> BundleOutcome | None:
    try:
        return emit_manifest(components, output_dir, config=config, runner=runner)
    except (OSError, ValueError) as exc:
        logger.warning("Failed to generate client entry in %s: %s", output_dir, exc)
        return None


def transpile_to_stdout(
    path: str | Path,
    stream: TextIO | None = None,
    *,
    config: BuildConfig | None = None,
    parser: Parser | None = None,
) -> bool:
    """Transpile one template file and write the module to *stream*.

    Nothing is written for a client module.

    Returns:
        ``True`` if a module was written.
    """
    config = config or BuildConfig()
    parser = parser or TemplateParser()
    stream = stream or sys.stdout
    path = Path(path)
    _require_template(path, config)

    source = read_source(path)
    code = transpile_source(source, filename=str(path), parser=parser, config=config)
    if code is None:
        return False
    stream.write(code)
    return True
