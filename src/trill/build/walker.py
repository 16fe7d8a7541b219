"""Recursive source-tree walk.

Dispatches template files to the transpiler, copies co-located assets
found under ``pages/`` verbatim, and copies the designated asset
directories into the output root afterwards.  Per-file failures are
logged and recorded, never fatal to the walk.
"""

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from trill.build.parser import Parser
from trill.build.paths import containment, is_within, swap_extension
from trill.build.transpiler import transpile_file
from trill.build.types import ClientComponentRef
from trill.config import BuildConfig
from trill.errors import TranspileError

logger = logging.getLogger("trill.build")


@dataclass(slots=True)
class WalkResult:
    """Everything one directory walk produced.

    Attributes:
        components: Component references in walk order, duplicates kept.
        transpiled: Output modules written.
        copied: Non-template files copied verbatim.
        failures: ``(path, error)`` pairs for files that were skipped.
    """

    components: list[ClientComponentRef] = field(default_factory=list)
    transpiled: list[Path] = field(default_factory=list)
    copied: list[Path] = field(default_factory=list)
    failures: list[tuple[Path, Exception]] = field(default_factory=list)


def transpile_directory(
    source_dir: str | Path,
    output_dir: str | Path,
    *,
    parser: Parser,
    config: BuildConfig,
) -> WalkResult:
    """Walk *source_dir* and mirror it into *output_dir*.

    Files are visited in sorted order.  When *output_dir* is nested inside
    *source_dir*, it is neither descended into nor read from.

    Returns:
        A fresh :class:`WalkResult` owned by the caller.
    """
    root = Path(source_dir)
    out = Path(output_dir)
    result = WalkResult()

    output_rel = containment(os.path.abspath(root), os.path.abspath(out))
    root_is_pages = root.resolve().name == config.pages_dirname

    _walk(
        root,
        root,
        out,
        output_rel=output_rel,
        root_is_pages=root_is_pages,
        parser=parser,
        config=config,
        result=result,
    )

    copy_directories(root, out, config.copy_dirs, verbose=config.verbose)
    return result


def _walk(
    directory: Path,
    root: Path,
    out: Path,
    *,
    output_rel: str | None,
    root_is_pages: bool,
    parser: Parser,
    config: BuildConfig,
    result: WalkResult,
) -> None:
    try:
        entries = sorted(directory.iterdir())
    except OSError as exc:
        logger.error("Error reading directory %s: %s", directory, exc)
        result.failures.append((directory, exc))
        return

    for item in entries:
        rel = os.path.relpath(item, root)
        if output_rel is not None and is_within(rel, output_rel):
            continue

        if item.is_symlink() and item.is_dir():
            logger.debug("Not following directory symlink: %s", item)
            continue
        if item.is_dir():
            _walk(
                item,
                root,
                out,
                output_rel=output_rel,
                root_is_pages=root_is_pages,
                parser=parser,
                config=config,
                result=result,
            )
            continue
        if not item.is_file():
            continue

        if item.name.endswith(config.template_ext):
            target = out / swap_extension(rel, config.template_ext, config.output_ext)
            try:
                if transpile_file(
                    item,
                    target,
                    root,
                    result.components,
                    parser=parser,
                    config=config,
                ):
                    result.transpiled.append(target)
            except (OSError, TranspileError) as exc:
                logger.error("Error transpiling %s: %s", item, exc)
                result.failures.append((item, exc))
        elif root_is_pages or _in_pages(rel, config.pages_dirname):
            target = out / rel
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(item, target)
            except OSError as exc:
                logger.error("Error copying %s: %s", item, exc)
                result.failures.append((item, exc))
                continue
            result.copied.append(target)
            if config.verbose:
                logger.info("Copied: %s -> %s", item, target)


def _in_pages(rel: str, pages_dirname: str) -> bool:
    """True if a directory segment of *rel* is named *pages_dirname*."""
    directories = Path(rel).parts[:-1]
    return pages_dirname in directories


def copy_directories(
    input_path: str | Path,
    output_dir: str | Path,
    copy_dirs: tuple[str, ...],
    *,
    verbose: bool = False,
) -> list[str]:
    """Copy each named directory into the output root.

    A directory is looked up beside *input_path* first, then inside it
    (for a directory input).  A missing directory is skipped silently;
    a failed copy is a warning.

    Returns:
        Names of the directories that were copied.
    """
    input_path = Path(input_path).resolve()
    output_dir = Path(output_dir)
    candidates_base = [input_path.parent]
    if input_path.is_dir():
        candidates_base.append(input_path)

    copied: list[str] = []
    for name in copy_dirs:
        source = next(
            (base / name for base in candidates_base if (base / name).is_dir()),
            None,
        )
        if source is None:
            continue
        dest = output_dir / name
        if source.resolve() == dest.resolve():
            continue
        if verbose:
            logger.info("Copying '%s' directory: %s -> %s", name, source, dest)
        try:
            shutil.copytree(source, dest, dirs_exist_ok=True)
        except (OSError, shutil.Error) as exc:
            logger.warning("Failed to copy '%s' directory %s: %s", name, source, exc)
            continue
        copied.append(name)
    return copied
