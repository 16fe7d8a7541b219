"""Route discovery over the transpiled ``pages/`` tree and route table emission.

Walks the pages directory and detects, per directory:

- the page marker (``page.py``) — the directory is a route
- the layout marker (``layout.py``) — the route's shell

Detection is existence-only.  A layout binds to the route of its own
directory and nothing else: descendants without their own layout marker
get no layout.

The resulting table is rendered into ``meta.py``, checked with
:func:`ast.parse`, and written next to the fixed ``main.py`` bootstrap.
"""

import ast
import logging
from pathlib import Path

from trill.build._templates import MAIN_PY
from trill.build.types import Route
from trill.config import BuildConfig
from trill.errors import RouteTableError

logger = logging.getLogger("trill.routes")

_META_HEADER = '''\
# Generated by trill. Do not edit.

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Route:
    path: str
    page: str
    layout: str | None = None


@dataclass(frozen=True, slots=True)
class Meta:
    rootdir: str
    routes: tuple[Route, ...]


'''


def scan_pages(
    pages_dir: str | Path,
    *,
    import_prefix: str = "pages",
    config: BuildConfig | None = None,
) -> list[Route]:
    """Walk a transpiled pages directory and discover all routes.

    Args:
        pages_dir: Path to ``<outdir>/pages``.
        import_prefix: Import reference of *pages_dir* relative to the
            output root.
        config: Marker names and the output directory.  A subdirectory is
            skipped only when it is the output directory itself.

    Returns:
        One :class:`Route` per directory containing a page marker, in
        traversal order.
    """
    config = config or BuildConfig()
    root = Path(pages_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"Pages directory not found: {root}")

    layout_stack: list[str] = []
    return _scan_directory(
        root,
        url_parts=[],
        import_prefix=import_prefix,
        layout_stack=layout_stack,
        exclude=Path(config.outdir).resolve(),
        config=config,
    )


def _scan_directory(
    directory: Path,
    *,
    url_parts: list[str],
    import_prefix: str,
    layout_stack: list[str],
    exclude: Path,
    config: BuildConfig,
) -> list[Route]:
    """Scan one directory and its subtree.

    Returns the routes of this subtree; the caller concatenates them.
    """
    page_stem = Path(config.page_marker).stem
    layout_stem = Path(config.layout_marker).stem

    has_page = (directory / config.page_marker).exists()
    has_layout = (directory / config.layout_marker).exists()

    if has_layout:
        layout_stack.append(f"{import_prefix}/{layout_stem}")

    try:
        routes: list[Route] = []
        if has_page:
            routes.append(
                Route(
                    path="/" + "/".join(url_parts),
                    page_import=f"{import_prefix}/{page_stem}",
                    # Only this directory's own layout, never an ancestor's
                    layout_import=layout_stack[-1] if has_layout else None,
                )
            )

        for item in sorted(directory.iterdir()):
            if not item.is_dir() or item.is_symlink():
                continue
            if item.resolve() == exclude:
                continue
            routes.extend(
                _scan_directory(
                    item,
                    url_parts=[*url_parts, item.name],
                    import_prefix=f"{import_prefix}/{item.name}",
                    layout_stack=layout_stack,
                    exclude=exclude,
                    config=config,
                )
            )
        return routes
    finally:
        if has_layout:
            layout_stack.pop()


def render_route_table(routes: list[Route], rootdir: str) -> str:
    """Render the route table module source."""
    lines = [_META_HEADER, "ROUTES = (\n"]
    for route in routes:
        lines.append(_render_route(route))
    lines.append(")\n\n")
    lines.append(f"META = Meta(rootdir={rootdir!r}, routes=ROUTES)\n")
    return "".join(lines)


def _render_route(route: Route) -> str:
    indent = "    "
    parts = [f"path={route.path!r}", f"page={route.page_import!r}"]
    if route.layout_import is not None:
        parts.append(f"layout={route.layout_import!r}")
    return f"{indent}Route({', '.join(parts)}),\n"


def validate_source(source: str, filename: str) -> None:
    """Re-parse generated Python source.

    Raises:
        RouteTableError: The source is not valid Python.
    """
    try:
        ast.parse(source, filename=filename)
    except SyntaxError as exc:
        msg = f"Generated {filename} is invalid (line {exc.lineno}): {exc.msg}"
        raise RouteTableError(msg) from exc


def generate_route_table(output_dir: str | Path, *, config: BuildConfig) -> list[Route]:
    """Scan ``<output_dir>/pages`` and write the route table and bootstrap.

    Raises:
        FileNotFoundError: There is no pages directory in the output tree.
        RouteTableError: The rendered table failed validation; nothing is
            written in that case.
        OSError: Writing either file failed.
    """
    output_dir = Path(output_dir)
    pages_dir = output_dir / config.pages_dirname
    if not pages_dir.is_dir():
        raise FileNotFoundError(f"No pages directory found at {pages_dir}")

    if config.verbose:
        logger.info("Generating %s from pages directory: %s", config.meta_filename, pages_dir)

    routes = scan_pages(pages_dir, import_prefix=config.pages_dirname, config=config)

    source = render_route_table(routes, str(output_dir))
    validate_source(source, config.meta_filename)

    meta_path = output_dir / config.meta_filename
    meta_path.write_text(source, encoding="utf-8")

    main_path = output_dir / config.bootstrap_filename
    main_path.write_text(
        MAIN_PY.format(meta_ref=Path(config.meta_filename).stem),
        encoding="utf-8",
    )

    if config.verbose:
        logger.info("Generated %s at: %s", config.meta_filename, meta_path)
        logger.info("Generated %s at: %s", config.bootstrap_filename, main_path)
    return routes
