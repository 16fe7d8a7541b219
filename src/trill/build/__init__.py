"""Build pipeline: templates to modules, pages to routes, islands to a bundle.

Usage::

    from trill.build import transpile_path
    from trill.config import BuildConfig

    result = transpile_path("site", config=BuildConfig(outdir="site/.trill"))
    for route in result.routes:
        print(route.path, route.page_import, route.layout_import)

Pipeline:

    site/                        site/.trill/
      pages/                       pages/
        page.trl        ->           page.py
        blog/                        blog/
          page.trl      ->             page.py
          layout.trl    ->             layout.py
          cover.png     ->             cover.png   (copied)
                                   meta.py       (route table)
                                   main.py       (runtime bootstrap)
                                   assets/main.tsx  (client entry, if any islands)
"""

from trill.build.manifest import emit_manifest, render_client_entry, run_bundler, serialize_manifest
from trill.build.orchestrator import BuildResult, transpile_path, transpile_to_stdout
from trill.build.parser import ParseResult, Parser, TemplateParser
from trill.build.paths import containment, relativize, resolve
from trill.build.routes import generate_route_table, render_route_table, scan_pages
from trill.build.transpiler import transpile_file
from trill.build.types import (
    BundleOutcome,
    BundleStatus,
    ClientComponentRef,
    ComponentRef,
    RawCode,
    Route,
)
from trill.build.walker import WalkResult, copy_directories, transpile_directory

__all__ = [
    "BuildResult",
    "BundleOutcome",
    "BundleStatus",
    "ClientComponentRef",
    "ComponentRef",
    "ParseResult",
    "Parser",
    "RawCode",
    "Route",
    "TemplateParser",
    "WalkResult",
    "containment",
    "copy_directories",
    "emit_manifest",
    "generate_route_table",
    "relativize",
    "render_client_entry",
    "render_route_table",
    "resolve",
    "run_bundler",
    "scan_pages",
    "serialize_manifest",
    "transpile_directory",
    "transpile_file",
    "transpile_path",
    "transpile_to_stdout",
]
