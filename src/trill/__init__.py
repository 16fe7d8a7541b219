"""Trill — build-time transpiler for page-based kida templates.

Turns ``*.trl`` templates into Python render modules, compiles the
``pages/`` tree into a static route table, and collects client islands
into one manifest for the browser bundle.

Basic usage::

    from trill import BuildConfig, transpile_path

    result = transpile_path("site", config=BuildConfig(outdir="build"))

Command line::

    trill transpile site --outdir build
"""

from trill.build import BuildResult, transpile_path
from trill.config import BuildConfig
from trill.errors import (
    InvalidExtensionError,
    InvalidPathError,
    RouteTableError,
    StructuralError,
    TemplateParseError,
    TranspileError,
    TrillError,
)

__version__ = "0.1.0"
__all__ = [
    "BuildConfig",
    "BuildResult",
    "InvalidExtensionError",
    "InvalidPathError",
    "RouteTableError",
    "StructuralError",
    "TemplateParseError",
    "TranspileError",
    "TrillError",
    "transpile_path",
]
