"""Build configuration.

BuildConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

# Hidden output root used when no --outdir is given
DEFAULT_OUTDIR = ".trill"


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Transpile build configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = BuildConfig(outdir="build", verbose=True)
    """

    # Output
    outdir: str | Path = DEFAULT_OUTDIR

    # Templates
    template_ext: str = ".trl"
    output_ext: str = ".py"
    client_directive: str = "'use client'"

    # Directories copied verbatim from beside the input root
    copy_dirs: tuple[str, ...] = ("assets", "public")

    # Routing (marker names refer to transpiled files in the output tree)
    pages_dirname: str = "pages"
    page_marker: str = "page.py"
    layout_marker: str = "layout.py"
    meta_filename: str = "meta.py"
    bootstrap_filename: str = "main.py"

    # Client bundle
    assets_dirname: str = "assets"
    client_entry_filename: str = "main.tsx"
    bundler: tuple[str, ...] = ("bun", "build")

    # Diagnostics
    verbose: bool = False

    @property
    def is_default_outdir(self) -> bool:
        """True when ``outdir`` was left at the class default."""
        return str(self.outdir) == DEFAULT_OUTDIR

    def with_outdir(self, outdir: str | Path) -> BuildConfig:
        """Return a copy of this config writing to *outdir*."""
        return replace(self, outdir=outdir)
