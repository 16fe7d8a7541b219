"""Data models for the transpile pipeline.

Immutable frozen dataclasses for component references, discovered routes,
and bundler outcomes.  All of them live for a single build only.
"""

from dataclasses import dataclass
from enum import Enum


class RawCode(str):
    """A string that must be emitted verbatim, never quoted, by the manifest serializer.

    Subclasses ``str`` so it still compares, hashes, and formats like the
    code it wraps.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"RawCode({str.__repr__(self)})"


@dataclass(frozen=True, slots=True)
class ComponentRef:
    """A client component reference as reported by the parser.

    Attributes:
        id: Identifier unique within one build.
        name: Human-readable component name.
        path: Path as declared in the template, relative to the
            template's own directory (or absolute).
    """

    id: str
    name: str
    path: str


@dataclass(frozen=True, slots=True)
class ClientComponentRef:
    """A component reference resolved for the client manifest.

    Attributes:
        id: Identifier unique within one build.
        name: Human-readable component name.
        path: Path relative to the input root, ``/``-separated.  The output
            tree mirrors the input tree, so it is stable across both.
        import_path: Path relative to the client entry's directory.
        import_expr: Lazy-import expression emitted unquoted.
    """

    id: str
    name: str
    path: str
    import_path: str
    import_expr: RawCode

    def to_manifest(self) -> dict[str, str]:
        """Manifest record: ``id``, ``name``, ``path``, ``import``."""
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "import": self.import_expr,
        }


@dataclass(frozen=True, slots=True)
class Route:
    """A route discovered in the transpiled pages tree.

    Imports are ``/``-separated and extension-less, relative to the output
    root (e.g. ``pages/blog/layout``).

    Attributes:
        path: URL path, slash-rooted.  The scan root is ``"/"``.
        page_import: Import reference of the directory's page module.
        layout_import: Import reference of the directory's own layout
            module, or ``None``.
    """

    path: str
    page_import: str
    layout_import: str | None = None


class BundleStatus(Enum):
    SUCCESS = "success"
    TOOL_UNAVAILABLE = "tool_unavailable"
    NONZERO_EXIT = "nonzero_exit"


@dataclass(frozen=True, slots=True)
class BundleOutcome:
    """Result of one bundler invocation.

    Callers decide the policy; the build pipeline treats anything but
    ``SUCCESS`` as a warning.
    """

    status: BundleStatus
    returncode: int | None = None
    diagnostics: str = ""

    @property
    def ok(self) -> bool:
        return self.status is BundleStatus.SUCCESS
