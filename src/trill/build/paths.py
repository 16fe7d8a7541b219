"""Pure path algebra for the transpile pipeline.

String-level resolution, relativization, and containment checks.  Nothing
here touches the filesystem, so results are deterministic and every
function can be exercised with either separator via the ``sep`` keyword.
"""

import ntpath
import os
import posixpath

__all__ = [
    "containment",
    "is_within",
    "relativize",
    "resolve",
    "swap_extension",
    "to_posix",
]


def _flavour(sep: str):
    return ntpath if sep == "\\" else posixpath


def _segments(path: str, sep: str) -> list[str]:
    return [part for part in path.split(sep) if part]


def _strip_trailing(path: str, sep: str) -> str:
    if len(path) > len(sep) and path.endswith(sep):
        return path[: -len(sep)]
    return path


def resolve(base_dir: str, path: str, *, sep: str = os.sep) -> str:
    """Resolve *path* against *base_dir*.

    Absolute paths pass through (normalized).  Relative paths are joined
    to *base_dir* and normalized, collapsing ``.`` and ``..`` segments.
    """
    flavour = _flavour(sep)
    if flavour.isabs(path):
        return flavour.normpath(path)
    base = _strip_trailing(base_dir, sep)
    return flavour.normpath(flavour.join(base, path))


def relativize(base: str, target: str, *, sep: str = os.sep) -> str:
    """Return the relative path that leads from *base* to *target*.

    Both paths are split into segments; after the longest common prefix,
    every remaining *base* segment becomes ``..`` and the remaining
    *target* segments are appended.  Identical paths yield ``"."``.
    """
    base_parts = _segments(base, sep)
    target_parts = _segments(target, sep)

    common = 0
    limit = min(len(base_parts), len(target_parts))
    while common < limit and base_parts[common] == target_parts[common]:
        common += 1

    parts = [".."] * (len(base_parts) - common) + target_parts[common:]
    if not parts:
        return "."
    return sep.join(parts)


def containment(directory: str, candidate: str, *, sep: str = os.sep) -> str | None:
    """Return the remainder of *candidate* below *directory*, if any.

    ``None`` when *candidate* is not a strict descendant: equal paths,
    unrelated paths, and sibling names sharing a prefix (``out`` vs
    ``output``) all yield ``None``.
    """
    parent = _strip_trailing(directory, sep)
    child = _strip_trailing(candidate, sep)

    if parent == child or not child.startswith(parent):
        return None

    remaining = child[len(parent) :]
    if parent.endswith(sep):
        suffix = remaining
    elif remaining.startswith(sep):
        suffix = remaining[len(sep) :]
    else:
        return None

    return suffix or None


def is_within(rel_path: str, prefix: str, *, sep: str = os.sep) -> bool:
    """True if *rel_path* is *prefix* itself or lies below it."""
    if rel_path == prefix:
        return True
    return containment(prefix, rel_path, sep=sep) is not None


def swap_extension(path: str, old: str, new: str) -> str:
    """Replace a trailing *old* extension with *new*."""
    if not path.endswith(old):
        msg = f"{path!r} does not end with {old!r}"
        raise ValueError(msg)
    return path[: len(path) - len(old)] + new


def to_posix(path: str, *, sep: str = os.sep) -> str:
    """Normalize separators to ``/`` for paths embedded in generated code."""
    if sep == "/":
        return path
    return path.replace(sep, "/")
