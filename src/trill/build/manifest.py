"""Client component manifest and browser bundle entry.

Serializes the build's component references into the interchange array
the client entry embeds, writes the entry, and runs the external bundler.

The interchange array is JSON except for the ``import`` field, which holds
executable code.  Values of type :class:`RawCode` are emitted verbatim by
:func:`serialize_manifest`; every other string is quoted by ``json``.
"""

import json
import logging
import subprocess
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

from trill.build._templates import CLIENT_ENTRY_PLACEHOLDER, CLIENT_ENTRY_TSX
from trill.build.types import BundleOutcome, BundleStatus, ClientComponentRef, RawCode
from trill.config import BuildConfig

logger = logging.getLogger("trill.manifest")

Runner = Callable[..., subprocess.CompletedProcess[str]]

_INDENT = "  "


def serialize_manifest(components: Sequence[ClientComponentRef]) -> str:
    """Render components as an ordered array of ``{id, name, path, import}``.

    Two-space indentation, one key per line.  Duplicates are kept.
    """
    return _serialize([component.to_manifest() for component in components], 0)


def _serialize(value: Any, depth: int) -> str:
    if isinstance(value, RawCode):
        return str(value)
    if isinstance(value, Mapping):
        if not value:
            return "{}"
        pad = _INDENT * (depth + 1)
        items = [
            f"{pad}{json.dumps(str(key))}: {_serialize(item, depth + 1)}"
            for key, item in value.items()
        ]
        return "{\n" + ",\n".join(items) + "\n" + _INDENT * depth + "}"
    if isinstance(value, (list, tuple)):
        if not value:
            return "[]"
        pad = _INDENT * (depth + 1)
        items = [f"{pad}{_serialize(item, depth + 1)}" for item in value]
        return "[\n" + ",\n".join(items) + "\n" + _INDENT * depth + "]"
    return json.dumps(value)


def render_client_entry(manifest_text: str, template: str = CLIENT_ENTRY_TSX) -> str:
    """Substitute *manifest_text* for the single placeholder in *template*.

    Raises:
        ValueError: The placeholder is missing or appears more than once.
    """
    count = template.count(CLIENT_ENTRY_PLACEHOLDER)
    if count != 1:
        msg = f"Expected exactly one {CLIENT_ENTRY_PLACEHOLDER} placeholder, found {count}"
        raise ValueError(msg)
    before, _, after = template.partition(CLIENT_ENTRY_PLACEHOLDER)
    return before + manifest_text + after


def run_bundler(
    entry: str | Path,
    outdir: str | Path,
    *,
    command: Sequence[str] = ("bun", "build"),
    runner: Runner = subprocess.run,
) -> BundleOutcome:
    """Run the bundler on *entry* and classify the result.

    Output is captured, not streamed.  Never raises for a missing tool or
    a failing build; both come back as a non-``SUCCESS`` outcome.
    """
    argv = [*command, str(entry), "--outdir", str(outdir)]
    try:
        process = runner(argv, capture_output=True, text=True, check=False)
    except (FileNotFoundError, PermissionError) as exc:
        return BundleOutcome(BundleStatus.TOOL_UNAVAILABLE, diagnostics=str(exc))

    if process.returncode != 0:
        diagnostics = "\n".join(
            part.strip() for part in (process.stdout, process.stderr) if part and part.strip()
        )
        return BundleOutcome(
            BundleStatus.NONZERO_EXIT,
            returncode=process.returncode,
            diagnostics=diagnostics,
        )
    return BundleOutcome(BundleStatus.SUCCESS, returncode=0)


def emit_manifest(
    components: Sequence[ClientComponentRef],
    output_dir: str | Path,
    *,
    config: BuildConfig,
    runner: Runner = subprocess.run,
) -> BundleOutcome | None:
    """Write the client entry for *components* and bundle it.

    With no components nothing happens: no entry file, no bundler run.

    Returns:
        The bundler outcome, or ``None`` when there was nothing to do.
        A failed outcome is logged as a warning, not raised.
    """
    if not components:
        return None

    assets_dir = Path(output_dir) / config.assets_dirname
    entry = assets_dir / config.client_entry_filename

    source = render_client_entry(serialize_manifest(components))
    assets_dir.mkdir(parents=True, exist_ok=True)
    entry.write_text(source, encoding="utf-8")
    if config.verbose:
        logger.info("Generated client entry with %d component(s): %s", len(components), entry)

    outcome = run_bundler(entry, assets_dir, command=config.bundler, runner=runner)
    if outcome.status is BundleStatus.TOOL_UNAVAILABLE:
        logger.warning(
            "Bundler %r not found, skipped %s. Install bun: https://bun.sh/docs/installation",
            config.bundler[0],
            entry,
        )
    elif outcome.status is BundleStatus.NONZERO_EXIT:
        logger.warning(
            "Bundler exited with status %s for %s:\n%s",
            outcome.returncode,
            entry,
            outcome.diagnostics,
        )
    elif config.verbose:
        logger.info("Bundled %s -> %s", entry, assets_dir)
    return outcome
