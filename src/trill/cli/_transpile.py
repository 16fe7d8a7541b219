"""``trill transpile`` — template transpilation command.

Directory input builds the whole site into ``--outdir``.  A single file
with the default output directory is printed to stdout instead.
"""

import argparse
import sys
from pathlib import Path

from trill.build import transpile_path, transpile_to_stdout
from trill.config import BuildConfig
from trill.errors import StructuralError, TrillError


def run_transpile(args: argparse.Namespace) -> None:
    """Transpile ``args.path`` into ``args.outdir``.

    Structural errors exit with their own status code; any other
    top-level failure exits with 1.  Per-file failures in a directory
    build are reported but do not change the exit status.
    """
    config = BuildConfig(outdir=args.outdir, verbose=args.verbose)
    path = Path(args.path)

    try:
        if path.is_file() and config.is_default_outdir:
            transpile_to_stdout(path, sys.stdout, config=config)
            return
        result = transpile_path(path, config=config)
    except StructuralError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(exc.exit_code) from exc
    except (TrillError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if result.failures:
        print(
            f"Transpiled with {len(result.failures)} error(s); see messages above.",
            file=sys.stderr,
        )
