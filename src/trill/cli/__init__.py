"""Trill CLI — template transpilation.

Entry point registered as ``trill`` in ``pyproject.toml``::

    [project.scripts]
    trill = "trill.cli:main"
"""

import argparse
import logging
import sys

from trill.config import DEFAULT_OUTDIR


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``trill`` command."""
    parser = argparse.ArgumentParser(
        prog="trill",
        description="Trill — transpile page-based templates into a routed Python site.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- trill transpile ---------------------------------------------------
    transpile_parser = subparsers.add_parser(
        "transpile",
        help="Transpile a template file or directory",
    )
    transpile_parser.add_argument("path", help="Path to a template file or directory")
    transpile_parser.add_argument(
        "-o",
        "--outdir",
        default=DEFAULT_OUTDIR,
        help=f"Output directory (default: {DEFAULT_OUTDIR}; a single file prints to stdout)",
    )
    transpile_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Report every file transpiled or copied",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.INFO if getattr(args, "verbose", False) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command == "transpile":
        from trill.cli._transpile import run_transpile

        run_transpile(args)
