"""Command-line front door for shellmark.

Parses CLI options, configures logging, and dispatches to the add, browse,
plug, and diag commands. Whatever a command produces for the calling shell is
written to stdout; diagnostics go to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__, logging_setup
from .add import add_cmd
from .bookmarks import BookmarkStore
from .browse import browse_cmd
from .diag import diag_cmd
from .errors import ShellmarkError
from .plug import DEFAULT_FUNCTION_NAME, DEFAULT_STYLE, highlight_script, plug_script
from .shell import OUTPUT_TYPE_NAMES, OutputType, render_output

logger = logging.getLogger(__name__)


def _output_type(value: str) -> OutputType:
    """argparse type for ``--out`` values."""
    try:
        return OutputType.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="shellmark",
        description="Cross-platform CLI bookmarks manager.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-o",
        "--out",
        dest="out_type",
        type=_output_type,
        default=OutputType.PLAIN,
        metavar="{" + ",".join(OUTPUT_TYPE_NAMES) + "}",
        help="Output selection as plain data or as evalable command for one of the shells.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    add_parser = subparsers.add_parser("add", aliases=["a"], help="(alias: a) Add bookmarks")
    add_parser.add_argument(
        "dest",
        nargs="?",
        default=None,
        help="Path to the destination file or directory (default: current directory).",
    )
    add_parser.add_argument(
        "-n",
        "--name",
        default=None,
        help="Name of the bookmark (default: the name of the destination).",
    )
    add_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Replace the bookmark's destination when similarly named bookmark exists.",
    )

    subparsers.add_parser(
        "browse",
        aliases=["b"],
        help="(default, alias: b) Interactively find and select bookmarks",
    )

    plug_parser = subparsers.add_parser("plug", help="Print the shell integration function")
    plug_parser.add_argument(
        "--name",
        default=DEFAULT_FUNCTION_NAME,
        help=f"Name of the shell function to define (default: {DEFAULT_FUNCTION_NAME}).",
    )
    plug_parser.add_argument(
        "--style",
        default=DEFAULT_STYLE,
        help="Pygments style used when printing to a terminal.",
    )

    subparsers.add_parser("diag", help="Print diagnostic information")
    return parser


def _run(args: argparse.Namespace) -> str | None:
    command = args.command or "browse"
    if command == "plug":
        script = plug_script(args.out_type, args.name)
        if script and not args.no_color and sys.stdout.isatty():
            return highlight_script(script, args.out_type, args.style)
        return script

    store = BookmarkStore.default()
    if command in {"add", "a"}:
        add_cmd(store, dest=args.dest, name=args.name, force=args.force)
        return None
    if command == "diag":
        return str(diag_cmd(store))
    action = browse_cmd(store, no_color=args.no_color)
    return render_output(action, args.out_type)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the selected command.

    Fatal errors are reported as ``shellmark: <message>`` with exit status 1.
    """
    args = build_parser().parse_args(argv)
    logging_setup.configure()

    try:
        output = _run(args)
    except ShellmarkError as exc:
        logger.debug("Fatal error", exc_info=True)
        raise SystemExit(f"shellmark: {exc}") from exc

    if output:
        sys.stdout.write(output)
        sys.stdout.flush()


if __name__ == "__main__":
    main()
