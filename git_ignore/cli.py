"""Entry point: argument parsing and the update run.

Usage::

    git-ignore [-h] [-v] [-gir] [-f FILE] pattern [pattern ...]

Exit codes:
    0: file updated, already up to date, or help shown
    1: no patterns given, or an unknown option
    2: git, settings or filesystem error
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml
from colorama import just_fix_windows_console

from .core import GitIgnoreError, load_config, logger
from .resolver import ExplicitFile, Global, Internal, Root, TargetMode, resolve
from .update import update_ignore_file

PROG = "git-ignore"

EXIT_OK = 0
EXIT_USAGE = 1
EXIT_ERROR = 2

_EPILOG = (
    "By default, patterns are added to the file '.gitignore' in the current directory.\n"
    "The specified file is created if it does not exist."
)


def build_parser() -> argparse.ArgumentParser:
    """Build the parser.

    Every mode option writes the same ``mode`` destination, so the last one
    given on the command line wins.
    """
    parser = argparse.ArgumentParser(
        prog=PROG,
        usage="%(prog)s [-h] [-v] [-gir] [-f FILE] pattern [pattern ...]",
        description="Add patterns to a git ignore file.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("patterns", nargs="*", metavar="pattern", help="pattern to add")
    parser.add_argument(
        "-f", dest="mode", metavar="FILE", type=ExplicitFile,
        help="add patterns to FILE",
    )
    parser.add_argument(
        "-g", dest="mode", action="store_const", const=Global(),
        help="add patterns to global ignore file (core.excludesFile)",
    )
    parser.add_argument(
        "-i", dest="mode", action="store_const", const=Internal(),
        help="add patterns to internal repository ignore file (_/.git/info/exclude)",
    )
    parser.add_argument(
        "-r", dest="mode", action="store_const", const=Root(),
        help="add patterns to root-level repository ignore file (_/.gitignore)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="show debug output")
    parser.set_defaults(mode=None)
    return parser


def run(mode: TargetMode, patterns: list[str], cwd: Path | None = None, git_exe: str = "git") -> bool:
    """Resolve the target for *mode* and merge *patterns* into it."""
    path = resolve(mode, cwd=cwd, git_exe=git_exe)
    return update_ignore_file(path, patterns)


def main(argv: list[str] | None = None) -> int:
    just_fix_windows_console()

    parser = build_parser()
    try:
        args = parser.parse_intermixed_args(argv)
    except SystemExit as exc:
        # -h and argparse usage errors
        return EXIT_OK if not exc.code else EXIT_USAGE

    logger.setLevel(logging.DEBUG if args.verbose else logging.INFO)

    if not args.patterns:
        print(parser.format_usage(), end="", file=sys.stderr)
        return EXIT_USAGE

    try:
        settings = load_config()
    except (GitIgnoreError, OSError, TypeError, yaml.YAMLError) as exc:
        logger.error(f"Could not load settings: {exc}")
        return EXIT_ERROR

    mode: TargetMode = args.mode or ExplicitFile(settings.default_file)

    try:
        run(mode, args.patterns, git_exe=settings.git)
    except (GitIgnoreError, OSError, UnicodeDecodeError) as exc:
        logger.error(str(exc))
        return EXIT_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
