"""Entry point for python -m pkgrun."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pkgrun.config import Settings, find_settings
from pkgrun.exceptions import ExecutionError, PkgRunError
from pkgrun.output import Reporter
from pkgrun.run import ScriptRunner

SUBCOMMANDS = ("run",)


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(prog="pkgrun", description="Run a defined package script.")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Run a defined package script")
    run_parser.add_argument(
        "--cwd",
        type=Path,
        default=None,
        help="Project directory (default: current directory)",
    )
    run_parser.add_argument(
        "--settings",
        type=Path,
        default=None,
        help="Settings file (default: ~/.pkgrun/settings.yaml or ./.pkgrun.yaml)",
    )
    run_parser.add_argument(
        "--non-interactive",
        action="store_true",
        default=None,
        help="Never ask for a command",
    )
    run_parser.add_argument("--script-shell", help="Shell used to run scripts")
    run_parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Give more output; repeat for debug logging",
    )
    run_parser.add_argument(
        "argv",
        nargs=argparse.REMAINDER,
        help="Script or binary name followed by its arguments",
    )

    return parser


def _normalize_argv(argv: Sequence[str]) -> list[str]:
    """Treat ``pkgrun build`` as ``pkgrun run build``."""
    argv = list(argv)
    if not argv or argv[0] not in (*SUBCOMMANDS, "-h", "--help"):
        argv.insert(0, "run")
    return argv


def _script_argv(argv: Sequence[str]) -> list[str]:
    """Drop the ``--`` separating pkgrun options from the script's."""
    argv = list(argv)
    if argv and argv[0] == "--":
        del argv[0]
    return argv


def _configure_logging(verbose: int) -> None:
    logging.basicConfig(
        level=max(logging.WARNING - verbose * 10, logging.DEBUG),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_settings(args: argparse.Namespace) -> Settings:
    settings = find_settings(args.settings)
    if args.script_shell:
        settings.script_shell = args.script_shell
    if args.non_interactive is not None:
        settings.non_interactive = args.non_interactive
    return settings


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI."""
    parser = _build_parser()
    args = parser.parse_args(_normalize_argv(sys.argv[1:] if argv is None else argv))
    _configure_logging(args.verbose)

    reporter = Reporter()
    try:
        settings = _load_settings(args)
        runner = ScriptRunner(settings=settings, cwd=args.cwd or Path.cwd(), reporter=reporter)
        runner.run(_script_argv(args.argv))
    except ExecutionError as e:
        reporter.error(str(e))
        return e.returncode if e.returncode > 0 else 1
    except PkgRunError as e:
        reporter.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
