"""CLI module for the matchy suite runner."""

from __future__ import annotations

import argparse
import importlib.util
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from types import ModuleType

from rich.console import Console
from rich.logging import RichHandler

from matchy.config import load_config
from matchy.reports.base import Reporter
from matchy.reports.console import ConsoleReporter
from matchy.suites.runner import run_suites
from matchy.suites.suite import get_suite_registry
from matchy.version import __version__


EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_NO_TESTS = 5

TEST_FILE_GLOB = "test_*.py"


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for matchy CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        raise SystemExit(_run(args))

    parser.print_help()
    raise SystemExit(EXIT_OK)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="matchy", description="matchy suite runner")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Load test files and run their suites")
    run_parser.add_argument("paths", nargs="*", help="Test files or directories")
    run_parser.add_argument("-k", "--keyword", help="Only run tests whose name or suite matches")
    run_parser.add_argument("-q", "--quiet", action="count", default=0, help="Reduce CLI output")
    run_parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase CLI output"
    )
    return parser


def _configure_logging(verbosity: int, console: Console) -> None:
    if verbosity < 2:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _collect_paths(raw_paths: Sequence[str]) -> list[Path]:
    paths = [Path(p) for p in raw_paths] or [Path.cwd()]
    files: list[Path] = []
    for path in paths:
        path = path.resolve()
        if path.is_dir():
            files.extend(sorted(path.rglob(TEST_FILE_GLOB)))
        elif path.is_file() and path.suffix == ".py":
            files.append(path)
        else:
            raise FileNotFoundError(f"No test file or directory at {path}")
    return files


def _load_module(path: Path) -> ModuleType:
    """Import ``path`` as a module so its suites get declared."""
    module_name = f"matchy_loaded_{path.stem}_{abs(hash(path)):x}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    if str(path.parent) not in sys.path:
        sys.path.insert(0, str(path.parent))
    spec.loader.exec_module(module)
    return module


def _run(args: argparse.Namespace) -> int:
    console = Console()
    verbosity = args.verbose - args.quiet
    _configure_logging(verbosity, console)
    load_config()

    try:
        files = _collect_paths(args.paths)
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        return EXIT_USAGE

    for path in files:
        _load_module(path)

    reporter: Reporter = ConsoleReporter(console=console, verbosity=verbosity)
    run_result = run_suites(
        list(get_suite_registry().values()),
        keyword=args.keyword,
        on_outcome=reporter.on_test_complete,
    )

    if run_result.total == 0:
        reporter.on_no_tests_found()
        return EXIT_NO_TESTS

    reporter.on_run_complete(run_result)
    return EXIT_OK if run_result.successful else EXIT_FAILED


__all__ = ["main"]
