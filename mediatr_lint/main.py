#!/usr/bin/env python3
"""mediatr_lint/main.py - command line front-end.

Usage examples
--------------
    # Check one or more program dumps, JSON lines on stdout
    mediatr-lint app.dump.json

    # GCC-style output, rule configuration from an .editorconfig
    mediatr-lint app.dump.json --output gcc --config .editorconfig

    # Only the naming rules, four worker threads
    mediatr-lint app.dump.json --checkers naming-convention --jobs 4

    # List the rules and exit
    mediatr-lint --list-rules

Exit codes
----------
    0   Success (no diagnostic with severity ERROR).
    1   One or more diagnostics with severity ERROR were emitted.
    2   Infrastructure failure (unreadable dump, bad configuration...).

The module doubles as ``python -m mediatr_lint`` via the companion
``mediatr_lint/__main__.py`` which simply calls :func:`main`.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Sequence, TextIO

from mediatr_lint import __version__
from mediatr_lint.config import RuleConfiguration, load_config
from mediatr_lint.diagnostics import SuppressionManager
from mediatr_lint.errors import MediatrLintError
from mediatr_lint.loader import load_program
from mediatr_lint.rules import ALL_RULES
from mediatr_lint.runner import DEFAULT_REGISTRY, CheckerRunner, CheckerRunResults

_log = logging.getLogger("mediatr_lint")

EXIT_OK: int = 0
EXIT_ERROR: int = 1
EXIT_INFRA: int = 2


def _configure_logging(verbosity: int) -> None:
    """Set up the ``mediatr_lint`` logger.

    Parameters
    ----------
    verbosity:
        0 → WARNING, 1 → INFO, 2+ → DEBUG.
    """
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)-5.5s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root = logging.getLogger("mediatr_lint")
    for old in [h for h in root.handlers if getattr(h, "_mediatr_lint_cli", False)]:
        root.removeHandler(old)
    handler._mediatr_lint_cli = True  # type: ignore[attr-defined]
    root.setLevel(level)
    root.addHandler(handler)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mediatr-lint",
        description="Naming and usage conventions for MediatR requests, notifications and handlers",
    )
    parser.add_argument("dumps", nargs="*", help="Program dump files (JSON)")
    parser.add_argument(
        "--checkers", nargs="*", default=None,
        help="Checker names to run (default: all)",
    )
    parser.add_argument(
        "--output", choices=["json", "gcc", "summary"],
        default="json", help="Output format",
    )
    parser.add_argument(
        "--suppress", nargs="*", default=None,
        help="Rule ids to suppress",
    )
    parser.add_argument(
        "--config", default=None,
        help=".editorconfig-style file with dotnet_diagnostic.<ID>.severity keys",
    )
    parser.add_argument(
        "--jobs", type=int, default=1,
        help="Worker threads for per-declaration evaluation",
    )
    parser.add_argument(
        "--list-rules", action="store_true",
        help="List available rules and checkers and exit",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _list_rules(out: TextIO) -> None:
    for rule in ALL_RULES:
        checkers = ", ".join(cls.name for cls in DEFAULT_REGISTRY.filter_by_rule_id(rule.id))
        out.write(f"  {rule.id}  {rule.default_severity.value:8s} {rule.title}\n")
        out.write(f"  {'':7s}  {'':8s} checker: {checkers}\n")


def _write_results(results: CheckerRunResults, fmt: str, out: TextIO) -> None:
    if fmt == "json":
        text = results.to_json_lines()
    elif fmt == "gcc":
        text = results.to_gcc_format()
    else:
        text = results.summary()
    if text:
        out.write(text + "\n")


def run(
    dumps: Sequence[str],
    checkers: Optional[Sequence[str]] = None,
    output: str = "json",
    suppress: Optional[Sequence[str]] = None,
    config: Optional[str] = None,
    jobs: int = 1,
    out: Optional[TextIO] = None,
) -> int:
    """
    Analyze dump files and write diagnostics.

    Returns
    -------
    Exit code (0 = no errors, 1 = errors found, 2 = infrastructure failure)
    """
    out = out or sys.stdout
    try:
        rule_config = load_config(config) if config else RuleConfiguration()
        programs = [load_program(path) for path in dumps]
    except MediatrLintError as exc:
        _log.error("%s", exc)
        return EXIT_INFRA

    sm = SuppressionManager()
    rule_config.apply(sm)
    for rule_id in suppress or ():
        sm.add_global_suppression(rule_id)

    runner = CheckerRunner(suppressions=sm, severities=rule_config.severities, jobs=jobs)
    results = runner.run_many(programs, checkers=checkers)
    _write_results(results, output, out)
    _log.info(
        "%d diagnostics (%d errors) in %d program(s)",
        results.total_count, results.error_count, len(programs),
    )
    return EXIT_ERROR if results.error_count > 0 else EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for ``mediatr-lint`` / ``python -m mediatr_lint``."""
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if args.list_rules:
        _list_rules(sys.stdout)
        return EXIT_OK

    if not args.dumps:
        _log.warning("no input files")
        return EXIT_OK

    return run(
        dumps=args.dumps,
        checkers=args.checkers,
        output=args.output,
        suppress=args.suppress,
        config=args.config,
        jobs=args.jobs,
    )


if __name__ == "__main__":
    sys.exit(main())
