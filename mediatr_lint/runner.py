"""
mediatr_lint/runner.py
══════════════════════

Runs the checker suite over program snapshots and aggregates results.

The catalog is resolved once per program (``catalog_for`` memoizes it);
with ``jobs > 1`` per-declaration and per-invocation hooks run on a thread
pool.  Results are always returned in source-span order, so the output is
identical whatever the scheduling.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence, Type

from mediatr_lint.checkers import Checker, CheckerContext, CheckerRegistry
from mediatr_lint.diagnostics import (
    Diagnostic,
    DiagnosticSeverity,
    DiagnosticSink,
    SuppressionManager,
)
from mediatr_lint.handlers import HandlerCallChecker, HandlerDeclarationChecker
from mediatr_lint.invocations import ParameterUsageChecker
from mediatr_lint.naming import NamingConventionChecker
from mediatr_lint.registration import ServiceRegistrationChecker
from mediatr_lint.symbols import Program, SourceSpan

_log = logging.getLogger(__name__)

INTERNAL_ERROR_ID = "internalError"


def build_default_registry() -> CheckerRegistry:
    """Register and return every built-in checker."""
    registry = CheckerRegistry()
    for cls in (
        NamingConventionChecker,
        ParameterUsageChecker,
        ServiceRegistrationChecker,
        HandlerDeclarationChecker,
        HandlerCallChecker,
    ):
        registry.register(cls)
    return registry


DEFAULT_REGISTRY = build_default_registry()


@dataclass
class CheckerRunResults:
    """
    Aggregate results from running a suite of checkers.

    Attributes
    ----------
    sink                   : every diagnostic, in emission order
    diagnostics_by_checker : diagnostics grouped by checker name
    stats                  : timing and counting statistics
    checker_names          : names of checkers that were run
    """
    sink: DiagnosticSink = field(default_factory=DiagnosticSink)
    diagnostics_by_checker: Dict[str, List[Diagnostic]] = field(
        default_factory=lambda: defaultdict(list)
    )
    stats: Dict[str, Any] = field(default_factory=dict)
    checker_names: List[str] = field(default_factory=list)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """All diagnostics in source-span order."""
        return self.sink.sorted()

    @property
    def error_count(self) -> int:
        return len(self.by_severity(DiagnosticSeverity.ERROR))

    @property
    def warning_count(self) -> int:
        return len(self.by_severity(DiagnosticSeverity.WARNING))

    @property
    def total_count(self) -> int:
        return len(self.sink)

    def by_severity(self, severity: DiagnosticSeverity) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == severity]

    def by_file(self, file: str) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.span.file == file]

    def by_rule(self, rule_id: str) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.rule_id == rule_id]

    def merge(self, other: "CheckerRunResults") -> None:
        self.sink.extend(other.sink)
        for name, diags in other.diagnostics_by_checker.items():
            self.diagnostics_by_checker[name].extend(diags)
        for key, val in other.stats.items():
            self.stats[key] = self.stats.get(key, 0) + val
        for name in other.checker_names:
            if name not in self.checker_names:
                self.checker_names.append(name)

    def to_json_lines(self) -> str:
        return "\n".join(d.to_json_str() for d in self.diagnostics)

    def to_gcc_format(self) -> str:
        return "\n".join(d.to_gcc_format() for d in self.diagnostics)

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [
            f"Checker run complete: {self.total_count} diagnostics "
            f"({self.error_count} errors, {self.warning_count} warnings)",
        ]
        for name in self.checker_names:
            count = len(self.diagnostics_by_checker.get(name, []))
            elapsed = self.stats.get(f"{name}_elapsed_ms", 0)
            lines.append(f"  {name}: {count} findings ({elapsed:.1f}ms)")
        return "\n".join(lines)


class CheckerRunner:
    """
    Runs a suite of checkers against program snapshots.

    Usage
    -----
    >>> runner = CheckerRunner()
    >>> results = runner.run(program)
    >>> print(results.summary())

    >>> results = runner.run(program, checkers=["naming-convention"])

    Parameters for constructor
    ─────────────────────────
    registry     : CheckerRegistry - source of checker classes
    suppressions : SuppressionManager - pre-loaded suppression rules
    severities   : rule id → configured severity
    jobs         : worker threads for per-item evaluation (1 = inline)
    """

    def __init__(
        self,
        registry: Optional[CheckerRegistry] = None,
        suppressions: Optional[SuppressionManager] = None,
        severities: Optional[Dict[str, DiagnosticSeverity]] = None,
        jobs: int = 1,
    ) -> None:
        self.registry = registry or DEFAULT_REGISTRY
        self.suppressions = suppressions or SuppressionManager()
        self.severities = dict(severities or {})
        self.jobs = max(1, jobs)

    def _select(self, checkers: Optional[Sequence[str]]) -> List[Type[Checker]]:
        if checkers is None:
            return self.registry.get_enabled()
        selected: List[Type[Checker]] = []
        for name in checkers:
            cls = self.registry.get_by_name(name)
            if cls is None:
                _log.warning("unknown checker '%s' ignored", name)
                continue
            selected.append(cls)
        return selected

    def run(
        self,
        program: Program,
        checkers: Optional[Sequence[str]] = None,
    ) -> CheckerRunResults:
        """Run checkers (None = all enabled) against a single program."""
        if self.jobs > 1:
            with ThreadPoolExecutor(max_workers=self.jobs) as pool:
                return self._run(program, checkers, pool)
        return self._run(program, checkers, None)

    def _run(
        self,
        program: Program,
        checkers: Optional[Sequence[str]],
        executor: Optional[ThreadPoolExecutor],
    ) -> CheckerRunResults:
        results = CheckerRunResults()

        suppressions = SuppressionManager()
        suppressions.merge(self.suppressions)
        suppressions.load_program_suppressions(program.suppressions)

        ctx = CheckerContext(
            program=program,
            suppressions=suppressions,
            severities=self.severities,
            executor=executor,
        )
        _log.info(
            "analyzing %r (%d types, %d invocations)",
            program, len(program.types), len(program.invocations),
        )

        for cls in self._select(checkers):
            checker = cls()
            checker_name = cls.name
            results.checker_names.append(checker_name)

            t0 = time.monotonic()
            try:
                checker.configure(ctx)
                if not checker.enabled:
                    _log.debug("%s disabled for %r", checker_name, program)
                checker.collect_evidence(ctx)
                checker.diagnose(ctx)
                diags = checker.report(ctx)
            except Exception as exc:
                # One broken checker must not hide the others' findings.
                _log.exception("checker '%s' failed on %r", checker_name, program)
                diags = [Diagnostic(
                    rule_id=INTERNAL_ERROR_ID,
                    message=f"Checker '{checker_name}' failed: {exc}",
                    severity=DiagnosticSeverity.HIDDEN,
                    span=SourceSpan(),
                    checker_name=checker_name,
                )]
            elapsed_ms = (time.monotonic() - t0) * 1000.0

            results.sink.extend(diags)
            results.diagnostics_by_checker[checker_name] = diags
            results.stats[f"{checker_name}_elapsed_ms"] = elapsed_ms

        return results

    def run_many(
        self,
        programs: Iterable[Program],
        checkers: Optional[Sequence[str]] = None,
    ) -> CheckerRunResults:
        """Run checkers across several programs and combine the results."""
        combined = CheckerRunResults()
        for program in programs:
            combined.merge(self.run(program, checkers=checkers))
        return combined


def analyze(program: Program, **runner_options: Any) -> List[Diagnostic]:
    """Convenience wrapper: run every enabled checker, return diagnostics."""
    return CheckerRunner(**runner_options).run(program).diagnostics


__all__ = [
    "INTERNAL_ERROR_ID",
    "build_default_registry",
    "DEFAULT_REGISTRY",
    "CheckerRunResults",
    "CheckerRunner",
    "analyze",
]
