"""
mediatr_lint/checkers.py
════════════════════════

Checker framework shared by every rule of the suite.

Architecture
────────────

  ┌─────────────────────────────────────────────────────────┐
  │                   CheckerRunner                         │
  │  ┌──────────────┐  ┌──────────────┐  ┌──────────────┐  │
  │  │   Naming     │  │  Parameter   │  │   Service    │  │
  │  │  Convention  │  │    Usage     │  │ Registration │  │
  │  └──────┬───────┘  └──────┬───────┘  └──────┬───────┘  │
  │         │  per type       │ per invocation  │          │
  │  ┌──────▼─────────────────▼─────────────────▼───────┐  │
  │  │  CheckerContext: Program + SymbolCatalog (frozen) │  │
  │  └──────────────────────────┬────────────────────────┘  │
  │  ┌──────────────────────────▼────────────────────────┐  │
  │  │  SuppressionManager + severity configuration      │  │
  │  └──────────────────────────┬────────────────────────┘  │
  │  ┌──────────────────────────▼────────────────────────┐  │
  │  │        DiagnosticSink → JSON / gcc / summary      │  │
  │  └──────────────────────────────────────────────────┘  │
  └─────────────────────────────────────────────────────────┘

Each Checker follows a four-phase lifecycle:

  1. **configure()**        - compilation start: resolve what the rule needs,
                              possibly disable itself for this program
  2. **collect_evidence()** - visit type declarations / invocations
  3. **diagnose()**         - correlate evidence (most rules need nothing here)
  4. **report()**           - apply severity configuration and suppressions

Per-item hooks (``check_type`` / ``check_invocation``) are pure: they read
the frozen program and catalog and *return* diagnostics.  That is what lets
``CheckerContext.map`` fan them out over a thread pool.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Optional,
    Set,
    Tuple,
    Type,
    TypeVar,
)

from mediatr_lint.catalog import SymbolCatalog, catalog_for
from mediatr_lint.diagnostics import (
    Diagnostic,
    DiagnosticSeverity,
    DiagnosticSink,
    RuleDescriptor,
    SuppressionManager,
)
from mediatr_lint.symbols import Invocation, Program, SourceSpan, TypeSymbol

T = TypeVar("T")
R = TypeVar("R")


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 - CHECKER CONTEXT
# ═════════════════════════════════════════════════════════════════════════

@dataclass
class CheckerContext:
    """
    Shared context passed to every checker during execution.

    Attributes
    ----------
    program      : the snapshot under analysis
    suppressions : SuppressionManager
    severities   : rule id → configured severity
    stats        : mutable dict for timing / counting statistics
    executor     : optional executor used by ``map`` for per-item work
    """
    program: Program
    suppressions: SuppressionManager = field(default_factory=SuppressionManager)
    severities: Dict[str, DiagnosticSeverity] = field(default_factory=dict)
    stats: Dict[str, Any] = field(default_factory=dict)
    executor: Optional[Executor] = None

    @property
    def catalog(self) -> SymbolCatalog:
        """The program's catalog, resolved on first use."""
        return catalog_for(self.program)

    def severity_for(self, descriptor_id: str, default: DiagnosticSeverity) -> DiagnosticSeverity:
        return self.severities.get(descriptor_id, default)

    def map(self, fn: Callable[[T], R], items: Iterable[T]) -> List[R]:
        """Apply ``fn`` to every item, on the executor when there is one."""
        if self.executor is None:
            return [fn(item) for item in items]
        return list(self.executor.map(fn, items))


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 - CHECKER BASE CLASSES
# ═════════════════════════════════════════════════════════════════════════

class Checker(ABC):
    """
    Abstract base class for all checkers.

    Subclass Contract
    ─────────────────
      - Override ``name``, ``description``, ``rules``
      - Implement ``collect_evidence()``
      - Optionally override ``configure()`` / ``diagnose()``
    """

    name: ClassVar[str] = "base-checker"
    description: ClassVar[str] = ""
    rules: ClassVar[Tuple[RuleDescriptor, ...]] = ()

    def __init__(self) -> None:
        self._diagnostics = DiagnosticSink()
        self._enabled: bool = True

    @classmethod
    def rule_ids(cls) -> FrozenSet[str]:
        return frozenset(rule.id for rule in cls.rules)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    def disable(self) -> None:
        self._enabled = False

    def configure(self, ctx: CheckerContext) -> None:
        """Called once per program before evidence collection."""

    @abstractmethod
    def collect_evidence(self, ctx: CheckerContext) -> None:
        ...

    def diagnose(self, ctx: CheckerContext) -> None:
        """Correlate evidence; default does nothing."""

    def report(self, ctx: CheckerContext) -> List[Diagnostic]:
        """Return final diagnostics with configured severities, minus suppressions."""
        configured = []
        for diag in self._diagnostics.sorted():
            severity = ctx.severity_for(diag.rule_id, diag.severity)
            configured.append(
                diag if severity is diag.severity else diag.with_severity(severity)
            )
        return ctx.suppressions.filter_diagnostics(configured)

    def diagnostic(
        self,
        descriptor: RuleDescriptor,
        span: SourceSpan,
        *message_args: Any,
        extra: Optional[Dict[str, Any]] = None,
    ) -> Diagnostic:
        """Build a diagnostic attributed to this checker."""
        return Diagnostic.create(
            descriptor, span, *message_args,
            checker_name=self.name, extra=extra,
        )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} '{self.name}'>"


class TypeDeclarationChecker(Checker):
    """Checker that fires once per type declared in source."""

    def collect_evidence(self, ctx: CheckerContext) -> None:
        if not self._enabled:
            return
        for found in ctx.map(
            lambda decl: list(self.check_type(decl, ctx)),
            ctx.program.source_types(),
        ):
            self._diagnostics.extend(found)

    @abstractmethod
    def check_type(self, decl: TypeSymbol, ctx: CheckerContext) -> Iterable[Diagnostic]:
        ...


class InvocationChecker(Checker):
    """Checker that fires once per invocation expression."""

    def collect_evidence(self, ctx: CheckerContext) -> None:
        if not self._enabled:
            return
        for found in ctx.map(
            lambda inv: list(self.check_invocation(inv, ctx)),
            ctx.program.invocations,
        ):
            self._diagnostics.extend(found)

    @abstractmethod
    def check_invocation(
        self, invocation: Invocation, ctx: CheckerContext
    ) -> Iterable[Diagnostic]:
        ...


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 - CHECKER REGISTRY
# ═════════════════════════════════════════════════════════════════════════

class CheckerRegistry:
    """
    Registry of available checkers with discovery and filtering.

    Usage
    -----
    >>> registry = CheckerRegistry()
    >>> registry.register(NamingConventionChecker)
    >>> checkers = registry.get_enabled()
    >>> checkers = registry.filter_by_rule_id("GMDTR01")
    """

    def __init__(self) -> None:
        self._checkers: Dict[str, Type[Checker]] = {}
        self._disabled: Set[str] = set()

    def register(self, checker_cls: Type[Checker]) -> None:
        self._checkers[checker_cls.name] = checker_cls

    def unregister(self, name: str) -> None:
        self._checkers.pop(name, None)

    def disable(self, name: str) -> None:
        self._disabled.add(name)

    def enable(self, name: str) -> None:
        self._disabled.discard(name)

    def get_all(self) -> List[Type[Checker]]:
        return list(self._checkers.values())

    def get_enabled(self) -> List[Type[Checker]]:
        return [
            cls for name, cls in self._checkers.items()
            if name not in self._disabled
        ]

    def get_by_name(self, name: str) -> Optional[Type[Checker]]:
        return self._checkers.get(name)

    def filter_by_rule_id(self, rule_id: str) -> List[Type[Checker]]:
        """Return checkers that can produce the given rule id."""
        return [
            cls for cls in self._checkers.values()
            if rule_id in cls.rule_ids()
        ]

    @property
    def names(self) -> List[str]:
        return sorted(self._checkers.keys())


__all__ = [
    "CheckerContext",
    "Checker",
    "TypeDeclarationChecker",
    "InvocationChecker",
    "CheckerRegistry",
]
