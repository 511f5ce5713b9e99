"""
mediatr_lint/diagnostics.py
═══════════════════════════

Diagnostic model, the append-only diagnostic sink and suppression handling.

  ┌──────────────┐   describes   ┌──────────────┐
  │RuleDescriptor│──────────────▶│  Diagnostic  │  (rule id, message,
  └──────────────┘               └──────┬───────┘   severity, span)
                                        │
                        ┌───────────────▼───────────────┐
                        │        SuppressionManager      │
                        │ snapshot │ per-file │ global   │
                        └───────────────┬───────────────┘
                                        │
                        ┌───────────────▼───────────────┐
                        │         DiagnosticSink         │
                        └───────────────────────────────┘

Rule identifiers are an external contract: configuration files reference
them by id, so a descriptor's ``id`` never changes once released.
"""

from __future__ import annotations

import json
from collections import defaultdict
from dataclasses import dataclass, field, replace
from enum import Enum
from fnmatch import fnmatch
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    Optional,
    Set,
    Tuple,
)

from mediatr_lint.symbols import SourceSpan, Suppression


# ═════════════════════════════════════════════════════════════════════════
#  PART 1 - DIAGNOSTIC MODEL
# ═════════════════════════════════════════════════════════════════════════

class DiagnosticSeverity(Enum):
    """Roslyn-compatible severity levels."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HIDDEN = "hidden"


@dataclass(frozen=True)
class RuleDescriptor:
    """
    Static description of one rule.

    Attributes
    ----------
    id               : stable rule identifier (e.g. "GMDTR01")
    title            : short title
    message_format   : ``str.format`` template for the message
    category         : rule category ("Design" for every built-in rule)
    default_severity : severity used unless configuration overrides it
    enabled_by_default : whether the rule reports without opt-in
    help_uri         : link to the rule documentation
    """
    id: str
    title: str
    message_format: str
    category: str = "Design"
    default_severity: DiagnosticSeverity = DiagnosticSeverity.WARNING
    enabled_by_default: bool = True
    help_uri: str = ""

    def format_message(self, *args: Any) -> str:
        return self.message_format.format(*args)


@dataclass(frozen=True)
class Diagnostic:
    """
    A single finding.

    ``extra`` carries machine-readable context (type name, method name)
    for downstream tooling; it does not participate in equality.
    """
    rule_id: str
    message: str
    severity: DiagnosticSeverity
    span: SourceSpan
    category: str = "Design"
    title: str = ""
    help_uri: str = ""
    checker_name: str = ""
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def create(
        cls,
        descriptor: RuleDescriptor,
        span: SourceSpan,
        *message_args: Any,
        severity: Optional[DiagnosticSeverity] = None,
        checker_name: str = "",
        extra: Optional[Dict[str, Any]] = None,
    ) -> "Diagnostic":
        """Instantiate ``descriptor`` at ``span``."""
        return cls(
            rule_id=descriptor.id,
            message=descriptor.format_message(*message_args),
            severity=severity or descriptor.default_severity,
            span=span,
            category=descriptor.category,
            title=descriptor.title,
            help_uri=descriptor.help_uri,
            checker_name=checker_name,
            extra=extra or {},
        )

    @property
    def sort_key(self) -> Tuple[SourceSpan, str]:
        return (self.span, self.rule_id)

    def with_severity(self, severity: DiagnosticSeverity) -> "Diagnostic":
        return replace(self, severity=severity)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON-lines output format."""
        result: Dict[str, Any] = {
            "ruleId": self.rule_id,
            "message": self.message,
            "severity": self.severity.value,
            "category": self.category,
            "file": self.span.file,
            "startLine": self.span.start_line,
            "startColumn": self.span.start_column,
            "endLine": self.span.end_line,
            "endColumn": self.span.end_column,
        }
        if self.help_uri:
            result["helpUri"] = self.help_uri
        return result

    def to_json_str(self) -> str:
        return json.dumps(self.to_dict())

    def to_gcc_format(self) -> str:
        """GCC-style diagnostic string: file:line:col: severity: message."""
        return f"{self.span}: {self.severity.value}: {self.message} [{self.rule_id}]"


# ═════════════════════════════════════════════════════════════════════════
#  PART 2 - DIAGNOSTIC SINK
# ═════════════════════════════════════════════════════════════════════════

class DiagnosticSink:
    """
    Append-only collection of diagnostics.

    No deduplication: two rules reporting on the same span both appear.
    Iteration yields emission order; ``sorted()`` yields source-span order,
    which is what hosts should present.
    """

    def __init__(self, diagnostics: Iterable[Diagnostic] = ()) -> None:
        self._items: List[Diagnostic] = list(diagnostics)

    def append(self, diagnostic: Diagnostic) -> None:
        self._items.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        self._items.extend(diagnostics)

    def sorted(self) -> List[Diagnostic]:
        return sorted(self._items, key=lambda d: d.sort_key)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"<DiagnosticSink {len(self._items)} diagnostics>"


# ═════════════════════════════════════════════════════════════════════════
#  PART 3 - SUPPRESSION MANAGER
# ═════════════════════════════════════════════════════════════════════════

class SuppressionManager:
    """
    Manages diagnostic suppressions from multiple sources.

    Sources:
      1. Snapshot suppressions (``#pragma warning disable`` recorded by the
         front-end), either on a line, a whole file or everywhere
      2. File-level suppressions (passed programmatically, fnmatch patterns)
      3. Global suppressions (command-line or configuration)

    Usage
    -----
    >>> sm = SuppressionManager()
    >>> sm.load_program_suppressions(program)
    >>> sm.add_file_suppression("GMDTR10", "Legacy/*.cs")
    >>> sm.add_global_suppression("GMDTR12")
    >>> if not sm.is_suppressed(diagnostic):
    ...     emit(diagnostic)
    """

    def __init__(self) -> None:
        # {(file, line)} → rule ids suppressed at that location
        self._inline: Dict[Tuple[str, int], Set[str]] = defaultdict(set)
        # file pattern → rule ids
        self._file_level: Dict[str, Set[str]] = defaultdict(set)
        self._global: Set[str] = set()

    def load_program_suppressions(self, suppressions: Iterable[Suppression]) -> None:
        for supp in suppressions:
            if supp.file and supp.line:
                self._inline[(supp.file, supp.line)].add(supp.rule_id)
            elif supp.file:
                self._file_level[supp.file].add(supp.rule_id)
            else:
                self._global.add(supp.rule_id)

    def add_file_suppression(self, rule_id: str, file_pattern: str) -> None:
        self._file_level[file_pattern].add(rule_id)

    def add_global_suppression(self, rule_id: str) -> None:
        self._global.add(rule_id)

    def merge(self, other: "SuppressionManager") -> None:
        """Add every suppression known to ``other``."""
        for key, ids in other._inline.items():
            self._inline[key] |= ids
        for pattern, ids in other._file_level.items():
            self._file_level[pattern] |= ids
        self._global |= other._global

    def is_suppressed(self, diag: Diagnostic) -> bool:
        rid = diag.rule_id
        if rid in self._global or "*" in self._global:
            return True

        span = diag.span
        ids = self._inline.get((span.file, span.start_line), set())
        if rid in ids or "*" in ids:
            return True

        for pattern, ids in self._file_level.items():
            if rid not in ids and "*" not in ids:
                continue
            if pattern == span.file or fnmatch(span.file, pattern):
                return True
        return False

    def filter_diagnostics(self, diagnostics: Iterable[Diagnostic]) -> List[Diagnostic]:
        """Return only non-suppressed diagnostics."""
        return [d for d in diagnostics if not self.is_suppressed(d)]


__all__ = [
    "DiagnosticSeverity",
    "RuleDescriptor",
    "Diagnostic",
    "DiagnosticSink",
    "SuppressionManager",
]
