"""
mediatr_lint/config.py
══════════════════════

Rule severity configuration.

Projects tune the rules with the same ``.editorconfig`` keys the analyzer
package has always honoured::

    root = true

    [*.cs]
    dotnet_diagnostic.GMDTR10.severity = none
    dotnet_diagnostic.GMDTR07.severity = error
    dotnet_analyzer_diagnostic.category-Design.severity = suggestion

Severity values
───────────────
  error       → DiagnosticSeverity.ERROR
  warning     → DiagnosticSeverity.WARNING
  suggestion  → DiagnosticSeverity.INFO
  silent      → suppressed
  none        → suppressed
  default     → keep the rule's default severity

A rule-specific key wins over a category key regardless of file order.
Section globs are not interpreted: every section of the file applies.
"""

from __future__ import annotations

import configparser
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Optional, Set, Union

from mediatr_lint.diagnostics import DiagnosticSeverity, RuleDescriptor, SuppressionManager
from mediatr_lint.errors import ConfigError
from mediatr_lint.rules import ALL_RULES

_log = logging.getLogger(__name__)

_RULE_PREFIX = "dotnet_diagnostic."
_CATEGORY_PREFIX = "dotnet_analyzer_diagnostic.category-"
_SEVERITY_SUFFIX = ".severity"
_PREAMBLE = "__preamble__"

SEVERITY_VALUES: Dict[str, Optional[DiagnosticSeverity]] = {
    "error": DiagnosticSeverity.ERROR,
    "warning": DiagnosticSeverity.WARNING,
    "suggestion": DiagnosticSeverity.INFO,
    "silent": None,
    "none": None,
}


@dataclass
class RuleConfiguration:
    """Resolved per-rule severities and suppressions."""
    severities: Dict[str, DiagnosticSeverity] = field(default_factory=dict)
    suppressed: Set[str] = field(default_factory=set)

    def apply(self, suppressions: SuppressionManager) -> None:
        for rule_id in sorted(self.suppressed):
            suppressions.add_global_suppression(rule_id)


def _parse_severity(raw: str, key: str, source: Optional[str]) -> Union[str, Optional[DiagnosticSeverity]]:
    value = raw.split("#", 1)[0].strip().lower()
    if value == "default":
        return "default"
    if value not in SEVERITY_VALUES:
        raise ConfigError(f"unknown severity '{raw}' for '{key}'", source)
    return SEVERITY_VALUES[value]


def parse_config(
    text: str,
    source: Optional[str] = None,
    rules: Iterable[RuleDescriptor] = ALL_RULES,
) -> RuleConfiguration:
    """Parse ``.editorconfig``-style text into a ``RuleConfiguration``."""
    parser = configparser.ConfigParser(
        interpolation=None, strict=False, comment_prefixes=("#", ";"),
    )
    try:
        parser.read_string(f"[{_PREAMBLE}]\n{text}", source=source or "<config>")
    except configparser.Error as exc:
        raise ConfigError(str(exc), source) from exc

    rule_levels: Dict[str, Union[str, Optional[DiagnosticSeverity]]] = {}
    category_levels: Dict[str, Union[str, Optional[DiagnosticSeverity]]] = {}
    for section in parser.sections():
        for key, raw in parser.items(section):
            if not key.endswith(_SEVERITY_SUFFIX):
                continue
            if key.startswith(_RULE_PREFIX):
                rule_id = key[len(_RULE_PREFIX):-len(_SEVERITY_SUFFIX)].upper()
                rule_levels[rule_id] = _parse_severity(raw, key, source)
            elif key.startswith(_CATEGORY_PREFIX):
                category = key[len(_CATEGORY_PREFIX):-len(_SEVERITY_SUFFIX)].lower()
                category_levels[category] = _parse_severity(raw, key, source)

    config = RuleConfiguration()
    known_ids = set()
    for rule in rules:
        known_ids.add(rule.id)
        level = rule_levels.get(rule.id, category_levels.get(rule.category.lower(), "default"))
        if level == "default":
            continue
        if level is None:
            config.suppressed.add(rule.id)
        else:
            config.severities[rule.id] = level

    for rule_id in sorted(set(rule_levels) - known_ids):
        _log.debug("configuration for unknown rule %s ignored", rule_id)
    return config


def load_config(path: Union[str, Path], rules: Iterable[RuleDescriptor] = ALL_RULES) -> RuleConfiguration:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"cannot read configuration: {exc.strerror}", str(p)) from exc
    _log.info("loading rule configuration from %s", p)
    return parse_config(text, source=str(p), rules=rules)


__all__ = ["SEVERITY_VALUES", "RuleConfiguration", "parse_config", "load_config"]
