"""
mediatr_lint/naming.py
══════════════════════

Naming conventions for requests, notifications and their handlers
(GMDTR01 – GMDTR06).

Every classified role has exactly one ``SuffixRule``: an ordered tuple of
accepted suffixes and the rule reported when the type name ends with none
of them.  Matching is an ordinal, case-sensitive tail comparison, so
``MyCommand`` satisfies ``Command`` while ``MyCommandX`` and ``Mycommand``
do not.

Handler roles are only evaluated on declarations that can actually
implement a handler (non-abstract classes, structs and records); interfaces
and abstract base classes deriving from a handler interface are contracts,
not handlers, and are left alone.

A concrete handler implementing several handler families has no single
family suffix to carry; its name is judged by GMDTR13 in
:mod:`mediatr_lint.handlers` instead.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import ClassVar, Iterable, List, Mapping, Optional, Tuple

from mediatr_lint import rules
from mediatr_lint.checkers import CheckerContext, TypeDeclarationChecker
from mediatr_lint.classifier import classify, handler_roles_of
from mediatr_lint.diagnostics import Diagnostic, RuleDescriptor
from mediatr_lint.roles import TypeRole
from mediatr_lint.symbols import TypeSymbol


@dataclass(frozen=True)
class SuffixRule:
    suffixes: Tuple[str, ...]
    rule: RuleDescriptor

    def matches(self, type_name: str) -> bool:
        return any(type_name.endswith(suffix) for suffix in self.suffixes)


SUFFIX_RULES: Mapping[TypeRole, SuffixRule] = MappingProxyType({
    TypeRole.REQUEST: SuffixRule(
        ("Command", "Query"),
        rules.USE_COMMAND_OR_QUERY_SUFFIX_RULE,
    ),
    TypeRole.STREAM_REQUEST: SuffixRule(
        ("StreamQuery",),
        rules.USE_STREAM_QUERY_SUFFIX_RULE,
    ),
    TypeRole.NOTIFICATION: SuffixRule(
        ("Notification", "Event"),
        rules.USE_NOTIFICATION_OR_EVENT_SUFFIX_RULE,
    ),
    TypeRole.REQUEST_HANDLER: SuffixRule(
        ("CommandHandler", "QueryHandler"),
        rules.USE_COMMAND_HANDLER_OR_QUERY_HANDLER_SUFFIX_RULE,
    ),
    TypeRole.STREAM_REQUEST_HANDLER: SuffixRule(
        ("StreamQueryHandler",),
        rules.USE_STREAM_QUERY_HANDLER_SUFFIX_RULE,
    ),
    TypeRole.NOTIFICATION_HANDLER: SuffixRule(
        ("NotificationHandler", "EventHandler"),
        rules.USE_NOTIFICATION_HANDLER_OR_EVENT_HANDLER_SUFFIX_RULE,
    ),
})


def suffix_rule_for(role: TypeRole) -> Optional[SuffixRule]:
    return SUFFIX_RULES.get(role)


def naming_violation(decl: TypeSymbol, role: TypeRole) -> Optional[RuleDescriptor]:
    """
    The rule ``decl`` violates given its ``role``, or None.

    Returns None for unclassified types and for handler roles on
    declarations that are not concrete.
    """
    rule = suffix_rule_for(role)
    if rule is None:
        return None
    if role.is_handler and not decl.is_concrete:
        return None
    if rule.matches(decl.name):
        return None
    return rule.rule


def check_name(decl: TypeSymbol, role: TypeRole) -> Optional[Diagnostic]:
    """Diagnostic for ``decl`` at its name span, or None if the name is fine."""
    violated = naming_violation(decl, role)
    if violated is None:
        return None
    return Diagnostic.create(violated, decl.span, decl.name)


class NamingConventionChecker(TypeDeclarationChecker):
    """
    Requests, notifications and handlers must carry the suffix of their role.

    ``MyCommand : IRequest`` is fine, ``MyClass : IRequest<string>`` is
    reported with GMDTR01, ``SomethingHandler : INotificationHandler<T>``
    with GMDTR06.
    """

    name: ClassVar[str] = "naming-convention"
    description: ClassVar[str] = "Message and handler type naming conventions"
    rules: ClassVar[Tuple[RuleDescriptor, ...]] = tuple(
        rule.rule for rule in SUFFIX_RULES.values()
    )

    def configure(self, ctx: CheckerContext) -> None:
        if not ctx.catalog.has_markers:
            self.disable()

    def check_type(self, decl: TypeSymbol, ctx: CheckerContext) -> Iterable[Diagnostic]:
        role = classify(decl, ctx.program, ctx.catalog)
        if role.is_handler and decl.is_concrete:
            if len(handler_roles_of(decl, ctx.program, ctx.catalog)) > 1:
                # mixed handlers are named by GMDTR13 alone
                return []
        violated = naming_violation(decl, role)
        found: List[Diagnostic] = []
        if violated is not None:
            found.append(self.diagnostic(
                violated, decl.span, decl.name,
                extra={"type": decl.metadata_name, "role": role.value},
            ))
        return found


__all__ = [
    "SuffixRule",
    "SUFFIX_RULES",
    "suffix_rule_for",
    "naming_violation",
    "check_name",
    "NamingConventionChecker",
]
