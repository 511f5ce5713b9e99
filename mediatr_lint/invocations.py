"""
mediatr_lint/invocations.py
═══════════════════════════

Dispatcher call-site checks (GMDTR07, GMDTR08, GMDTR12).

A call site is inspected only when:

  * every dispatcher type (``Mediator``, ``IMediator``, ``ISender``,
    ``IPublisher``) resolved in the catalog,
  * the target method is declared on one of them,
  * the target method has exactly two parameters,
  * its base name (simple name minus a trailing ``Async``) is one of
    ``Send``, ``Publish``, ``CreateStream``.

Three independent checks then apply, any subset may fire:

  ┌──────────┬──────────────────────────────────────────────────────────┐
  │ GMDTR12  │ Send / Publish whose name does not end with ``Async``    │
  │ GMDTR07  │ the resolved overload is not generic                     │
  │ GMDTR08  │ two arguments, the second bound to its default value     │
  └──────────┴──────────────────────────────────────────────────────────┘
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, FrozenSet, Iterable, List, Optional, Tuple

from mediatr_lint import known_symbols as known
from mediatr_lint import rules
from mediatr_lint.catalog import SymbolCatalog
from mediatr_lint.checkers import CheckerContext, InvocationChecker
from mediatr_lint.diagnostics import Diagnostic, RuleDescriptor
from mediatr_lint.symbols import ArgumentKind, Invocation, SourceSpan

DISPATCHER_METHOD_NAMES: FrozenSet[str] = frozenset({
    known.SEND_METHOD,
    known.PUBLISH_METHOD,
    known.CREATE_STREAM_METHOD,
})

# CreateStream returns IAsyncEnumerable and keeps its name.
ASYNC_SUFFIX_METHOD_NAMES: FrozenSet[str] = frozenset({
    known.SEND_METHOD,
    known.PUBLISH_METHOD,
})


@dataclass(frozen=True)
class InvocationFinding:
    """Outcome of inspecting one dispatcher call site."""
    span: SourceSpan
    method_name: str
    missing_async_suffix: bool = False
    not_generic: bool = False
    missing_cancellation_token: bool = False

    @property
    def violated_rules(self) -> Tuple[RuleDescriptor, ...]:
        found: List[RuleDescriptor] = []
        if self.missing_async_suffix:
            found.append(rules.USE_METHOD_ENDING_WITH_ASYNC_RULE)
        if self.not_generic:
            found.append(rules.USE_GENERIC_PARAMETER_RULE)
        if self.missing_cancellation_token:
            found.append(rules.PROVIDE_CANCELLATION_TOKEN_RULE)
        return tuple(found)

    def __bool__(self) -> bool:
        return bool(self.violated_rules)


def base_method_name(name: str) -> str:
    if name.endswith(known.ASYNC_SUFFIX) and name != known.ASYNC_SUFFIX:
        return name[: -len(known.ASYNC_SUFFIX)]
    return name


def is_dispatcher_method(invocation: Invocation, catalog: SymbolCatalog) -> bool:
    target = invocation.target
    return (
        catalog.is_dispatcher_valid
        and len(target.parameters) == 2
        and catalog.is_dispatcher_type(target.containing_type)
        and base_method_name(target.name) in DISPATCHER_METHOD_NAMES
    )


def is_default_cancellation_token_argument(invocation: Invocation) -> bool:
    args = invocation.arguments
    return len(args) == 2 and args[1].kind is ArgumentKind.DEFAULT_VALUE


def inspect_invocation(
    invocation: Invocation, catalog: SymbolCatalog
) -> Optional[InvocationFinding]:
    """
    Inspect a call site; None when it is not a dispatcher call.

    A returned finding may still be clean (falsy) when the call follows
    every convention.
    """
    if not is_dispatcher_method(invocation, catalog):
        return None
    target = invocation.target
    base = base_method_name(target.name)
    return InvocationFinding(
        span=invocation.span,
        method_name=target.name,
        missing_async_suffix=(
            base in ASYNC_SUFFIX_METHOD_NAMES
            and not target.name.endswith(known.ASYNC_SUFFIX)
        ),
        not_generic=not target.is_generic,
        missing_cancellation_token=is_default_cancellation_token_argument(invocation),
    )


class ParameterUsageChecker(InvocationChecker):
    """Conventions for ``Send`` / ``Publish`` / ``CreateStream`` call sites."""

    name: ClassVar[str] = "parameter-usage"
    description: ClassVar[str] = "Dispatcher call sites: generic overload, cancellation, Async suffix"
    rules: ClassVar[Tuple[RuleDescriptor, ...]] = (
        rules.USE_GENERIC_PARAMETER_RULE,
        rules.PROVIDE_CANCELLATION_TOKEN_RULE,
        rules.USE_METHOD_ENDING_WITH_ASYNC_RULE,
    )

    def configure(self, ctx: CheckerContext) -> None:
        if not ctx.catalog.is_dispatcher_valid:
            self.disable()

    def check_invocation(
        self, invocation: Invocation, ctx: CheckerContext
    ) -> Iterable[Diagnostic]:
        finding = inspect_invocation(invocation, ctx.catalog)
        if not finding:
            return []
        return [
            self.diagnostic(rule, finding.span, extra={"method": finding.method_name})
            for rule in finding.violated_rules
        ]


__all__ = [
    "DISPATCHER_METHOD_NAMES",
    "ASYNC_SUFFIX_METHOD_NAMES",
    "InvocationFinding",
    "base_method_name",
    "is_dispatcher_method",
    "is_default_cancellation_token_argument",
    "inspect_invocation",
    "ParameterUsageChecker",
]
