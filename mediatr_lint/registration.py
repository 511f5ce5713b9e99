"""Forbidden registration API (GMDTR11): ``AddMediatR`` instead of ``AddMediator``."""

from __future__ import annotations

from typing import ClassVar, Iterable, Optional, Tuple

from mediatr_lint import known_symbols as known
from mediatr_lint import rules
from mediatr_lint.catalog import SymbolCatalog
from mediatr_lint.checkers import CheckerContext, InvocationChecker
from mediatr_lint.diagnostics import Diagnostic, RuleDescriptor
from mediatr_lint.symbols import Invocation


def is_forbidden_registration(invocation: Invocation, catalog: SymbolCatalog) -> bool:
    target = invocation.target
    return (
        target.name == known.ADD_MEDIATR_METHOD
        and catalog.is_registration_extensions(target.containing_type)
    )


def check_registration(
    invocation: Invocation, catalog: SymbolCatalog
) -> Optional[Diagnostic]:
    if not is_forbidden_registration(invocation, catalog):
        return None
    return Diagnostic.create(rules.USE_ADD_MEDIATOR_EXTENSION_METHOD_RULE, invocation.span)


class ServiceRegistrationChecker(InvocationChecker):
    """
    Flags every call to MediatR's own ``AddMediatR`` registration.

    The wrapper's ``AddMediator`` registers the same handlers plus the
    pipeline behaviors the wrapper relies on.  Arguments are not inspected.
    """

    name: ClassVar[str] = "service-registration"
    description: ClassVar[str] = "Use AddMediator instead of AddMediatR"
    rules: ClassVar[Tuple[RuleDescriptor, ...]] = (
        rules.USE_ADD_MEDIATOR_EXTENSION_METHOD_RULE,
    )

    def check_invocation(
        self, invocation: Invocation, ctx: CheckerContext
    ) -> Iterable[Diagnostic]:
        if not is_forbidden_registration(invocation, ctx.catalog):
            return []
        return [self.diagnostic(
            rules.USE_ADD_MEDIATOR_EXTENSION_METHOD_RULE,
            invocation.span,
            extra={"method": invocation.target.name},
        )]


__all__ = ["is_forbidden_registration", "check_registration", "ServiceRegistrationChecker"]
