"""
mediatr_lint/handlers.py
════════════════════════

Rules about handler implementations.

  GMDTR09  a handler calls another handler's ``Handle`` directly instead of
           going through the mediator (pipeline behaviors are bypassed)
  GMDTR10  a concrete handler is ``public``; handlers are resolved by the
           container and should stay internal to their assembly
  GMDTR13  a type implementing handler interfaces from several families
           (e.g. a request handler that is also a notification handler)
           cannot carry a family-specific suffix and must end with
           ``Handler``
"""

from __future__ import annotations

from typing import ClassVar, Iterable, List, Optional, Tuple

from mediatr_lint import known_symbols as known
from mediatr_lint import rules
from mediatr_lint.checkers import (
    CheckerContext,
    InvocationChecker,
    TypeDeclarationChecker,
)
from mediatr_lint.classifier import classify, handler_roles_of
from mediatr_lint.diagnostics import Diagnostic, RuleDescriptor
from mediatr_lint.symbols import Accessibility, Invocation, TypeRef, TypeSymbol

HANDLER_SUFFIX = "Handler"


class HandlerDeclarationChecker(TypeDeclarationChecker):
    """Visibility and generic naming of handler implementations."""

    name: ClassVar[str] = "handler-declaration"
    description: ClassVar[str] = "Handlers should not be public; mixed handlers end with 'Handler'"
    rules: ClassVar[Tuple[RuleDescriptor, ...]] = (
        rules.HANDLERS_SHOULD_NOT_BE_PUBLIC_RULE,
        rules.USE_HANDLER_SUFFIX_RULE,
    )

    def configure(self, ctx: CheckerContext) -> None:
        if not ctx.catalog.has_markers:
            self.disable()

    def check_type(self, decl: TypeSymbol, ctx: CheckerContext) -> Iterable[Diagnostic]:
        if not decl.is_concrete:
            return []
        families = handler_roles_of(decl, ctx.program, ctx.catalog)
        if not families:
            return []

        found: List[Diagnostic] = []
        if decl.accessibility is Accessibility.PUBLIC:
            found.append(self.diagnostic(
                rules.HANDLERS_SHOULD_NOT_BE_PUBLIC_RULE, decl.span, decl.name,
            ))
        if len(families) > 1 and not decl.name.endswith(HANDLER_SUFFIX):
            found.append(self.diagnostic(
                rules.USE_HANDLER_SUFFIX_RULE, decl.span, decl.name,
                extra={"roles": sorted(role.value for role in families)},
            ))
        return found


class HandlerCallChecker(InvocationChecker):
    """Handlers must not invoke other handlers' ``Handle`` method."""

    name: ClassVar[str] = "handler-call"
    description: ClassVar[str] = "Handlers should not call other handlers directly"
    rules: ClassVar[Tuple[RuleDescriptor, ...]] = (
        rules.REQUEST_HANDLERS_SHOULD_NOT_CALL_HANDLER_RULE,
    )

    def configure(self, ctx: CheckerContext) -> None:
        if not ctx.catalog.has_markers:
            self.disable()

    def _is_handler(self, ref: TypeRef, ctx: CheckerContext) -> bool:
        role = ctx.catalog.marker_role(ref)
        if role is not None:
            return role.is_handler
        decl = ctx.program.resolve(ref)
        return decl is not None and classify(decl, ctx.program, ctx.catalog).is_handler

    def _enclosing_handler(
        self, invocation: Invocation, ctx: CheckerContext
    ) -> Optional[TypeSymbol]:
        if invocation.containing_type is None:
            return None
        decl = ctx.program.resolve(invocation.containing_type)
        if decl is None or not classify(decl, ctx.program, ctx.catalog).is_handler:
            return None
        return decl

    def check_invocation(
        self, invocation: Invocation, ctx: CheckerContext
    ) -> Iterable[Diagnostic]:
        target = invocation.target
        if target.name != known.HANDLE_METHOD:
            return []
        caller = self._enclosing_handler(invocation, ctx)
        if caller is None:
            return []
        callee = target.containing_type
        if callee.definition_key == caller.definition_key:
            return []
        if not self._is_handler(callee, ctx):
            return []
        return [self.diagnostic(
            rules.REQUEST_HANDLERS_SHOULD_NOT_CALL_HANDLER_RULE,
            invocation.span, caller.name, callee.name,
        )]


__all__ = ["HANDLER_SUFFIX", "HandlerDeclarationChecker", "HandlerCallChecker"]
