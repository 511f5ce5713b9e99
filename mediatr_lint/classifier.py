"""
mediatr_lint/classifier.py
══════════════════════════

Assigns a message-pattern role to a type declaration.

The classifier looks at every interface the declaration implements,
transitively, and maps each one through the catalog's open-generic marker
table.  When several markers match, the role with the highest priority in
``ROLE_PRIORITY`` wins, so the result never depends on declaration order.
Handlers come first: a handler never legitimately implements a request
marker itself, but a class implementing both is still a handler.
"""

from __future__ import annotations

from typing import FrozenSet, Set

from mediatr_lint.catalog import SymbolCatalog
from mediatr_lint.roles import HANDLER_ROLES, ROLE_PRIORITY, TypeRole
from mediatr_lint.symbols import Program, TypeSymbol


def roles_of(
    decl: TypeSymbol, program: Program, catalog: SymbolCatalog
) -> FrozenSet[TypeRole]:
    """Every role whose marker ``decl`` implements, directly or not."""
    if not catalog.has_markers:
        return frozenset()
    roles: Set[TypeRole] = set()
    for iface in program.all_interfaces(decl):
        role = catalog.marker_role(iface)
        if role is not None:
            roles.add(role)
    return frozenset(roles)


def classify(decl: TypeSymbol, program: Program, catalog: SymbolCatalog) -> TypeRole:
    """Return the role of ``decl``; ``UNCLASSIFIED`` if it implements no marker."""
    roles = roles_of(decl, program, catalog)
    for role in ROLE_PRIORITY:
        if role in roles:
            return role
    return TypeRole.UNCLASSIFIED


def handler_roles_of(
    decl: TypeSymbol, program: Program, catalog: SymbolCatalog
) -> FrozenSet[TypeRole]:
    return roles_of(decl, program, catalog) & HANDLER_ROLES


__all__ = ["TypeRole", "roles_of", "classify", "handler_roles_of"]
