"""
mediatr_lint/catalog.py
═══════════════════════

The symbol catalog: the handful of MediatR definitions every rule needs,
resolved once per program and frozen afterwards.

  ┌──────────────────────┐     resolve()      ┌──────────────────────────┐
  │ Program (symbol table)│ ─────────────────▶ │ SymbolCatalog (frozen)   │
  └──────────────────────┘                     │  markers  → TypeRole     │
                                               │  dispatcher definitions  │
                                               │  registration extensions │
                                               └──────────────────────────┘

Each lookup is independently optional.  A program built against an older
MediatR without ``IStreamRequest`` still gets its requests classified; a
program that does not reference MediatR at all gets an empty catalog and
every rule silently skips.  The invocation rules additionally require all
four dispatcher types (``Mediator``, ``IMediator``, ``ISender``,
``IPublisher``) before they run.
"""

from __future__ import annotations

import logging
import threading
import weakref
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional, Tuple

from mediatr_lint import known_symbols as known
from mediatr_lint.roles import TypeRole
from mediatr_lint.symbols import DefinitionKey, Program, TypeRef

_log = logging.getLogger(__name__)

# (metadata name, assembly, role)
MARKER_INTERFACES: Tuple[Tuple[str, str, TypeRole], ...] = (
    (known.REQUEST_INTERFACE, known.MEDIATR_CONTRACTS_ASSEMBLY, TypeRole.REQUEST),
    (known.GENERIC_REQUEST_INTERFACE, known.MEDIATR_CONTRACTS_ASSEMBLY, TypeRole.REQUEST),
    (known.STREAM_REQUEST_INTERFACE, known.MEDIATR_CONTRACTS_ASSEMBLY, TypeRole.STREAM_REQUEST),
    (known.NOTIFICATION_INTERFACE, known.MEDIATR_CONTRACTS_ASSEMBLY, TypeRole.NOTIFICATION),
    (known.REQUEST_HANDLER_INTERFACE, known.MEDIATR_ASSEMBLY, TypeRole.REQUEST_HANDLER),
    (known.GENERIC_REQUEST_HANDLER_INTERFACE, known.MEDIATR_ASSEMBLY, TypeRole.REQUEST_HANDLER),
    (known.STREAM_REQUEST_HANDLER_INTERFACE, known.MEDIATR_ASSEMBLY, TypeRole.STREAM_REQUEST_HANDLER),
    (known.NOTIFICATION_HANDLER_INTERFACE, known.MEDIATR_ASSEMBLY, TypeRole.NOTIFICATION_HANDLER),
)

DISPATCHER_TYPES: Tuple[str, ...] = (
    known.MEDIATOR_CLASS,
    known.MEDIATOR_INTERFACE,
    known.SENDER_INTERFACE,
    known.PUBLISHER_INTERFACE,
)


@dataclass(frozen=True)
class SymbolCatalog:
    """
    Resolved MediatR definitions for one program.

    Attributes
    ----------
    markers                 : definition key → role, for every marker found
    dispatcher_types        : definition keys of the dispatcher types found
    registration_extensions : definition key of MediatR's
                              ``ServiceCollectionExtensions``, if found
    """
    markers: Mapping[DefinitionKey, TypeRole] = field(
        default_factory=lambda: MappingProxyType({})
    )
    dispatcher_types: FrozenSet[DefinitionKey] = frozenset()
    registration_extensions: Optional[DefinitionKey] = None

    @classmethod
    def resolve(cls, program: Program) -> "SymbolCatalog":
        markers = {}
        for name, assembly, role in MARKER_INTERFACES:
            decl = program.get_type_by_metadata_name(name, assembly)
            if decl is None:
                _log.debug("marker %s not found in %s", name, assembly)
                continue
            markers[decl.definition_key] = role

        dispatchers = set()
        for name in DISPATCHER_TYPES:
            decl = program.get_type_by_metadata_name(name, known.MEDIATR_ASSEMBLY)
            if decl is None:
                _log.debug("dispatcher type %s not found", name)
                continue
            dispatchers.add(decl.definition_key)

        extensions = program.get_type_by_metadata_name(
            known.SERVICE_COLLECTION_EXTENSIONS_CLASS, known.MEDIATR_ASSEMBLY
        )

        catalog = cls(
            markers=MappingProxyType(markers),
            dispatcher_types=frozenset(dispatchers),
            registration_extensions=(
                extensions.definition_key if extensions is not None else None
            ),
        )
        _log.debug(
            "resolved catalog for %r: %d markers, %d/%d dispatcher types",
            program, len(markers), len(dispatchers), len(DISPATCHER_TYPES),
        )
        return catalog

    @property
    def has_markers(self) -> bool:
        return bool(self.markers)

    @property
    def is_dispatcher_valid(self) -> bool:
        """True only when every dispatcher type resolved."""
        return len(self.dispatcher_types) == len(DISPATCHER_TYPES)

    def marker_role(self, ref: TypeRef) -> Optional[TypeRole]:
        """Role of the marker ``ref`` is a construction of, if any."""
        return self.markers.get(ref.definition_key)

    def is_dispatcher_type(self, ref: TypeRef) -> bool:
        return ref.definition_key in self.dispatcher_types

    def is_registration_extensions(self, ref: TypeRef) -> bool:
        if self.registration_extensions is not None:
            return ref.definition_key == self.registration_extensions
        # The front-end may omit library types it did not need; fall back
        # to the fully-qualified name.
        return ref.metadata_name == known.SERVICE_COLLECTION_EXTENSIONS_CLASS


_CACHE: "weakref.WeakKeyDictionary[Program, SymbolCatalog]" = weakref.WeakKeyDictionary()
_CACHE_LOCK = threading.Lock()


def catalog_for(program: Program) -> SymbolCatalog:
    """Memoized ``SymbolCatalog.resolve``; safe to call from several threads."""
    with _CACHE_LOCK:
        catalog = _CACHE.get(program)
        if catalog is None:
            catalog = SymbolCatalog.resolve(program)
            _CACHE[program] = catalog
        return catalog


__all__ = ["SymbolCatalog", "MARKER_INTERFACES", "DISPATCHER_TYPES", "catalog_for"]
