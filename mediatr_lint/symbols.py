"""
mediatr_lint/symbols.py
═══════════════════════

Read-only program snapshot consumed by the rule suite.

A front-end (compiler plugin, dump exporter, test builder) produces one
``Program`` per compilation.  It carries:

  * every named type visible to the compilation, both the ones declared in
    source and the ones that come from referenced libraries (``in_source``
    is False for the latter);
  * every invocation expression, already bound to its target method and
    with per-argument binding information;
  * the suppressions found in source.

Nothing here performs analysis.  The only non-trivial piece is
``Program.all_interfaces``, which walks base types and interface
inheritance to produce the transitive interface set of a declaration.

Type identity
─────────────
Types are identified the way .NET metadata identifies them: by metadata
name (``Namespace.Name`` with a ```N`` arity suffix for generic types) plus
the name of the assembly that declares them.  ``TypeRef.definition_key``
gives that identity for a possibly-constructed reference, ignoring its
concrete type arguments, so ``IRequest<string>`` and ``IRequest<int>`` share
the key ``("MediatR.IRequest`1", "MediatR.Contracts")``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Optional, Set, Tuple


DefinitionKey = Tuple[str, str]


def metadata_name(namespace: str, name: str, arity: int) -> str:
    """Build a metadata name such as ``MediatR.IRequestHandler`2``."""
    qualified = f"{namespace}.{name}" if namespace else name
    if arity:
        return f"{qualified}`{arity}"
    return qualified


# ═════════════════════════════════════════════════════════════════════════
#  SOURCE SPANS
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True, order=True)
class SourceSpan:
    """A range in a source file (1-based lines and columns)."""
    file: str = ""
    start_line: int = 0
    start_column: int = 0
    end_line: int = 0
    end_column: int = 0

    def __str__(self) -> str:
        if self.start_column:
            return f"{self.file}:{self.start_line}:{self.start_column}"
        return f"{self.file}:{self.start_line}"


# ═════════════════════════════════════════════════════════════════════════
#  TYPES
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TypeRef:
    """
    Reference to a named type, possibly constructed with type arguments.

    ``type_arguments`` only contributes to the arity of the reference; the
    arguments themselves are kept for completeness but never compared.
    """
    name: str
    namespace: str = ""
    assembly: str = ""
    type_arguments: Tuple["TypeRef", ...] = ()

    @property
    def arity(self) -> int:
        return len(self.type_arguments)

    @property
    def metadata_name(self) -> str:
        return metadata_name(self.namespace, self.name, self.arity)

    @property
    def definition_key(self) -> DefinitionKey:
        return (self.metadata_name, self.assembly)

    def __str__(self) -> str:
        base = f"{self.namespace}.{self.name}" if self.namespace else self.name
        if self.type_arguments:
            args = ", ".join(str(a) for a in self.type_arguments)
            return f"{base}<{args}>"
        return base


class TypeKind(Enum):
    CLASS = "class"
    STRUCT = "struct"
    RECORD = "record"
    INTERFACE = "interface"
    ENUM = "enum"
    DELEGATE = "delegate"


# Kinds that can carry a body with member implementations.
CONCRETE_KINDS: FrozenSet[TypeKind] = frozenset({
    TypeKind.CLASS, TypeKind.STRUCT, TypeKind.RECORD,
})


class Accessibility(Enum):
    PUBLIC = "public"
    INTERNAL = "internal"
    PROTECTED = "protected"
    PROTECTED_INTERNAL = "protected internal"
    PRIVATE_PROTECTED = "private protected"
    PRIVATE = "private"


@dataclass(frozen=True)
class TypeSymbol:
    """
    A named type declaration.

    Attributes
    ----------
    name            : simple name, without arity suffix
    namespace       : containing namespace ("" for the global namespace)
    assembly        : declaring assembly name
    kind            : TypeKind
    type_parameters : names of the declaration's own type parameters
    accessibility   : declared accessibility (C# defaults to internal)
    is_abstract     : True for abstract classes
    base_type       : base class reference, if any
    interfaces      : directly declared interfaces
    span            : span of the name token
    in_source       : False for types imported from referenced assemblies
    """
    name: str
    namespace: str = ""
    assembly: str = ""
    kind: TypeKind = TypeKind.CLASS
    type_parameters: Tuple[str, ...] = ()
    accessibility: Accessibility = Accessibility.INTERNAL
    is_abstract: bool = False
    base_type: Optional[TypeRef] = None
    interfaces: Tuple[TypeRef, ...] = ()
    span: SourceSpan = field(default_factory=SourceSpan)
    in_source: bool = True

    @property
    def metadata_name(self) -> str:
        return metadata_name(self.namespace, self.name, len(self.type_parameters))

    @property
    def definition_key(self) -> DefinitionKey:
        return (self.metadata_name, self.assembly)

    @property
    def is_concrete(self) -> bool:
        """True for non-abstract class, struct and record declarations."""
        return self.kind in CONCRETE_KINDS and not self.is_abstract

    def as_ref(self) -> TypeRef:
        return TypeRef(self.name, self.namespace, self.assembly)


# ═════════════════════════════════════════════════════════════════════════
#  METHODS AND INVOCATIONS
# ═════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Parameter:
    name: str
    type: Optional[TypeRef] = None
    has_default: bool = False


@dataclass(frozen=True)
class MethodSymbol:
    """A method as seen from a call site (already overload-resolved)."""
    name: str
    containing_type: TypeRef
    parameters: Tuple[Parameter, ...] = ()
    type_arguments: Tuple[TypeRef, ...] = ()
    is_static: bool = False

    @property
    def is_generic(self) -> bool:
        return bool(self.type_arguments)


class ArgumentKind(Enum):
    """How an argument position got its value."""
    EXPLICIT = "explicit"
    DEFAULT_VALUE = "default"
    PARAMS_ARRAY = "params"


@dataclass(frozen=True)
class Argument:
    parameter: str
    kind: ArgumentKind = ArgumentKind.EXPLICIT
    span: Optional[SourceSpan] = None


@dataclass(frozen=True)
class Invocation:
    """
    A resolved call site.

    ``containing_type`` is the type whose body encloses the call, or None
    for calls in top-level statements.
    """
    target: MethodSymbol
    arguments: Tuple[Argument, ...] = ()
    span: SourceSpan = field(default_factory=SourceSpan)
    containing_type: Optional[TypeRef] = None


@dataclass(frozen=True)
class Suppression:
    """
    A rule suppression recorded by the front-end.

    An empty ``file`` suppresses the rule everywhere; a file with line 0
    suppresses it for the whole file.
    """
    rule_id: str
    file: str = ""
    line: int = 0


# ═════════════════════════════════════════════════════════════════════════
#  PROGRAM
# ═════════════════════════════════════════════════════════════════════════

class Program:
    """
    Symbol table and call sites of one compilation.

    Lookups are backed by a dictionary built at construction; the object is
    treated as immutable afterwards and may be shared across threads.
    """

    def __init__(
        self,
        name: str = "",
        types: Tuple[TypeSymbol, ...] = (),
        invocations: Tuple[Invocation, ...] = (),
        suppressions: Tuple[Suppression, ...] = (),
    ) -> None:
        self.name = name
        self.types: Tuple[TypeSymbol, ...] = tuple(types)
        self.invocations: Tuple[Invocation, ...] = tuple(invocations)
        self.suppressions: Tuple[Suppression, ...] = tuple(suppressions)
        self._by_key: Dict[DefinitionKey, TypeSymbol] = {}
        self._by_name: Dict[str, List[TypeSymbol]] = {}
        for decl in self.types:
            self._by_key.setdefault(decl.definition_key, decl)
            self._by_name.setdefault(decl.metadata_name, []).append(decl)

    def __repr__(self) -> str:
        return (
            f"<Program '{self.name}' types={len(self.types)} "
            f"invocations={len(self.invocations)}>"
        )

    def source_types(self) -> Iterator[TypeSymbol]:
        """Declarations that come from source (the ones rules report on)."""
        return (t for t in self.types if t.in_source)

    def get_type_by_metadata_name(
        self, name: str, assembly: Optional[str] = None
    ) -> Optional[TypeSymbol]:
        """
        Find a declaration by metadata name.

        With ``assembly`` the lookup is exact.  Without it, a unique match
        across all assemblies is returned; ambiguous names give None.
        """
        if assembly is not None:
            return self._by_key.get((name, assembly))
        candidates = self._by_name.get(name, [])
        if len(candidates) == 1:
            return candidates[0]
        return None

    def resolve(self, ref: TypeRef) -> Optional[TypeSymbol]:
        """Map a reference to its declaration, if the snapshot has one."""
        found = self._by_key.get(ref.definition_key)
        if found is None and not ref.assembly:
            found = self.get_type_by_metadata_name(ref.metadata_name)
        return found

    def all_interfaces(self, decl: TypeSymbol) -> Tuple[TypeRef, ...]:
        """
        Transitive interfaces of ``decl``.

        Includes interfaces declared on base classes and interfaces
        inherited by other interfaces.  References that do not resolve to
        a declaration are kept but not expanded further.
        """
        result: List[TypeRef] = []
        seen_refs: Set[TypeRef] = set()
        visited: Set[DefinitionKey] = {decl.definition_key}
        pending: List[TypeSymbol] = [decl]

        while pending:
            current = pending.pop()
            parents: List[TypeRef] = list(current.interfaces)
            if current.base_type is not None:
                base = self.resolve(current.base_type)
                if base is not None and base.definition_key not in visited:
                    visited.add(base.definition_key)
                    pending.append(base)
            for iface in parents:
                if iface not in seen_refs:
                    seen_refs.add(iface)
                    result.append(iface)
                resolved = self.resolve(iface)
                if resolved is not None and resolved.definition_key not in visited:
                    visited.add(resolved.definition_key)
                    pending.append(resolved)
        return tuple(result)


__all__ = [
    "DefinitionKey",
    "metadata_name",
    "SourceSpan",
    "TypeRef",
    "TypeKind",
    "CONCRETE_KINDS",
    "Accessibility",
    "TypeSymbol",
    "Parameter",
    "MethodSymbol",
    "ArgumentKind",
    "Argument",
    "Invocation",
    "Suppression",
    "Program",
]
