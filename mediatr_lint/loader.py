"""
mediatr_lint/loader.py
══════════════════════

Loads a program snapshot from a JSON dump file.

A dump is produced by a compiler front-end (the analyzer does not parse
source text).  Schema, with optional keys in brackets::

    {
      "name": "MyApp",
      ["types": [
        {
          "name": "MyCommandHandler",
          ["namespace": "MyApp"], ["assembly": "MyApp"],
          ["kind": "class"],              # class|struct|record|interface|enum|delegate
          ["typeParameters": ["T"]],
          ["accessibility": "internal"],  # public|internal|protected|private|...
          ["isAbstract": false],
          ["baseType": <typeref>],
          ["interfaces": [<typeref>, ...]],
          ["span": <span>],
          ["inSource": true]
        }
      ]],
      ["invocations": [
        {
          "target": {
            "name": "Send",
            "containingType": <typeref>,
            ["parameters": [{"name": "request", ["type": <typeref>], ["hasDefault": false]}]],
            ["typeArguments": [<typeref>, ...]],
            ["isStatic": false]
          },
          ["arguments": [{"parameter": "request", ["kind": "explicit"], ["span": <span>]}]],
          ["span": <span>],
          ["containingType": <typeref>]
        }
      ]],
      ["suppressions": [{"ruleId": "GMDTR01", ["file": "..."], ["line": 3]}]]
    }

    <typeref> = {"name": "IRequest", ["namespace": "MediatR"],
                 ["assembly": "MediatR.Contracts"], ["typeArguments": [<typeref>]]}
    <span>    = {"file": "Program.cs", "startLine": 1, "startColumn": 14,
                 ["endLine": 1], ["endColumn": 23]}

Argument ``kind`` is ``explicit``, ``default`` (the callee's default value
was used) or ``params``.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

from mediatr_lint.errors import SnapshotError
from mediatr_lint.symbols import (
    Accessibility,
    Argument,
    ArgumentKind,
    Invocation,
    MethodSymbol,
    Parameter,
    Program,
    SourceSpan,
    Suppression,
    TypeKind,
    TypeRef,
    TypeSymbol,
)

_log = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


def _require(obj: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in obj:
        raise SnapshotError(f"{where}: missing '{key}'")
    return obj[key]


def _require_str(obj: Mapping[str, Any], key: str, where: str) -> str:
    value = _require(obj, key, where)
    if not isinstance(value, str):
        raise SnapshotError(f"{where}.{key}: expected a string, got {type(value).__name__}")
    return value


def _mapping(obj: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(obj, dict):
        raise SnapshotError(f"{where}: expected an object, got {type(obj).__name__}")
    return obj


def _list(obj: Mapping[str, Any], key: str, where: str) -> List[Any]:
    value = obj.get(key, [])
    if not isinstance(value, list):
        raise SnapshotError(f"{where}: '{key}' must be a list")
    return value


def _enum(enum_cls: Type[E], raw: Any, where: str) -> E:
    try:
        return enum_cls(raw)
    except ValueError:
        choices = ", ".join(e.value for e in enum_cls)
        raise SnapshotError(f"{where}: invalid value {raw!r} (expected one of {choices})") from None


def _span(obj: Optional[Any], where: str) -> SourceSpan:
    if obj is None:
        return SourceSpan()
    obj = _mapping(obj, where)
    start_line = int(obj.get("startLine", 0))
    start_column = int(obj.get("startColumn", 0))
    return SourceSpan(
        file=str(obj.get("file", "")),
        start_line=start_line,
        start_column=start_column,
        end_line=int(obj.get("endLine", start_line)),
        end_column=int(obj.get("endColumn", start_column)),
    )


def _type_ref(obj: Any, where: str) -> TypeRef:
    obj = _mapping(obj, where)
    return TypeRef(
        name=_require_str(obj, "name", where),
        namespace=str(obj.get("namespace", "")),
        assembly=str(obj.get("assembly", "")),
        type_arguments=tuple(
            _type_ref(arg, f"{where}.typeArguments[{i}]")
            for i, arg in enumerate(_list(obj, "typeArguments", where))
        ),
    )


def _type_symbol(obj: Any, where: str) -> TypeSymbol:
    obj = _mapping(obj, where)
    base = obj.get("baseType")
    return TypeSymbol(
        name=_require_str(obj, "name", where),
        namespace=str(obj.get("namespace", "")),
        assembly=str(obj.get("assembly", "")),
        kind=_enum(TypeKind, obj.get("kind", "class"), f"{where}.kind"),
        type_parameters=tuple(str(p) for p in _list(obj, "typeParameters", where)),
        accessibility=_enum(Accessibility, obj.get("accessibility", "internal"), f"{where}.accessibility"),
        is_abstract=bool(obj.get("isAbstract", False)),
        base_type=_type_ref(base, f"{where}.baseType") if base is not None else None,
        interfaces=tuple(
            _type_ref(iface, f"{where}.interfaces[{i}]")
            for i, iface in enumerate(_list(obj, "interfaces", where))
        ),
        span=_span(obj.get("span"), f"{where}.span"),
        in_source=bool(obj.get("inSource", True)),
    )


def _method(obj: Any, where: str) -> MethodSymbol:
    obj = _mapping(obj, where)
    params = []
    for i, raw in enumerate(_list(obj, "parameters", where)):
        p = _mapping(raw, f"{where}.parameters[{i}]")
        ptype = p.get("type")
        params.append(Parameter(
            name=_require_str(p, "name", f"{where}.parameters[{i}]"),
            type=_type_ref(ptype, f"{where}.parameters[{i}].type") if ptype is not None else None,
            has_default=bool(p.get("hasDefault", False)),
        ))
    return MethodSymbol(
        name=_require_str(obj, "name", where),
        containing_type=_type_ref(_require(obj, "containingType", where), f"{where}.containingType"),
        parameters=tuple(params),
        type_arguments=tuple(
            _type_ref(arg, f"{where}.typeArguments[{i}]")
            for i, arg in enumerate(_list(obj, "typeArguments", where))
        ),
        is_static=bool(obj.get("isStatic", False)),
    )


def _invocation(obj: Any, where: str) -> Invocation:
    obj = _mapping(obj, where)
    args = []
    for i, raw in enumerate(_list(obj, "arguments", where)):
        a = _mapping(raw, f"{where}.arguments[{i}]")
        args.append(Argument(
            parameter=str(a.get("parameter", "")),
            kind=_enum(ArgumentKind, a.get("kind", "explicit"), f"{where}.arguments[{i}].kind"),
            span=_span(a["span"], f"{where}.arguments[{i}].span") if "span" in a else None,
        ))
    container = obj.get("containingType")
    return Invocation(
        target=_method(_require(obj, "target", where), f"{where}.target"),
        arguments=tuple(args),
        span=_span(obj.get("span"), f"{where}.span"),
        containing_type=_type_ref(container, f"{where}.containingType") if container is not None else None,
    )


def _suppression(obj: Any, where: str) -> Suppression:
    obj = _mapping(obj, where)
    return Suppression(
        rule_id=_require_str(obj, "ruleId", where),
        file=str(obj.get("file", "")),
        line=int(obj.get("line", 0)),
    )


def program_from_dict(obj: Any, default_name: str = "") -> Program:
    """Build a ``Program`` from a decoded dump; raises ``SnapshotError``."""
    root = _mapping(obj, "dump")
    try:
        return Program(
            name=str(root.get("name", default_name)),
            types=tuple(
                _type_symbol(t, f"types[{i}]")
                for i, t in enumerate(_list(root, "types", "dump"))
            ),
            invocations=tuple(
                _invocation(inv, f"invocations[{i}]")
                for i, inv in enumerate(_list(root, "invocations", "dump"))
            ),
            suppressions=tuple(
                _suppression(s, f"suppressions[{i}]")
                for i, s in enumerate(_list(root, "suppressions", "dump"))
            ),
        )
    except (TypeError, ValueError) as exc:
        raise SnapshotError(f"malformed dump: {exc}") from exc


def load_program(path: Union[str, Path]) -> Program:
    """Read and decode a dump file."""
    p = Path(path)
    try:
        raw = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotError(f"cannot read dump: {exc.strerror}", p) from exc
    except UnicodeDecodeError as exc:
        raise SnapshotError(f"invalid UTF-8: {exc.reason}", p) from exc
    try:
        obj = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"invalid JSON at line {exc.lineno}: {exc.msg}", p) from exc
    try:
        program = program_from_dict(obj, default_name=p.stem)
    except SnapshotError as exc:
        raise SnapshotError(exc.reason, p) from exc
    _log.debug("loaded %r from %s", program, p)
    return program


def program_to_dict(program: Program) -> Dict[str, Any]:
    """Inverse of ``program_from_dict``; used to export test snapshots."""

    def ref(r: TypeRef) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": r.name, "namespace": r.namespace, "assembly": r.assembly}
        if r.type_arguments:
            out["typeArguments"] = [ref(a) for a in r.type_arguments]
        return out

    def span(s: SourceSpan) -> Dict[str, Any]:
        return {
            "file": s.file, "startLine": s.start_line, "startColumn": s.start_column,
            "endLine": s.end_line, "endColumn": s.end_column,
        }

    def param(p: Parameter) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": p.name, "hasDefault": p.has_default}
        if p.type is not None:
            out["type"] = ref(p.type)
        return out

    def argument(a: Argument) -> Dict[str, Any]:
        out: Dict[str, Any] = {"parameter": a.parameter, "kind": a.kind.value}
        if a.span is not None:
            out["span"] = span(a.span)
        return out

    types = []
    for t in program.types:
        entry: Dict[str, Any] = {
            "name": t.name, "namespace": t.namespace, "assembly": t.assembly,
            "kind": t.kind.value, "typeParameters": list(t.type_parameters),
            "accessibility": t.accessibility.value, "isAbstract": t.is_abstract,
            "interfaces": [ref(i) for i in t.interfaces],
            "span": span(t.span), "inSource": t.in_source,
        }
        if t.base_type is not None:
            entry["baseType"] = ref(t.base_type)
        types.append(entry)

    invocations = []
    for inv in program.invocations:
        entry = {
            "target": {
                "name": inv.target.name,
                "containingType": ref(inv.target.containing_type),
                "parameters": [param(p) for p in inv.target.parameters],
                "typeArguments": [ref(a) for a in inv.target.type_arguments],
                "isStatic": inv.target.is_static,
            },
            "arguments": [argument(a) for a in inv.arguments],
            "span": span(inv.span),
        }
        if inv.containing_type is not None:
            entry["containingType"] = ref(inv.containing_type)
        invocations.append(entry)

    return {
        "name": program.name,
        "types": types,
        "invocations": invocations,
        "suppressions": [
            {"ruleId": s.rule_id, "file": s.file, "line": s.line} for s in program.suppressions
        ],
    }


__all__ = ["program_from_dict", "load_program", "program_to_dict"]
