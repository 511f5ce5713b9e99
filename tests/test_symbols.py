# tests/test_symbols.py
"""Tests for the program snapshot model."""

import pytest

from mediatr_lint.symbols import (
    Program,
    SourceSpan,
    TypeKind,
    TypeRef,
    TypeSymbol,
    metadata_name,
)

from tests.builders import (
    APP,
    CONTRACTS,
    STRING,
    app_ref,
    declare,
    irequest,
    make_program,
)


class TestIdentity:

    def test_metadata_name_with_arity(self):
        assert metadata_name("MediatR", "IRequestHandler", 2) == "MediatR.IRequestHandler`2"

    def test_metadata_name_global_namespace(self):
        assert metadata_name("", "Foo", 0) == "Foo"

    def test_definition_key_ignores_type_arguments(self):
        a = TypeRef("IRequest", "MediatR", CONTRACTS, (STRING,))
        b = TypeRef("IRequest", "MediatR", CONTRACTS, (TypeRef("Int32", "System"),))
        assert a.definition_key == b.definition_key == ("MediatR.IRequest`1", CONTRACTS)

    def test_definition_key_distinguishes_arity(self):
        assert irequest().definition_key != irequest(STRING).definition_key

    def test_str_renders_type_arguments(self):
        assert str(irequest(STRING)) == "MediatR.IRequest<System.String>"

    def test_declaration_key_matches_reference(self):
        decl = declare("MyQuery", type_parameters=("T",))
        assert decl.definition_key == app_ref("MyQuery", STRING).definition_key

    @pytest.mark.parametrize("kind,is_abstract,expected", [
        (TypeKind.CLASS, False, True),
        (TypeKind.STRUCT, False, True),
        (TypeKind.RECORD, False, True),
        (TypeKind.CLASS, True, False),
        (TypeKind.INTERFACE, False, False),
    ])
    def test_is_concrete(self, kind, is_abstract, expected):
        assert declare("X", kind=kind, is_abstract=is_abstract).is_concrete is expected


class TestSourceSpan:

    def test_str_with_column(self):
        assert str(SourceSpan("a.cs", 3, 7, 3, 12)) == "a.cs:3:7"

    def test_str_without_column(self):
        assert str(SourceSpan("a.cs", 3)) == "a.cs:3"

    def test_ordering_is_file_then_position(self):
        spans = [SourceSpan("b.cs", 1, 1), SourceSpan("a.cs", 9, 1), SourceSpan("a.cs", 2, 5)]
        assert sorted(spans) == [spans[2], spans[1], spans[0]]


class TestProgramLookup:

    def test_lookup_with_assembly(self, empty_program):
        found = empty_program.get_type_by_metadata_name("MediatR.IRequest`1", CONTRACTS)
        assert found is not None
        assert found.type_parameters == ("TResponse",)

    def test_lookup_wrong_assembly(self, empty_program):
        assert empty_program.get_type_by_metadata_name("MediatR.IRequest", "Other") is None

    def test_lookup_without_assembly_requires_unique_match(self):
        a = TypeSymbol("Dup", "N", "A1")
        b = TypeSymbol("Dup", "N", "A2")
        program = Program(types=(a, b))
        assert program.get_type_by_metadata_name("N.Dup") is None
        assert program.get_type_by_metadata_name("N.Dup", "A2") is b

    def test_source_types_excludes_library(self, empty_program):
        assert list(empty_program.source_types()) == []


class TestAllInterfaces:

    def test_direct_interfaces(self):
        decl = declare("MyCommand", irequest())
        program = make_program(decl)
        assert program.all_interfaces(decl) == (irequest(),)

    def test_through_base_class(self):
        base = declare("CommandBase", irequest(), is_abstract=True)
        derived = declare("MyCommand", base=app_ref("CommandBase"))
        program = make_program(base, derived)
        assert irequest() in program.all_interfaces(derived)

    def test_through_interface_inheritance(self):
        marker = declare("ICommand", irequest(), kind=TypeKind.INTERFACE)
        decl = declare("MyCommand", app_ref("ICommand"))
        program = make_program(marker, decl)
        assert program.all_interfaces(decl) == (app_ref("ICommand"), irequest())

    def test_unresolved_reference_is_kept(self):
        ghost = TypeRef("IGhost", "Elsewhere", "Missing")
        decl = declare("Thing", ghost)
        assert make_program(decl).all_interfaces(decl) == (ghost,)

    def test_cycles_terminate(self):
        a = declare("IA", app_ref("IB"), kind=TypeKind.INTERFACE)
        b = declare("IB", app_ref("IA"), kind=TypeKind.INTERFACE)
        program = make_program(a, b)
        assert set(program.all_interfaces(a)) == {app_ref("IA"), app_ref("IB")}

    def test_base_type_without_assembly_resolves_by_name(self):
        base = declare("CommandBase", irequest(), is_abstract=True)
        derived = declare("MyCommand", base=TypeRef("CommandBase", APP))
        program = make_program(base, derived)
        assert irequest() in program.all_interfaces(derived)
