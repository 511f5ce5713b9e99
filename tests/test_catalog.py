# tests/test_catalog.py
"""Tests for the symbol catalog."""

import threading

import pytest

from mediatr_lint.catalog import DISPATCHER_TYPES, SymbolCatalog, catalog_for
from mediatr_lint.roles import TypeRole
from mediatr_lint.symbols import Program, TypeRef

from tests.builders import (
    ISENDER,
    MEDIATOR,
    SERVICE_COLLECTION_EXTENSIONS,
    STRING,
    app_ref,
    inotification,
    inotification_handler,
    irequest,
    irequest_handler,
    istream_request,
    istream_request_handler,
    make_program,
    mediatr_library,
)


class TestResolution:

    def test_full_library(self, catalog):
        assert catalog.has_markers
        assert catalog.is_dispatcher_valid
        assert len(catalog.markers) == 8
        assert len(catalog.dispatcher_types) == len(DISPATCHER_TYPES)
        assert catalog.registration_extensions is not None

    def test_no_library(self):
        catalog = SymbolCatalog.resolve(Program())
        assert not catalog.has_markers
        assert not catalog.is_dispatcher_valid
        assert catalog.registration_extensions is None

    def test_missing_dispatchers_keeps_markers(self):
        catalog = SymbolCatalog.resolve(make_program(library=mediatr_library(dispatchers=False)))
        assert catalog.has_markers
        assert not catalog.is_dispatcher_valid

    def test_partial_dispatchers_is_invalid(self):
        library = [t for t in mediatr_library() if t.name != "IPublisher"]
        catalog = SymbolCatalog.resolve(make_program(library=library))
        assert len(catalog.dispatcher_types) == 3
        assert not catalog.is_dispatcher_valid

    def test_older_library_without_streams(self):
        catalog = SymbolCatalog.resolve(make_program(library=mediatr_library(streams=False)))
        assert catalog.marker_role(irequest()) is TypeRole.REQUEST
        assert catalog.marker_role(istream_request()) is None

    def test_catalog_is_read_only(self, catalog):
        with pytest.raises(TypeError):
            catalog.markers[("X", "Y")] = TypeRole.REQUEST  # type: ignore[index]


class TestMarkerRole:

    @pytest.mark.parametrize("ref,role", [
        (irequest(), TypeRole.REQUEST),
        (irequest(STRING), TypeRole.REQUEST),
        (istream_request(), TypeRole.STREAM_REQUEST),
        (inotification(), TypeRole.NOTIFICATION),
        (irequest_handler(app_ref("C")), TypeRole.REQUEST_HANDLER),
        (irequest_handler(app_ref("Q"), STRING), TypeRole.REQUEST_HANDLER),
        (istream_request_handler(app_ref("S")), TypeRole.STREAM_REQUEST_HANDLER),
        (inotification_handler(app_ref("N")), TypeRole.NOTIFICATION_HANDLER),
    ])
    def test_open_generic_match(self, catalog, ref, role):
        assert catalog.marker_role(ref) is role

    def test_same_name_other_assembly_is_not_a_marker(self, catalog):
        impostor = TypeRef("IRequest", "MediatR", "MyFork")
        assert catalog.marker_role(impostor) is None

    def test_unknown_arity_is_not_a_marker(self, catalog):
        three = TypeRef("IRequestHandler", "MediatR", "MediatR", (STRING, STRING, STRING))
        assert catalog.marker_role(three) is None


class TestDispatcherTypes:

    def test_dispatcher_membership(self, catalog):
        assert catalog.is_dispatcher_type(ISENDER)
        assert catalog.is_dispatcher_type(MEDIATOR)
        assert not catalog.is_dispatcher_type(app_ref("MyMediator"))

    def test_registration_extensions(self, catalog):
        assert catalog.is_registration_extensions(SERVICE_COLLECTION_EXTENSIONS)
        assert not catalog.is_registration_extensions(app_ref("ServiceCollectionExtensions"))

    def test_registration_fallback_on_name(self):
        catalog = SymbolCatalog.resolve(make_program(library=mediatr_library(registration=False)))
        assert catalog.is_registration_extensions(SERVICE_COLLECTION_EXTENSIONS)


class TestMemoization:

    def test_catalog_for_is_memoized(self, empty_program):
        assert catalog_for(empty_program) is catalog_for(empty_program)

    def test_redundant_resolution_is_equivalent(self, empty_program):
        assert SymbolCatalog.resolve(empty_program) == SymbolCatalog.resolve(empty_program)

    def test_concurrent_first_use(self):
        program = make_program()
        seen = []

        def worker():
            seen.append(catalog_for(program))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len({id(c) for c in seen}) == 1
