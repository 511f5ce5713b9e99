# tests/test_handlers.py
"""Tests for the handler rules (GMDTR09, GMDTR10, GMDTR13)."""

import pytest

from mediatr_lint.handlers import HandlerCallChecker, HandlerDeclarationChecker
from mediatr_lint.symbols import Accessibility, TypeKind, TypeRef

from tests.builders import (
    STRING,
    app_ref,
    declare,
    handle_call,
    inotification_handler,
    irequest,
    irequest_handler,
    istream_request_handler,
    make_program,
)

DECLARATION = [HandlerDeclarationChecker.name]
CALLS = [HandlerCallChecker.name]


class TestHandlerVisibility:

    @pytest.mark.parametrize("accessibility,expected", [
        (Accessibility.PUBLIC, ["GMDTR10"]),
        (Accessibility.INTERNAL, []),
        (Accessibility.PRIVATE, []),
        (Accessibility.PROTECTED_INTERNAL, []),
    ])
    def test_accessibility(self, rule_ids, accessibility, expected):
        decl = declare("MyCommandHandler", irequest_handler(app_ref("MyCommand")),
                       accessibility=accessibility)
        assert rule_ids(make_program(decl), DECLARATION) == expected

    def test_public_abstract_base_handler_is_fine(self, rule_ids):
        decl = declare("HandlerBase", irequest_handler(TypeRef("T")), is_abstract=True,
                       accessibility=Accessibility.PUBLIC, type_parameters=("T",))
        assert rule_ids(make_program(decl), DECLARATION) == []

    def test_public_handler_interface_is_fine(self, rule_ids):
        decl = declare("IMyHandler", irequest_handler(app_ref("MyCommand")),
                       kind=TypeKind.INTERFACE, accessibility=Accessibility.PUBLIC)
        assert rule_ids(make_program(decl), DECLARATION) == []

    def test_public_request_is_fine(self, rule_ids):
        decl = declare("MyCommand", irequest(), accessibility=Accessibility.PUBLIC)
        assert rule_ids(make_program(decl), DECLARATION) == []

    def test_message_names_the_handler(self, run_checkers):
        decl = declare("MyEventHandler", inotification_handler(app_ref("MyEvent")),
                       accessibility=Accessibility.PUBLIC)
        diags = run_checkers(make_program(decl), DECLARATION)
        assert [d.message for d in diags] == ["Handler 'MyEventHandler' should not be public"]
        assert diags[0].span == decl.span


class TestMixedHandlerSuffix:

    def test_request_and_notification_handler_without_suffix(self, rule_ids):
        decl = declare(
            "UserWorkflow",
            irequest_handler(app_ref("CreateUserCommand")),
            inotification_handler(app_ref("UserCreatedEvent")),
        )
        assert rule_ids(make_program(decl), DECLARATION) == ["GMDTR13"]

    def test_mixed_handler_with_suffix(self, rule_ids):
        decl = declare(
            "UserHandler",
            irequest_handler(app_ref("CreateUserCommand")),
            istream_request_handler(app_ref("ListUsersStreamQuery")),
        )
        assert rule_ids(make_program(decl), DECLARATION) == []

    def test_single_family_is_left_to_naming_rules(self, rule_ids):
        decl = declare(
            "UserThing",
            irequest_handler(app_ref("CreateUserCommand")),
            irequest_handler(app_ref("GetUserQuery"), STRING),
        )
        assert rule_ids(make_program(decl), DECLARATION) == []

    def test_public_mixed_handler_gets_both(self, rule_ids):
        decl = declare(
            "UserWorkflow",
            irequest_handler(app_ref("CreateUserCommand")),
            inotification_handler(app_ref("UserCreatedEvent")),
            accessibility=Accessibility.PUBLIC,
        )
        assert sorted(rule_ids(make_program(decl), DECLARATION)) == ["GMDTR10", "GMDTR13"]

    @pytest.mark.parametrize("name,expected", [
        ("UserHandler", []),
        ("UserWorkflow", ["GMDTR13"]),
        ("UserCommandHandler", []),
    ])
    def test_full_suite_reports_mixed_names_once(self, rule_ids, name, expected):
        decl = declare(
            name,
            irequest_handler(app_ref("CreateUserCommand")),
            inotification_handler(app_ref("UserCreatedEvent")),
        )
        assert rule_ids(make_program(decl)) == expected

    def test_full_suite_accepts_request_and_stream_handler(self, rule_ids):
        decl = declare(
            "UserHandler",
            irequest_handler(app_ref("CreateUserCommand")),
            istream_request_handler(app_ref("ListUsersStreamQuery"), STRING),
        )
        assert rule_ids(make_program(decl)) == []

    def test_abstract_mixed_base_is_left_alone(self, rule_ids):
        decl = declare(
            "WorkflowBase",
            irequest_handler(app_ref("CreateUserCommand")),
            inotification_handler(app_ref("UserCreatedEvent")),
            is_abstract=True,
        )
        assert rule_ids(make_program(decl)) == []


class TestHandlerCalls:

    @staticmethod
    def _program(*invocations):
        return make_program(
            declare("CreateUserCommandHandler", irequest_handler(app_ref("CreateUserCommand")), line=1),
            declare("SendWelcomeCommandHandler", irequest_handler(app_ref("SendWelcomeCommand")), line=2),
            declare("UserService", line=3),
            invocations=invocations,
        )

    def test_handler_calling_another_handler(self, run_checkers):
        call = handle_call(on=app_ref("SendWelcomeCommandHandler"),
                           containing=app_ref("CreateUserCommandHandler"))
        diags = run_checkers(self._program(call), CALLS)
        assert [d.rule_id for d in diags] == ["GMDTR09"]
        assert diags[0].span == call.span
        assert "CreateUserCommandHandler" in diags[0].message
        assert "SendWelcomeCommandHandler" in diags[0].message

    def test_handler_calling_through_handler_interface(self, rule_ids):
        call = handle_call(on=irequest_handler(app_ref("SendWelcomeCommand")),
                           containing=app_ref("CreateUserCommandHandler"))
        assert rule_ids(self._program(call), CALLS) == ["GMDTR09"]

    def test_non_handler_calling_handler(self, rule_ids):
        call = handle_call(on=app_ref("SendWelcomeCommandHandler"),
                           containing=app_ref("UserService"))
        assert rule_ids(self._program(call), CALLS) == []

    def test_handler_calling_its_own_handle(self, rule_ids):
        call = handle_call(on=app_ref("CreateUserCommandHandler"),
                           containing=app_ref("CreateUserCommandHandler"))
        assert rule_ids(self._program(call), CALLS) == []

    def test_handler_calling_non_handler_handle(self, rule_ids):
        call = handle_call(on=app_ref("UserService"),
                           containing=app_ref("CreateUserCommandHandler"))
        assert rule_ids(self._program(call), CALLS) == []

    def test_top_level_call(self, rule_ids):
        call = handle_call(on=app_ref("SendWelcomeCommandHandler"),
                           containing=app_ref("Missing"))
        assert rule_ids(self._program(call), CALLS) == []
