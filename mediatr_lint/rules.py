"""
Rule identifiers and descriptors.

DO NOT change the identifier of existing rules.  Projects customize the
severity of rules by id in their configuration files.
"""

from __future__ import annotations

from typing import Dict, Tuple

from mediatr_lint.diagnostics import RuleDescriptor

HELP_URI = "https://github.com/workleap/wl-extensions-mediatr"
DESIGN = "Design"

USE_COMMAND_OR_QUERY_SUFFIX = "GMDTR01"
USE_COMMAND_HANDLER_OR_QUERY_HANDLER_SUFFIX = "GMDTR02"
USE_STREAM_QUERY_SUFFIX = "GMDTR03"
USE_STREAM_QUERY_HANDLER_SUFFIX = "GMDTR04"
USE_NOTIFICATION_OR_EVENT_SUFFIX = "GMDTR05"
USE_NOTIFICATION_HANDLER_OR_EVENT_HANDLER_SUFFIX = "GMDTR06"
USE_GENERIC_PARAMETER = "GMDTR07"
PROVIDE_CANCELLATION_TOKEN = "GMDTR08"
REQUEST_HANDLERS_SHOULD_NOT_CALL_HANDLER = "GMDTR09"
HANDLERS_SHOULD_NOT_BE_PUBLIC = "GMDTR10"
USE_ADD_MEDIATOR_EXTENSION_METHOD = "GMDTR11"
USE_METHOD_ENDING_WITH_ASYNC = "GMDTR12"
USE_HANDLER_SUFFIX = "GMDTR13"


def _rule(rule_id: str, title: str, message_format: str) -> RuleDescriptor:
    return RuleDescriptor(
        id=rule_id,
        title=title,
        message_format=message_format,
        category=DESIGN,
        help_uri=HELP_URI,
    )


USE_COMMAND_OR_QUERY_SUFFIX_RULE = _rule(
    USE_COMMAND_OR_QUERY_SUFFIX,
    "Use 'Command' or 'Query' suffix",
    "'{0}' should end with 'Command' or 'Query'",
)
USE_COMMAND_HANDLER_OR_QUERY_HANDLER_SUFFIX_RULE = _rule(
    USE_COMMAND_HANDLER_OR_QUERY_HANDLER_SUFFIX,
    "Use 'CommandHandler' or 'QueryHandler' suffix",
    "'{0}' should end with 'CommandHandler' or 'QueryHandler'",
)
USE_STREAM_QUERY_SUFFIX_RULE = _rule(
    USE_STREAM_QUERY_SUFFIX,
    "Use 'StreamQuery' suffix",
    "'{0}' should end with 'StreamQuery'",
)
USE_STREAM_QUERY_HANDLER_SUFFIX_RULE = _rule(
    USE_STREAM_QUERY_HANDLER_SUFFIX,
    "Use 'StreamQueryHandler' suffix",
    "'{0}' should end with 'StreamQueryHandler'",
)
USE_NOTIFICATION_OR_EVENT_SUFFIX_RULE = _rule(
    USE_NOTIFICATION_OR_EVENT_SUFFIX,
    "Use 'Notification' or 'Event' suffix",
    "'{0}' should end with 'Notification' or 'Event'",
)
USE_NOTIFICATION_HANDLER_OR_EVENT_HANDLER_SUFFIX_RULE = _rule(
    USE_NOTIFICATION_HANDLER_OR_EVENT_HANDLER_SUFFIX,
    "Use 'NotificationHandler' or 'EventHandler' suffix",
    "'{0}' should end with 'NotificationHandler' or 'EventHandler'",
)
USE_GENERIC_PARAMETER_RULE = _rule(
    USE_GENERIC_PARAMETER,
    "Use generic method instead",
    "Use generic method instead",
)
PROVIDE_CANCELLATION_TOKEN_RULE = _rule(
    PROVIDE_CANCELLATION_TOKEN,
    "Provide a cancellation token",
    "Provide a cancellation token",
)
REQUEST_HANDLERS_SHOULD_NOT_CALL_HANDLER_RULE = _rule(
    REQUEST_HANDLERS_SHOULD_NOT_CALL_HANDLER,
    "Handlers should not call other handlers",
    "'{0}' should not call the handler '{1}' directly, use the mediator instead",
)
HANDLERS_SHOULD_NOT_BE_PUBLIC_RULE = _rule(
    HANDLERS_SHOULD_NOT_BE_PUBLIC,
    "Handlers should not be public",
    "Handler '{0}' should not be public",
)
USE_ADD_MEDIATOR_EXTENSION_METHOD_RULE = _rule(
    USE_ADD_MEDIATOR_EXTENSION_METHOD,
    "Use 'AddMediator' extension method instead of 'AddMediatR'",
    "Use 'AddMediator' extension method instead of 'AddMediatR'",
)
USE_METHOD_ENDING_WITH_ASYNC_RULE = _rule(
    USE_METHOD_ENDING_WITH_ASYNC,
    "Use method ending with 'Async' instead",
    "Use method ending with 'Async' instead",
)
USE_HANDLER_SUFFIX_RULE = _rule(
    USE_HANDLER_SUFFIX,
    "Use 'Handler' suffix",
    "'{0}' implements several handler interfaces and should end with 'Handler'",
)

ALL_RULES: Tuple[RuleDescriptor, ...] = (
    USE_COMMAND_OR_QUERY_SUFFIX_RULE,
    USE_COMMAND_HANDLER_OR_QUERY_HANDLER_SUFFIX_RULE,
    USE_STREAM_QUERY_SUFFIX_RULE,
    USE_STREAM_QUERY_HANDLER_SUFFIX_RULE,
    USE_NOTIFICATION_OR_EVENT_SUFFIX_RULE,
    USE_NOTIFICATION_HANDLER_OR_EVENT_HANDLER_SUFFIX_RULE,
    USE_GENERIC_PARAMETER_RULE,
    PROVIDE_CANCELLATION_TOKEN_RULE,
    REQUEST_HANDLERS_SHOULD_NOT_CALL_HANDLER_RULE,
    HANDLERS_SHOULD_NOT_BE_PUBLIC_RULE,
    USE_ADD_MEDIATOR_EXTENSION_METHOD_RULE,
    USE_METHOD_ENDING_WITH_ASYNC_RULE,
    USE_HANDLER_SUFFIX_RULE,
)

RULES_BY_ID: Dict[str, RuleDescriptor] = {rule.id: rule for rule in ALL_RULES}
