"""Message-pattern roles a type declaration can play."""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Tuple


class TypeRole(Enum):
    REQUEST = "request"
    STREAM_REQUEST = "stream-request"
    NOTIFICATION = "notification"
    REQUEST_HANDLER = "request-handler"
    STREAM_REQUEST_HANDLER = "stream-request-handler"
    NOTIFICATION_HANDLER = "notification-handler"
    UNCLASSIFIED = "unclassified"

    @property
    def is_handler(self) -> bool:
        return self in HANDLER_ROLES


HANDLER_ROLES: FrozenSet[TypeRole] = frozenset({
    TypeRole.REQUEST_HANDLER,
    TypeRole.STREAM_REQUEST_HANDLER,
    TypeRole.NOTIFICATION_HANDLER,
})

# Highest priority first.
ROLE_PRIORITY: Tuple[TypeRole, ...] = (
    TypeRole.STREAM_REQUEST_HANDLER,
    TypeRole.REQUEST_HANDLER,
    TypeRole.NOTIFICATION_HANDLER,
    TypeRole.STREAM_REQUEST,
    TypeRole.REQUEST,
    TypeRole.NOTIFICATION,
)
