"""Well-known MediatR metadata names looked up by the symbol catalog."""

from __future__ import annotations

MEDIATR_ASSEMBLY = "MediatR"
MEDIATR_CONTRACTS_ASSEMBLY = "MediatR.Contracts"

# Dispatcher and its capability interfaces (assembly "MediatR").
MEDIATOR_CLASS = "MediatR.Mediator"
MEDIATOR_INTERFACE = "MediatR.IMediator"
SENDER_INTERFACE = "MediatR.ISender"
PUBLISHER_INTERFACE = "MediatR.IPublisher"

# Marker interfaces (assembly "MediatR.Contracts").
REQUEST_INTERFACE = "MediatR.IRequest"
GENERIC_REQUEST_INTERFACE = "MediatR.IRequest`1"
STREAM_REQUEST_INTERFACE = "MediatR.IStreamRequest`1"
NOTIFICATION_INTERFACE = "MediatR.INotification"

# Handler interfaces live next to the dispatcher.
REQUEST_HANDLER_INTERFACE = "MediatR.IRequestHandler`1"
GENERIC_REQUEST_HANDLER_INTERFACE = "MediatR.IRequestHandler`2"
STREAM_REQUEST_HANDLER_INTERFACE = "MediatR.IStreamRequestHandler`2"
NOTIFICATION_HANDLER_INTERFACE = "MediatR.INotificationHandler`1"

# Dispatch methods.
SEND_METHOD = "Send"
PUBLISH_METHOD = "Publish"
CREATE_STREAM_METHOD = "CreateStream"
HANDLE_METHOD = "Handle"
ASYNC_SUFFIX = "Async"

# Registration.
SERVICE_COLLECTION_EXTENSIONS_CLASS = (
    "Microsoft.Extensions.DependencyInjection.ServiceCollectionExtensions"
)
ADD_MEDIATR_METHOD = "AddMediatR"
ADD_MEDIATOR_METHOD = "AddMediator"
