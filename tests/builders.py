# tests/builders.py
"""
Snapshot builders shared by the test-suite.

``mediatr_library()`` returns the MediatR types a real compilation would see
through its references; ``declare()`` and ``dispatcher_call()`` build source
declarations and call sites on top of them.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

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

CONTRACTS = "MediatR.Contracts"
MEDIATR = "MediatR"
APP = "App"
SOURCE_FILE = "Program.cs"

STRING = TypeRef("String", "System", "System.Runtime")
CANCELLATION_TOKEN = TypeRef("CancellationToken", "System.Threading", "System.Runtime")
SERVICE_COLLECTION = TypeRef(
    "IServiceCollection", "Microsoft.Extensions.DependencyInjection",
    "Microsoft.Extensions.DependencyInjection.Abstractions",
)

MEDIATOR = TypeRef("Mediator", "MediatR", MEDIATR)
IMEDIATOR = TypeRef("IMediator", "MediatR", MEDIATR)
ISENDER = TypeRef("ISender", "MediatR", MEDIATR)
IPUBLISHER = TypeRef("IPublisher", "MediatR", MEDIATR)
SERVICE_COLLECTION_EXTENSIONS = TypeRef(
    "ServiceCollectionExtensions", "Microsoft.Extensions.DependencyInjection", MEDIATR,
)


def _lib(name: str, assembly: str, *type_params: str, kind: TypeKind = TypeKind.INTERFACE,
         namespace: str = "MediatR", interfaces: Sequence[TypeRef] = ()) -> TypeSymbol:
    return TypeSymbol(
        name=name,
        namespace=namespace,
        assembly=assembly,
        kind=kind,
        type_parameters=tuple(type_params),
        accessibility=Accessibility.PUBLIC,
        interfaces=tuple(interfaces),
        in_source=False,
    )


def irequest(response: Optional[TypeRef] = None) -> TypeRef:
    if response is None:
        return TypeRef("IRequest", "MediatR", CONTRACTS)
    return TypeRef("IRequest", "MediatR", CONTRACTS, (response,))


def istream_request(response: TypeRef = STRING) -> TypeRef:
    return TypeRef("IStreamRequest", "MediatR", CONTRACTS, (response,))


def inotification() -> TypeRef:
    return TypeRef("INotification", "MediatR", CONTRACTS)


def irequest_handler(request: TypeRef, response: Optional[TypeRef] = None) -> TypeRef:
    args = (request,) if response is None else (request, response)
    return TypeRef("IRequestHandler", "MediatR", MEDIATR, args)


def istream_request_handler(request: TypeRef, response: TypeRef = STRING) -> TypeRef:
    return TypeRef("IStreamRequestHandler", "MediatR", MEDIATR, (request, response))


def inotification_handler(notification: TypeRef) -> TypeRef:
    return TypeRef("INotificationHandler", "MediatR", MEDIATR, (notification,))


def mediatr_library(
    dispatchers: bool = True,
    streams: bool = True,
    registration: bool = True,
) -> List[TypeSymbol]:
    """MediatR types as seen through the compilation's references."""
    types = [
        _lib("IRequest", CONTRACTS),
        _lib("IRequest", CONTRACTS, "TResponse"),
        _lib("INotification", CONTRACTS),
        _lib("IRequestHandler", MEDIATR, "TRequest"),
        _lib("IRequestHandler", MEDIATR, "TRequest", "TResponse"),
        _lib("INotificationHandler", MEDIATR, "TNotification"),
    ]
    if streams:
        types += [
            _lib("IStreamRequest", CONTRACTS, "TResponse"),
            _lib("IStreamRequestHandler", MEDIATR, "TRequest", "TResponse"),
        ]
    if dispatchers:
        types += [
            _lib("ISender", MEDIATR),
            _lib("IPublisher", MEDIATR),
            _lib("IMediator", MEDIATR, interfaces=(ISENDER, IPUBLISHER)),
            _lib("Mediator", MEDIATR, kind=TypeKind.CLASS, interfaces=(IMEDIATOR,)),
        ]
    if registration:
        types.append(_lib(
            "ServiceCollectionExtensions", MEDIATR, kind=TypeKind.CLASS,
            namespace="Microsoft.Extensions.DependencyInjection",
        ))
    return types


def span(line: int, column: int = 14, length: int = 10) -> SourceSpan:
    return SourceSpan(SOURCE_FILE, line, column, line, column + length)


def declare(
    name: str,
    *interfaces: TypeRef,
    kind: TypeKind = TypeKind.CLASS,
    base: Optional[TypeRef] = None,
    accessibility: Accessibility = Accessibility.INTERNAL,
    is_abstract: bool = False,
    type_parameters: Sequence[str] = (),
    line: int = 1,
) -> TypeSymbol:
    """A type declared in source, in the ``App`` assembly."""
    return TypeSymbol(
        name=name,
        namespace=APP,
        assembly=APP,
        kind=kind,
        type_parameters=tuple(type_parameters),
        accessibility=accessibility,
        is_abstract=is_abstract,
        base_type=base,
        interfaces=tuple(interfaces),
        span=span(line, length=len(name)),
    )


def app_ref(name: str, *type_args: TypeRef) -> TypeRef:
    return TypeRef(name, APP, APP, tuple(type_args))


def dispatcher_call(
    name: str = "SendAsync",
    on: TypeRef = ISENDER,
    generic: bool = True,
    cancellation: str = "explicit",
    parameter_count: int = 2,
    line: int = 20,
    containing: Optional[TypeRef] = None,
) -> Invocation:
    """
    A call to a dispatcher method.

    ``cancellation`` is ``"explicit"`` (caller passed a token), ``"default"``
    (the parameter's default value was used) or ``"absent"`` (the overload
    has no second argument at all).
    """
    params = [Parameter("request", TypeRef("Object", "System", "System.Runtime"))]
    if parameter_count >= 2:
        params.append(Parameter("cancellationToken", CANCELLATION_TOKEN, has_default=True))
    params += [Parameter(f"extra{i}") for i in range(2, parameter_count)]

    args = [Argument("request")]
    if cancellation == "explicit":
        args.append(Argument("cancellationToken", ArgumentKind.EXPLICIT))
    elif cancellation == "default":
        args.append(Argument("cancellationToken", ArgumentKind.DEFAULT_VALUE))

    return Invocation(
        target=MethodSymbol(
            name=name,
            containing_type=on,
            parameters=tuple(params),
            type_arguments=(STRING,) if generic else (),
        ),
        arguments=tuple(args),
        span=span(line, column=9, length=len(name) + 12),
        containing_type=containing,
    )


def add_mediatr_call(line: int = 30, method: str = "AddMediatR",
                     on: TypeRef = SERVICE_COLLECTION_EXTENSIONS) -> Invocation:
    return Invocation(
        target=MethodSymbol(
            name=method,
            containing_type=on,
            parameters=(Parameter("services", SERVICE_COLLECTION), Parameter("configuration")),
            is_static=True,
        ),
        arguments=(Argument("services"), Argument("configuration")),
        span=span(line, column=9, length=40),
        containing_type=app_ref("MyRegistrations"),
    )


def handle_call(on: TypeRef, containing: TypeRef, line: int = 40) -> Invocation:
    return Invocation(
        target=MethodSymbol(
            name="Handle",
            containing_type=on,
            parameters=(Parameter("request"), Parameter("cancellationToken", CANCELLATION_TOKEN)),
        ),
        arguments=(Argument("request"), Argument("cancellationToken")),
        span=span(line, column=13, length=30),
        containing_type=containing,
    )


def make_program(
    *decls: TypeSymbol,
    invocations: Iterable[Invocation] = (),
    suppressions: Iterable[Suppression] = (),
    library: Optional[List[TypeSymbol]] = None,
    name: str = "App",
) -> Program:
    lib = mediatr_library() if library is None else library
    return Program(
        name=name,
        types=tuple(lib) + tuple(decls),
        invocations=tuple(invocations),
        suppressions=tuple(suppressions),
    )
