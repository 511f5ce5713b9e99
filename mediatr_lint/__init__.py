"""
mediatr_lint - Conventions Analyzer for MediatR Message Dispatch
================================================================

Rule-based static analysis over a compiled program's symbol table.  Given a
program snapshot the suite

  * classifies every type as request, stream request, notification or one
    of their handlers, from the MediatR marker interfaces it implements;
  * checks that the type name carries the suffix of its role
    (``Command``/``Query``, ``StreamQuery``, ``Notification``/``Event``...);
  * checks dispatcher call sites (``Send``, ``Publish``, ``CreateStream``)
    for the generic overload, an explicit cancellation token and the
    ``Async`` suffix;
  * flags the legacy ``AddMediatR`` registration;
  * flags public handlers and handlers that call other handlers.

Quick start
-----------
>>> from mediatr_lint import load_program, CheckerRunner
>>> results = CheckerRunner().run(load_program("app.dump.json"))
>>> print(results.summary())

Package layout
--------------
::

    mediatr_lint/
    ├── symbols.py         program snapshot model
    ├── loader.py          JSON dump loader
    ├── known_symbols.py   MediatR metadata names
    ├── catalog.py         symbol catalog (resolved once per program)
    ├── roles.py           TypeRole
    ├── classifier.py      role classification
    ├── naming.py          GMDTR01-06
    ├── invocations.py     GMDTR07, 08, 12
    ├── registration.py    GMDTR11
    ├── handlers.py        GMDTR09, 10, 13
    ├── rules.py           rule identifiers and descriptors
    ├── diagnostics.py     diagnostics, sink, suppressions
    ├── checkers.py        checker framework
    ├── runner.py          checker runner
    ├── config.py          .editorconfig severity configuration
    ├── errors.py          exception hierarchy
    └── main.py            command line
"""

from __future__ import annotations

import logging

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from mediatr_lint.catalog import SymbolCatalog, catalog_for  # noqa: E402
from mediatr_lint.checkers import (  # noqa: E402
    Checker,
    CheckerContext,
    CheckerRegistry,
    InvocationChecker,
    TypeDeclarationChecker,
)
from mediatr_lint.classifier import classify, roles_of  # noqa: E402
from mediatr_lint.diagnostics import (  # noqa: E402
    Diagnostic,
    DiagnosticSeverity,
    DiagnosticSink,
    RuleDescriptor,
    SuppressionManager,
)
from mediatr_lint.errors import ConfigError, MediatrLintError, SnapshotError  # noqa: E402
from mediatr_lint.invocations import InvocationFinding, inspect_invocation  # noqa: E402
from mediatr_lint.loader import load_program, program_from_dict  # noqa: E402
from mediatr_lint.naming import SUFFIX_RULES, check_name  # noqa: E402
from mediatr_lint.registration import check_registration  # noqa: E402
from mediatr_lint.roles import TypeRole  # noqa: E402
from mediatr_lint.runner import CheckerRunner, CheckerRunResults, analyze  # noqa: E402
from mediatr_lint.symbols import (  # noqa: E402
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

__all__ = [
    "__version__",
    "SymbolCatalog",
    "catalog_for",
    "Checker",
    "CheckerContext",
    "CheckerRegistry",
    "InvocationChecker",
    "TypeDeclarationChecker",
    "classify",
    "roles_of",
    "Diagnostic",
    "DiagnosticSeverity",
    "DiagnosticSink",
    "RuleDescriptor",
    "SuppressionManager",
    "ConfigError",
    "MediatrLintError",
    "SnapshotError",
    "InvocationFinding",
    "inspect_invocation",
    "load_program",
    "program_from_dict",
    "SUFFIX_RULES",
    "check_name",
    "check_registration",
    "TypeRole",
    "CheckerRunner",
    "CheckerRunResults",
    "analyze",
    "Accessibility",
    "Argument",
    "ArgumentKind",
    "Invocation",
    "MethodSymbol",
    "Parameter",
    "Program",
    "SourceSpan",
    "Suppression",
    "TypeKind",
    "TypeRef",
    "TypeSymbol",
]
