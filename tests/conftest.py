# tests/conftest.py
"""Shared fixtures for the mediatr-lint test-suite."""

from __future__ import annotations

from typing import Callable, List, Optional, Sequence

import pytest

from mediatr_lint.catalog import SymbolCatalog
from mediatr_lint.diagnostics import Diagnostic
from mediatr_lint.runner import CheckerRunner
from mediatr_lint.symbols import Program

from tests.builders import make_program


@pytest.fixture
def empty_program() -> Program:
    """A program that references MediatR but declares nothing."""
    return make_program()


@pytest.fixture
def catalog(empty_program: Program) -> SymbolCatalog:
    return SymbolCatalog.resolve(empty_program)


@pytest.fixture
def run_checkers() -> Callable[..., List[Diagnostic]]:
    """Run the given checkers (default: all) and return the diagnostics."""

    def _run(program: Program, checkers: Optional[Sequence[str]] = None, **options) -> List[Diagnostic]:
        return CheckerRunner(**options).run(program, checkers=checkers).diagnostics

    return _run


@pytest.fixture
def rule_ids(run_checkers) -> Callable[..., List[str]]:
    """Like ``run_checkers`` but only the rule ids, in span order."""

    def _ids(program: Program, checkers: Optional[Sequence[str]] = None, **options) -> List[str]:
        return [d.rule_id for d in run_checkers(program, checkers, **options)]

    return _ids
