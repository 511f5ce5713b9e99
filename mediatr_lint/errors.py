# mediatr_lint/errors.py
"""
Infrastructure error types for mediatr-lint.

Rule evaluation itself never raises: a missing library symbol or an
inapplicable rule simply produces no diagnostic.  The exceptions below are
reserved for failures *around* the analysis, i.e. a dump file that cannot
be read or a configuration file that does not make sense.

Hierarchy
─────────
  MediatrLintError (base)
  ├── SnapshotError   - unreadable or malformed program dump
  └── ConfigError     - invalid severity configuration
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union


class MediatrLintError(Exception):
    """Base class for every error raised by mediatr-lint."""


class SnapshotError(MediatrLintError):
    """
    A program snapshot could not be loaded.

    Attributes
    ----------
    path   : the dump file, if the snapshot came from disk
    reason : short description of what was wrong
    """

    def __init__(self, reason: str, path: Optional[Union[str, Path]] = None) -> None:
        self.reason = reason
        self.path = str(path) if path is not None else None
        where = f"{self.path}: " if self.path else ""
        super().__init__(f"{where}{reason}")


class ConfigError(MediatrLintError):
    """Invalid rule configuration (unknown severity, unreadable file...)."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        self.source = source
        where = f"{source}: " if source else ""
        super().__init__(f"{where}{message}")


__all__ = ["MediatrLintError", "SnapshotError", "ConfigError"]
