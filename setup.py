#!/usr/bin/env python3
# =============================================================================
#  mediatr-lint - setup.py
#
#  For development:
#      pip install -e ".[dev]"
#      python -m pytest
# =============================================================================

from __future__ import annotations

import re
from pathlib import Path

from setuptools import setup, find_packages

# ---------------------------------------------------------------------------
#  The version lives in mediatr_lint/__init__.py; single source of truth.
# ---------------------------------------------------------------------------
_HERE = Path(__file__).resolve().parent


def _read_version() -> str:
    """Extract __version__ from the package without importing it."""
    init = _HERE / "mediatr_lint" / "__init__.py"
    text = init.read_text(encoding="utf-8")
    match = re.search(r'^__version__\s*=\s*"([^"]+)"', text, re.MULTILINE)
    if match:
        return match.group(1)
    return "0.0.0"


def _read_long_description() -> str:
    """Read README.md for the long description."""
    readme = _HERE / "README.md"
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


setup(
    name="mediatr-lint",
    version=_read_version(),
    description=(
        "Static analysis of naming and usage conventions for MediatR "
        "requests, notifications and handlers."
    ),
    long_description=_read_long_description(),
    long_description_content_type="text/markdown",
    license="Apache-2.0",
    author="mediatr-lint contributors",
    python_requires=">=3.10",
    packages=find_packages(
        include=["mediatr_lint", "mediatr_lint.*"],
        exclude=["tests", "tests.*"],
    ),
    install_requires=[],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "ruff>=0.4",
            "mypy>=1.10",
        ],
    },
    entry_points={
        "console_scripts": [
            "mediatr-lint=mediatr_lint.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Software Development :: Quality Assurance",
    ],
    keywords=[
        "mediatr",
        "static-analysis",
        "cqrs",
        "naming-conventions",
        "linter",
    ],
    zip_safe=False,
)
