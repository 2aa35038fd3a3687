"""Fixtures for integration tests."""

import sys
from pathlib import Path
from typing import Protocol

import pytest


class WriteSuiteFn(Protocol):
    """Protocol for suite writing function."""

    def __call__(self, body: str) -> Path:
        """Write a suite file and return its path."""


@pytest.fixture
def python() -> str:
    """Path of the running interpreter, used as a portable command."""
    return sys.executable


@pytest.fixture
def write_suite(tmp_path: Path) -> WriteSuiteFn:
    """Return a function writing suite files into a temporary directory."""

    def _write(body: str) -> Path:
        suite_file = tmp_path / "suite.yaml"
        suite_file.write_text(body)
        return suite_file

    return _write
