"""Shared fixtures for CLI command tests."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from exoserve.lib.logging_config import ROOT_LOGGER_NAME


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear EXOSERVE_* variables and undo logging setup after each test."""
    for name in ("EXOSERVE_ADDR", "EXOSERVE_DOCUMENT", "EXOSERVE_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.propagate = True
    root.setLevel(logging.NOTSET)


@pytest.fixture
def document_path(tmp_path: Path, reference_pdf: bytes) -> Path:
    """Write the reference exercise document to a temporary file."""
    path = tmp_path / "exercises.pdf"
    path.write_bytes(reference_pdf)
    return path
