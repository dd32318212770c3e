"""Global pytest configuration."""

from __future__ import annotations

import logging
import os

import pytest


def pytest_sessionstart(session):  # noqa: ARG001
    # Plain log output keeps CLI captures free of terminal control codes
    os.environ.setdefault("SAFESEQ_NO_COLOR_LOG", "1")
    # Wide console, so rich tables are not wrapped in captured output
    os.environ.setdefault("COLUMNS", "200")


@pytest.fixture(autouse=True)
def reset_logger():
    """Remove handlers installed by the CLI between tests."""
    yield
    logger = logging.getLogger("safeseq")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def write_toml(tmp_path):
    """Write a TOML document into the temporary directory and return its path."""

    def _write(content: str, name: str = "scenario.toml"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
