"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dashlist.config import Config  # noqa: E402


SAMPLE_DOCUMENT = (
    "--[x] Buy milk ;; :2023-06-01T09:30: \n"
    "--Write report ;;\n"
    " details here\n"
    "----[ ] Outline ;; :2023/06/02:\n"
    "------Intro ;;\n"
    "--Bad entry without delimiter\n"
    "--Call plumber ;;"
)


@pytest.fixture(autouse=True)
def reset_config():
    """Drop the cached configuration between tests."""
    Config._instance = None
    yield
    Config._instance = None


@pytest.fixture
def sample_document():
    return SAMPLE_DOCUMENT


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "todo.txt"
    path.write_text(SAMPLE_DOCUMENT, encoding="utf-8")
    return path
