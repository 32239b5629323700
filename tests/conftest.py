"""Shared fixtures for errchain tests."""

from __future__ import annotations

import inspect
from pathlib import Path

import pytest

from errchain.config import TraceConfig

REPO_ROOT = Path(__file__).parent.parent


def line_of(function: object, needle: str) -> int:
    """Source line of the first line in ``function`` containing ``needle``."""
    lines, start = inspect.getsourcelines(function)
    for offset, line in enumerate(lines):
        if needle in line:
            return start + offset
    raise AssertionError(f"failed to find {needle!r} in source")


@pytest.fixture
def trace_config() -> TraceConfig:
    """Display paths relative to the repository, independent of the cwd."""
    return TraceConfig(root=str(REPO_ROOT))
