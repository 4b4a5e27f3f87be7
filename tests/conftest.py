from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A fixture that lays out project trees on disk from a nested dict.
3. Teardown of the logging listener started by CLI runs.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from treemake.infra.logging import shutdown_logging  # noqa: E402

Layout = Dict[str, Any]


def _build(base: Path, layout: Layout) -> None:
    for name, content in layout.items():
        path = base / name
        if isinstance(content, dict):
            path.mkdir()
            _build(path, content)
        else:
            path.write_text(content, encoding="utf-8")


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[Layout], Path]:
    """
    Return a builder that creates a directory tree under tmp_path.

    Dict values become directories, string values become files with that
    content. The builder returns the created root.

    Example:
        root = make_tree({"src": {"a.c": "", "b.cpp": ""}, "include": {}})
    """
    def _make(layout: Layout, name: str = "project") -> Path:
        root = tmp_path / name
        root.mkdir()
        _build(root, layout)
        return root

    return _make


@pytest.fixture(autouse=True)
def _stop_logging_listener():
    """Stop the queue listener a CLI run may have started."""
    yield
    shutdown_logging()
