from __future__ import annotations

"""
Generation Domain Data Models.

Defines the result structure and factory functions used to report a
generation run from the engine to the interface layer.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

# Failure categories, mapped to exit codes by the CLI
ERROR_INPUT = "input"
ERROR_WRITE = "write"


# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of one generation run.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        error_kind: ERROR_INPUT or ERROR_WRITE when ok is False.
        root_path: Canonical project root.
        dry_run: Whether files were only planned, not written.
        written_files: Files written (or planned), in generation order.
        archives: Archive paths, relative to the root, the tree produces.
        toolchain: Toolchain values used for the shared definitions file.
    """
    ok: bool
    error: str
    error_kind: str
    root_path: str
    dry_run: bool = False
    written_files: List[str] = field(default_factory=list)
    archives: List[str] = field(default_factory=list)
    toolchain: Dict[str, str] = field(default_factory=dict)


# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        error_kind: str,
        root_path: str,
        written_files: Optional[List[str]] = None,
) -> GenerationResult:
    """
    Create a failed generation result.

    Args:
        error: Detailed error description.
        error_kind: ERROR_INPUT or ERROR_WRITE.
        root_path: The target root directory.
        written_files: Files written before the failure.

    Returns:
        GenerationResult: An immutable error result object.
    """
    return GenerationResult(
        ok=False,
        error=error,
        error_kind=error_kind,
        root_path=root_path,
        written_files=written_files or [],
    )


def create_success_result(
        root_path: str,
        written_files: List[str],
        archives: List[str],
        toolchain: Dict[str, str],
        dry_run: bool = False,
) -> GenerationResult:
    """Create a successful generation result."""
    return GenerationResult(
        ok=True,
        error="",
        error_kind="",
        root_path=root_path,
        dry_run=dry_run,
        written_files=written_files,
        archives=archives,
        toolchain=toolchain,
    )
