from __future__ import annotations

"""
Generation Orchestration.

Coordinates the two supported workflows:
1. 'project': scaffold and populate the src/libs/tests/include layout,
   attach external repositories, generate.
2. 'recursive': populate an arbitrary tree (fully, or from selected top
   level folders) and generate.

Core errors are converted here into GenerationResult objects so the
interface layer only deals with results.
"""

import logging
import os
from typing import Iterable, List, Optional

from treemake.core.mainfile import Mainfile
from treemake.core.project import CProject, scaffold_project
from treemake.core.repository import RepositoryTargets
from treemake.domain.config import DEFAULT_TOOLCHAIN, ToolchainConfig, toolchain_to_dict
from treemake.domain.errors import NotDescendantError, NotDirectoryError
from treemake.domain.generation_models import (
    ERROR_INPUT,
    ERROR_WRITE,
    GenerationResult,
    create_error_result,
    create_success_result,
)
from treemake.infra.fs import normalize_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def run_project(
        root_path: str,
        archive: str,
        *,
        toolchain: Optional[ToolchainConfig] = None,
        repositories: Iterable[RepositoryTargets] = (),
        test_binary: Optional[str] = None,
        dry_run: bool = False,
) -> GenerationResult:
    """
    Generate the Makefiles of a standard C project.

    A missing root is created together with its layout folders, unless
    running dry.

    Args:
        root_path: Project root directory.
        archive: Project archive name, without extension.
        toolchain: Commands and flags for the shared definitions file.
        repositories: External repositories to attach to 'libs'.
        test_binary: Optional executable linked from the test objects.
        dry_run: If True, populate and report without writing.

    Returns:
        GenerationResult: Status and the list of written files.
    """
    base_path = normalize_path(root_path, os.getcwd())
    toolchain = toolchain or DEFAULT_TOOLCHAIN

    if not dry_run:
        try:
            scaffold_project(base_path)
        except OSError as e:
            msg = f"Could not create project layout: {e}"
            logger.error(msg)
            return create_error_result(msg, ERROR_INPUT, base_path)

    try:
        project = CProject(base_path, archive, toolchain, test_binary=test_binary)
    except NotDirectoryError as e:
        return _input_error(str(e), base_path)
    except OSError as e:
        return _input_error(f"Could not read project tree: {e}", base_path)

    for repository in repositories:
        project.add_repository(repository)

    return _generate(project, project.archives, dry_run)


def run_recursive(
        root_path: str,
        *,
        toolchain: Optional[ToolchainConfig] = None,
        only: Iterable[str] = (),
        dry_run: bool = False,
) -> GenerationResult:
    """
    Generate Makefiles for a whole directory tree.

    Args:
        root_path: Tree root; created if missing, unless running dry.
        toolchain: Commands and flags for the shared definitions file.
        only: If given, the top-level subdirectories to populate instead of all.
        dry_run: If True, populate and report without writing.

    Returns:
        GenerationResult: Status and the list of written files.
    """
    base_path = normalize_path(root_path, os.getcwd())
    selected = list(only)

    if not dry_run:
        try:
            scaffold_project(base_path, subdirs=())
        except OSError as e:
            msg = f"Could not create {base_path}: {e}"
            logger.error(msg)
            return create_error_result(msg, ERROR_INPUT, base_path)

    try:
        root = Mainfile(base_path, toolchain or DEFAULT_TOOLCHAIN)
        if selected:
            archives = root.populate(*selected)
        else:
            archives = root.populate_full()
    except NotDirectoryError as e:
        return _input_error(str(e), base_path)
    except OSError as e:
        return _input_error(f"Could not read directory tree: {e}", base_path)

    return _generate(root, archives, dry_run)


def planned_files(root: Mainfile) -> List[str]:
    """List the files generation writes, in the order it writes them."""
    return [root.common_path] + [node.makefile_path for node in root.walk()]


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _generate(root: Mainfile, archives: List[str], dry_run: bool) -> GenerationResult:
    files = planned_files(root)

    if dry_run:
        logger.info(f"Dry run: {len(files)} files would be written under {root.path}")
    else:
        try:
            root.generate_project()
        except NotDescendantError as e:
            return _input_error(str(e), root.path)
        except OSError as e:
            msg = f"Failed to create Makefiles: {e}"
            logger.error(msg)
            return create_error_result(msg, ERROR_WRITE, root.path)

    return create_success_result(
        root_path=root.path,
        written_files=files,
        archives=archives,
        toolchain=toolchain_to_dict(root.toolchain),
        dry_run=dry_run,
    )


def _input_error(msg: str, root_path: str) -> GenerationResult:
    logger.error(msg)
    return create_error_result(msg, ERROR_INPUT, root_path)
