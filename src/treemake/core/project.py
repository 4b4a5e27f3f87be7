from __future__ import annotations

"""
Standard C Project Layout.

Wires a Mainfile for projects laid out as:

    <root>/src      sources compiled into the project archive
    <root>/libs     external repositories, never cleaned automatically
    <root>/tests    test sources, no archive
    <root>/include  shared headers

The archive built in 'src' is copied to the root directory.
"""

import logging
import os
import shutil
from typing import List, Optional, Tuple

from treemake.core.mainfile import Mainfile
from treemake.core.makefile import Makefile
from treemake.core.repository import RepositoryTargets
from treemake.core.targets import FileCopyTarget, join_make_path
from treemake.domain import constants as c
from treemake.domain.config import ToolchainConfig
from treemake.infra.fs import safe_mkdir

logger = logging.getLogger(__name__)

SRC_DIR = "src"
LIBS_DIR = "libs"
TESTS_DIR = "tests"
LAYOUT_DIRS = (SRC_DIR, LIBS_DIR, TESTS_DIR, c.INCLUDE_NAME)


class CProject(Mainfile):
    """
    Mainfile for the src/libs/tests/include layout.

    Attributes:
        archive_file_name: Name of the project archive, with extension.
        src: Node of the source folder.
        libs: Node of the external repositories folder.
        tests: Node of the test folder.
        archives: Archive paths, relative to the root, built by src and tests.
    """

    def __init__(
            self,
            path: str,
            archive: str,
            toolchain: Optional[ToolchainConfig] = None,
            test_binary: Optional[str] = None,
    ):
        super().__init__(path, toolchain)

        self.src = Makefile(os.path.join(self.path, SRC_DIR), self)
        self.libs = Makefile(os.path.join(self.path, LIBS_DIR), self)
        self.tests = Makefile(os.path.join(self.path, TESTS_DIR), self)

        self.archive_file_name = archive + c.ARCHIVE_EXT
        self.src.set_custom_archive_name(self.archive_file_name)
        # Test objects are not used anywhere else
        self.tests.set_make_archive(False)
        # Keep cloned repositories across 'make clean'
        self.libs.set_auto_clean(False)

        if test_binary:
            project_archive = join_make_path(c.PARENT_SEGMENT, SRC_DIR, self.archive_file_name)
            self.tests.set_binary(test_binary, [project_archive])

        self.add_subdir(self.libs)
        self.add_subdir(self.src)
        self.add_subdir(self.tests)

        self.archives: List[str] = []
        for subdir in (self.src, self.tests):
            for archive_path in subdir.populate_full():
                self.archives.append(join_make_path(subdir.name, archive_path))

        self.add_target(FileCopyTarget(join_make_path(SRC_DIR, self.archive_file_name), self.archive_file_name))

    def add_repository(self, repository: RepositoryTargets) -> None:
        """Attach an external repository's rules to the libs folder."""
        repository.add_to_makefile(self.libs)


# -----------------------------------------------------------------------------
# Layout Scaffolding
# -----------------------------------------------------------------------------
def scaffold_project(path: str, subdirs: Tuple[str, ...] = LAYOUT_DIRS) -> List[str]:
    """
    Create a project root and its layout folders if the root does not exist.

    An existing root is left untouched. If any folder cannot be created,
    everything created by this call is removed again.

    Args:
        path: Project root to create.
        subdirs: Layout folders to create under the root.

    Returns:
        List[str]: Directories created by this call.

    Raises:
        OSError: If the root or one of the layout folders cannot be created.
    """
    if os.path.exists(path):
        return []

    ok, err = safe_mkdir(path)
    if not ok:
        raise OSError(f"Could not create {path}: {err}")

    created = [path]
    for name in subdirs:
        sub_path = os.path.join(path, name)
        ok, err = safe_mkdir(sub_path)
        if not ok:
            logger.error(f"Could not create '{name}' folder: {err}")
            shutil.rmtree(path, ignore_errors=True)
            raise OSError(f"Could not create {sub_path}: {err}")
        created.append(sub_path)

    logger.info(f"Created project layout at {path}")
    return created
