from __future__ import annotations

"""
Root Directory Node.

The Mainfile is the Makefile of the project root. It owns the toolchain
configuration written to the shared definitions file, knows whether a
project-wide include directory exists, and resolves the relative path from
any node of its tree back to the root.
"""

import logging
import os
from typing import Optional

from treemake.core.makefile import Makefile
from treemake.domain import constants as c
from treemake.domain.config import DEFAULT_TOOLCHAIN, ToolchainConfig
from treemake.domain.errors import NotDescendantError
from treemake.infra.formatter import MakeFormatter
from treemake.infra.fs import canonical_path

logger = logging.getLogger(__name__)


class Mainfile(Makefile):
    """
    Entry point for generating every Makefile of a project.

    Attributes:
        toolchain: Commands and flags written to the shared definitions file.
        has_include: Whether '<root>/include' existed at construction time.
    """

    def __init__(self, path: str, toolchain: Optional[ToolchainConfig] = None):
        super().__init__(path, self)
        self._toolchain = toolchain or DEFAULT_TOOLCHAIN
        self._has_include = os.path.isdir(os.path.join(self.path, c.INCLUDE_NAME))

    @property
    def toolchain(self) -> ToolchainConfig:
        return self._toolchain

    @property
    def has_include(self) -> bool:
        return self._has_include

    @property
    def common_path(self) -> str:
        return os.path.join(self.path, c.COMMON_NAME)

    # -------------------------------------------------------------------------
    # Relative Addressing
    # -------------------------------------------------------------------------

    def relative_path_to(self, descendant: Makefile) -> str:
        """
        Compute the path from a descendant directory back up to the root.

        Args:
            descendant: A node whose directory lies inside the root directory.

        Returns:
            str: One '../' per level of depth; '' for the root itself.

        Raises:
            NotDescendantError: If the node's directory is outside the root.
        """
        root_path = self.path
        descendant_path = canonical_path(descendant.path)

        if descendant_path == root_path:
            return ""

        prefix = root_path.rstrip(os.sep) + os.sep
        if not descendant_path.startswith(prefix):
            raise NotDescendantError(descendant_path, root_path)

        remainder = descendant_path[len(prefix):]
        depth = len([segment for segment in remainder.split(os.sep) if segment])
        return c.PARENT_SEGMENT * depth

    # -------------------------------------------------------------------------
    # Project Generation
    # -------------------------------------------------------------------------

    def write_common_definitions(self, output: MakeFormatter) -> None:
        """Emit the toolchain variable assignments shared by all Makefiles."""
        for name, value in self._toolchain.common_assignments():
            output.assign_variable(name, value)

    def generate_project(self) -> None:
        """
        Write the shared definitions file and every Makefile of the tree.

        Raises:
            OSError: On the first write failure. Files written before the
                failure are left in place.
        """
        with MakeFormatter.for_path(self.common_path) as output:
            self.write_common_definitions(output)
        logger.info(f"Wrote {self.common_path}")

        self.generate()
