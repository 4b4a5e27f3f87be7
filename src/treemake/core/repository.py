from __future__ import annotations

"""
External Repository Targets.

Aggregates the rules that bring an external Git repository into the tree:
one rule cloning the repository folder, followed by rules copying the files
wanted out of it. Files may only appear once the repository's own build has
run, so the first copy rule of each repository triggers that build.
"""

import logging
from typing import List, Tuple

from treemake.core.makefile import Makefile
from treemake.core.targets import RepositoryCloneTarget, RepositoryCopyTarget
from treemake.domain import constants as c

logger = logging.getLogger(__name__)

# Headers are copied to the project include folder, one level above the
# directory that holds the repository rules.
INCLUDE_TARGET_DIR = c.PARENT_SEGMENT + c.INCLUDE_NAME


class RepositoryTargets:
    """
    Clone rule plus ordered copy rules for one external repository.

    Attributes:
        project: Folder name the repository is cloned into.
        url: Location to clone from.
    """

    def __init__(self, project: str, url: str):
        self.project = project
        self.url = url
        self._clone = RepositoryCloneTarget(project, url)
        self._outputs: List[RepositoryCopyTarget] = []

    @property
    def clone_target(self) -> RepositoryCloneTarget:
        return self._clone

    @property
    def outputs(self) -> Tuple[RepositoryCopyTarget, ...]:
        return tuple(self._outputs)

    def add_output(
            self,
            file_name: str,
            dir_in_project: str,
            dir_in_target: str = c.LOCAL_DIR,
    ) -> RepositoryCopyTarget:
        """
        Register a file to copy out of the cloned repository.

        Args:
            file_name: Name of the file, identical at source and destination.
            dir_in_project: Folder inside the repository holding the file.
            dir_in_target: Destination folder, relative to the owning Makefile.

        Returns:
            RepositoryCopyTarget: The created rule.
        """
        ordinal = len(self._outputs)
        output = RepositoryCopyTarget(
            self.project,
            file_name,
            dir_in_project,
            dir_in_target,
            is_first=(ordinal == 0),
        )
        self._outputs.append(output)
        return output

    def add_include_output(self, header_name: str) -> RepositoryCopyTarget:
        """Copy '<project>/include/<header>' into the project's include folder."""
        return self.add_output(header_name, c.INCLUDE_NAME, INCLUDE_TARGET_DIR)

    def add_to_makefile(self, makefile: Makefile) -> None:
        """
        Attach the clone rule, then every copy rule, to a directory node.

        Also assigns the clone command variable from the root's toolchain.
        """
        makefile.add_assignment(c.GIT_CLONE_VAR, makefile.root.toolchain.git_cmd)
        makefile.add_target(self._clone)
        for output in self._outputs:
            makefile.add_target(output)

        logger.debug(f"Attached repository '{self.project}' with {len(self._outputs)} outputs to {makefile.path}")
