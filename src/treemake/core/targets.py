from __future__ import annotations

"""
Special Target Rules.

A target is a named rule listed under TARGETS in the Makefile of the
directory that owns it. Each concrete variant renders only its own command
lines; the header, indentation and trailing blank line are shared.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Tuple

from treemake.domain import constants as c
from treemake.infra.formatter import MakeFormatter, gen_list, use_var


def join_make_path(*segments: str) -> str:
    """
    Join path segments with '/', skipping empty and '.' segments.

    A leading '/' on the first non-empty segment is kept, so absolute
    destinations stay absolute.
    """
    parts = [s.strip("/") for s in segments if s]
    joined = "/".join(p for p in parts if p and p != c.LOCAL_DIR)
    first = next((s for s in segments if s), "")
    return "/" + joined if first.startswith("/") else joined


# -----------------------------------------------------------------------------
# BASE CLASS
# -----------------------------------------------------------------------------

class Target(ABC):
    """
    Abstract rule with a name, ordered dependencies and a command body.

    Attributes:
        name: The rule's target identifier.
        dependencies: Names the rule depends on, in emission order.
    """

    def __init__(self, name: str, dependencies: Iterable[str] = ()):
        self._name = name
        self._dependencies: Tuple[str, ...] = tuple(dependencies)

    @property
    def name(self) -> str:
        return self._name

    @property
    def dependencies(self) -> Tuple[str, ...]:
        return self._dependencies

    def generate_rule(self, output: MakeFormatter) -> None:
        """Write the rule header, the indented command body and a blank line."""
        output.write_rule_header(self._name, self._dependencies)
        with output.indented():
            self.render_command(output)
        output.write_line()

    @abstractmethod
    def render_command(self, output: MakeFormatter) -> None:
        """Write the command line(s) that build the target."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._name!r}, {list(self._dependencies)!r})"


# -----------------------------------------------------------------------------
# BUILD VARIANTS
# -----------------------------------------------------------------------------

class ArchiveTarget(Target):
    """Static archive built from the object files of its directory."""

    def render_command(self, output: MakeFormatter) -> None:
        output.write_line(gen_list([
            use_var(c.AR_VAR),
            use_var(c.AR_FLAGS_VAR),
            c.OUT_IN_VARS,
        ]))


class BinaryTarget(Target):
    """
    Executable linked from all of its dependencies.

    The C driver is used when every source is C, the C++ driver otherwise.
    """

    def __init__(self, name: str, dependencies: Iterable[str], all_c: bool):
        super().__init__(name, dependencies)
        self._all_c = all_c

    @property
    def all_c(self) -> bool:
        return self._all_c

    def render_command(self, output: MakeFormatter) -> None:
        compiler_var = c.CC_VAR if self._all_c else c.CXX_VAR
        output.write_line(gen_list([
            use_var(compiler_var),
            use_var(c.CPPFLAGS_VAR),
            c.OUTPUT_FLAG,
            c.OUT_IN_VARS,
        ]))


class FileCopyTarget(Target):
    """Copy of a file built elsewhere in the tree to the owning directory."""

    def __init__(self, source: str, destination: str):
        super().__init__(destination, (source,))
        self._source = source

    @property
    def source(self) -> str:
        return self._source

    def render_command(self, output: MakeFormatter) -> None:
        output.write_line(gen_list([c.COPY_CMD, self._source, self._name]))


# -----------------------------------------------------------------------------
# EXTERNAL REPOSITORY VARIANTS
# -----------------------------------------------------------------------------

class RepositoryCloneTarget(Target):
    """Fetch of an external repository into a directory named after the project."""

    def __init__(self, project: str, url: str):
        super().__init__(project)
        self._url = url

    @property
    def url(self) -> str:
        return self._url

    def render_command(self, output: MakeFormatter) -> None:
        output.write_line(gen_list([use_var(c.GIT_CLONE_VAR), self._url, self._name]))


class RepositoryCopyTarget(Target):
    """
    Copy of one file out of a cloned repository.

    The file may only exist after the repository's own build has run, so the
    first copy registered for a repository invokes that build before copying.

    Attributes:
        project: Directory the repository is cloned into.
        source: Path of the file inside the cloned directory.
        is_first: Whether this copy runs the repository's build first.
    """

    def __init__(
            self,
            project: str,
            file_name: str,
            dir_in_project: str,
            dir_in_target: str = c.LOCAL_DIR,
            is_first: bool = False,
    ):
        super().__init__(join_make_path(dir_in_target, file_name), (project,))
        self._project = project
        self._source = join_make_path(project, dir_in_project, file_name)
        self._is_first = is_first

    @property
    def project(self) -> str:
        return self._project

    @property
    def source(self) -> str:
        return self._source

    @property
    def is_first(self) -> bool:
        return self._is_first

    def render_command(self, output: MakeFormatter) -> None:
        if self._is_first:
            output.write_line(gen_list([use_var(c.MAKE_VAR), c.MAKE_SWITCH_FLAG, self._project]))
        output.write_line(gen_list([c.COPY_CMD, self._source, self._name]))
