from __future__ import annotations

"""
Directory Node Model.

One Makefile object per directory. Population walks the filesystem to
discover subdirectories and source files, infers object and archive rules,
and records the archives each subtree produces. Generation writes the
directory's Makefile and then those of its subdirectories, depth-first.
"""

import logging
import os
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Tuple

from treemake.core.targets import ArchiveTarget, BinaryTarget, Target, join_make_path
from treemake.domain import constants as c
from treemake.domain.errors import NotDirectoryError
from treemake.infra.formatter import MakeFormatter, gen_list, use_var
from treemake.infra.fs import canonical_path, list_directory

if TYPE_CHECKING:
    from treemake.core.mainfile import Mainfile

logger = logging.getLogger(__name__)

CPPFLAGS_VALUE = gen_list([use_var(c.STATIC_CPPFLAGS_VAR), use_var(c.INCLUDE_VAR)])


# -----------------------------------------------------------------------------
# Source Classification
# -----------------------------------------------------------------------------
def is_source(file_name: str) -> bool:
    """Check whether a filename carries one of the C/C++ source extensions."""
    _, ext = os.path.splitext(file_name)
    return ext in c.SOURCE_EXTS


def object_name_for(file_name: str) -> str:
    """Derive the object file name of a source file ('a.cpp' -> 'a.o')."""
    stem, _ = os.path.splitext(file_name)
    return stem + c.OBJECT_EXT


# -----------------------------------------------------------------------------
# Directory Node
# -----------------------------------------------------------------------------
class Makefile:
    """
    Makefile data for one directory of the project.

    Attributes:
        path: Canonical path of the directory; identity of the node.
        root: The Mainfile at the top of the tree.
        object_names: Objects compiled directly in this directory.
        targets: Special target rules owned by this directory.
        subdirs: Child directory nodes, in insertion order.
        assignments: Extra variable assignments, in insertion order.
    """

    def __init__(self, path: str, root: "Mainfile"):
        if not os.path.isdir(path):
            raise NotDirectoryError(path)

        self._path = canonical_path(path)
        self._root = root

        self._object_names: List[str] = []
        self._targets: List[Target] = []
        self._subdirs: List[Makefile] = []
        self._assignments: Dict[str, str] = {}

        self.custom_archive_name: Optional[str] = None
        self.make_archive: bool = True
        self.auto_clean: bool = True

        self._binary_name: Optional[str] = None
        self._binary_extra_deps: Tuple[str, ...] = ()

    # --- Read-only views ---

    @property
    def path(self) -> str:
        return self._path

    @property
    def root(self) -> "Mainfile":
        return self._root

    @property
    def name(self) -> str:
        return os.path.basename(self._path)

    @property
    def makefile_path(self) -> str:
        return os.path.join(self._path, c.MAKEFILE_NAME)

    @property
    def object_names(self) -> Tuple[str, ...]:
        return tuple(self._object_names)

    @property
    def targets(self) -> Tuple[Target, ...]:
        return tuple(self._targets)

    @property
    def subdirs(self) -> Tuple["Makefile", ...]:
        return tuple(self._subdirs)

    @property
    def assignments(self) -> Dict[str, str]:
        return dict(self._assignments)

    @property
    def archive_name(self) -> str:
        """Name of the archive produced by automatic population."""
        return self.custom_archive_name or self.name + c.ARCHIVE_EXT

    # --- Mutators used by callers before generation ---

    def add_object(self, object_name: str) -> None:
        self._object_names.append(object_name)

    def add_target(self, target: Target) -> None:
        self._targets.append(target)

    def add_subdir(self, subdir: "Makefile") -> None:
        """
        Attach a child node.

        Raises:
            NotDirectoryError: If the node is not a direct subdirectory.
        """
        if os.path.dirname(subdir.path) != self._path:
            raise NotDirectoryError(subdir.path)
        self._subdirs.append(subdir)

    def add_assignment(self, name: str, value: str) -> None:
        self._assignments[name] = value

    def set_custom_archive_name(self, name: Optional[str]) -> None:
        self.custom_archive_name = name

    def set_make_archive(self, enabled: bool) -> None:
        self.make_archive = enabled

    def set_auto_clean(self, enabled: bool) -> None:
        self.auto_clean = enabled

    def set_binary(self, name: Optional[str], extra_dependencies: Iterable[str] = ()) -> None:
        """
        Request an executable linked from this directory's objects.

        The binary target is created during population, after the sources
        have been classified, so the compiler driver matches the sources.

        Args:
            name: Executable name, or None to disable.
            extra_dependencies: Further inputs to link, e.g. archives.
        """
        self._binary_name = name
        self._binary_extra_deps = tuple(extra_dependencies)

    def walk(self) -> Iterator["Makefile"]:
        """Yield this node and all its descendants in pre-order."""
        yield self
        for subdir in self._subdirs:
            yield from subdir.walk()

    # -------------------------------------------------------------------------
    # Population
    # -------------------------------------------------------------------------

    def populate(self, *subdir_names: str) -> List[str]:
        """
        Populate from the named subdirectories and this directory's sources.

        Every name is verified before any node is added, so a failure leaves
        the tree unchanged.

        Args:
            subdir_names: Names of direct subdirectories to recurse into.

        Returns:
            List[str]: Paths, relative to this directory, of all archives
            the populated subtree will produce.

        Raises:
            NotDirectoryError: If a named entry is missing, not a directory,
                a symbolic link, or not a single path component.
        """
        new_subdirs = [self._child(subdir_name) for subdir_name in subdir_names]
        return self._populate_after_subdirs_added(new_subdirs)

    def populate_full(self) -> List[str]:
        """
        Populate recursively from every subdirectory except the include folder.

        Returns:
            List[str]: Paths, relative to this directory, of all archives
            the populated subtree will produce.
        """
        subdir_names, _ = list_directory(self._path)
        new_subdirs = [
            self._child(subdir_name)
            for subdir_name in subdir_names
            if subdir_name != c.INCLUDE_NAME
        ]
        return self._populate_after_subdirs_added(new_subdirs)

    def _child(self, subdir_name: str) -> "Makefile":
        """Build the node of a direct subdirectory that is not a symbolic link."""
        path = os.path.join(self._path, subdir_name)
        separators = [sep for sep in (os.sep, os.altsep) if sep]
        if subdir_name in ("", os.curdir, os.pardir) or any(sep in subdir_name for sep in separators):
            raise NotDirectoryError(path)

        child = Makefile(path, self._root)
        # A link would be named after its target, not after its entry
        if child.path != path:
            raise NotDirectoryError(path)
        return child

    def _populate_after_subdirs_added(self, new_subdirs: List["Makefile"]) -> List[str]:
        archives: List[str] = []

        for subdir in new_subdirs:
            self.add_subdir(subdir)
        for subdir in new_subdirs:
            for sub_archive in subdir.populate_full():
                archives.append(join_make_path(subdir.name, sub_archive))

        _, file_names = list_directory(self._path)
        sources = [f for f in file_names if is_source(f)]
        for source in sources:
            self.add_object(object_name_for(source))

        logger.debug(f"Populated {self._path}: {len(sources)} sources, {len(new_subdirs)} subdirectories")

        if self.make_archive:
            archive = ArchiveTarget(self.archive_name, self._object_names)
            self.add_target(archive)
            archives.append(archive.name)

        if self._binary_name:
            all_c = all(os.path.splitext(s)[1] == c.C_EXT for s in sources)
            deps = list(self._object_names) + list(self._binary_extra_deps)
            self.add_target(BinaryTarget(self._binary_name, deps, all_c))

        return archives

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate(self) -> None:
        """
        Write this directory's Makefile, then those of all subdirectories.

        Raises:
            OSError: On any write failure; files already written are kept.
            NotDescendantError: If this node is not under its root.
        """
        to_root = self._root.relative_path_to(self)

        with MakeFormatter.for_path(self.makefile_path) as output:
            self.write_makefile(output, to_root)
        logger.info(f"Wrote {self.makefile_path}")

        for subdir in self._subdirs:
            subdir.generate()

    def write_makefile(self, output: MakeFormatter, to_root: str) -> None:
        """
        Emit this directory's Makefile content into a formatter.

        Args:
            output: Destination sink.
            to_root: Relative path from this directory to the root ('' or '../'...).
        """
        subdir_names = [subdir.name for subdir in self._subdirs]
        target_names = [target.name for target in self._targets]

        # Subdirectory rules never produce files of the same name
        output.write_rule_header(c.PHONY_RULE, subdir_names)
        output.write_line(gen_list([c.INCLUDE_DIRECTIVE, to_root + c.COMMON_NAME]))

        if self._root.has_include:
            output.assign_variable(c.INCLUDE_VAR, c.INCLUDE_FLAG + to_root + c.INCLUDE_NAME)
        output.assign_variable(c.CPPFLAGS_VAR, CPPFLAGS_VALUE)

        for name, value in self._assignments.items():
            output.assign_variable(name, value)

        output.assign_variable(c.SUBDIRS_VAR, gen_list(subdir_names))
        output.assign_variable(c.OBJECTS_VAR, gen_list(self._object_names))
        output.assign_variable(c.TARGETS_VAR, gen_list(target_names))

        output.write_rule_header(c.ALL_RULE, [
            use_var(c.SUBDIRS_VAR),
            use_var(c.OBJECTS_VAR),
            use_var(c.TARGETS_VAR),
        ])

        for target in self._targets:
            target.generate_rule(output)

        for subdir in self._subdirs:
            output.write_rule_header(subdir.name)
            with output.indented():
                output.write_line(gen_list([use_var(c.MAKE_VAR), c.MAKE_SWITCH_FLAG, subdir.name]))
            output.write_line()

        output.write_rule_header(c.CLEAN_RULE)
        with output.indented():
            output.write_line(gen_list([
                use_var(c.RM_VAR),
                use_var(c.RM_FLAGS_VAR),
                use_var(c.OBJECTS_VAR),
                use_var(c.TARGETS_VAR),
            ]))
            for subdir in self._subdirs:
                if subdir.auto_clean:
                    output.write_line(gen_list([
                        use_var(c.MAKE_VAR),
                        c.MAKE_SWITCH_FLAG,
                        subdir.name,
                        c.CLEAN_RULE,
                    ]))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._path!r})"
