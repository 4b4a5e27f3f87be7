from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the generator and translates parsed
namespaces into repository target aggregates for the project layout.
"""

import argparse
import logging
from typing import Dict, List

from treemake.core.repository import RepositoryTargets

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the treemake CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="JSON file overriding toolchain commands and flags.",
    )
    common.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    common.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )
    common.add_argument(
        "--dry-run",
        action="store_true",
        help="Populate and list the files that would be written, without writing.",
    )
    common.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )

    p = argparse.ArgumentParser(
        prog="treemake",
        description="Generate a Makefile per directory of a C/C++ project.",
    )
    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- Standard layout ---
    project = sub.add_parser(
        "project",
        parents=[common],
        help="Generate Makefiles for a src/libs/tests/include project.",
    )
    project.add_argument("root", help="Project root; created with its layout if missing.")
    project.add_argument("archive", help="Name of the project archive, without extension.")
    project.add_argument(
        "--git",
        dest="git",
        nargs=2,
        action="append",
        default=[],
        metavar=("NAME", "URL"),
        help="Clone repository URL into libs/NAME. Repeatable.",
    )
    project.add_argument(
        "--git-output",
        dest="git_outputs",
        nargs="+",
        action="append",
        default=[],
        metavar="NAME FILE DIR [DEST]",
        help=(
            "Copy DIR/FILE out of repository NAME into DEST, relative to libs "
            "(default: libs itself). Repeatable."
        ),
    )
    project.add_argument(
        "--git-include",
        dest="git_includes",
        nargs=2,
        action="append",
        default=[],
        metavar=("NAME", "HEADER"),
        help="Copy include/HEADER of repository NAME into the project include folder. Repeatable.",
    )
    project.add_argument(
        "--test-binary",
        dest="test_binary",
        default=None,
        help="Link the test objects and project archive into this executable.",
    )

    # --- Arbitrary trees ---
    recursive = sub.add_parser(
        "recursive",
        parents=[common],
        help="Generate Makefiles for every subdirectory of a tree.",
    )
    recursive.add_argument("root", nargs="?", default=".", help="Tree root; created if missing.")
    recursive.add_argument(
        "--only",
        dest="only",
        action="append",
        default=[],
        metavar="SUBDIR",
        help="Restrict the top level to these subdirectories. Repeatable.",
    )

    # --- Diagnostics ---
    sub.add_parser(
        "dump-config",
        parents=[common],
        help="Print the effective toolchain configuration.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_repositories(args: argparse.Namespace) -> List[RepositoryTargets]:
    """
    Build repository aggregates from the --git, --git-output and --git-include flags.

    A repeated repository name is ignored with a warning.

    Args:
        args: Parsed 'project' command arguments.

    Returns:
        List[RepositoryTargets]: Aggregates in command-line order.

    Raises:
        ValueError: If an output refers to an undeclared repository or has
            the wrong number of values.
    """
    repos: Dict[str, RepositoryTargets] = {}

    for name, url in args.git:
        if name in repos:
            logger.warning(f"The repeat of {name} will be ignored.")
            continue
        repos[name] = RepositoryTargets(name, url)

    for values in args.git_outputs:
        if len(values) not in (3, 4):
            raise ValueError(f"--git-output takes NAME FILE DIR [DEST], got: {' '.join(values)}")
        name, file_name, dir_in_project = values[:3]
        _lookup(repos, name).add_output(file_name, dir_in_project, *values[3:])

    for name, header in args.git_includes:
        _lookup(repos, name).add_include_output(header)

    return list(repos.values())

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _lookup(repos: Dict[str, RepositoryTargets], name: str) -> RepositoryTargets:
    if name not in repos:
        raise ValueError(f"Unknown repository '{name}'; declare it with --git first.")
    return repos[name]
