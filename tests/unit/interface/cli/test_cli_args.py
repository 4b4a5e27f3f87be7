from __future__ import annotations

"""
Unit tests for CLI argument parsing and mapping.

Verifies subcommand schema, defaults, repeatable flags and the translation
of repository flags into RepositoryTargets.
"""

import logging

import pytest

from treemake.interface.cli.args import args_to_repositories, build_parser


def parse(*argv: str):
    return build_parser().parse_args(list(argv))


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_project_defaults():
    args = parse("project", "/tmp/p", "mylib")

    assert args.command == "project"
    assert args.root == "/tmp/p"
    assert args.archive == "mylib"
    assert args.git == []
    assert args.git_outputs == []
    assert args.git_includes == []
    assert args.test_binary is None
    assert args.config_path is None
    assert not args.debug
    assert not args.dry_run
    assert not args.json_output


def test_recursive_defaults_to_current_dir():
    args = parse("recursive")

    assert args.root == "."
    assert args.only == []


def test_common_flags_after_subcommand():
    args = parse("recursive", "tree", "--only", "a", "--only", "b", "--dry-run", "--json", "--debug",
                 "--config", "tc.json", "--log-file", "run.log")

    assert args.only == ["a", "b"]
    assert args.dry_run and args.json_output and args.debug
    assert args.config_path == "tc.json"
    assert args.log_file == "run.log"


def test_repositories_from_flags():
    args = parse(
        "project", "p", "mylib",
        "--git", "dep", "https://example.com/dep.git",
        "--git-output", "dep", "dep.a", "build",
        "--git-include", "dep", "dep.h",
    )

    (repo,) = args_to_repositories(args)
    assert repo.project == "dep"
    assert repo.url == "https://example.com/dep.git"
    assert [o.name for o in repo.outputs] == ["dep.a", "../include/dep.h"]
    assert repo.outputs[0].is_first


def test_repeated_repository_is_ignored(caplog):
    args = parse("project", "p", "mylib", "--git", "dep", "first", "--git", "dep", "second")

    with caplog.at_level(logging.WARNING):
        repos = args_to_repositories(args)

    assert [r.url for r in repos] == ["first"]
    assert "The repeat of dep will be ignored." in caplog.text


def test_output_for_undeclared_repository():
    args = parse("project", "p", "mylib", "--git-output", "ghost", "g.a", ".")

    with pytest.raises(ValueError, match="ghost"):
        args_to_repositories(args)


def test_output_with_destination_folder():
    args = parse(
        "project", "p", "mylib",
        "--git", "CommonC", "url",
        "--git-output", "CommonC", "commonc.a", "build", "../src",
        "--git-output", "CommonC", "logger.h", "include",
    )

    (repo,) = args_to_repositories(args)
    first, second = repo.outputs
    assert first.name == "../src/commonc.a"
    assert first.source == "CommonC/build/commonc.a"
    assert second.name == "logger.h"


@pytest.mark.parametrize("values", [["dep", "dep.a"], ["dep", "dep.a", "build", "out", "extra"]])
def test_output_with_wrong_value_count(values):
    args = parse("project", "p", "mylib", "--git", "dep", "url", "--git-output", *values)

    with pytest.raises(ValueError, match="NAME FILE DIR"):
        args_to_repositories(args)
