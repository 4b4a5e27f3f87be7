from __future__ import annotations

"""
Unit tests for directory population.

Verifies:
1. Source classification by extension and object naming.
2. Archive inference, naming and path qualification across levels.
3. Named population failing atomically on missing subdirectories.
4. Exclusion of the shared include folder and binary inference.
"""

import pytest

from treemake.core.mainfile import Mainfile
from treemake.core.makefile import Makefile, is_source, object_name_for
from treemake.core.targets import ArchiveTarget, BinaryTarget
from treemake.domain.errors import NotDirectoryError


@pytest.mark.parametrize("name, expected", [
    ("a.c", True),
    ("b.cpp", True),
    ("c.cxx", True),
    ("d.c++", True),
    ("e.h", False),
    ("notes.txt", False),
    (".c", False),
    ("Makefile", False),
])
def test_is_source(name: str, expected: bool):
    assert is_source(name) is expected


def test_object_name_replaces_last_extension():
    assert object_name_for("x.y.cpp") == "x.y.o"
    assert object_name_for("d.c++") == "d.o"


def test_objects_one_per_source_ignoring_unknown(make_tree):
    root_dir = make_tree({
        "b.cpp": "", "a.c": "", "c.cxx": "", "d.c++": "",
        "e.h": "", "README.md": "",
    })
    root = Mainfile(str(root_dir))

    root.populate_full()

    assert root.object_names == ("a.o", "b.o", "c.o", "d.o")


def test_src_scenario_archive_rule(make_tree):
    root_dir = make_tree({"src": {"a.c": "", "b.cpp": ""}})
    root = Mainfile(str(root_dir))

    archives = root.populate("src")

    src = root.subdirs[0]
    assert src.name == "src"
    assert src.object_names == ("a.o", "b.o")
    archive = src.targets[0]
    assert isinstance(archive, ArchiveTarget)
    assert archive.name == "src.a"
    assert archive.dependencies == ("a.o", "b.o")
    assert archives == ["src/src.a", "project.a"]


def test_archive_aggregation_is_transitive(make_tree):
    root_dir = make_tree({
        "lib": {"x.c": "", "deep": {"y.c": "", "deeper": {"z.cpp": ""}}},
        "util": {"u.c": ""},
    })
    root = Mainfile(str(root_dir))
    root.set_make_archive(False)

    archives = root.populate_full()

    assert archives == [
        "lib/deep/deeper/deeper.a",
        "lib/deep/deep.a",
        "lib/lib.a",
        "util/util.a",
    ]


def test_custom_archive_name(make_tree):
    root_dir = make_tree({"src": {"a.c": ""}})
    root = Mainfile(str(root_dir))
    src = Makefile(str(root_dir / "src"), root)
    src.set_custom_archive_name("libfoo.a")
    root.add_subdir(src)

    assert src.populate_full() == ["libfoo.a"]
    assert src.targets[0].name == "libfoo.a"


def test_tests_directory_without_archive(make_tree):
    root_dir = make_tree({"tests": {"t.c": ""}})
    root = Mainfile(str(root_dir))
    tests = Makefile(str(root_dir / "tests"), root)
    tests.set_make_archive(False)

    assert tests.populate_full() == []
    assert tests.targets == ()
    assert tests.object_names == ("t.o",)


def test_missing_named_subdirectory_creates_no_nodes(make_tree):
    root_dir = make_tree({"src": {"a.c": ""}, "notes.txt": ""})
    root = Mainfile(str(root_dir))

    with pytest.raises(NotDirectoryError):
        root.populate("src", "missing")
    with pytest.raises(NotDirectoryError):
        root.populate("notes.txt")

    assert root.subdirs == ()
    assert root.targets == ()


def test_constructing_node_over_file_fails(make_tree):
    root_dir = make_tree({"a.c": ""})
    root = Mainfile(str(root_dir))
    with pytest.raises(NotDirectoryError):
        Makefile(str(root_dir / "a.c"), root)


def test_populate_full_skips_include_folder(make_tree):
    root_dir = make_tree({"include": {"x.h": ""}, "src": {}, "b": {}})
    root = Mainfile(str(root_dir))

    root.populate_full()

    assert [s.name for s in root.subdirs] == ["b", "src"]
    assert root.has_include is True


def test_binary_inference_records_c_only_sources(make_tree):
    root_dir = make_tree({"tests": {"t1.c": "", "t2.c": ""}, "mixed": {"m.c": "", "n.cpp": ""}})
    root = Mainfile(str(root_dir))
    tests = Makefile(str(root_dir / "tests"), root)
    tests.set_make_archive(False)
    tests.set_binary("runner", ["../lib.a"])
    mixed = Makefile(str(root_dir / "mixed"), root)
    mixed.set_make_archive(False)
    mixed.set_binary("mixed_bin")

    tests.populate_full()
    mixed.populate_full()

    binary = tests.targets[0]
    assert isinstance(binary, BinaryTarget)
    assert binary.dependencies == ("t1.o", "t2.o", "../lib.a")
    assert binary.all_c is True
    assert mixed.targets[0].all_c is False


def test_walk_is_pre_order(make_tree):
    root_dir = make_tree({"a": {"a1": {}}, "b": {}})
    root = Mainfile(str(root_dir))
    root.populate_full()

    assert [node.name for node in root.walk()] == ["project", "a", "a1", "b"]


@pytest.mark.parametrize("name", ["src/util", ".", "..", "", "src/"])
def test_named_population_accepts_only_direct_children(make_tree, name: str):
    root_dir = make_tree({"src": {"util": {"u.c": ""}}})
    root = Mainfile(str(root_dir))

    with pytest.raises(NotDirectoryError):
        root.populate(name)

    assert root.subdirs == ()
    assert root.targets == ()


def test_nested_name_never_reaches_generated_makefile(make_tree):
    root_dir = make_tree({"src": {"util": {}}})
    root = Mainfile(str(root_dir))

    with pytest.raises(NotDirectoryError):
        root.populate("src", "src/util")
    root.populate("src")
    root.generate_project()

    text = (root_dir / "Makefile").read_text(encoding="utf-8")
    assert "SUBDIRS=src\n" in text
    assert "-C util" not in text


def test_add_subdir_rejects_non_children(make_tree, tmp_path):
    root_dir = make_tree({"src": {"util": {}}})
    (tmp_path / "other").mkdir()
    root = Mainfile(str(root_dir))

    with pytest.raises(NotDirectoryError):
        root.add_subdir(Makefile(str(root_dir / "src" / "util"), root))
    with pytest.raises(NotDirectoryError):
        root.add_subdir(Makefile(str(tmp_path / "other"), root))

    assert root.subdirs == ()


def test_linked_directories_are_not_populated(make_tree, tmp_path):
    root_dir = make_tree({"real": {"r.c": ""}})
    (tmp_path / "outside").mkdir()
    (root_dir / "alias").symlink_to(root_dir / "real", target_is_directory=True)
    (root_dir / "ext").symlink_to(tmp_path / "outside", target_is_directory=True)
    (root_dir / "real" / "loop").symlink_to(root_dir, target_is_directory=True)
    root = Mainfile(str(root_dir))

    archives = root.populate_full()

    assert [s.name for s in root.subdirs] == ["real"]
    assert root.subdirs[0].subdirs == ()
    assert archives == ["real/real.a", root.name + ".a"]


def test_named_population_rejects_linked_directory(make_tree):
    root_dir = make_tree({"real": {}})
    (root_dir / "alias").symlink_to(root_dir / "real", target_is_directory=True)
    root = Mainfile(str(root_dir))

    with pytest.raises(NotDirectoryError):
        root.populate("alias")

    assert root.subdirs == ()
