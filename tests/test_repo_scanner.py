"""Tests for springviz.repo_scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from springviz.extractors import FileUnreadableError
from springviz.repo_scanner import RepoScanner, build_ignore_rule, matches_package_filter, read_source
from tests._fixtures.tree_builder import JAVA_ROOT, TreeBuilder


def test_scan_lists_java_files_in_sorted_order(tree_builder: TreeBuilder) -> None:
    tree_builder.write_demo()
    tree_builder.write({"README.md": "# demo\n", "src/main/resources/app.properties": "a=b\n"})

    tree = tree_builder.scan()

    assert tree.root == str(tree_builder.path().resolve())
    assert [source.path for source in tree.files] == [
        f"{JAVA_ROOT}/DaoConfig.java",
        f"{JAVA_ROOT}/DemoApplication.java",
        f"{JAVA_ROOT}/ServiceConfig.java",
        f"{JAVA_ROOT}/repository/UserRepository.java",
        f"{JAVA_ROOT}/service/BarService.java",
        f"{JAVA_ROOT}/service/ConstructorInjection.java",
        f"{JAVA_ROOT}/util/Strings.java",
    ]
    assert all(source.size > 0 for source in tree.files)


def test_scan_skips_build_output_and_vcs_directories(tree_builder: TreeBuilder) -> None:
    tree_builder.write(
        {
            "src/A.java": "package a; class A {}\n",
            "target/generated/B.java": "package b; class B {}\n",
            ".git/hooks/C.java": "package c; class C {}\n",
            "node_modules/D.java": "package d; class D {}\n",
        }
    )

    paths = [source.path for source in tree_builder.scan().files]

    assert paths == ["src/A.java"]


def test_scan_respects_gitignore(tree_builder: TreeBuilder) -> None:
    tree_builder.write(
        {
            ".gitignore": "# generated\ngen/\n*Test.java\n!KeepTest.java\n",
            "src/A.java": "package a; class A {}\n",
            "src/ATest.java": "package a; class ATest {}\n",
            "src/KeepTest.java": "package a; class KeepTest {}\n",
            "gen/G.java": "package g; class G {}\n",
        }
    )

    paths = [source.path for source in tree_builder.scan().files]

    assert paths == ["src/A.java", "src/KeepTest.java"]


def test_scan_applies_configured_excludes_and_extensions(tree_builder: TreeBuilder) -> None:
    tree_builder.write(
        {
            "src/A.java": "package a; class A {}\n",
            "src/B.kt": "package b\n",
            "legacy/C.java": "package c; class C {}\n",
        }
    )
    scanner = RepoScanner(extensions=(".java", ".KT"), exclude_paths=["legacy/"])

    tree = scanner.scan(str(tree_builder.path()))

    assert [source.path for source in tree.files] == ["src/A.java", "src/B.kt"]


@pytest.mark.parametrize(
    ("package_filter", "expected"),
    [
        ("", 7),
        ("service", 2),
        ("com.example.demo.repository", 1),
        ("com/example/demo/util", 1),
        ("nothing.here", 0),
    ],
)
def test_scan_package_filter(tree_builder: TreeBuilder, package_filter: str, expected: int) -> None:
    tree_builder.write_demo()
    assert len(tree_builder.scan(package_filter).files) == expected


def test_matches_package_filter_accepts_dotted_and_slashed_forms() -> None:
    assert matches_package_filter("src/a/b/C.java", "")
    assert matches_package_filter("src/a/b/C.java", "a.b")
    assert matches_package_filter("src/a/b/C.java", "a/b")
    assert not matches_package_filter("src/a/b/C.java", "a.c")


def test_scan_rejects_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "missing"
    with pytest.raises(FileNotFoundError, match="missing"):
        RepoScanner().scan(str(missing))


def test_scan_rejects_file_root(tmp_path: Path) -> None:
    target = tmp_path / "A.java"
    target.write_text("package a; class A {}\n", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        RepoScanner().scan(str(target))


def test_build_ignore_rule_flags() -> None:
    rule = build_ignore_rule("/build/")
    assert rule is not None
    assert rule.anchored and rule.directory_only
    assert rule.matches("build", True)
    assert not rule.matches("build", False)
    assert build_ignore_rule("   ") is None


def test_read_source_strips_bom(tree_builder: TreeBuilder) -> None:
    tree_builder.write_bytes("src/A.java", "\ufeffpackage a; class A {}\n".encode("utf-8"))
    tree = tree_builder.scan()
    assert read_source(tree, tree.files[0]).startswith("package a;")


def test_read_source_wraps_decoding_errors(tree_builder: TreeBuilder) -> None:
    tree_builder.write_bytes("src/Bad.java", b"package a; \xff\xfe class Bad {}\n")
    tree = tree_builder.scan()

    with pytest.raises(FileUnreadableError) as excinfo:
        read_source(tree, tree.files[0])

    assert excinfo.value.path == "src/Bad.java"
