"""Tests for jdocmd.scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from jdocmd.scanner import SourceScanner, build_ignore_rule
from tests._fixtures.source_builder import SourceBuilder


def _relative(paths, root: Path) -> list[str]:
    return [path.relative_to(root.resolve()).as_posix() for path in paths]


def test_scan_finds_sources_recursively_in_sorted_order(source_builder: SourceBuilder) -> None:
    source_builder.write(
        {
            "src/com/example/Zeta.java": "class Zeta {}\n",
            "src/com/example/Alpha.java": "class Alpha {}\n",
            "src/Main.JAVA": "class Main {}\n",
            "README.md": "# readme\n",
            "src/notes.txt": "not java\n",
        }
    )

    files = SourceScanner().scan(source_builder.path())

    assert _relative(files, source_builder.path()) == [
        "src/Main.JAVA",
        "src/com/example/Alpha.java",
        "src/com/example/Zeta.java",
    ]


def test_scan_skips_tool_directories_and_gitignore(source_builder: SourceBuilder) -> None:
    source_builder.write(
        {
            "src/Keep.java": "class Keep {}\n",
            "build/Generated.java": "class Generated {}\n",
            ".git/Hidden.java": "class Hidden {}\n",
            "legacy/Old.java": "class Old {}\n",
            "src/Skip.java": "class Skip {}\n",
            ".gitignore": "legacy/\nSkip.java\n",
        }
    )

    files = SourceScanner().scan(source_builder.path())

    assert _relative(files, source_builder.path()) == ["src/Keep.java"]


def test_scan_honours_exclude_paths_and_negation(source_builder: SourceBuilder) -> None:
    source_builder.write(
        {
            "gen/A.java": "class A {}\n",
            "src/B.java": "class B {}\n",
            "src/BTest.java": "class BTest {}\n",
            "src/KeepTest.java": "class KeepTest {}\n",
        }
    )

    scanner = SourceScanner(exclude_paths=["/gen/", "*Test.java", "!KeepTest.java"])
    files = scanner.scan(source_builder.path())

    assert _relative(files, source_builder.path()) == ["src/B.java", "src/KeepTest.java"]


def test_scan_uses_configured_extensions(source_builder: SourceBuilder) -> None:
    source_builder.write({"Shape.kt": "class Shape\n", "Other.java": "class Other {}\n"})
    files = SourceScanner(extensions=[".kt"]).scan(source_builder.path())
    assert _relative(files, source_builder.path()) == ["Shape.kt"]


def test_scan_rejects_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "missing"
    with pytest.raises(FileNotFoundError) as excinfo:
        SourceScanner().scan(missing)
    assert str(missing) in str(excinfo.value)


def test_scan_rejects_file_root(tmp_path: Path) -> None:
    target = tmp_path / "Single.java"
    target.write_text("class Single {}\n", encoding="utf-8")
    with pytest.raises(NotADirectoryError):
        SourceScanner().scan(target)


def test_ignore_rule_parsing() -> None:
    rule = build_ignore_rule("/out/")
    assert rule is not None
    assert rule.anchored is True
    assert rule.directory_only is True
    assert rule.matches("out", True) is True
    assert rule.matches("src/out", True) is False
    assert build_ignore_rule("   ") is None
