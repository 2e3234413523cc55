"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from jdocmd.cli import _build_parser, main
from tests._fixtures.source_builder import SourceBuilder


def test_cli_accepts_verbose_before_command() -> None:
    args = _build_parser().parse_args(["--verbose", "generate", "src"])
    assert args.verbose is True
    assert args.command == "generate"
    assert args.input == "src"


def test_cli_accepts_verbose_after_command() -> None:
    args = _build_parser().parse_args(["generate", "src", "-v"])
    assert args.verbose is True


def test_cli_generate_options() -> None:
    args = _build_parser().parse_args(
        ["generate", "src", "-d", "docs", "-c", "ctx", "--workers", "3"]
    )
    assert args.destination == "docs"
    assert args.context == "ctx"
    assert args.workers == 3


def test_cli_rejects_non_positive_workers() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["generate", "src", "--workers", "0"])


def test_cli_serve_defaults() -> None:
    args = _build_parser().parse_args(["serve"])
    assert args.host == "127.0.0.1"
    assert args.port == 8000


def test_generate_writes_markdown(
    source_builder: SourceBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    source_builder.write({"Hello.java": "/** Greets. */\npublic class Hello {\n}\n"})
    destination = tmp_path / "docs"

    main(["generate", str(source_builder.path()), "-d", str(destination)])

    out = capsys.readouterr().out
    assert f"Generating documentation from {source_builder.path()}" in out
    assert "Hello.md was created" in out
    assert (destination / "Hello.md").exists()


def test_generate_reads_destination_from_context_config(
    source_builder: SourceBuilder, tmp_path: Path
) -> None:
    source_builder.write({"Hello.java": "public class Hello {\n}\n"})
    context = tmp_path / "ctx"
    context.mkdir()
    (context / ".jdocmd.yml").write_text("destination: out\n", encoding="utf-8")

    main(["generate", str(source_builder.path()), "-c", str(context)])

    assert (context / "out" / "Hello.md").exists()


def test_generate_reports_empty_tree(
    source_builder: SourceBuilder, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main(["generate", str(source_builder.path()), "-d", str(tmp_path / "docs")])
    assert "No source files found" in capsys.readouterr().out


def test_generate_missing_input_exits_with_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(tmp_path / "missing"), "-d", str(tmp_path / "docs")])
    assert excinfo.value.code == 1


def test_generate_exits_non_zero_when_a_file_fails(
    source_builder: SourceBuilder, tmp_path: Path
) -> None:
    source_builder.write_bytes("Bad.java", b"\xff\xfe broken")
    with pytest.raises(SystemExit) as excinfo:
        main(["generate", str(source_builder.path()), "-d", str(tmp_path / "docs")])
    assert excinfo.value.code == 1
