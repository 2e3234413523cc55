"""Tests for jdocmd.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from jdocmd.config import ConfigError, JDocConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, JDocConfig)
    assert config.root == tmp_path.resolve()
    assert config.destination is None
    assert config.workers is None
    assert config.extensions == [".java"]
    assert config.exclude_paths == []
    assert config.templates_dir is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / ".jdocmd.yml").write_text(
        """
destination: docs/api
workers: 3
extensions: [java, ".JAV"]
exclude_paths:
  - "generated/"
  - "*Test.java"
templates_dir: docs/templates
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path / ".jdocmd.yml")
    root = tmp_path.resolve()

    assert config.destination == root / "docs/api"
    assert config.workers == 3
    assert config.extensions == [".java", ".jav"]
    assert config.exclude_paths == ["generated/", "*Test.java"]
    assert config.templates_dir == root / "docs/templates"


def test_load_config_from_sibling_file_path(tmp_path: Path) -> None:
    (tmp_path / ".jdocmd.yml").write_text("workers: 2\n", encoding="utf-8")
    config = load_config(tmp_path / "Main.java")
    assert config.workers == 2


def test_invalid_values_fall_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / ".jdocmd.yml").write_text(
        "workers: many\nextensions: {}\nexclude_paths: 7\n",
        encoding="utf-8",
    )
    config = load_config(tmp_path)
    assert config.workers is None
    assert config.extensions == [".java"]
    assert config.exclude_paths == []


def test_non_positive_workers_are_ignored(tmp_path: Path) -> None:
    (tmp_path / ".jdocmd.yml").write_text("workers: 0\n", encoding="utf-8")
    assert load_config(tmp_path).workers is None


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    (tmp_path / ".jdocmd.yml").write_text("\n", encoding="utf-8")
    assert load_config(tmp_path).extensions == [".java"]


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    (tmp_path / ".jdocmd.yml").write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    (tmp_path / ".jdocmd.yml").write_text("workers: [1, 2\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)
