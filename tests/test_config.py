"""Tests for springviz.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from springviz.config import ConfigError, SpringVizConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, SpringVizConfig)
    assert config.root == tmp_path.resolve()
    assert config.relations is None
    assert config.strict is False
    assert config.graph_name is None
    assert config.extensions == [".java"]
    assert config.exclude_paths == []
    assert config.templates_dir is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / ".springviz.yml").write_text(
        """
relations: [import, bean]
strict: true
graph_name: Services
extensions: [java, .kt]
exclude_paths:
  - "legacy/"
  - "*Test.java"
templates_dir: "docs/dot"
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.relations == ["import", "bean"]
    assert config.strict is True
    assert config.graph_name == "Services"
    assert config.extensions == [".java", ".kt"]
    assert config.exclude_paths == ["legacy/", "*Test.java"]
    assert config.templates_dir == tmp_path.resolve() / "docs/dot"


def test_load_config_accepts_comma_separated_relations(tmp_path: Path) -> None:
    (tmp_path / ".springviz.yml").write_text("relations: 'autowired, constructorinjection'\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.relations == ["autowired", "constructorinjection"]


def test_load_config_accepts_path_to_file(tmp_path: Path) -> None:
    config_file = tmp_path / ".springviz.yml"
    config_file.write_text("graph_name: Direct\n", encoding="utf-8")

    assert load_config(config_file).graph_name == "Direct"


def test_load_config_treats_empty_file_as_defaults(tmp_path: Path) -> None:
    (tmp_path / ".springviz.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).strict is False


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".springviz.yml").write_text("relations: [import\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".springviz.yml").write_text("- import\n- bean\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)


def test_load_config_rejects_non_boolean_strict(tmp_path: Path) -> None:
    (tmp_path / ".springviz.yml").write_text("strict: sometimes\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="strict"):
        load_config(tmp_path)
