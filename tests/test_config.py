"""Tests for sassvars.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from sassvars.config import ConfigError, SassVarsConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, SassVarsConfig)
    assert config.root == tmp_path.resolve()
    assert config.compile.include_paths == []
    assert config.compile.output_style is None
    assert config.compile.precision is None
    assert config.extract.plugins == []


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".sassvars.yml"
    config_file.write_text(
        """
compile:
  include_paths:
    - vendor
    - ../shared
  output_style: compressed
  precision: "8"
extract:
  plugins:
    - serialize
    - plugin: filter
      options:
        only:
          types: [color]
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    root = tmp_path.resolve()
    assert config.compile.include_paths == [root / "vendor", root / "../shared"]
    assert config.compile.output_style == "compressed"
    assert config.compile.precision == 8
    assert config.extract.plugins == [
        "serialize",
        {"plugin": "filter", "options": {"only": {"types": ["color"]}}},
    ]


def test_config_builds_compile_and_extract_options(tmp_path: Path) -> None:
    (tmp_path / ".sassvars.yml").write_text(
        "compile:\n  include_paths: lib\n  precision: 3\nextract:\n  plugins: minimal\n",
        encoding="utf-8",
    )

    config = load_config(tmp_path / "main.scss")
    compile_options = config.compile_options(file="main.scss")
    extract_options = config.extract_options()

    assert compile_options.file == "main.scss"
    assert compile_options.include_paths == [str(tmp_path.resolve() / "lib")]
    assert compile_options.precision == 3
    assert compile_options.output_style == "nested"
    assert extract_options.plugins == ["minimal"]

    extract_options.plugins.append("compact")
    assert config.extract.plugins == ["minimal"]


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".sassvars.yml").write_text("compile: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".sassvars.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_invalid_plugin_entries(tmp_path: Path) -> None:
    (tmp_path / ".sassvars.yml").write_text("extract:\n  plugins:\n    - 3\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)
