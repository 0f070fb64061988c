from __future__ import annotations

import textwrap
import pytest
from pathlib import Path

from xml_to_markdown.config import (
    ConfigError,
    ConverterConfig,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".xml-to-markdown.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.xml-to-markdown]
        indent_width = 2
        strict = true
        max_file_size = 4096
        """,
    )

    config = load_config(tmp_path)

    assert config == ConverterConfig(indent_width=2, strict=True, max_file_size=4096)


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [xml-to-markdown]
        indent-width = 3
        """,
    )

    assert load_config(tmp_path) == ConverterConfig(indent_width=3)


def test_dotfile_accepts_tool_table(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [tool.xml-to-markdown]
        strict = true
        """,
    )

    assert load_config(tmp_path).strict is True


def test_pyproject_takes_precedence_over_dotfile(tmp_path: Path):
    _write_pyproject(tmp_path, "[tool.xml-to-markdown]\nindent_width = 2\n")
    _write_dotfile(tmp_path, "[xml-to-markdown]\nindent_width = 8\n")

    assert load_config(tmp_path).indent_width == 2


def test_searches_parent_directories(tmp_path: Path):
    _write_pyproject(tmp_path, "[tool.xml-to-markdown]\nstrict = true\n")
    nested = tmp_path / "docs" / "api"
    nested.mkdir(parents=True)

    assert load_config(nested).strict is True


def test_pyproject_without_table_is_skipped(tmp_path: Path):
    parent = tmp_path
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(parent, "[tool.xml-to-markdown]\nindent_width = 6\n")
    _write_pyproject(child, "[tool.other]\nvalue = 1\n")

    assert load_config(child).indent_width == 6


def test_invalid_toml_is_ignored(tmp_path: Path):
    _write_pyproject(tmp_path, "[tool.xml-to-markdown\nbroken")

    assert load_config(tmp_path) == ConverterConfig()


def test_unknown_keys_raise(tmp_path: Path):
    _write_pyproject(tmp_path, "[tool.xml-to-markdown]\nunknown = 1\n")

    with pytest.raises(ConfigError, match="Invalid"):
        load_config(tmp_path)


def test_non_table_value_raises(tmp_path: Path):
    _write_pyproject(tmp_path, '[tool]\nxml-to-markdown = "yes"\n')

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    "config",
    [
        ConverterConfig(indent_width=0),
        ConverterConfig(indent_width=-4),
        ConverterConfig(max_file_size=0),
        ConverterConfig(indent_width="4"),
        ConverterConfig(indent_width=True),
        ConverterConfig(strict="yes"),
    ],
)
def test_validate_config_rejects_invalid_values(config: ConverterConfig):
    with pytest.raises(ConfigError):
        validate_config(config)


def test_apply_overrides_ignores_none():
    config = ConverterConfig(indent_width=2)

    assert apply_overrides(config, indent_width=None, strict=None) is config
    assert apply_overrides(config, strict=True) == ConverterConfig(indent_width=2, strict=True)


def test_build_config_applies_overrides_over_file(tmp_path: Path):
    _write_pyproject(tmp_path, "[tool.xml-to-markdown]\nindent_width = 2\nstrict = true\n")

    config = build_config(tmp_path, indent_width=8, strict=None)

    assert config == ConverterConfig(indent_width=8, strict=True)


def test_build_config_validates_overrides(tmp_path: Path):
    with pytest.raises(ConfigError):
        build_config(tmp_path, indent_width=0)
