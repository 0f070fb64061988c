"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_INDENT_WIDTH, DEFAULT_MAX_FILE_SIZE

CONFIG_TABLE = "xml-to-markdown"


@dataclass
class ConverterConfig:
    """Configuration for converting documentation XML to Markdown.

    Attributes:
        indent_width: Spaces per list nesting level.
        strict: Raise `MalformedXMLError` on malformed XML instead of
            reporting it and keeping the partial output.
        max_file_size: Maximum input file size in bytes the CLI will read.

    Examples:
        ConverterConfig(indent_width=2, strict=True)
    """

    # Formatting
    indent_width: int = DEFAULT_INDENT_WIDTH

    # Error policy
    strict: bool = False

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`indent_width` must be a positive integer")
    """


def load_config(search_path: Path) -> ConverterConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.xml-to-markdown]`` table from `pyproject.toml` and the
    ``[xml-to-markdown]`` or ``[tool.xml-to-markdown]`` table from
    `.xml-to-markdown.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ConverterConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", CONFIG_TABLE)]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / f".{CONFIG_TABLE}.toml",
            table_paths=[(CONFIG_TABLE,), ("tool", CONFIG_TABLE)],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ConverterConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> ConverterConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ConverterConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return ConverterConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # TOML keys use dashes; dataclass fields use underscores
    normalized = {key.replace("-", "_"): value for key, value in raw_config.items()}

    try:
        return ConverterConfig(**normalized)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: ConverterConfig) -> None:
    """Validate a `ConverterConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If numeric settings are not positive integers or `strict`
            is not a boolean.

    Examples:
        validate_config(ConverterConfig(indent_width=2))
    """
    values = {
        "indent_width": config.indent_width,
        "max_file_size": config.max_file_size,
    }
    _ensure_integers(values)
    _ensure_positive(values)

    if not isinstance(config.strict, bool):
        raise ConfigError("`strict` must be a boolean")


def apply_overrides(config: ConverterConfig, **overrides: object) -> ConverterConfig:
    """Apply override values to a `ConverterConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ConverterConfig: New configuration with the provided overrides applied.
        The original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ConverterConfig`.

    Examples:
        updated = apply_overrides(config, strict=True, indent_width=None)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ConverterConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ConverterConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), strict=True)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
