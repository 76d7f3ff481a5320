"""Configuration management for docquery."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from docquery.documents.models import Scope
from docquery.documents.shaping import DEFAULT_LIMIT, MAX_LIMIT, SORT_FIELDS, SORT_ORDERS
from docquery.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "docquery" / "config.toml"


def get_default_db_path() -> Path:
    """Get the default document store path."""
    return Path.home() / ".local" / "share" / "docquery" / "documents.db"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        db_path: Path to the SQLite document store.
        default_scope: Scope used when ``query`` is run without ``--scope``.
        default_sort_by: Sort field used when ``--sort-by`` is omitted.
        default_order: Sort direction used when ``--order`` is omitted.
        default_limit: Page size used when ``--limit`` is omitted.
        colored_output: Whether to use colored terminal output.
        config_path: Path where config was loaded from (None if defaults).
    """

    db_path: Path = field(default_factory=get_default_db_path)
    default_scope: str = "all"
    default_sort_by: str = "creation_date"
    default_order: str = "asc"
    default_limit: int = DEFAULT_LIMIT
    colored_output: bool = True
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.

        Raises:
            ConfigValidationError: If a value is outside its allowed set.
        """
        warnings: list[str] = []

        self.db_path = self.db_path.expanduser().resolve()

        # Store may be created later by `docquery load`
        if not self.db_path.exists():
            warnings.append(f"Document store not found: {self.db_path}")

        valid_scopes = [s.value for s in Scope]
        if self.default_scope.lower() not in valid_scopes:
            raise ConfigValidationError(
                "query.default_scope",
                self.default_scope,
                f"must be one of: {', '.join(valid_scopes)}",
            )

        if self.default_sort_by.lower() not in SORT_FIELDS:
            raise ConfigValidationError(
                "query.default_sort_by",
                self.default_sort_by,
                f"must be one of: {', '.join(SORT_FIELDS)}",
            )

        if self.default_order.lower() not in SORT_ORDERS:
            raise ConfigValidationError(
                "query.default_order",
                self.default_order,
                f"must be one of: {', '.join(SORT_ORDERS)}",
            )

        if not 1 <= self.default_limit <= MAX_LIMIT:
            warnings.append(
                f"query.default_limit={self.default_limit} "
                f"is outside valid range 1-{MAX_LIMIT}, it will be clamped"
            )

        return warnings


def load_config(config_path: Path | None = None) -> tuple[Config, list[str]]:
    """Load configuration from file or use defaults.

    Args:
        config_path: Explicit config file path. If None, uses default location.

    Returns:
        Tuple of (Config object, list of warning messages).

    Raises:
        ConfigParseError: If config file exists but has invalid syntax.
        ConfigValidationError: If config values are invalid.
    """
    warnings: list[str] = []

    if config_path is None:
        config_path = get_default_config_path()

    config_path = config_path.expanduser().resolve()

    if not config_path.exists():
        config = Config()
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: docquery init-config"
        )
        config_warnings = config.validate()
        return config, warnings + config_warnings

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    config_warnings = config.validate()

    return config, warnings + config_warnings


def _get_string(section: dict[str, Any], key: str, full_key: str) -> str:
    value = section[key]
    if not isinstance(value, str):
        raise ConfigValidationError(full_key, value, "must be a string")
    return value


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [store] section
    store = data.get("store", {})
    if "db_path" in store:
        value = store["db_path"]
        if not isinstance(value, str):
            raise ConfigValidationError("store.db_path", value, "must be a string path")
        config.db_path = Path(value)

    # Parse [query] section
    query = data.get("query", {})
    if "default_scope" in query:
        config.default_scope = _get_string(query, "default_scope", "query.default_scope")

    if "default_sort_by" in query:
        config.default_sort_by = _get_string(query, "default_sort_by", "query.default_sort_by")

    if "default_order" in query:
        config.default_order = _get_string(query, "default_order", "query.default_order")

    if "default_limit" in query:
        value = query["default_limit"]
        # bool is an int subclass
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigValidationError("query.default_limit", value, "must be an integer")
        config.default_limit = value

    # Parse [display] section
    display = data.get("display", {})
    if "colored_output" in display:
        value = display["colored_output"]
        if not isinstance(value, bool):
            raise ConfigValidationError("display.colored_output", value, "must be a boolean")
        config.colored_output = value

    return config


def save_config(config: Config, config_path: Path | None = None) -> None:
    """Save configuration to file.

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {
        "store": {
            "db_path": str(config.db_path),
        },
        "query": {
            "default_scope": config.default_scope,
            "default_sort_by": config.default_sort_by,
            "default_order": config.default_order,
            "default_limit": config.default_limit,
        },
        "display": {
            "colored_output": config.colored_output,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
