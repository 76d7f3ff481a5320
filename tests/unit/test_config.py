"""Unit tests for configuration."""

from pathlib import Path

import pytest

from docquery.config import Config, load_config, save_config
from docquery.exceptions import ConfigParseError, ConfigValidationError


def test_default_config() -> None:
    """Test that default config has sensible values."""
    config = Config()
    assert config.colored_output is True
    assert config.default_scope == "all"
    assert config.default_sort_by == "creation_date"
    assert config.default_order == "asc"
    assert config.default_limit == 20


def test_load_missing_config(temp_dir: Path) -> None:
    """Test loading when config file doesn't exist."""
    config_path = temp_dir / "nonexistent.toml"
    config, warnings = load_config(config_path)

    assert config is not None
    assert any("No config file found" in w for w in warnings)


def test_load_valid_config(sample_config: Path, temp_dir: Path) -> None:
    """Test loading a valid config file."""
    config, warnings = load_config(sample_config)

    assert config.db_path == (temp_dir / "documents.db").resolve()
    assert config.colored_output is False
    assert config.default_limit == 20
    assert config.config_path == sample_config.resolve()
    # The store has not been loaded yet
    assert any(w.startswith("Document store not found") for w in warnings)


def test_load_invalid_toml(temp_dir: Path) -> None:
    """Test loading invalid TOML raises error."""
    config_path = temp_dir / "invalid.toml"
    config_path.write_text("this is not valid [ toml")

    with pytest.raises(ConfigParseError):
        load_config(config_path)


def test_config_validation_invalid_type(temp_dir: Path) -> None:
    """Test that invalid types raise validation error."""
    config_path = temp_dir / "bad_types.toml"
    config_path.write_text("""[display]
colored_output = "not a boolean"
""")

    with pytest.raises(ConfigValidationError):
        load_config(config_path)


@pytest.mark.parametrize(
    ("section", "message"),
    [
        ('[query]\ndefault_scope = "mine"\n', "query.default_scope"),
        ('[query]\ndefault_sort_by = "title"\n', "query.default_sort_by"),
        ('[query]\ndefault_order = "up"\n', "query.default_order"),
        ("[query]\ndefault_limit = true\n", "query.default_limit"),
        ('[query]\ndefault_limit = "20"\n', "query.default_limit"),
        ("[store]\ndb_path = 5\n", "store.db_path"),
    ],
)
def test_invalid_query_settings(temp_dir: Path, section: str, message: str) -> None:
    config_path = temp_dir / "config.toml"
    config_path.write_text(section)

    with pytest.raises(ConfigValidationError, match=message):
        load_config(config_path)


def test_query_settings_are_case_insensitive(temp_dir: Path) -> None:
    config_path = temp_dir / "config.toml"
    config_path.write_text('[query]\ndefault_scope = "Owned"\ndefault_order = "DESC"\n')

    config, _ = load_config(config_path)
    assert config.default_scope == "Owned"
    assert config.default_order == "DESC"


def test_out_of_range_limit_warns(temp_dir: Path) -> None:
    config_path = temp_dir / "config.toml"
    config_path.write_text("[query]\ndefault_limit = 500\n")

    config, warnings = load_config(config_path)
    assert config.default_limit == 500
    assert any("will be clamped" in w for w in warnings)


def test_config_path_expansion() -> None:
    """Test that paths are expanded."""
    config = Config(db_path=Path("~/test.db"))
    config.validate()

    assert "~" not in str(config.db_path)


def test_save_and_reload(temp_dir: Path) -> None:
    config = Config(
        db_path=temp_dir / "store.db",
        default_scope="shared",
        default_sort_by="last_modified_date",
        default_order="desc",
        default_limit=50,
        colored_output=False,
    )
    config_path = temp_dir / "saved" / "config.toml"
    save_config(config, config_path)

    loaded, _ = load_config(config_path)
    assert loaded.db_path == (temp_dir / "store.db").resolve()
    assert loaded.default_scope == "shared"
    assert loaded.default_sort_by == "last_modified_date"
    assert loaded.default_order == "desc"
    assert loaded.default_limit == 50
    assert loaded.colored_output is False
