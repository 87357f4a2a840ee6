"""Unit tests for configuration."""

import tomllib
from pathlib import Path

import pytest

from playlister.config import Config, load_config, save_config
from playlister.exceptions import ConfigParseError, ConfigValidationError


def test_default_config() -> None:
    """Test that default config has sensible values."""
    config = Config()
    assert config.colored_output is True
    assert config.search_limit == 5
    assert config.search_jobs == 4
    assert config.guided is False
    assert config.stations == {}


def test_load_missing_config(temp_dir: Path) -> None:
    """Test loading when config file doesn't exist."""
    config_path = temp_dir / "nonexistent.toml"
    config, warnings = load_config(config_path)

    assert config.search_limit == Config().search_limit
    assert config.config_path == config_path.resolve()
    assert any("init-config" in w for w in warnings)


def test_load_valid_config(sample_config: Path) -> None:
    """Test loading a valid config file."""
    config, warnings = load_config(sample_config)

    assert warnings == []
    assert config.catalog_access_token == "config-token"
    assert config.catalog_market == "GB"
    assert config.search_limit == 10
    assert config.search_jobs == 2
    assert config.guided is True
    assert config.replace_existing is True
    assert config.stations == {"kexp": "https://www.bbc.co.uk/kexp/playlist"}
    assert config.config_path == sample_config.resolve()


def test_load_invalid_toml(temp_dir: Path) -> None:
    """Test loading invalid TOML raises error."""
    config_path = temp_dir / "invalid.toml"
    config_path.write_text("this is not valid [ toml")

    with pytest.raises(ConfigParseError):
        load_config(config_path)


@pytest.mark.parametrize(
    "content, key",
    [
        ('[display]\ncolored_output = "yes"\n', "display.colored_output"),
        ('[catalog]\nsearch_limit = "5"\n', "catalog.search_limit"),
        ("[catalog]\njobs = true\n", "catalog.jobs"),
        ("[matching]\nguided = 1\n", "matching.guided"),
        ("[stations]\nradio9 = 9\n", "stations.radio9"),
        ('stations = "radio1"\n', "stations"),
        ('display = "x"\n', "display"),
        ('catalog = "colored_output"\n', "catalog"),
        ("matching = 1\n", "matching"),
        ('playlist = ["replace_existing"]\n', "playlist"),
    ],
)
def test_config_validation_invalid_type(temp_dir: Path, content: str, key: str) -> None:
    """Test that invalid types raise validation error."""
    config_path = temp_dir / "bad_types.toml"
    config_path.write_text(content)

    with pytest.raises(ConfigValidationError) as exc:
        load_config(config_path)
    assert exc.value.key == key


def test_out_of_range_values_warn(temp_dir: Path) -> None:
    config_path = temp_dir / "range.toml"
    config_path.write_text("[catalog]\nsearch_limit = 500\njobs = 0\n")

    config, warnings = load_config(config_path)

    assert config.search_limit == 5
    assert config.search_jobs == 1
    assert len(warnings) == 2


def test_station_url_warning() -> None:
    config = Config(stations={"bad": "not-a-url"})
    assert any("stations.bad" in w for w in config.validate())


def test_save_roundtrip_non_defaults(temp_dir: Path) -> None:
    config = Config(
        catalog_market="SE",
        search_jobs=8,
        treat_with_as_feat=True,
        stations={"b": "https://b.example", "a": "https://a.example"},
    )
    path = save_config(config, temp_dir / "out.toml")

    data = tomllib.loads(path.read_text())
    assert data["catalog"] == {"market": "SE", "jobs": 8}
    assert data["matching"] == {"treat_with_as_feat": True}
    assert "playlist" not in data
    assert list(data["stations"]) == ["a", "b"]
    assert path.stat().st_mode & 0o777 == 0o600

    loaded, _ = load_config(path)
    assert loaded.stations == config.stations
    assert loaded.search_jobs == 8
