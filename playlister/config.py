"""Configuration management for playlister."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

from playlister.exceptions import (
    ConfigParseError,
    ConfigValidationError,
)
from playlister.utils.fileops import secure_atomic_write

DEFAULT_SEARCH_LIMIT = 5
DEFAULT_JOBS = 4
MAX_SEARCH_LIMIT = 50


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".config" / "playlister" / "config.toml"


@dataclass
class Config:
    """Application configuration.

    Attributes:
        colored_output: Whether to use colored terminal output.
        catalog_access_token: Fallback access token when no credentials
            file exists.
        catalog_market: Country code restricting search results.
        search_limit: Candidates requested per track search.
        search_jobs: Concurrent track searches.
        guided: Ask the user when no candidate matches automatically.
        treat_with_as_feat: Normalize "with" like "feat." when comparing titles.
        replace_existing: Replace an owned playlist of the same name.
        stations: User-defined station name -> playlist URL.
        config_path: Path the config was loaded from, or would be saved to.
            None only for configs built in code.
    """

    colored_output: bool = True
    catalog_access_token: str | None = None
    catalog_market: str | None = None
    search_limit: int = DEFAULT_SEARCH_LIMIT
    search_jobs: int = DEFAULT_JOBS
    guided: bool = False
    treat_with_as_feat: bool = False
    replace_existing: bool = False
    stations: dict[str, str] = field(default_factory=dict)
    config_path: Path | None = None

    def validate(self) -> list[str]:
        """Validate configuration values.

        Returns:
            List of warning messages for non-fatal issues.
        """
        warnings: list[str] = []

        if not 1 <= self.search_limit <= MAX_SEARCH_LIMIT:
            warnings.append(
                f"catalog.search_limit={self.search_limit} is outside valid range "
                f"1-{MAX_SEARCH_LIMIT}, using {DEFAULT_SEARCH_LIMIT}"
            )
            self.search_limit = DEFAULT_SEARCH_LIMIT

        if self.search_jobs < 1:
            warnings.append(f"catalog.jobs={self.search_jobs} must be at least 1, using 1")
            self.search_jobs = 1

        for name, url in self.stations.items():
            if not url.startswith(("http://", "https://")):
                warnings.append(f"stations.{name} does not look like a URL: {url}")

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
        config = Config(config_path=config_path)
        warnings.append(
            f"No config file found at {config_path}. Using defaults. "
            f"Create config with: playlister init-config"
        )
        return config, warnings + config.validate()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(config_path, str(e)) from e

    config = _parse_config_dict(data, config_path)
    return config, warnings + config.validate()


def _expect(section: dict[str, Any], key: str, types: tuple[type, ...], reason: str, prefix: str):
    value = section[key]
    # bool is an int subclass; never accept it where an int is wanted
    if isinstance(value, bool) and bool not in types:
        raise ConfigValidationError(f"{prefix}.{key}", value, reason)
    if not isinstance(value, types):
        raise ConfigValidationError(f"{prefix}.{key}", value, reason)
    return value


def _section(data: dict[str, Any], name: str, reason: str = "must be a table") -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigValidationError(name, section, reason)
    return section


def _parse_config_dict(data: dict[str, Any], config_path: Path) -> Config:
    """Parse configuration dictionary into Config object."""
    config = Config(config_path=config_path)

    # Parse [display] section
    display = _section(data, "display")
    if "colored_output" in display:
        config.colored_output = _expect(
            display, "colored_output", (bool,), "must be a boolean", "display"
        )

    # Parse [catalog] section
    catalog = _section(data, "catalog")
    if "access_token" in catalog:
        config.catalog_access_token = _expect(
            catalog, "access_token", (str,), "must be a string", "catalog"
        )
    if "market" in catalog:
        config.catalog_market = _expect(catalog, "market", (str,), "must be a string", "catalog")
    if "search_limit" in catalog:
        config.search_limit = _expect(
            catalog, "search_limit", (int,), "must be an integer", "catalog"
        )
    if "jobs" in catalog:
        config.search_jobs = _expect(catalog, "jobs", (int,), "must be an integer", "catalog")

    # Parse [matching] section
    matching = _section(data, "matching")
    if "guided" in matching:
        config.guided = _expect(matching, "guided", (bool,), "must be a boolean", "matching")
    if "treat_with_as_feat" in matching:
        config.treat_with_as_feat = _expect(
            matching, "treat_with_as_feat", (bool,), "must be a boolean", "matching"
        )

    # Parse [playlist] section
    playlist = _section(data, "playlist")
    if "replace_existing" in playlist:
        config.replace_existing = _expect(
            playlist, "replace_existing", (bool,), "must be a boolean", "playlist"
        )

    # Parse [stations] section
    stations = _section(data, "stations", "must be a table of name = url")
    for name in stations:
        config.stations[name] = _expect(stations, name, (str,), "must be a string URL", "stations")

    return config


def save_config(config: Config, config_path: Path | None = None) -> Path:
    """Save configuration to file.

    Only non-default values are written, apart from [display].

    Args:
        config: Configuration to save.
        config_path: Path to save to. If None, uses config.config_path or default.

    Returns:
        The path written.
    """
    if config_path is None:
        config_path = config.config_path or get_default_config_path()

    config_path = config_path.expanduser().resolve()

    data: dict[str, Any] = {
        "display": {
            "colored_output": config.colored_output,
        },
    }

    catalog: dict[str, Any] = {}
    if config.catalog_access_token is not None:
        catalog["access_token"] = config.catalog_access_token
    if config.catalog_market is not None:
        catalog["market"] = config.catalog_market
    if config.search_limit != DEFAULT_SEARCH_LIMIT:
        catalog["search_limit"] = config.search_limit
    if config.search_jobs != DEFAULT_JOBS:
        catalog["jobs"] = config.search_jobs
    if catalog:
        data["catalog"] = catalog

    matching: dict[str, Any] = {}
    if config.guided:
        matching["guided"] = True
    if config.treat_with_as_feat:
        matching["treat_with_as_feat"] = True
    if matching:
        data["matching"] = matching

    if config.replace_existing:
        data["playlist"] = {"replace_existing": True}

    if config.stations:
        data["stations"] = dict(sorted(config.stations.items()))

    # May hold an access token
    secure_atomic_write(config_path, tomli_w.dumps(data))
    return config_path
