"""Exception hierarchy for playlister."""

from pathlib import Path


class PlaylisterError(Exception):
    """Base exception for all playlister errors.

    All exceptions in this package inherit from this class,
    allowing callers to catch all playlister errors with
    a single except clause.
    """

    pass


# Configuration Errors
class ConfigError(PlaylisterError):
    """Configuration-related errors."""

    pass


class ConfigParseError(ConfigError):
    """Configuration file has invalid syntax."""

    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Invalid config at {path}: {detail}")


class ConfigValidationError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: object, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid config value for '{key}': {reason}")


# Scraper Errors
class ScrapeError(PlaylisterError):
    """The source page could not be fetched or parsed."""

    def __init__(self, url: str, detail: str) -> None:
        self.url = url
        self.detail = detail
        super().__init__(f"There was an error with the content of {url}: {detail}")


class InvalidSourceUrlError(ScrapeError):
    """URL is not handled by the selected selector schema."""

    def __init__(self, url: str, schema_name: str) -> None:
        self.schema_name = schema_name
        super().__init__(url, f"not a valid source url for schema '{schema_name}'")


class UnknownStationError(PlaylisterError):
    """No preset station with the given name."""

    def __init__(self, name: str, known: list[str]) -> None:
        self.name = name
        self.known = known
        super().__init__(f"Unknown station '{name}'. Known stations: {', '.join(known) or 'none'}")


# Catalog Errors
class CatalogError(PlaylisterError):
    """Remote catalog request failed (transport or HTTP error)."""

    pass


class CatalogAuthError(CatalogError):
    """Remote catalog rejected the credentials."""

    pass


# Playlist Errors
class PlaylistWriteError(PlaylisterError):
    """Creating or updating the remote playlist failed."""

    def __init__(self, step: str, detail: str) -> None:
        self.step = step
        self.detail = detail
        super().__init__(f"There was a problem {step}: {detail}")
