"""Catalog credentials file management.

Stores the access token and the account it belongs to in
~/.config/playlister/credentials.json.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from playlister.exceptions import CatalogAuthError
from playlister.utils.fileops import secure_atomic_write

if TYPE_CHECKING:
    from playlister.config import Config

CREDENTIALS_FILENAME = "credentials.json"


@dataclass
class CatalogCredentials:
    """Stored catalog authentication credentials."""

    access_token: str
    user_id: str
    display_name: str | None = None
    saved_at: str = ""


def get_credentials_path(config_dir: Path | None = None) -> Path:
    """Return the path to the credentials file.

    Args:
        config_dir: Override config directory. Defaults to ~/.config/playlister/.
    """
    if config_dir is None:
        config_dir = Path.home() / ".config" / "playlister"
    return config_dir / CREDENTIALS_FILENAME


def load_credentials(config_dir: Path | None = None) -> CatalogCredentials | None:
    """Load credentials from the JSON file.

    Returns:
        CatalogCredentials if the file exists and is valid, None otherwise.
    """
    path = get_credentials_path(config_dir)
    if not path.exists():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError):
        return None

    if not isinstance(data, dict) or "access_token" not in data or "user_id" not in data:
        return None

    return CatalogCredentials(
        access_token=data["access_token"],
        user_id=data["user_id"],
        display_name=data.get("display_name"),
        saved_at=data.get("saved_at", ""),
    )


def save_credentials(creds: CatalogCredentials, config_dir: Path | None = None) -> Path:
    """Write credentials atomically with owner-only permissions."""
    path = get_credentials_path(config_dir)
    secure_atomic_write(path, json.dumps(asdict(creds), indent=2) + "\n")
    return path


def get_access_token(config: Config, config_dir: Path | None = None) -> str:
    """Resolve the access token: credentials file first, then config.toml.

    Raises:
        CatalogAuthError: If no token is configured anywhere.
    """
    creds = load_credentials(config_dir)
    if creds is not None:
        return creds.access_token
    if config.catalog_access_token:
        return config.catalog_access_token
    raise CatalogAuthError(
        "Not authenticated. Run: playlister auth --token <token> "
        "or set [catalog] access_token in config.toml"
    )
