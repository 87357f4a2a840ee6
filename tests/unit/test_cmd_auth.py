"""Unit tests for the auth command."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from playlister.catalog.credentials import CatalogCredentials, load_credentials
from playlister.cli import cli
from playlister.commands import EXIT_AUTH_ERROR, EXIT_CATALOG_ERROR, EXIT_SUCCESS
from playlister.exceptions import CatalogAuthError, CatalogError


@pytest.fixture
def home(temp_dir: Path):
    """Point the credentials file at a temporary home directory."""
    with patch("playlister.catalog.credentials.Path.home", return_value=temp_dir):
        yield temp_dir


def _run(home: Path, *args: str):
    config = home / "missing.toml"
    return CliRunner().invoke(cli, ["--quiet", "--config", str(config), "auth", *args])


class TestAuthToken:
    def test_valid_token_saved(self, home) -> None:
        with patch("playlister.commands.auth.SpotifyCatalog") as catalog_cls:
            catalog_cls.return_value.current_user.return_value = ("me", "Me")
            result = _run(home, "--token", "tok")

        assert result.exit_code == EXIT_SUCCESS, result.output
        creds = load_credentials(home / ".config" / "playlister")
        assert creds is not None
        assert creds.access_token == "tok"
        assert creds.user_id == "me"
        assert creds.saved_at

    def test_rejected_token(self, home) -> None:
        with patch("playlister.commands.auth.SpotifyCatalog") as catalog_cls:
            catalog_cls.return_value.current_user.side_effect = CatalogAuthError("bad")
            result = _run(home, "--token", "tok")

        assert result.exit_code == EXIT_AUTH_ERROR
        assert load_credentials(home / ".config" / "playlister") is None

    def test_service_unreachable(self, home) -> None:
        with patch("playlister.commands.auth.SpotifyCatalog") as catalog_cls:
            catalog_cls.return_value.current_user.side_effect = CatalogError("down")
            result = _run(home, "--token", "tok")
        assert result.exit_code == EXIT_CATALOG_ERROR

    def test_requires_token_or_status(self, home) -> None:
        assert _run(home).exit_code == EXIT_AUTH_ERROR


class TestAuthStatus:
    def test_not_authenticated(self, home) -> None:
        assert _run(home, "--status").exit_code == EXIT_AUTH_ERROR

    def test_stored_token_valid(self, home) -> None:
        from playlister.catalog.credentials import save_credentials

        save_credentials(
            CatalogCredentials(access_token="stored", user_id="me"),
            home / ".config" / "playlister",
        )
        with patch("playlister.commands.auth.SpotifyCatalog") as catalog_cls:
            catalog_cls.return_value.current_user.return_value = ("me", None)
            result = _run(home, "--status")

        assert result.exit_code == EXIT_SUCCESS
        assert catalog_cls.call_args.args[0] == "stored"

    def test_stored_token_expired(self, home) -> None:
        from playlister.catalog.credentials import save_credentials

        save_credentials(
            CatalogCredentials(access_token="stored", user_id="me"),
            home / ".config" / "playlister",
        )
        with patch("playlister.commands.auth.SpotifyCatalog") as catalog_cls:
            catalog_cls.return_value.current_user.side_effect = CatalogAuthError("expired")
            result = _run(home, "--status")

        assert result.exit_code == EXIT_AUTH_ERROR
