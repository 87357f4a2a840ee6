"""Catalog authentication command."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from playlister.catalog.credentials import (
    CatalogCredentials,
    get_credentials_path,
    load_credentials,
    save_credentials,
)
from playlister.catalog.spotify import SpotifyCatalog
from playlister.cli import Context, pass_context
from playlister.commands import EXIT_AUTH_ERROR, EXIT_CATALOG_ERROR, EXIT_SUCCESS
from playlister.config import Config
from playlister.exceptions import CatalogAuthError, CatalogError
from playlister.utils.output import error, info, success


@click.command("auth")
@click.option(
    "--token",
    "-t",
    default=None,
    help="Access token with playlist-modify scopes",
)
@click.option(
    "--status",
    "-s",
    is_flag=True,
    default=False,
    help="Check current authentication status",
)
@pass_context
def cli(ctx: Context, token: str | None, status: bool) -> None:
    """Authenticate with the streaming service.

    Validates an access token against the service and stores it in
    ~/.config/playlister/credentials.json, or checks the stored one.

    Examples:

        playlister auth --token BQD...

        playlister auth --status
    """
    config = ctx.config or Config()

    if status:
        _show_status(config)
        return

    if not token:
        error(
            "Specify an access token:\n"
            "  playlister auth --token <token>\n"
            "  playlister auth --status"
        )
        raise SystemExit(EXIT_AUTH_ERROR)

    info("Validating token...")
    try:
        user_id, display_name = SpotifyCatalog(token, config.catalog_market).current_user()
    except CatalogAuthError as e:
        error(str(e))
        raise SystemExit(EXIT_AUTH_ERROR)
    except CatalogError as e:
        error(f"Could not reach the streaming service: {e}")
        raise SystemExit(EXIT_CATALOG_ERROR)

    creds = CatalogCredentials(
        access_token=token,
        user_id=user_id,
        display_name=display_name,
        saved_at=datetime.now(timezone.utc).isoformat(),
    )
    path = save_credentials(creds)

    success(f"Authenticated as: {display_name or user_id} (user id: {user_id})")
    info(f"Credentials saved to {path}")
    raise SystemExit(EXIT_SUCCESS)


def _show_status(config: Config) -> None:
    """Show current authentication status."""
    creds = load_credentials()
    if creds is not None:
        token = creds.access_token
        info(f"Token source: {get_credentials_path()}")
        if creds.saved_at:
            info(f"Saved at: {creds.saved_at}")
    elif config.catalog_access_token:
        token = config.catalog_access_token
        info("Token source: config.toml (manual)")
    else:
        error("Not authenticated. Run:\n  playlister auth --token <token>")
        raise SystemExit(EXIT_AUTH_ERROR)

    try:
        user_id, display_name = SpotifyCatalog(token, config.catalog_market).current_user()
    except CatalogAuthError:
        error(
            "Stored token has expired or was revoked. Re-authenticate with:\n"
            "  playlister auth --token <token>"
        )
        raise SystemExit(EXIT_AUTH_ERROR)
    except CatalogError as e:
        error(f"Could not reach the streaming service: {e}")
        raise SystemExit(EXIT_CATALOG_ERROR)

    success(f"Authenticated as: {display_name or user_id} (user id: {user_id})")
    raise SystemExit(EXIT_SUCCESS)
