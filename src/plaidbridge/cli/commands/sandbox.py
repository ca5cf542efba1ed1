"""Plaid sandbox helpers for plaidbridge CLI."""

import logging

import typer

from plaidbridge.config import get_settings
from plaidbridge.connectors.sandbox import (
    DEFAULT_SANDBOX_INSTITUTION,
    link_sandbox_item,
)
from plaidbridge.logging import setup_logging

app = typer.Typer(help="Plaid sandbox helpers")
logger = logging.getLogger(__name__)


@app.callback()
def sandbox_callback() -> None:
    """Helpers for working against the Plaid sandbox."""


@app.command("token")
def sandbox_token(
    institution_id: str = typer.Option(
        DEFAULT_SANDBOX_INSTITUTION,
        "--institution-id",
        help="Sandbox institution to link",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
) -> None:
    """Create a sandbox item and print its access token.

    Put the printed value in ACCESS_TOKEN to use it with the export command.
    """
    setup_logging(cli_mode=True, verbose=verbose)

    try:
        settings = get_settings()
        access_token = link_sandbox_item(settings.plaid, institution_id=institution_id)
    except Exception as e:
        logger.error(f"❌ Could not create a sandbox access token: {e}")
        raise typer.Exit(1) from e

    typer.echo(access_token)
