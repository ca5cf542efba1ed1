"""Server command for plaidbridge CLI.

This module provides the `plaidbridge serve` command that starts the Plaid
Link passthrough HTTP server.
"""

import logging
from typing import Annotated

import typer

from plaidbridge.config import get_settings
from plaidbridge.logging import setup_server_logging
from plaidbridge.server.app import run_server

logger = logging.getLogger(__name__)


def serve(
    host: Annotated[
        str | None,
        typer.Option("--host", help="Interface to bind (defaults to configuration)"),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option(
            "--port", "-p", min=1, max=65535, help="Port to listen on (default 3003)"
        ),
    ] = None,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
) -> None:
    """Start the Plaid Link passthrough server.

    Routes:
      POST /api/create_link_token
      POST /api/exchange_public_token
      GET  /api/transactions
      GET  /api/item
      POST /api/item/remove
    """
    setup_server_logging(verbose=verbose)

    try:
        settings = get_settings()
    except ValueError as e:
        logger.error(f"❌ {e}")
        logger.error("Please check your .env file configuration")
        raise typer.Exit(1) from e

    try:
        run_server(settings, host=host, port=port)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
