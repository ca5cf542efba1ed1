"""Main CLI application for plaidbridge.

This module provides the entry point for all plaidbridge CLI operations:
exporting transactions, serving the passthrough API, and sandbox helpers.
"""

import logging
from typing import Annotated

import typer

from ..logging import setup_logging
from .commands import export, sandbox, serve

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="plaidbridge",
    help="plaidbridge: Plaid transaction export and Link passthrough server",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose debug logging",
        ),
    ] = False,
) -> None:
    """Global options for plaidbridge CLI.

    Examples:
      plaidbridge export transactions          # Write transactions.csv
      plaidbridge serve --port 3003            # Start the passthrough server
      plaidbridge sandbox token                # Create a sandbox access token
    """
    setup_logging(cli_mode=True, verbose=verbose)


app.add_typer(export.app, name="export", help="Export data from Plaid to files")
app.add_typer(sandbox.app, name="sandbox", help="Plaid sandbox helpers")
app.command("serve", help="Start the Plaid Link passthrough server")(serve.serve)


def main() -> None:
    """Entry point for the plaidbridge CLI application."""
    app()


if __name__ == "__main__":
    main()
