"""plaidbridge CLI package.

This package provides the command-line interface for exporting Plaid
transactions and running the Plaid Link passthrough server.
"""

from .main import app, main

__all__ = ["app", "main"]
