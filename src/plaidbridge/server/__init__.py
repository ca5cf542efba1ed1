"""Plaid Link passthrough HTTP server."""

from .app import create_app, run_server
from .token_store import AccessTokenStore, MissingAccessTokenError

__all__ = ["AccessTokenStore", "MissingAccessTokenError", "create_app", "run_server"]
