"""Logging setup shared by the plaidbridge command line and server."""

from .config import LoggingConfig, setup_logging, setup_server_logging

__all__ = ["LoggingConfig", "setup_logging", "setup_server_logging"]
