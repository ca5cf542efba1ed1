"""In-memory holder for the Plaid access token used by the server."""

import logging
import threading

logger = logging.getLogger(__name__)


class MissingAccessTokenError(RuntimeError):
    """Raised when a route needs an access token but none has been stored."""


class AccessTokenStore:
    """Holds at most one Plaid access token for the lifetime of the process.

    Route handlers run on a threadpool, so reads and writes go through a lock.
    Nothing is persisted; restarting the server forgets the token unless it is
    seeded again from configuration.
    """

    def __init__(self, token: str | None = None):
        self._token = token or None
        self._lock = threading.Lock()

    def get(self) -> str | None:
        with self._lock:
            return self._token

    def set(self, token: str) -> None:
        """Replace the stored token."""
        if not token:
            raise ValueError("Refusing to store an empty access token")
        with self._lock:
            self._token = token
        logger.info("Stored new Plaid access token")

    def clear(self) -> None:
        with self._lock:
            self._token = None
        logger.info("Cleared Plaid access token")

    def require(self) -> str:
        """Return the stored token.

        Raises:
            MissingAccessTokenError: If no token has been stored yet
        """
        token = self.get()
        if token is None:
            raise MissingAccessTokenError(
                "No access token available; exchange a public token first"
            )
        return token

    @property
    def has_token(self) -> bool:
        return self.get() is not None
