"""Plaid API client factory using the Plaid Python SDK.

Both the export command and the passthrough server talk to Plaid through the
client built here, and use the helpers below to turn SDK responses and errors
into plain JSON-compatible dictionaries.
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from plaid.api import plaid_api
from plaid.api_client import ApiClient
from plaid.configuration import Configuration
from plaid.exceptions import ApiException

from ..config import PlaidConfig

logger = logging.getLogger(__name__)

PLAID_HOSTS: dict[str, str] = {
    "sandbox": "https://sandbox.plaid.com",
    "development": "https://development.plaid.com",
    "production": "https://production.plaid.com",
}


def get_plaid_host(environment: str) -> str:
    """Get the Plaid API base URL for an environment name.

    Args:
        environment: One of sandbox, development or production

    Returns:
        str: The Plaid API base URL, sandbox for unknown names
    """
    return PLAID_HOSTS.get(environment.lower(), PLAID_HOSTS["sandbox"])


def create_plaid_client(config: PlaidConfig) -> Any:
    """Build a Plaid API client from configuration.

    Args:
        config: Plaid credentials and environment

    Returns:
        plaid_api.PlaidApi: Client ready for API calls
    """
    configuration = Configuration(
        host=get_plaid_host(config.environment),
        api_key={
            "clientId": config.client_id,
            "secret": config.secret,
        },
    )
    api_client = ApiClient(configuration)
    logger.debug(f"Created Plaid client for {config.environment} environment")
    # Type as Any to avoid pyright partial-unknowns from the SDK stubs
    client: Any = plaid_api.PlaidApi(api_client)
    return client


def get_response_field(response: Any, name: str, default: Any = None) -> Any:
    """Read a field from an SDK model or a plain mapping."""
    if isinstance(response, Mapping):
        return response.get(name, default)
    return getattr(response, name, default)


def response_to_dict(response: Any) -> dict[str, Any]:
    """Convert a Plaid SDK response into a plain dictionary.

    Args:
        response: SDK model (anything with ``to_dict``) or a mapping

    Returns:
        dict: The response content, unchanged

    Raises:
        TypeError: If the response cannot be represented as a dictionary
    """
    if response is None:
        return {}
    if isinstance(response, Mapping):
        return dict(response)
    to_dict = getattr(response, "to_dict", None)
    if callable(to_dict):
        converted = to_dict()
        if isinstance(converted, Mapping):
            return dict(converted)
    raise TypeError(f"Cannot convert {type(response).__name__} to a dictionary")


def api_error_payload(error: Exception) -> dict[str, Any]:
    """Describe a failed Plaid call as a JSON-compatible payload.

    Plaid API errors carry a JSON body (error_type, error_code, error_message,
    request_id, ...) which is passed through as-is. Any other error is reported
    by type and message.

    Args:
        error: The exception raised while calling Plaid

    Returns:
        dict: The raw error payload
    """
    if isinstance(error, ApiException):
        body = getattr(error, "body", None)
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        if isinstance(body, str) and body:
            try:
                details = json.loads(body)
            except ValueError:
                details = None
            if isinstance(details, dict):
                return details
        return {
            "error": type(error).__name__,
            "status": error.status,
            "message": error.reason,
        }
    return {"error": type(error).__name__, "message": str(error)}
