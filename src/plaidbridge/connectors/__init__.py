"""Plaid API client construction and response shaping."""

from .plaid_client import (
    PLAID_HOSTS,
    api_error_payload,
    create_plaid_client,
    get_plaid_host,
    get_response_field,
    response_to_dict,
)
from .sandbox import SandboxLinkError, link_sandbox_item

__all__ = [
    "PLAID_HOSTS",
    "SandboxLinkError",
    "api_error_payload",
    "create_plaid_client",
    "get_plaid_host",
    "get_response_field",
    "link_sandbox_item",
    "response_to_dict",
]
