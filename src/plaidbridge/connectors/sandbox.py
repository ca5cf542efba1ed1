"""Plaid sandbox item linking.

Plaid Link needs a browser, so local runs against the sandbox obtain an
access token by creating a sandbox public token directly and exchanging it,
the same exchange the server performs for tokens coming from Link.
"""

import logging
from collections.abc import Sequence
from typing import Any

from plaid.model.item_public_token_exchange_request import (
    ItemPublicTokenExchangeRequest,
)
from plaid.model.products import Products
from plaid.model.sandbox_public_token_create_request import (
    SandboxPublicTokenCreateRequest,
)

from ..config import PlaidConfig
from .plaid_client import create_plaid_client, get_response_field

logger = logging.getLogger(__name__)

DEFAULT_SANDBOX_INSTITUTION = "ins_109508"


class SandboxLinkError(RuntimeError):
    """Raised when Plaid answers a sandbox call without the expected token."""


def _token_from(response: Any, field: str) -> str:
    token = get_response_field(response, field)
    if not isinstance(token, str) or not token:
        raise SandboxLinkError(f"Plaid response did not include a {field}")
    return token


def link_sandbox_item(
    config: PlaidConfig,
    institution_id: str = DEFAULT_SANDBOX_INSTITUTION,
    products: Sequence[str] = ("transactions",),
    client: Any | None = None,
) -> str:
    """Link a sandbox institution and return the item's access token.

    Args:
        config: Plaid credentials; the environment must be sandbox
        institution_id: Sandbox institution to link
        products: Products the item is created with
        client: Pre-built Plaid client, mainly for tests

    Returns:
        str: Access token for the new sandbox item

    Raises:
        ValueError: If the configured environment is not sandbox
        SandboxLinkError: If Plaid omits a token from its response
    """
    if config.environment != "sandbox":
        raise ValueError(
            f"Sandbox items cannot be linked in the {config.environment} environment"
        )

    plaid: Any = client or create_plaid_client(config)

    logger.info(f"🔗 Linking sandbox institution {institution_id}")
    created = plaid.sandbox_public_token_create(
        SandboxPublicTokenCreateRequest(
            institution_id=institution_id,
            initial_products=[Products(p) for p in products],
        )
    )
    exchanged = plaid.item_public_token_exchange(
        ItemPublicTokenExchangeRequest(
            public_token=_token_from(created, "public_token")
        )
    )

    access_token = _token_from(exchanged, "access_token")
    logger.info(f"✅ Sandbox item linked: {get_response_field(exchanged, 'item_id')}")
    return access_token
