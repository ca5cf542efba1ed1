"""FastAPI application forwarding Plaid Link and item calls to the Plaid API.

Five routes are exposed under /api. Each one builds the matching Plaid SDK
request, calls the client, and returns the Plaid response unchanged. Any
error raised along the way is logged and answered with HTTP 500 carrying the
raw error payload.
"""

import logging
from collections.abc import Callable
from datetime import date
from typing import Annotated, Any

import uvicorn
from fastapi import APIRouter, Body, Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from plaid.model.country_code import CountryCode
from plaid.model.item_get_request import ItemGetRequest
from plaid.model.item_public_token_exchange_request import (
    ItemPublicTokenExchangeRequest,
)
from plaid.model.item_remove_request import ItemRemoveRequest
from plaid.model.link_token_create_request import LinkTokenCreateRequest
from plaid.model.link_token_create_request_user import LinkTokenCreateRequestUser
from plaid.model.products import Products
from plaid.model.transactions_get_request import TransactionsGetRequest
from .. import __version__
from ..config import PlaidBridgeSettings, ServerConfig, get_settings
from ..connectors.plaid_client import (
    api_error_payload,
    create_plaid_client,
    get_response_field,
    response_to_dict,
)
from .token_store import AccessTokenStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_plaid_client(request: Request) -> Any:
    return request.app.state.plaid_client


def get_token_store(request: Request) -> AccessTokenStore:
    return request.app.state.token_store


def get_server_config(request: Request) -> ServerConfig:
    return request.app.state.settings.server


PlaidClientDep = Annotated[Any, Depends(get_plaid_client)]
TokenStoreDep = Annotated[AccessTokenStore, Depends(get_token_store)]
ServerConfigDep = Annotated[ServerConfig, Depends(get_server_config)]


def _forward(operation: str, call: Callable[[], Any]) -> JSONResponse:
    """Run a Plaid call and turn its outcome into a JSON response."""
    try:
        payload = response_to_dict(call())
    except Exception as e:
        logger.error(f"❌ {operation} failed: {e}")
        return JSONResponse(
            status_code=500, content=jsonable_encoder(api_error_payload(e))
        )

    logger.debug(f"{operation} succeeded")
    return JSONResponse(content=jsonable_encoder(payload))


@router.post("/create_link_token")
def create_link_token(
    client: PlaidClientDep, config: ServerConfigDep
) -> JSONResponse:
    """Create a Link token for initializing Plaid Link on the client."""

    def call() -> Any:
        request = LinkTokenCreateRequest(
            user=LinkTokenCreateRequestUser(client_user_id=config.client_user_id),
            client_name=config.client_name,
            products=[Products(p) for p in config.products],
            country_codes=[CountryCode(c) for c in config.country_codes],
            language=config.language,
        )
        return client.link_token_create(request)

    return _forward("Link token creation", call)


@router.post("/exchange_public_token")
def exchange_public_token(
    client: PlaidClientDep,
    token_store: TokenStoreDep,
    body: Annotated[Any, Body()] = None,
) -> JSONResponse:
    """Exchange a public token from Plaid Link and keep the access token.

    The body is forwarded as parsed JSON; a missing or malformed public_token
    is rejected by the SDK request model and answered like any other error.
    """
    public_token = body.get("public_token") if isinstance(body, dict) else None

    def call() -> Any:
        request = ItemPublicTokenExchangeRequest(public_token=public_token)
        response = client.item_public_token_exchange(request)
        token_store.set(get_response_field(response, "access_token"))
        return response

    return _forward("Public token exchange", call)


@router.get("/transactions")
def get_transactions(
    client: PlaidClientDep,
    token_store: TokenStoreDep,
    config: ServerConfigDep,
    start_date: date | None = None,
    end_date: date | None = None,
) -> JSONResponse:
    """Retrieve transactions for the linked item."""

    def call() -> Any:
        request = TransactionsGetRequest(
            access_token=token_store.require(),
            start_date=start_date or config.transactions_start_date,
            end_date=end_date or config.transactions_end_date,
        )
        return client.transactions_get(request)

    return _forward("Transaction retrieval", call)


@router.get("/item")
def get_item(client: PlaidClientDep, token_store: TokenStoreDep) -> JSONResponse:
    """Get information about the linked item."""

    def call() -> Any:
        return client.item_get(ItemGetRequest(access_token=token_store.require()))

    return _forward("Item lookup", call)


@router.post("/item/remove")
def remove_item(client: PlaidClientDep, token_store: TokenStoreDep) -> JSONResponse:
    """Remove the linked item; its access token stops working afterwards."""

    def call() -> Any:
        response = client.item_remove(
            ItemRemoveRequest(access_token=token_store.require())
        )
        token_store.clear()
        return response

    return _forward("Item removal", call)


def create_app(
    settings: PlaidBridgeSettings | None = None,
    client: Any | None = None,
    token_store: AccessTokenStore | None = None,
) -> FastAPI:
    """Build the passthrough application.

    Args:
        settings: Application settings; loaded from the environment when omitted
        client: Pre-built Plaid client, mainly for tests
        token_store: Access token holder; seeded from ACCESS_TOKEN when omitted

    Returns:
        FastAPI: The configured application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="plaidbridge",
        version=__version__,
        description="Passthrough endpoints for the Plaid Link flow",
    )
    app.state.settings = settings
    app.state.plaid_client = client or create_plaid_client(settings.plaid)
    app.state.token_store = token_store or AccessTokenStore(
        settings.plaid.access_token
    )
    app.include_router(router)

    if app.state.token_store.has_token:
        logger.info("Seeded access token from configuration")

    return app


def run_server(
    settings: PlaidBridgeSettings | None = None,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Serve the passthrough application with uvicorn.

    Args:
        settings: Application settings; loaded from the environment when omitted
        host: Interface to bind, overriding configuration
        port: Port to listen on, overriding configuration
    """
    settings = settings or get_settings()
    app = create_app(settings)

    bind_host = host or settings.server.host
    bind_port = port or settings.server.port

    logger.info(f"Server is running on port {bind_port}")
    uvicorn.run(app, host=bind_host, port=bind_port, log_config=None)
