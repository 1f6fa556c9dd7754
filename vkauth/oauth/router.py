"""
OAuth2 login endpoints.

- GET /oauth/{provider}/connect - Redirect to the provider's authorization page
- GET /oauth/{provider}/callback - Exchange the code and return the user profile

Client errors (ParseError, UnexpectedResponseError, TransportError) are
handled centrally in main.py.
"""

import logging

from authlib.common.security import generate_token
from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse

from vkauth.oauth.dependencies import ProviderClient


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/oauth", tags=["oauth"])


@router.get("/{provider}/connect")
def connect(client: ProviderClient):
    """
    Start OAuth2 authorization flow.

    Redirects the user to the provider's authorization page. A random state
    value is sent along; it is echoed back but not checked here.

    Args:
        client: OAuth2 client for the validated provider

    Returns:
        Redirect to provider's authorization page
    """
    login_uri = client.get_login_link_uri(state=generate_token(24))

    logger.info(
        f"Starting OAuth flow for provider: {client.provider_name}",
        extra={"provider": client.provider_name},
    )

    return RedirectResponse(url=login_uri, status_code=status.HTTP_302_FOUND)


@router.get("/{provider}/callback")
def callback(client: ProviderClient, request: Request):
    """
    Handle OAuth2 callback from provider.

    Exchanges the authorization code for a token and fetches the user profile.
    FastAPI runs this in a worker thread since the client is synchronous.

    Args:
        client: OAuth2 client for the validated provider
        request: Incoming request (contains code or error)

    Returns:
        The normalized user profile
    """
    logger.info(
        f"OAuth callback received for provider: {client.provider_name}",
        extra={"provider": client.provider_name},
    )

    info = client.get_user_info(dict(request.query_params))

    logger.info(
        f"Fetched {client.provider_name} profile for user {info.id}",
        extra={"provider": client.provider_name, "user_id": info.id},
    )

    return {
        "status": "success",
        "user": info.model_dump(),
    }
