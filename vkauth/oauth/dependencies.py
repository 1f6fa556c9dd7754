"""
FastAPI dependencies for OAuth endpoints.

Provides dependency injection for OAuth clients and provider validation.
"""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status

from vkauth.core.oauth_service import OAuth2Client
from vkauth.oauth.config import (
    get_oauth_client,
    get_oauth_config,
    OAuthConfig,
    SUPPORTED_PROVIDERS,
)


logger = logging.getLogger(__name__)


def validate_provider(
    provider: str,
    config: Annotated[OAuthConfig, Depends(get_oauth_config)],
) -> str:
    """
    Validate that the provider is supported and configured.

    Args:
        provider: OAuth provider name from path
        config: OAuth configuration

    Returns:
        Validated provider name

    Raises:
        HTTPException: If provider is invalid or not configured
    """
    if provider not in SUPPORTED_PROVIDERS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown provider: {provider}. Supported: {SUPPORTED_PROVIDERS}",
        )

    if not config.is_provider_configured(provider):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Provider '{provider}' is not configured",
        )

    return provider


ValidProvider = Annotated[str, Depends(validate_provider)]


def get_client(provider: ValidProvider) -> OAuth2Client:
    """Provide the OAuth2 client for a validated provider."""
    client = get_oauth_client(provider)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"OAuth client for '{provider}' not available",
        )
    return client


# Type aliases for cleaner dependency injection
ProviderClient = Annotated[OAuth2Client, Depends(get_client)]
