"""
OAuth2 configuration and client registry.

Each supported provider is wired from an adapter, an HTTP transport and
the application credentials loaded from the environment.
"""

import os
import logging
from dataclasses import dataclass
from functools import lru_cache

from vkauth.core.oauth_service import ClientConfiguration, OAuth2Client
from vkauth.infrastructure.http_transport import HttpxTransport
from vkauth.infrastructure.vk_provider import DEFAULT_USER_INFO_FIELDS, VkProvider


logger = logging.getLogger(__name__)


@dataclass
class OAuthConfig:
    """
    OAuth configuration settings.

    Loaded from environment variables. Providers without credentials
    are reported as not configured.
    """

    base_url: str
    vk_client_id: str | None
    vk_client_secret: str | None
    vk_scope: str | None = None
    vk_user_info_fields: str | None = DEFAULT_USER_INFO_FIELDS
    vk_api_version: str | None = None
    http_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "OAuthConfig":
        """Load configuration from environment variables."""
        # An empty VK_USER_INFO_FIELDS turns the fields parameter off
        fields = os.getenv("VK_USER_INFO_FIELDS", DEFAULT_USER_INFO_FIELDS)
        return cls(
            base_url=os.getenv("BASE_URL", ""),
            vk_client_id=os.getenv("VK_CLIENT_ID"),
            vk_client_secret=os.getenv("VK_CLIENT_SECRET"),
            vk_scope=os.getenv("VK_SCOPE"),
            vk_user_info_fields=fields or None,
            vk_api_version=os.getenv("VK_API_VERSION"),
            http_timeout=float(os.getenv("HTTP_TIMEOUT", "10")),
        )

    def get_callback_url(self, provider: str) -> str:
        """Generate callback URL for a provider."""
        return f"{self.base_url}/oauth/{provider}/callback"

    def is_provider_configured(self, provider: str) -> bool:
        """Check if a provider has valid credentials configured."""
        if provider == "vk":
            return bool(self.vk_client_id and self.vk_client_secret)
        return False

    def get_configured_providers(self) -> list[str]:
        """List all providers with valid configuration."""
        return [p for p in SUPPORTED_PROVIDERS if self.is_provider_configured(p)]


@lru_cache()
def get_oauth_config() -> OAuthConfig:
    """Get OAuth configuration singleton."""
    return OAuthConfig.from_env()


def create_oauth_client(
    provider: str, config: OAuthConfig | None = None
) -> OAuth2Client | None:
    """
    Create an OAuth2 client for a provider.

    Args:
        provider: Provider name
        config: OAuth configuration (uses default if not provided)

    Returns:
        Configured client, or None if the provider is unknown or lacks credentials
    """
    if config is None:
        config = get_oauth_config()

    if not config.is_provider_configured(provider):
        logger.warning(f"{provider} OAuth not configured (missing credentials)")
        return None

    if provider == "vk":
        adapter = VkProvider(
            user_info_fields=config.vk_user_info_fields,
            api_version=config.vk_api_version,
        )
        configuration = ClientConfiguration(
            client_id=config.vk_client_id or "",
            client_secret=config.vk_client_secret or "",
            redirect_uri=config.get_callback_url(provider),
            scope=config.vk_scope,
        )
        logger.info("Registered VK OAuth provider")
        return OAuth2Client(
            adapter, HttpxTransport(timeout=config.http_timeout), configuration
        )

    return None


# Client registry, filled on first access per provider
_oauth_clients: dict[str, OAuth2Client] = {}


def get_oauth_client(provider: str) -> OAuth2Client | None:
    """
    Get the OAuth client for a provider.

    Creates and caches the client on first access.
    """
    client = _oauth_clients.get(provider)
    if client is None:
        client = create_oauth_client(provider)
        if client is not None:
            _oauth_clients[provider] = client
    return client


def reset_oauth_clients() -> None:
    """
    Reset the OAuth client registry.

    Useful for testing with different configurations.
    """
    _oauth_clients.clear()


# List of supported providers (for validation)
SUPPORTED_PROVIDERS = ["vk"]
