"""
Tests for OAuth configuration and client registry.
"""

import os
from unittest.mock import patch

from vkauth.core.oauth_service import OAuth2Client
from vkauth.infrastructure.vk_provider import VkProvider
from vkauth.oauth.config import (
    OAuthConfig,
    create_oauth_client,
    get_oauth_client,
    reset_oauth_clients,
    SUPPORTED_PROVIDERS,
)


class TestOAuthConfig:
    """Tests for OAuthConfig."""

    def test_from_env_loads_variables(self):
        """Test loading config from environment variables."""
        env = {
            "BASE_URL": "https://example.com",
            "VK_CLIENT_ID": "vk-id",
            "VK_CLIENT_SECRET": "vk-secret",
            "VK_SCOPE": "email",
            "VK_USER_INFO_FIELDS": "uid,photo_200",
            "VK_API_VERSION": "5.131",
            "HTTP_TIMEOUT": "3.5",
        }

        with patch.dict(os.environ, env, clear=False):
            config = OAuthConfig.from_env()

        assert config.base_url == "https://example.com"
        assert config.vk_client_id == "vk-id"
        assert config.vk_client_secret == "vk-secret"
        assert config.vk_scope == "email"
        assert config.vk_user_info_fields == "uid,photo_200"
        assert config.vk_api_version == "5.131"
        assert config.http_timeout == 3.5

    def test_from_env_handles_missing(self):
        """Test loading config with missing variables."""
        with patch.dict(os.environ, {"BASE_URL": "https://example.com"}, clear=True):
            config = OAuthConfig.from_env()

        assert config.vk_client_id is None
        assert config.vk_client_secret is None
        assert config.vk_scope is None
        assert config.vk_user_info_fields == "uid,first_name,last_name,photo"
        assert config.vk_api_version is None
        assert config.http_timeout == 10.0

    def test_from_env_empty_fields_disables(self):
        """Test an empty field list turns the fields parameter off."""
        with patch.dict(os.environ, {"VK_USER_INFO_FIELDS": ""}, clear=True):
            config = OAuthConfig.from_env()

        assert config.vk_user_info_fields is None

    def test_get_callback_url(self):
        """Test callback URL generation."""
        config = OAuthConfig(
            base_url="https://example.com", vk_client_id=None, vk_client_secret=None
        )

        assert config.get_callback_url("vk") == "https://example.com/oauth/vk/callback"

    def test_is_provider_configured(self):
        """Test VK is configured only with both credentials."""
        full = OAuthConfig(
            base_url="https://example.com", vk_client_id="id", vk_client_secret="s"
        )
        no_secret = OAuthConfig(
            base_url="https://example.com", vk_client_id="id", vk_client_secret=None
        )

        assert full.is_provider_configured("vk") is True
        assert no_secret.is_provider_configured("vk") is False
        assert full.is_provider_configured("unknown") is False

    def test_get_configured_providers(self):
        """Test listing configured providers."""
        config = OAuthConfig(
            base_url="https://example.com", vk_client_id="id", vk_client_secret="s"
        )
        empty = OAuthConfig(
            base_url="https://example.com", vk_client_id=None, vk_client_secret=None
        )

        assert config.get_configured_providers() == ["vk"]
        assert empty.get_configured_providers() == []


class TestOAuthClientRegistry:
    """Tests for OAuth client creation."""

    def test_create_vk_client(self):
        """Test VK client is wired from configuration."""
        config = OAuthConfig(
            base_url="https://example.com",
            vk_client_id="vk-id",
            vk_client_secret="vk-secret",
            vk_scope="email",
            vk_user_info_fields=None,
            vk_api_version="5.131",
        )

        client = create_oauth_client("vk", config)

        assert isinstance(client, OAuth2Client)
        assert isinstance(client.adapter, VkProvider)
        assert client.adapter.user_info_fields is None
        assert client.adapter.api_version == "5.131"
        assert client.configuration.client_id == "vk-id"
        assert client.configuration.scope == "email"
        assert client.configuration.redirect_uri == (
            "https://example.com/oauth/vk/callback"
        )

    def test_create_unconfigured_returns_none(self):
        """Test missing credentials yield no client."""
        config = OAuthConfig(
            base_url="https://example.com", vk_client_id=None, vk_client_secret=None
        )

        assert create_oauth_client("vk", config) is None

    def test_create_unknown_returns_none(self):
        config = OAuthConfig(
            base_url="https://example.com", vk_client_id="id", vk_client_secret="s"
        )

        assert create_oauth_client("unknown", config) is None

    def test_get_oauth_client_caches(self):
        """Test the registry returns the same client on repeated access."""
        reset_oauth_clients()
        config = OAuthConfig(
            base_url="https://example.com", vk_client_id="id", vk_client_secret="s"
        )

        with patch("vkauth.oauth.config.get_oauth_config", return_value=config):
            first = get_oauth_client("vk")
            second = get_oauth_client("vk")

        assert first is not None
        assert first is second
        reset_oauth_clients()

    def test_supported_providers(self):
        assert SUPPORTED_PROVIDERS == ["vk"]
