"""
Core service for the OAuth 2.0 authorization-code flow.

The client is generic; everything provider-specific comes from a
ProviderAdapter, and all HTTP goes through an injected HttpTransport.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from authlib.common.urls import add_params_to_uri
from pydantic import ValidationError

from vkauth.core.domain import HttpRequest, OAuthToken, UserInfo
from vkauth.core.exceptions import ParseError, UnexpectedResponseError
from vkauth.core.ports import HttpTransport, ProviderAdapter


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientConfiguration:
    """Credentials and redirect settings for one registered application."""

    client_id: str
    client_secret: str
    redirect_uri: str
    scope: Optional[str] = None


class OAuth2Client:
    """
    OAuth 2.0 client for one provider.

    Builds the login link, exchanges the authorization code for an access
    token and fetches the user profile. No retries, no state validation.
    """

    def __init__(
        self,
        adapter: ProviderAdapter,
        transport: HttpTransport,
        configuration: ClientConfiguration,
    ):
        self.adapter = adapter
        self.transport = transport
        self.configuration = configuration

    @property
    def provider_name(self) -> str:
        return self.adapter.name

    def get_login_link_uri(self, state: Optional[str] = None) -> str:
        """
        Build the URI the user is redirected to for granting access.

        Args:
            state: Opaque value echoed back by the provider on callback

        Returns:
            Authorization URL with query parameters
        """
        params = {
            "response_type": "code",
            "client_id": self.configuration.client_id,
            "redirect_uri": self.configuration.redirect_uri,
        }
        if self.configuration.scope:
            params["scope"] = self.configuration.scope
        if state:
            params["state"] = state

        return add_params_to_uri(self.adapter.access_code_endpoint.url, params)

    def get_token(self, code: str) -> OAuthToken:
        """
        Exchange the authorization code for an access token.

        Args:
            code: Authorization code from the callback

        Returns:
            Parsed token response

        Raises:
            UnexpectedResponseError: If the provider rejects the exchange
            ParseError: If the token response cannot be parsed
        """
        request = HttpRequest(
            method="POST",
            url=self.adapter.access_token_endpoint.url,
            data={
                "code": code,
                "client_id": self.configuration.client_id,
                "client_secret": self.configuration.client_secret,
                "redirect_uri": self.configuration.redirect_uri,
                "grant_type": "authorization_code",
            },
        )

        logger.info(
            f"Exchanging authorization code for {self.provider_name}",
            extra={"provider": self.provider_name},
        )
        response = self.transport.execute(request)

        try:
            data = self._decode_json(response.content, "token response")
        except ParseError:
            if not response.is_success:
                raise UnexpectedResponseError(
                    f"Token exchange failed with status {response.status_code}",
                    status_code=response.status_code,
                ) from None
            raise

        if "error" in data:
            raise UnexpectedResponseError(
                f"Token exchange failed: {_describe_error(data)}",
                status_code=response.status_code,
            )
        if not response.is_success:
            raise UnexpectedResponseError(
                f"Token exchange failed with status {response.status_code}",
                status_code=response.status_code,
            )
        if not data.get("access_token"):
            raise ParseError("Token response has no access_token")

        try:
            return OAuthToken.from_oauth_response(data)
        except ValidationError as e:
            raise ParseError(f"Failed to parse token response: {e}") from e

    def get_user_info(self, parameters: Mapping[str, str]) -> UserInfo:
        """
        Complete the flow from callback parameters and return the user profile.

        Args:
            parameters: Query parameters the provider sent to the callback

        Returns:
            Normalized user info

        Raises:
            UnexpectedResponseError: If the provider reported an error
            ParseError: If a response body cannot be parsed
            TransportError: On network failures
        """
        if parameters.get("error"):
            description = parameters.get("error_description") or parameters["error"]
            logger.warning(
                f"Provider {self.provider_name} returned an error: {description}",
                extra={"provider": self.provider_name, "error": parameters["error"]},
            )
            raise UnexpectedResponseError(f"Authorization denied: {description}")

        code = parameters.get("code")
        if not code:
            raise UnexpectedResponseError("Callback has no authorization code")

        token = self.get_token(code)
        return self.query_user_info(token)

    def query_user_info(self, token: OAuthToken) -> UserInfo:
        """Fetch and parse the user profile for an access token."""
        request = HttpRequest(
            url=self.adapter.user_info_endpoint.url,
            params={"access_token": token.access_token},
        )
        for name, value in self.adapter.user_info_params(token).items():
            request.add_parameter(name, value)

        logger.info(
            f"Fetching user info from {self.provider_name}",
            extra={"provider": self.provider_name, "user_id": token.user_id},
        )
        response = self.transport.execute(request)

        if not response.is_success:
            logger.error(
                f"User info request failed: {response.status_code}",
                extra={"provider": self.provider_name, "body": response.content},
            )
            raise UnexpectedResponseError(
                f"User info request failed with status {response.status_code}",
                status_code=response.status_code,
            )

        info = self.adapter.parse_user_info(response.content)
        if info.email is None and token.email:
            info = info.model_copy(update={"email": token.email})
        return info

    @staticmethod
    def _decode_json(content: str, what: str) -> Dict[str, Any]:
        try:
            data = json.loads(content)
        except ValueError as e:
            raise ParseError(f"Invalid JSON in {what}: {e}") from e
        if not isinstance(data, dict):
            raise ParseError(f"Expected a JSON object in {what}")
        return data


def _describe_error(data: Dict[str, Any]) -> str:
    """Readable message from an OAuth2 error body."""
    error = data.get("error")
    description = data.get("error_description")
    if description:
        return f"{error}: {description}"
    return str(error)
