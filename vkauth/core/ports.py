"""
Port definitions (interfaces) for the core domain.

Ports define the contracts between the core OAuth2 client and external systems.
Infrastructure adapters implement these ports.
"""

from typing import Dict, Protocol

from vkauth.core.domain import Endpoint, HttpRequest, HttpResponse, OAuthToken, UserInfo


class HttpTransport(Protocol):
    """
    Port (interface) for sending HTTP requests.

    This is implemented by infrastructure adapters (e.g., HttpxTransport).
    Tests substitute a fake that records requests and returns canned responses.
    """

    def execute(self, request: HttpRequest) -> HttpResponse:
        """
        Send the request and return the response.

        Args:
            request: The request to send

        Returns:
            The response, whatever its status code

        Raises:
            TransportError: If the request could not be completed
        """
        ...


class ProviderAdapter(Protocol):
    """
    Port (interface) for one identity provider.

    Supplies fixed endpoint locations and parses the provider's user-info
    payload. The OAuth2Client drives the flow and calls into the adapter.
    """

    @property
    def name(self) -> str:
        """Provider name used in routes and configuration (e.g. "vk")."""
        ...

    @property
    def access_code_endpoint(self) -> Endpoint:
        """Where the user is sent to grant access."""
        ...

    @property
    def access_token_endpoint(self) -> Endpoint:
        """Where the authorization code is exchanged for a token."""
        ...

    @property
    def user_info_endpoint(self) -> Endpoint:
        """Where the user profile is fetched."""
        ...

    def parse_user_info(self, content: str) -> UserInfo:
        """
        Parse the user-info response body.

        Raises:
            ParseError: If the body does not hold a user record
        """
        ...

    def user_info_params(self, token: OAuthToken) -> Dict[str, str]:
        """Extra query parameters for the user-info request."""
        ...
