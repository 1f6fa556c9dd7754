"""
Core domain models for the OAuth2 login flow.

These models represent the business domain and are independent of
any infrastructure or delivery mechanism.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def id_to_str(v: Any) -> Any:
    """Providers send numeric ids as JSON integers; keep them as strings."""
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return v


class Endpoint(BaseModel):
    """
    Location of one provider service operation.

    Split into the scheme+host part and the resource path, so the
    two can be checked independently.
    """

    base_uri: str = Field(description="Scheme and host, no trailing slash")
    resource: str = Field(description="Resource path, leading slash")

    model_config = ConfigDict(frozen=True)

    @field_validator("base_uri")
    @classmethod
    def validate_base_uri(cls, v: str) -> str:
        if not v or v.endswith("/"):
            raise ValueError("base_uri must be non-empty without a trailing slash")
        return v

    @field_validator("resource")
    @classmethod
    def validate_resource(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("resource must start with '/'")
        return v

    @property
    def url(self) -> str:
        """Full URL of the endpoint."""
        return f"{self.base_uri}{self.resource}"


class UserInfo(BaseModel):
    """
    Normalized user profile returned by an identity provider.

    Optional fields are None when the provider did not send them.
    """

    id: str = Field(description="User ID at the provider")
    first_name: str = Field(description="Given name")
    last_name: str = Field(description="Family name")
    email: Optional[str] = Field(default=None, description="Email address")
    photo_uri: Optional[str] = Field(default=None, description="Avatar URL")
    provider_name: str = Field(description="Provider the profile came from")


class OAuthToken(BaseModel):
    """
    Access token returned by the token-exchange endpoint.

    Some providers put extra identity data next to the token
    (VK sends user_id, and email when the scope allows it).
    """

    access_token: str = Field(description="OAuth2 access token")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_in: Optional[int] = Field(
        default=None, description="Lifetime in seconds (0 means no expiry)"
    )
    refresh_token: Optional[str] = Field(default=None, description="Refresh token")
    user_id: Optional[str] = Field(default=None, description="User ID at the provider")
    email: Optional[str] = Field(default=None, description="Email granted by scope")

    model_config = ConfigDict(extra="allow")

    @field_validator("user_id", mode="before")
    @classmethod
    def validate_user_id(cls, v):
        """Accept integer user ids."""
        return id_to_str(v)

    @classmethod
    def from_oauth_response(cls, token_data: Dict[str, Any]) -> "OAuthToken":
        """
        Create OAuthToken from a decoded token-exchange response.

        Args:
            token_data: Decoded JSON body of the token response

        Returns:
            OAuthToken instance
        """
        return cls.model_validate(token_data)


class HttpRequest(BaseModel):
    """Outgoing HTTP request, independent of the HTTP library."""

    method: str = Field(default="GET", description="HTTP method")
    url: str = Field(description="Absolute URL without query string")
    params: Dict[str, str] = Field(default_factory=dict, description="Query parameters")
    data: Optional[Dict[str, str]] = Field(
        default=None, description="Form-encoded body"
    )
    headers: Dict[str, str] = Field(default_factory=dict, description="Request headers")

    def add_parameter(self, name: str, value: str) -> None:
        """Add or replace a query parameter."""
        self.params[name] = value


class HttpResponse(BaseModel):
    """Response returned by an HTTP transport."""

    status_code: int = Field(description="HTTP status code")
    content: str = Field(default="", description="Decoded response body")
    headers: Dict[str, str] = Field(default_factory=dict, description="Response headers")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300
