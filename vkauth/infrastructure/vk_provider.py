"""
VK (VKontakte) OAuth 2.0 provider adapter.
"""

import json
import logging
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from vkauth.core.domain import Endpoint, OAuthToken, UserInfo, id_to_str
from vkauth.core.exceptions import ParseError


logger = logging.getLogger(__name__)

VK_ACCESS_CODE_ENDPOINT = Endpoint(base_uri="http://oauth.vk.com", resource="/authorize")
VK_ACCESS_TOKEN_ENDPOINT = Endpoint(
    base_uri="https://oauth.vk.com", resource="/access_token"
)
VK_USER_INFO_ENDPOINT = Endpoint(
    base_uri="https://api.vk.com", resource="/method/users.get"
)

DEFAULT_USER_INFO_FIELDS = "uid,first_name,last_name,photo"


class VkProfile(BaseModel):
    """One record of the users.get response."""

    uid: str = Field(description="VK user ID")
    first_name: str = Field(description="First name")
    last_name: str = Field(description="Last name")
    photo: Optional[str] = Field(default=None, description="Avatar URL")
    email: Optional[str] = Field(default=None, description="Email address")

    model_config = ConfigDict(extra="allow")

    @field_validator("uid", mode="before")
    @classmethod
    def validate_uid(cls, v):
        """VK sends uid as a number in most API versions."""
        return id_to_str(v)


class VkProvider:
    """
    Provider adapter for VK.

    Endpoints are fixed. users.get returns {"response": [profile]}; only the
    first profile is used.
    """

    name = "vk"

    def __init__(
        self,
        user_info_fields: Optional[str] = DEFAULT_USER_INFO_FIELDS,
        api_version: Optional[str] = None,
    ):
        self.user_info_fields = user_info_fields
        self.api_version = api_version

    @property
    def access_code_endpoint(self) -> Endpoint:
        return VK_ACCESS_CODE_ENDPOINT

    @property
    def access_token_endpoint(self) -> Endpoint:
        return VK_ACCESS_TOKEN_ENDPOINT

    @property
    def user_info_endpoint(self) -> Endpoint:
        return VK_USER_INFO_ENDPOINT

    def parse_user_info(self, content: str) -> UserInfo:
        """
        Parse a users.get response body.

        Args:
            content: Raw JSON body, e.g. {"response":[{"uid":"1",...}]}

        Returns:
            UserInfo built from the first profile in the envelope

        Raises:
            ParseError: If the body is not a non-empty users.get envelope
        """
        try:
            payload = json.loads(content)
        except ValueError as e:
            raise ParseError(f"VK user info is not valid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise ParseError("VK user info must be a JSON object")

        if "error" in payload:
            error = payload["error"]
            message = error.get("error_msg") if isinstance(error, dict) else error
            raise ParseError(f"VK API returned an error: {message}")

        profiles = payload.get("response")
        if not isinstance(profiles, list):
            raise ParseError("VK user info has no 'response' list")
        if not profiles:
            raise ParseError("VK user info 'response' list is empty")

        try:
            profile = VkProfile.model_validate(profiles[0])
        except ValidationError as e:
            raise ParseError(f"Failed to parse VK profile: {e}") from e

        return UserInfo(
            id=profile.uid,
            first_name=profile.first_name,
            last_name=profile.last_name,
            email=profile.email,
            photo_uri=profile.photo,
            provider_name=self.name,
        )

    def user_info_params(self, token: OAuthToken) -> Dict[str, str]:
        """
        Query parameters for users.get.

        Args:
            token: Token response; VK includes the user's id in it

        Returns:
            uids, fields and v, each only when available
        """
        params: Dict[str, str] = {}
        if token.user_id:
            params["uids"] = token.user_id
        else:
            logger.debug("VK token response has no user_id")
        if self.user_info_fields:
            params["fields"] = self.user_info_fields
        if self.api_version:
            params["v"] = self.api_version
        return params
