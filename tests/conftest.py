"""
Shared test configuration and fixtures.
"""

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from vkauth.core.domain import HttpRequest, HttpResponse

# Set credentials before importing app
with patch.dict(
    os.environ,
    {
        "BASE_URL": "http://testserver",
        "VK_CLIENT_ID": "test-vk-id",
        "VK_CLIENT_SECRET": "test-vk-secret",
    },
):
    from vkauth.main import app

client = TestClient(app)


VK_USER_INFO_CONTENT = (
    '{"response":[{"uid":"1","first_name":"Павел","last_name":"Дуров",'
    '"photo":"http:\\/\\/cs109.vkontakte.ru\\/u00001\\/c_df2abf56.jpg"}]}'
)

VK_TOKEN_CONTENT = '{"access_token":"token","expires_in":0,"user_id":1}'


class FakeTransport:
    """
    In-memory HttpTransport.

    Responses are registered per URL; every executed request is recorded.
    """

    def __init__(self):
        self.requests: list[HttpRequest] = []
        self.responses: dict[str, HttpResponse] = {}

    def add_response(self, url: str, content: str, status_code: int = 200) -> None:
        self.responses[url] = HttpResponse(status_code=status_code, content=content)

    def execute(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        return self.responses[request.url]


@pytest.fixture
def vk_user_info_content():
    """Sample users.get response with Cyrillic names and escaped slashes."""
    return VK_USER_INFO_CONTENT


@pytest.fixture
def fake_transport():
    """Fake transport preloaded with successful VK responses."""
    transport = FakeTransport()
    transport.add_response("https://oauth.vk.com/access_token", VK_TOKEN_CONTENT)
    transport.add_response(
        "https://api.vk.com/method/users.get", VK_USER_INFO_CONTENT
    )
    return transport
