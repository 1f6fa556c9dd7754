"""
HTTP transport backed by httpx.
"""

import logging
from typing import Optional

import httpx

from vkauth.core.domain import HttpRequest, HttpResponse
from vkauth.core.exceptions import TransportError


logger = logging.getLogger(__name__)


class HttpxTransport:
    """
    Sends HttpRequests with a synchronous httpx client.

    A shared client can be passed in; otherwise a short-lived client is
    opened for each request.
    """

    def __init__(self, client: Optional[httpx.Client] = None, timeout: float = 10.0):
        self._client = client
        self._timeout = timeout

    def execute(self, request: HttpRequest) -> HttpResponse:
        """
        Send the request.

        Args:
            request: The request to send

        Returns:
            HttpResponse with the decoded body, for any status code

        Raises:
            TransportError: If httpx could not complete the request
        """
        try:
            if self._client is not None:
                response = self._send(self._client, request)
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = self._send(client, request)
        except httpx.RequestError as e:
            logger.error(
                f"Network error calling {request.url}: {e}",
                extra={"method": request.method, "url": request.url},
            )
            raise TransportError(f"Network error calling {request.url}: {e}") from e

        return HttpResponse(
            status_code=response.status_code,
            content=response.text,
            headers=dict(response.headers),
        )

    @staticmethod
    def _send(client: httpx.Client, request: HttpRequest) -> httpx.Response:
        return client.request(
            request.method,
            request.url,
            params=request.params or None,
            data=request.data,
            headers=request.headers or None,
        )

    def close(self) -> None:
        """Close the shared client, if any."""
        if self._client is not None:
            self._client.close()
