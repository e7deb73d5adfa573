"""
Default HTTP transport for constructed OAuth services, built on httpx.
"""

import logging
from typing import Any, Mapping, Optional, Union

import httpx

from oauth_factory.core.exceptions import TransportError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "oauth-service-factory"


class HttpxTransport:
    """
    HttpTransport adapter backed by a single lazily created httpx.Client.

    Constructing the transport performs no I/O; the client is opened on the
    first request and reused until close().
    """

    def __init__(
        self,
        timeout: float = 15.0,
        max_redirects: int = 5,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.timeout = timeout
        self.max_redirects = max_redirects
        self.user_agent = user_agent
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.timeout,
                follow_redirects=self.max_redirects > 0,
                max_redirects=self.max_redirects,
                headers={"User-Agent": self.user_agent},
            )
        return self._client

    def retrieve_response(
        self,
        endpoint: str,
        body: Union[Mapping[str, Any], str, None] = None,
        extra_headers: Optional[Mapping[str, str]] = None,
        method: str = "POST",
    ) -> str:
        """
        Perform a request and return the response body.

        Args:
            endpoint: Absolute URL to call
            body: Form fields (encoded as a form) or a raw request body
            extra_headers: Headers merged over the transport defaults
            method: HTTP method

        Returns:
            The response body as text

        Raises:
            ValueError: If a body is supplied for a GET request
            TransportError: If the request fails or returns an error status
        """
        method = method.upper()
        if method == "GET" and body:
            raise ValueError("No body expected for GET request.")

        request_kwargs: dict[str, Any] = {"headers": dict(extra_headers or {})}
        if isinstance(body, Mapping):
            request_kwargs["data"] = dict(body)
        elif body:
            request_kwargs["content"] = body

        try:
            response = self.client.request(method, endpoint, **request_kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Request failed | method={method} endpoint={endpoint} "
                f"status={e.response.status_code}"
            )
            raise TransportError(
                f"Request to {endpoint} failed: {e.response.status_code} {e.response.text}"
            ) from e
        except httpx.RequestError as e:
            logger.error(f"Network error | method={method} endpoint={endpoint}: {e}")
            raise TransportError(f"Network error while calling {endpoint}: {e}") from e

        return response.text

    def close(self) -> None:
        """Close the underlying client if it was ever opened."""
        if self._client is not None:
            self._client.close()
            self._client = None
