"""
Port definitions (interfaces) for the core domain.

Ports define the contracts between the service factory and the
collaborators that constructed services use later on. Infrastructure
adapters implement these ports.
"""

from typing import Any, Mapping, Optional, Protocol, Union


class HttpTransport(Protocol):
    """
    Port (interface) for performing HTTP requests on behalf of a service.

    Implemented by infrastructure adapters (e.g., HttpxTransport). The
    factory only passes it through; services call it.
    """

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
            body: Form fields or a raw request body
            extra_headers: Headers merged over the transport defaults
            method: HTTP method

        Returns:
            The response body as text
        """
        ...

    def close(self) -> None:
        """Release any pooled connections."""
        ...


class TokenStorage(Protocol):
    """Port (interface) for persisting access tokens per provider."""

    def retrieve_access_token(self, service: str) -> Any:
        """Return the stored token for a service."""
        ...

    def store_access_token(self, service: str, token: Any) -> None:
        """Persist a token for a service, replacing any previous one."""
        ...

    def has_access_token(self, service: str) -> bool:
        """Check whether a token is stored for a service."""
        ...

    def clear_token(self, service: str) -> None:
        """Remove the token stored for a service."""
        ...

    def clear_all_tokens(self) -> None:
        """Remove every stored token."""
        ...


class SignatureHelper(Protocol):
    """Port (interface) for OAuth1 request signing."""

    def set_token_secret(self, token_secret: str) -> None:
        ...

    def get_signature(
        self, uri: str, params: Mapping[str, str], method: str = "POST"
    ) -> str:
        ...
