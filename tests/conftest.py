"""
Shared test configuration and fixtures.
"""

from unittest.mock import MagicMock

import pytest

from oauth_factory.core.domain import Credentials
from oauth_factory.core.oauth_service import OAuth1Service, OAuth2Service
from oauth_factory.oauth.factory import ServiceFactory


class InMemoryTokenStorage:
    """Dict-backed TokenStorage used by the tests."""

    def __init__(self):
        self.tokens = {}

    def retrieve_access_token(self, service):
        return self.tokens[service]

    def store_access_token(self, service, token):
        self.tokens[service] = token

    def has_access_token(self, service):
        return service in self.tokens

    def clear_token(self, service):
        self.tokens.pop(service, None)

    def clear_all_tokens(self):
        self.tokens.clear()


class ExampleOAuth2(OAuth2Service):
    """OAuth2 provider declaring an email scope."""

    SCOPE_EMAIL = "user:email"
    SCOPE_REPO = "repo"

    @property
    def authorization_endpoint(self) -> str:
        return "https://example.com/oauth2/authorize"

    @property
    def access_token_endpoint(self) -> str:
        return "https://example.com/oauth2/token"


class ExampleOAuth1(OAuth1Service):
    """OAuth1 provider."""

    @property
    def request_token_endpoint(self) -> str:
        return "https://example.com/oauth1/request_token"

    @property
    def authorization_endpoint(self) -> str:
        return "https://example.com/oauth1/authorize"

    @property
    def access_token_endpoint(self) -> str:
        return "https://example.com/oauth1/access_token"


class NotAService:
    """Class outside both capability sets."""

    pass


@pytest.fixture
def credentials():
    """Sample consumer credentials."""
    return Credentials(
        consumer_id="client-id",
        consumer_secret="client-secret",
        callback_url="https://app.example.com/callback",
    )


@pytest.fixture
def storage():
    """Empty in-memory token storage."""
    return InMemoryTokenStorage()


@pytest.fixture
def mock_transport():
    """Mock HTTP transport."""
    return MagicMock()


@pytest.fixture
def factory(mock_transport):
    """Factory with built-in providers and a mock transport."""
    return ServiceFactory(http_transport=mock_transport)
