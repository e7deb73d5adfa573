"""
Built-in OAuth 1.0a provider implementations.
"""

from oauth_factory.core.oauth_service import OAuth1Service


class Twitter(OAuth1Service):
    """Twitter (X) OAuth 1.0a implementation."""

    base_api_uri = "https://api.twitter.com/1.1/"

    @property
    def request_token_endpoint(self) -> str:
        return "https://api.twitter.com/oauth/request_token"

    @property
    def authorization_endpoint(self) -> str:
        return "https://api.twitter.com/oauth/authenticate"

    @property
    def access_token_endpoint(self) -> str:
        return "https://api.twitter.com/oauth/access_token"


class Tumblr(OAuth1Service):
    """Tumblr OAuth 1.0a implementation."""

    base_api_uri = "https://api.tumblr.com/v2/"

    @property
    def request_token_endpoint(self) -> str:
        return "https://www.tumblr.com/oauth/request_token"

    @property
    def authorization_endpoint(self) -> str:
        return "https://www.tumblr.com/oauth/authorize"

    @property
    def access_token_endpoint(self) -> str:
        return "https://www.tumblr.com/oauth/access_token"


class Bitbucket(OAuth1Service):
    """Bitbucket OAuth 1.0a implementation (legacy 1.0 API)."""

    base_api_uri = "https://bitbucket.org/api/1.0/"

    @property
    def request_token_endpoint(self) -> str:
        return "https://bitbucket.org/api/1.0/oauth/request_token"

    @property
    def authorization_endpoint(self) -> str:
        return "https://bitbucket.org/api/1.0/oauth/authenticate"

    @property
    def access_token_endpoint(self) -> str:
        return "https://bitbucket.org/api/1.0/oauth/access_token"


BUILTIN_OAUTH1_SERVICES = {
    "Twitter": Twitter,
    "Tumblr": Tumblr,
    "Bitbucket": Bitbucket,
}
