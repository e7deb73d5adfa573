"""
Capability sets for OAuth service implementations.

A provider implementation is usable by the factory when it derives from
OAuth2Service or OAuth1Service (OAuth2 when it derives from both).
Everything here is pure computation; requests go through the injected HttpTransport.
"""

from abc import ABC, abstractmethod
from typing import ClassVar, Dict, Iterable, List, Optional
from urllib.parse import urlencode

from oauth_factory.core.domain import Credentials
from oauth_factory.core.ports import HttpTransport, SignatureHelper, TokenStorage

SCOPE_PREFIX = "SCOPE_"


class OAuthService(ABC):
    """
    Behaviour shared by both OAuth generations.

    Constructors are cooperative: each generation consumes its own keyword
    (scopes or signature) and forwards the rest, so a class deriving from
    both bases still receives every argument.
    """

    # Key under which tokens are kept in storage; defaults to the class name
    service_name: ClassVar[Optional[str]] = None
    base_api_uri: ClassVar[Optional[str]] = None

    def __init__(
        self,
        credentials: Credentials,
        http_transport: HttpTransport,
        storage: TokenStorage,
    ):
        self.credentials = credentials
        self.http_transport = http_transport
        self.storage = storage

    @property
    @abstractmethod
    def authorization_endpoint(self) -> str:
        """Provider's authorization endpoint."""
        pass

    @property
    @abstractmethod
    def access_token_endpoint(self) -> str:
        """Provider's access token endpoint."""
        pass

    def get_storage_key(self) -> str:
        return self.service_name or type(self).__name__

    def get_authorization_uri(self, **params: str) -> str:
        """
        Build the URL the user is sent to for authorization.

        Args:
            **params: Extra query parameters appended to the endpoint

        Returns:
            Full authorization URL with query parameters
        """
        query = {key: value for key, value in params.items() if value is not None}
        separator = "&" if "?" in self.authorization_endpoint else "?"
        return f"{self.authorization_endpoint}{separator}{urlencode(query)}"


class OAuth2Service(OAuthService):
    """
    Base class for OAuth 2.0 providers.

    Providers declare their scopes as ``SCOPE_<NAME>`` string constants.
    Those constants are collected into ``scope_constants`` once, when the
    subclass is defined, and are what the factory resolves friendly scope
    names against.
    """

    scope_delimiter: ClassVar[str] = " "
    scope_constants: ClassVar[Dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        constants: Dict[str, str] = {}
        for klass in reversed(cls.__mro__):
            for key, value in vars(klass).items():
                if key.startswith(SCOPE_PREFIX) and isinstance(value, str):
                    constants[key] = value
        cls.scope_constants = constants

    def __init__(
        self,
        credentials: Credentials,
        http_transport: HttpTransport,
        storage: TokenStorage,
        scopes: Iterable[str] = (),
        **kwargs,
    ):
        super().__init__(credentials, http_transport, storage, **kwargs)
        self.scopes: List[str] = list(scopes)

    @classmethod
    def is_valid_scope(cls, scope: str) -> bool:
        """Check whether a value is one of the provider's declared scopes."""
        return scope in cls.scope_constants.values()

    def get_authorization_uri(self, **params: str) -> str:
        query = {
            "response_type": "code",
            "client_id": self.credentials.consumer_id,
            "redirect_uri": self.credentials.callback_url,
        }
        if self.scopes:
            query["scope"] = self.scope_delimiter.join(self.scopes)
        query.update(params)
        return super().get_authorization_uri(**query)


class OAuth1Service(OAuthService):
    """Base class for OAuth 1.0a providers."""

    def __init__(
        self,
        credentials: Credentials,
        http_transport: HttpTransport,
        storage: TokenStorage,
        signature: Optional[SignatureHelper] = None,
        **kwargs,
    ):
        super().__init__(credentials, http_transport, storage, **kwargs)
        self.signature = signature

    @property
    @abstractmethod
    def request_token_endpoint(self) -> str:
        """Provider's temporary credentials endpoint."""
        pass
