"""
Service factory: resolves a provider name to a ready-to-use OAuth service.

Responsibilities:
- Hold the capability registry (custom registrations over built-ins)
- Prefer OAuth2 over OAuth1 for the same provider name
- Resolve friendly scope names for OAuth2 providers
- Supply the shared HTTP transport and, for OAuth1, a signature helper
"""

import logging
import threading
from typing import Callable, Optional, Sequence, Union

from oauth_factory.core.domain import Credentials, ProtocolVersion, normalize_service_name
from oauth_factory.core.exceptions import UnsupportedOperation
from oauth_factory.core.oauth_service import OAuthService
from oauth_factory.core.ports import HttpTransport, TokenStorage
from oauth_factory.core.registry import ServiceClass, ServiceRegistry, ServiceTable
from oauth_factory.core.scopes import resolve_scopes
from oauth_factory.infrastructure.http_transport import HttpxTransport
from oauth_factory.infrastructure.oauth1_services import BUILTIN_OAUTH1_SERVICES
from oauth_factory.infrastructure.oauth2_services import BUILTIN_OAUTH2_SERVICES
from oauth_factory.infrastructure.signature import Signature

logger = logging.getLogger(__name__)

BUILTIN_SERVICES: ServiceTable = {
    ProtocolVersion.OAUTH2: BUILTIN_OAUTH2_SERVICES,
    ProtocolVersion.OAUTH1: BUILTIN_OAUTH1_SERVICES,
}


class ServiceFactory:
    """
    Builds OAuth service instances by provider name.

    The only state kept between calls is the registry and the default HTTP
    transport, which is created once on first use unless one was set.
    """

    def __init__(
        self,
        http_transport: Optional[HttpTransport] = None,
        defaults: Optional[ServiceTable] = None,
        transport_factory: Callable[[], HttpTransport] = HttpxTransport,
    ):
        """
        Initialize the factory.

        Args:
            http_transport: Transport handed to every service; created lazily if omitted
            defaults: Built-in table consulted when no custom entry exists
            transport_factory: Builds the default transport on first use
        """
        self._registry = ServiceRegistry(BUILTIN_SERVICES if defaults is None else defaults)
        self._http_transport = http_transport
        self._transport_factory = transport_factory
        self._owns_transport = False
        self._transport_lock = threading.Lock()

    def set_http_transport(self, http_transport: HttpTransport) -> "ServiceFactory":
        """Use the given transport for every service created from now on."""
        with self._transport_lock:
            self._http_transport = http_transport
            self._owns_transport = False
        return self

    def register_service(
        self, service_name: str, implementation: Union[ServiceClass, str]
    ) -> "ServiceFactory":
        """
        Register a custom service implementation.

        Args:
            service_name: Provider name (e.g., "github")
            implementation: Class deriving from OAuth1Service or OAuth2Service,
                or its import path ("package.module:Class")

        Returns:
            The factory, so registrations can be chained

        Raises:
            UnknownImplementationType: If an import path cannot be resolved
            InvalidServiceType: If the class derives from neither service base
        """
        self._registry.register(service_name, implementation)
        return self

    def get_http_transport(self) -> HttpTransport:
        with self._transport_lock:
            if self._http_transport is None:
                self._http_transport = self._transport_factory()
                self._owns_transport = True
                logger.debug("Created default HTTP transport")
            return self._http_transport

    def create_service(
        self,
        service_name: str,
        credentials: Credentials,
        storage: TokenStorage,
        scopes: Sequence[str] = (),
    ) -> Optional[OAuthService]:
        """
        Create a service for a provider.

        An OAuth2 implementation is always preferred when one exists for the
        name; OAuth1 is used only as a fallback.

        Args:
            service_name: Provider name; only its first character is case-folded
            credentials: Consumer credentials for the provider
            storage: Token storage handed to the service
            scopes: Scopes to request (OAuth2 only)

        Returns:
            The constructed service, or None if no implementation exists

        Raises:
            UnsupportedOperation: If scopes are passed for an OAuth1-only provider
        """
        name = normalize_service_name(service_name)
        http_transport = self.get_http_transport()

        v2_class = self._registry.lookup(ProtocolVersion.OAUTH2, name)
        if v2_class is not None:
            resolved_scopes = resolve_scopes(v2_class, scopes)
            logger.debug(
                f"Creating OAuth2 service {name} with scopes {resolved_scopes}",
                extra={
                    "service_name": name,
                    "protocol_version": ProtocolVersion.OAUTH2.value,
                    "scopes": resolved_scopes,
                },
            )
            return v2_class(credentials, http_transport, storage, scopes=resolved_scopes)

        v1_class = self._registry.lookup(ProtocolVersion.OAUTH1, name)
        if v1_class is not None:
            if scopes:
                raise UnsupportedOperation(
                    f"Scopes passed to create_service but an OAuth1 service was requested for {name}."
                )
            logger.debug(
                f"Creating OAuth1 service {name}",
                extra={"service_name": name, "protocol_version": ProtocolVersion.OAUTH1.value},
            )
            return v1_class(
                credentials, http_transport, storage, signature=Signature(credentials)
            )

        logger.debug(
            f"No OAuth service implementation found for {name}",
            extra={"service_name": name},
        )
        return None

    def close(self) -> None:
        """Close the default transport if this factory created it."""
        with self._transport_lock:
            if self._owns_transport and self._http_transport is not None:
                self._http_transport.close()
                self._http_transport = None
                self._owns_transport = False
