"""
Capability registry mapping provider names to service implementations.
"""

import importlib
import logging
import threading
from typing import Dict, Mapping, Optional, Type, Union

from oauth_factory.core.domain import ProtocolVersion, normalize_service_name
from oauth_factory.core.exceptions import InvalidServiceType, UnknownImplementationType
from oauth_factory.core.oauth_service import OAuth1Service, OAuth2Service, OAuthService

logger = logging.getLogger(__name__)

ServiceClass = Type[OAuthService]
ServiceTable = Mapping[ProtocolVersion, Mapping[str, ServiceClass]]

# Checked in this order, so a class deriving from both counts as OAuth2
CAPABILITY_SETS = (
    (ProtocolVersion.OAUTH2, OAuth2Service),
    (ProtocolVersion.OAUTH1, OAuth1Service),
)


def import_implementation(path: str) -> object:
    """
    Import the object named by ``"package.module:Name"`` or ``"package.module.Name"``.

    Raises:
        UnknownImplementationType: If the module or attribute does not exist
    """
    if ":" in path:
        module_name, _, attribute = path.partition(":")
    else:
        module_name, _, attribute = path.rpartition(".")

    if not module_name or not attribute:
        raise UnknownImplementationType(f"Service class {path} does not exist.")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise UnknownImplementationType(f"Service class {path} does not exist.") from e

    try:
        return getattr(module, attribute)
    except AttributeError as e:
        raise UnknownImplementationType(f"Service class {path} does not exist.") from e


def protocol_version_of(implementation: object) -> ProtocolVersion:
    """
    Return the capability set a class belongs to.

    Raises:
        InvalidServiceType: If the object is not a class deriving from either set
    """
    if isinstance(implementation, type):
        for version, base in CAPABILITY_SETS:
            if issubclass(implementation, base):
                return version

    raise InvalidServiceType(
        f"Service class {implementation!r} must derive from OAuth1Service or OAuth2Service."
    )


class ServiceRegistry:
    """
    Mutable (protocol version, provider name) -> implementation mapping.

    Custom registrations shadow the static defaults table. Entries are never
    removed; registering a name again replaces the previous entry.
    """

    def __init__(self, defaults: Optional[ServiceTable] = None):
        self._defaults = defaults or {}
        self._custom: Dict[ProtocolVersion, Dict[str, ServiceClass]] = {
            version: {} for version in ProtocolVersion
        }
        self._lock = threading.Lock()

    def register(
        self, name: str, implementation: Union[ServiceClass, str]
    ) -> ProtocolVersion:
        """
        Register a custom implementation for a provider name.

        Args:
            name: Provider name; its first character is uppercased
            implementation: Service class or its import path

        Returns:
            The protocol version the implementation was registered under

        Raises:
            UnknownImplementationType: If an import path cannot be resolved
            InvalidServiceType: If the target derives from neither capability set
        """
        if isinstance(implementation, str):
            implementation = import_implementation(implementation)

        version = protocol_version_of(implementation)
        key = normalize_service_name(name)

        with self._lock:
            self._custom[version][key] = implementation

        logger.info(
            f"Registered {version.value} service: {key} -> {implementation.__qualname__}",
            extra={"service_name": key, "protocol_version": version.value},
        )
        return version

    def lookup(self, version: ProtocolVersion, name: str) -> Optional[ServiceClass]:
        """Find the implementation for a normalized name, custom entries first."""
        with self._lock:
            custom = self._custom[version].get(name)
        if custom is not None:
            return custom
        return self._defaults.get(version, {}).get(name)
