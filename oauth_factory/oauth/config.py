"""
Service factory configuration and process-wide factory instance.

The factory itself never reads the environment. Applications that want a
shared instance use get_service_factory(), which is configured from
environment variables on first access.
"""

import logging
import os
import threading
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from oauth_factory.infrastructure.http_transport import DEFAULT_USER_AGENT, HttpxTransport
from oauth_factory.oauth.factory import ServiceFactory

logger = logging.getLogger(__name__)


@dataclass
class FactoryConfig:
    """
    Settings for the default HTTP transport.

    Loaded from environment variables by from_env(); every field has a default
    so partial configuration is fine.
    """

    http_timeout: float = 15.0
    http_max_redirects: int = 5
    http_user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> "FactoryConfig":
        """Load configuration from environment variables."""
        return cls(
            http_timeout=float(os.getenv("OAUTH_HTTP_TIMEOUT", "15.0")),
            http_max_redirects=int(os.getenv("OAUTH_HTTP_MAX_REDIRECTS", "5")),
            http_user_agent=os.getenv("OAUTH_HTTP_USER_AGENT", DEFAULT_USER_AGENT),
        )

    def create_transport(self) -> HttpxTransport:
        return HttpxTransport(
            timeout=self.http_timeout,
            max_redirects=self.http_max_redirects,
            user_agent=self.http_user_agent,
        )


@lru_cache()
def get_factory_config() -> FactoryConfig:
    """Get factory configuration singleton."""
    return FactoryConfig.from_env()


def create_service_factory(config: Optional[FactoryConfig] = None) -> ServiceFactory:
    """
    Create a service factory with the built-in providers.

    Args:
        config: Factory configuration (uses default if not provided)

    Returns:
        ServiceFactory whose default transport follows the configuration
    """
    if config is None:
        config = get_factory_config()

    return ServiceFactory(transport_factory=config.create_transport)


# Global service factory singleton
_service_factory: Optional[ServiceFactory] = None
_service_factory_lock = threading.Lock()


def get_service_factory() -> ServiceFactory:
    """
    Get the service factory singleton.

    Creates it on first access. Safe to call from several threads.
    """
    global _service_factory
    with _service_factory_lock:
        if _service_factory is None:
            _service_factory = create_service_factory()
            logger.info("Created process-wide OAuth service factory")
        return _service_factory


def reset_service_factory() -> None:
    """
    Tear down the service factory singleton.

    Closes the default transport it created and forgets custom
    registrations. Useful for testing with different configurations.
    """
    global _service_factory
    with _service_factory_lock:
        if _service_factory is not None:
            _service_factory.close()
        _service_factory = None
    get_factory_config.cache_clear()
