"""
Domain exceptions for service resolution.

All of them are raised synchronously at the offending call. None of them
are retryable: they describe static configuration or usage errors.
"""


class ServiceFactoryError(Exception):
    """Base exception for service factory errors."""

    pass


class InvalidServiceType(ServiceFactoryError):
    """
    Raised when a registration target is not a usable service implementation.

    The target must be a class deriving from OAuth1Service or OAuth2Service.
    """

    pass


class UnknownImplementationType(InvalidServiceType):
    """Raised when a registration target cannot be resolved to a class at all."""

    pass


class UnsupportedOperation(ServiceFactoryError):
    """
    Raised when a caller asks an OAuth1 provider for scopes.

    OAuth1 has no notion of scopes, so silently dropping them would hide a
    programming error.
    """

    pass


class UnsupportedHashAlgorithm(ServiceFactoryError):
    """Raised when a signature helper is asked for an unknown algorithm."""

    pass


class TransportError(ServiceFactoryError):
    """Raised for errors while talking to a provider over HTTP."""

    pass
