"""
Scope resolution against a provider's declared scope constants.
"""

from typing import Iterable, List, Type

from oauth_factory.core.oauth_service import SCOPE_PREFIX, OAuth2Service


def resolve_scopes(
    implementation: Type[OAuth2Service], requested_scopes: Iterable[str]
) -> List[str]:
    """
    Translate friendly scope names into provider scope identifiers.

    ``"email"`` becomes the value of the provider's ``SCOPE_EMAIL`` constant
    when it declares one. Anything else is passed through untouched, so
    callers may also hand in raw provider scopes.

    Args:
        implementation: OAuth2 provider class whose constants are consulted
        requested_scopes: Scopes as supplied by the caller

    Returns:
        One resolved scope per requested scope, in the same order
    """
    constants = implementation.scope_constants
    return [
        constants.get(f"{SCOPE_PREFIX}{scope}".upper(), scope)
        for scope in requested_scopes
    ]
