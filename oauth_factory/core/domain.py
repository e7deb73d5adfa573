"""
Core domain models for OAuth service resolution.

These models are independent of any transport, storage or provider
implementation.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProtocolVersion(str, Enum):
    """OAuth protocol generation a service implementation speaks."""

    OAUTH1 = "OAuth1"
    OAUTH2 = "OAuth2"


class Credentials(BaseModel):
    """
    Consumer credentials issued by an OAuth provider.

    Owned by the caller and handed by reference to every service built from
    it. Frozen so constructed services can never mutate it.
    """

    model_config = ConfigDict(frozen=True)

    consumer_id: str = Field(description="Client identifier issued by the provider")
    consumer_secret: str = Field(description="Client secret issued by the provider")
    callback_url: Optional[str] = Field(
        default=None, description="Redirect target registered with the provider"
    )


def normalize_service_name(name: str) -> str:
    """Uppercase the first character of a provider name, leave the rest alone."""
    return name[:1].upper() + name[1:]
