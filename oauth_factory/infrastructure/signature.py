"""
OAuth1 request signature helper.

The signature algorithms themselves come from authlib; this class only
binds them to a set of consumer credentials and a token secret.
"""

from typing import Mapping
from urllib.parse import parse_qsl, urlsplit

from authlib.oauth1.rfc5849.signature import (
    construct_base_string,
    hmac_sha1_signature,
    plaintext_signature,
)

from oauth_factory.core.domain import Credentials
from oauth_factory.core.exceptions import UnsupportedHashAlgorithm

HMAC_SHA1 = "HMAC-SHA1"
PLAINTEXT = "PLAINTEXT"

SUPPORTED_ALGORITHMS = (HMAC_SHA1, PLAINTEXT)


class Signature:
    """Computes OAuth1 request signatures for one set of credentials."""

    def __init__(self, credentials: Credentials, algorithm: str = HMAC_SHA1):
        self.credentials = credentials
        self.token_secret = ""
        self.set_hashing_algorithm(algorithm)

    def set_hashing_algorithm(self, algorithm: str) -> None:
        if algorithm not in SUPPORTED_ALGORITHMS:
            raise UnsupportedHashAlgorithm(
                f"Unsupported hashing algorithm ({algorithm}) used."
            )
        self.algorithm = algorithm

    def set_token_secret(self, token_secret: str) -> None:
        self.token_secret = token_secret

    def get_signature(
        self, uri: str, params: Mapping[str, str], method: str = "POST"
    ) -> str:
        """
        Sign a request.

        Args:
            uri: Request URI; query parameters in it are part of the signature
            params: OAuth and body parameters
            method: HTTP method

        Returns:
            The encoded signature value for the ``oauth_signature`` parameter
        """
        if self.algorithm == PLAINTEXT:
            return plaintext_signature(self.credentials.consumer_secret, self.token_secret)

        query = parse_qsl(urlsplit(uri).query, keep_blank_values=True)
        base_string = construct_base_string(method.upper(), uri, query + list(params.items()))
        return hmac_sha1_signature(
            base_string, self.credentials.consumer_secret, self.token_secret
        )
