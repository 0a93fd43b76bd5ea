"""
Authentication utilities for the Kraken REST API

Private endpoints are authenticated with two headers:
- API-Key:  the public key identifier
- API-Sign: base64(HMAC-SHA512(secret, path + SHA256(nonce + postdata)))

See https://docs.kraken.com/rest/#section/Authentication/Headers-and-Signature
"""

import base64
import binascii
import hashlib
import hmac
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple
from urllib.parse import urlencode

from kraken_client.config import Settings
from kraken_client.exceptions import MissingNonceError

logger = logging.getLogger(__name__)

Params = Sequence[Tuple[str, str]]


@dataclass(frozen=True)
class Credential:
    """API key plus the raw (already base64-decoded) secret."""

    key: str
    secret: bytes = field(repr=False)

    @classmethod
    def from_base64(cls, key: str, secret_b64: str) -> "Credential":
        """
        Build a credential from the key and secret exactly as Kraken displays them

        Args:
            key: API key
            secret_b64: Private key, base64 text

        Returns:
            Credential holding the decoded secret bytes

        Raises:
            ValueError: If the key is empty or the secret is not valid base64
        """
        if not key:
            raise ValueError("API key must not be empty")
        try:
            secret = base64.b64decode(secret_b64, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"API secret is not valid base64: {e}") from e
        if not secret:
            raise ValueError("API secret must not be empty")
        return cls(key=key, secret=secret)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Credential":
        """Load the credential from a Settings instance."""
        return cls.from_base64(settings.kraken_api_key, settings.kraken_api_secret)


class NonceGenerator:
    """
    Strictly increasing millisecond nonces.

    Starts at the current wall-clock time. When two calls land in the same
    millisecond (or the clock steps backwards) the previous value plus one is
    used instead, so every nonce handed out by one generator is larger than
    the last. Kraken still sees them in network-arrival order; callers that
    fire overlapping requests must serialize them if arrival order matters.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._last = 0

    def next(self) -> str:
        with self._lock:
            now = int(time.time() * 1000)
            self._last = max(now, self._last + 1)
            return str(self._last)


_default_nonce_generator: Optional[NonceGenerator] = None
_default_lock = threading.Lock()


def get_nonce_generator() -> NonceGenerator:
    """Process-wide generator shared by every call that does not bring its own."""
    global _default_nonce_generator

    with _default_lock:
        if _default_nonce_generator is None:
            _default_nonce_generator = NonceGenerator()
        return _default_nonce_generator


def encode_params(params: Params) -> str:
    """Form-encode ordered (name, value) pairs, keeping their order."""
    return urlencode(list(params))


def sign(path: str, params: Params, secret: bytes) -> str:
    """
    Compute the API-Sign header value for a private request

    Args:
        path: API path, e.g. /0/private/Balance
        params: Ordered parameters exactly as they will be sent; must hold one nonce
        secret: Raw secret bytes

    Returns:
        Base64 signature text

    Raises:
        MissingNonceError: If params does not contain exactly one nonce entry
    """
    nonces = [value for name, value in params if name == "nonce"]
    if len(nonces) != 1:
        raise MissingNonceError(f"Signed parameters must contain exactly one nonce, found {len(nonces)}")

    postdata = encode_params(params)
    encoded = (str(nonces[0]) + postdata).encode("utf-8")
    message = path.encode("utf-8") + hashlib.sha256(encoded).digest()

    mac = hmac.new(secret, message, hashlib.sha512)
    return base64.b64encode(mac.digest()).decode("ascii")
