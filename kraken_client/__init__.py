"""Async client for the Kraken REST API"""

from kraken_client.exceptions import (
    APIError,
    DeserializationError,
    KrakenError,
    MissingNonceError,
    ProtocolError,
    TransportError,
)
from kraken_client.kraken_api.auth import Credential, NonceGenerator, sign
from kraken_client.kraken_api.envelope import decode
from kraken_client.kraken_client import KrakenClient

__version__ = "0.9.0"

__all__ = [
    "KrakenClient",
    "Credential",
    "NonceGenerator",
    "sign",
    "decode",
    "KrakenError",
    "TransportError",
    "DeserializationError",
    "ProtocolError",
    "APIError",
    "MissingNonceError",
]
