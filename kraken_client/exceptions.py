"""
Domain exceptions for the Kraken client.

Every failure the client can surface maps to exactly one of these classes so
callers (and the CLI) can tell a dead network apart from a malformed reply,
a broken envelope, or an error reported by the exchange itself.
"""

from typing import List, Optional


class KrakenError(Exception):
    """Base client error."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TransportError(KrakenError):
    """Network or connection failure while talking to the exchange."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class DeserializationError(KrakenError):
    """Response body did not match the expected envelope or result shape."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)


class ProtocolError(KrakenError):
    """Envelope reported no error but carried no result."""

    def __init__(self, message: str = "Envelope has an empty error list but no result"):
        super().__init__(message)


class APIError(KrakenError):
    """The exchange reported one or more business-logic errors."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(", ".join(self.errors))


class MissingNonceError(AssertionError):
    """Signed parameters must carry exactly one nonce entry.

    Raised for bugs in request construction, never for bad network input,
    and therefore not a KrakenError.
    """
