"""
Decoding of the Kraken response envelope

Every endpoint answers HTTP 200 with {"error": [...], "result": ...}; the
error list, not the status code, says whether the call succeeded.
"""

import json
import logging
from typing import Any, Optional, Union

from pydantic import TypeAdapter, ValidationError

from kraken_client.exceptions import APIError, DeserializationError, ProtocolError

logger = logging.getLogger(__name__)

_EXCERPT_LEN = 200


def _excerpt(body: Union[str, bytes]) -> str:
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    return body[:_EXCERPT_LEN]


def decode(body: Union[str, bytes], result_type: Optional[Any] = None) -> Any:
    """
    Unwrap an envelope into its result

    Args:
        body: Raw response body (JSON text)
        result_type: Optional type to validate the result into (pydantic model,
            Dict[str, Model], ...). Without one the plain JSON value is returned.

    Returns:
        The result, validated into result_type when given

    Raises:
        DeserializationError: Body is not a well-formed envelope, or the result
            does not fit result_type
        APIError: The exchange returned one or more error strings
        ProtocolError: The error list is empty but there is no result
    """
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DeserializationError(f"Response is not valid JSON: {_excerpt(body)!r}", cause=e) from e

    if not isinstance(payload, dict) or "error" not in payload:
        raise DeserializationError(f"Response is not an envelope: {_excerpt(body)!r}")

    errors = payload["error"]
    if not isinstance(errors, list) or not all(isinstance(e, str) for e in errors):
        raise DeserializationError(f"Envelope error field is not a list of strings: {errors!r}")

    if errors:
        raise APIError(errors)

    result = payload.get("result")
    if result is None:
        raise ProtocolError()

    if result_type is None:
        return result

    try:
        return TypeAdapter(result_type).validate_python(result)
    except ValidationError as e:
        logger.warning(f"Result did not match {result_type!r}: {e.error_count()} validation error(s)")
        raise DeserializationError(f"Result does not match expected shape: {e}", cause=e) from e
