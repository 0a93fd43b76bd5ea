"""
HTTP dispatch for public and private Kraken endpoints.

Returns raw body text; turning it into a result is the caller's job
(see envelope.decode).
"""

import logging
from typing import Optional

import httpx

from kraken_client.config import get_settings
from kraken_client.exceptions import TransportError
from kraken_client.kraken_api.auth import (
    Credential,
    NonceGenerator,
    Params,
    encode_params,
    get_nonce_generator,
    sign,
)

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"


def build_url(base_url: str, path: str, query: Params = ()) -> str:
    """Join the API origin and path, appending the query string if any."""
    url = f"{base_url}{path}"
    if query:
        url = f"{url}?{encode_params(query)}"
    return url


async def _send(
    method: str,
    url: str,
    headers: dict,
    body: Optional[str],
    client: Optional[httpx.AsyncClient],
) -> str:
    content = body.encode("utf-8") if body else None
    try:
        if client is not None:
            response = await client.request(method, url, headers=headers, content=content)
        else:
            async with httpx.AsyncClient(timeout=get_settings().kraken_request_timeout) as own_client:
                response = await own_client.request(method, url, headers=headers, content=content)
    except httpx.HTTPError as e:
        logger.warning(f"Transport failure on {method} {url.split('?')[0]}: {e!r}")
        raise TransportError(f"{method} {url.split('?')[0]} failed: {e}", cause=e) from e

    # Status is not checked here: Kraken reports failures through the envelope
    if response.status_code != 200:
        logger.debug(f"{method} {url.split('?')[0]} returned HTTP {response.status_code}")
    return response.text


async def public_request(
    method: str,
    path: str,
    params: Params = (),
    *,
    client: Optional[httpx.AsyncClient] = None,
    base_url: Optional[str] = None,
) -> str:
    """
    Call an unauthenticated endpoint

    Args:
        method: GET (params go in the query string) or POST (params go in a form body)
        path: API path, e.g. /0/public/Time
        params: Ordered request parameters
        client: Caller-supplied httpx client; a short-lived one is opened if omitted
        base_url: API origin, defaults to the configured kraken_api_url

    Returns:
        Raw response body text
    """
    base_url = base_url or get_settings().kraken_api_url
    method = method.upper()

    if method == "GET":
        url = build_url(base_url, path, params)
        headers = {}
        body = None
    elif method == "POST":
        url = build_url(base_url, path)
        headers = {"Content-Type": FORM_CONTENT_TYPE}
        body = encode_params(params)
    else:
        raise ValueError(f"Unsupported method: {method}")

    logger.debug(f"Public {method} {path}")
    return await _send(method, url, headers, body, client)


async def private_request(
    credential: Credential,
    path: str,
    params: Params = (),
    *,
    method: str = "POST",
    client: Optional[httpx.AsyncClient] = None,
    base_url: Optional[str] = None,
    nonce_generator: Optional[NonceGenerator] = None,
) -> str:
    """
    Call an authenticated endpoint

    A fresh nonce is put first, followed by params in their given order. The
    same sequence is signed and sent as the form body.

    Args:
        credential: API key and decoded secret
        path: API path, e.g. /0/private/Balance
        params: Ordered request parameters (without nonce)
        method: Must be POST; Kraken accepts nothing else for private calls
        client: Caller-supplied httpx client; a short-lived one is opened if omitted
        base_url: API origin, defaults to the configured kraken_api_url
        nonce_generator: Nonce source, defaults to the process-wide generator

    Returns:
        Raw response body text
    """
    if method.upper() != "POST":
        raise ValueError(f"Private endpoints only accept POST, got {method}")

    base_url = base_url or get_settings().kraken_api_url
    nonce_generator = nonce_generator or get_nonce_generator()

    authenticated = [("nonce", nonce_generator.next())]
    authenticated.extend(params)

    postdata = encode_params(authenticated)
    signature = sign(path, authenticated, credential.secret)
    headers = {
        "API-Key": credential.key,
        "API-Sign": signature,
        "Content-Type": FORM_CONTENT_TYPE,
    }

    logger.debug(f"Private POST {path}")
    return await _send("POST", build_url(base_url, path), headers, postdata, client)
