"""
HTTP forwarding from the Gateway to the backend services.

Requests are relayed with their body, ``Content-Type`` and query string;
no other headers cross the Gateway.
"""
import logging
import httpx
from typing import Optional

from .. import config

logger = logging.getLogger(__name__)

TIMEOUT = config.UPSTREAM_TIMEOUT  # seconds


def get_transport() -> Optional[httpx.AsyncBaseTransport]:
    """
    Dependency providing the transport for upstream calls.

    Returns None so httpx opens real connections; tests override it.
    """
    return None


def describe_failure(exc: httpx.HTTPError) -> str:
    """
    Short cause string for a failed upstream call.

    Prefers the ``message`` of an upstream error envelope, then the status
    line, then the transport error text.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            payload = exc.response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("message"):
            return str(payload["message"])
        return f"Request failed with status code {exc.response.status_code}"
    return str(exc) or exc.__class__.__name__


async def forward(
    method: str,
    url: str,
    params: Optional[str] = None,
    content: Optional[bytes] = None,
    content_type: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.Response:
    """
    Send one request upstream.

    Args:
        method: HTTP method
        url: Absolute backend URL
        params: Raw query string, forwarded verbatim
        content: Raw request body, forwarded verbatim
        content_type: Content-Type of the body
        transport: Optional httpx transport (see get_transport)

    Returns:
        The upstream response (2xx only)

    Raises:
        httpx.HTTPStatusError: If the upstream answered with a non-2xx status
        httpx.HTTPError: On network errors or timeouts
    """
    headers = {"Content-Type": content_type} if content and content_type else None
    logger.debug(f"Forwarding {method} {url}")
    async with httpx.AsyncClient(timeout=TIMEOUT, transport=transport) as client:
        response = await client.request(method, url, params=params, content=content or None, headers=headers)
        response.raise_for_status()
        return response
