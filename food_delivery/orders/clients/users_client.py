"""
HTTP client for communicating with the Users service.

This module retrieves user records from the Users microservice for the
order-with-user read. Every call is a single GET bounded by
``UPSTREAM_TIMEOUT``; there is no retry.
"""
import logging
import httpx
from typing import Optional

from ... import config

logger = logging.getLogger(__name__)

TIMEOUT = config.UPSTREAM_TIMEOUT  # seconds


class UserServiceError(Exception):
    """The Users service could not provide the requested user."""


def get_transport() -> Optional[httpx.AsyncBaseTransport]:
    """
    Dependency providing the transport for outbound calls.

    Returns None so httpx opens real connections; tests override it to route
    calls to an in-process app or a stub.
    """
    return None


async def get_user(
    user_id: int,
    base_url: str = config.USER_SERVICE_URL,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict:
    """
    Retrieve user data from the Users service.

    Args:
        user_id: The ID of the user to retrieve
        base_url: Root URL of the Users service
        transport: Optional httpx transport (see get_transport)

    Returns:
        The ``data`` object of the Users service envelope

    Raises:
        UserServiceError: On network error, timeout, non-2xx status or a
            response that is not an envelope holding a user object
    """
    url = f"{base_url}/users/{user_id}"
    try:
        async with httpx.AsyncClient(timeout=TIMEOUT, transport=transport) as client:
            response = await client.get(url)
            response.raise_for_status()
            payload = response.json()
    except httpx.HTTPStatusError as e:
        logger.error(f"GET {url} answered {e.response.status_code}")
        raise UserServiceError(f"Request failed with status code {e.response.status_code}") from e
    except httpx.HTTPError as e:
        logger.error(f"GET {url} failed: {e!r}")
        raise UserServiceError(str(e) or e.__class__.__name__) from e
    except ValueError as e:
        logger.error(f"GET {url} returned malformed JSON: {e}")
        raise UserServiceError(f"Malformed JSON from user service: {e}") from e

    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, dict):
        raise UserServiceError("User service response has no user data")
    return data
