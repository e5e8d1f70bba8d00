"""HTTP transport for helpdesk API calls"""
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Any, AsyncIterator, Dict, Optional
from urllib.parse import urlparse
import logging

import httpx

from helpdesk_bridge.config import PROBE_TIMEOUT, REQUEST_TIMEOUT
from helpdesk_bridge.models.helpdesk import HelpdeskSettings
from helpdesk_bridge.services.errors import ApiError, TransportError
from helpdesk_bridge.services.vendors import get_vendor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HelpdeskResponse:
    """A 2xx helpdesk response; data is None when the body was not JSON"""
    status_code: int
    body: str
    data: Any = None


@asynccontextmanager
async def http_client(
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = REQUEST_TIMEOUT,
) -> AsyncIterator[httpx.AsyncClient]:
    """Use the given client, or open a short-lived one"""
    if client is not None:
        yield client
        return
    async with httpx.AsyncClient(timeout=timeout) as owned:
        yield owned


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


async def post_json(
    url: str,
    payload: Dict[str, Any],
    headers: Dict[str, str],
    client: Optional[httpx.AsyncClient] = None,
) -> HelpdeskResponse:
    """
    POST a JSON body once

    Raises:
        TransportError: No response (DNS, TLS, timeout, connection reset)
        ApiError: Response status outside 2xx; body kept verbatim
    """
    try:
        async with http_client(client) as http:
            response = await http.post(url, json=payload, headers=headers, timeout=REQUEST_TIMEOUT)
    except httpx.RequestError as e:
        raise TransportError(str(e) or e.__class__.__name__, original=e)

    body = response.text
    logger.debug(f"Response code: {response.status_code}; Body: {body}")

    if not is_success(response.status_code):
        raise ApiError(response.status_code, body)

    try:
        data = response.json()
    except ValueError:
        logger.warning(f"Helpdesk returned {response.status_code} with a non-JSON body")
        data = None

    return HelpdeskResponse(status_code=response.status_code, body=body, data=data)


def validate_helpdesk_url(value: Optional[str]) -> bool:
    """Absolute http(s) URL with a host"""
    if not value or any(ch.isspace() for ch in value):
        return False
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


async def validate_credentials(
    settings: HelpdeskSettings,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[bool]:
    """
    Probe the helpdesk with a read-only request

    Returns:
        None if no URL is configured (nothing to check against),
        False for an empty key, a network failure or a non-2xx answer,
        True otherwise
    """
    if not (settings.api_key or "").strip():
        return False

    base_url = (settings.base_url or "").strip().rstrip("/")
    if not base_url:
        return None

    vendor = get_vendor(settings.vendor)
    headers = vendor.auth_headers(settings.api_key.strip(), (settings.api_secret or "").strip())

    try:
        async with http_client(client, timeout=PROBE_TIMEOUT) as http:
            response = await http.get(
                f"{base_url}{vendor.probe_path}",
                headers=headers,
                timeout=PROBE_TIMEOUT
            )
    except httpx.RequestError as e:
        logger.warning(f"{vendor.display_name} credential check failed: {e}")
        return False

    if not is_success(response.status_code):
        logger.warning(f"{vendor.display_name} credential check returned {response.status_code}")
        return False
    return True
