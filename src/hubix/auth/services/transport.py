"""Single-attempt HTTP exchange shared by the hubIC services.

Wraps ``httpx.AsyncClient.request`` so transport failures come back as
``TransportError`` values, URLs httpx rejects as ``ShapeError`` values, and
responses come back untouched. Status handling is left to each step since each
expects a different code. Redirects are never followed, whatever the client was
configured with.
"""

from __future__ import annotations

import logging

import httpx

from hubix.auth.models.errors import ShapeError, TransportError
from hubix.auth.models.result import Err, Ok, Result

logger = logging.getLogger(__name__)


def build_http_client(timeout: float) -> httpx.AsyncClient:
    """Create a client with the given read/write/connect timeout and no redirects."""
    return httpx.AsyncClient(timeout=httpx.Timeout(timeout), follow_redirects=False)


async def send(
    http_client: httpx.AsyncClient,
    method: str,
    url: str,
    headers: dict[str, str],
    content: bytes | None = None,
) -> Result[httpx.Response]:
    try:
        response = await http_client.request(
            method, url, content=content, headers=headers, follow_redirects=False
        )
    except httpx.InvalidURL as e:
        logger.warning(f"Invalid URL for {method} {url!r}: {e}")
        return Err(ShapeError(f"invalid URL {url!r}: {e}"))
    except httpx.HTTPError as e:
        reason = str(e) or type(e).__name__
        logger.warning(f"HTTP error during {method} {url}: {reason}")
        return Err(TransportError(reason))

    logger.debug(f"{method} {url} -> {response.status_code}")
    return Ok(response)
