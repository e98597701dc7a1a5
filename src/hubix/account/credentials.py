"""hubIC account credentials service.

Fetches the delegated OpenStack Swift credentials (token and storage
endpoint) hubIC issues to an authenticated application.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import BaseModel, StrictStr

from hubix.auth.models.errors import UnexpectedStatus
from hubix.auth.models.result import Err, Ok, Result
from hubix.auth.primitives.payload import decode_payload
from hubix.auth.services.security import bearer_auth_header
from hubix.auth.services.transport import build_http_client, send
from hubix.config import HubicConfig

logger = logging.getLogger(__name__)


class AccountCredentials(BaseModel):
    """Storage credentials returned by ``/1.0/account/credentials``."""

    token: StrictStr
    expires: StrictStr
    endpoint: StrictStr


class HubicAccount:
    """Client for the hubIC account API, authenticated with an access token."""

    def __init__(
        self,
        config: HubicConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the account client.

        Args:
            config: Endpoints and timeouts. Requests use ``account_timeout``.
            http_client: Optional client to send requests with
        """
        self.config = config or HubicConfig()
        self._owns_client = http_client is None
        self._http_client = http_client or build_http_client(
            self.config.account_timeout
        )

    async def get_credentials(self, access_token: str) -> Result[AccountCredentials]:
        """Fetch storage credentials for the account owning ``access_token``.

        Returns:
            Ok(AccountCredentials), or Err(TransportError | UnexpectedStatus |
            JsonParseError | JsonShapeError)
        """
        logger.info("Fetching account credentials")

        headers = self.config.request_headers()
        headers["Authorization"] = bearer_auth_header(access_token)

        result = await send(
            self._http_client, "GET", self.config.credentials_url, headers
        )
        if result.is_error():
            return result

        response = result.value
        if response.status_code != 200:
            logger.warning(
                "Unexpected HTTP code while fetching account credentials, "
                f"status_code = {response.status_code}"
            )
            return Err(UnexpectedStatus(response.status_code))

        credentials = decode_payload(response.content, AccountCredentials)
        if credentials.is_error():
            logger.warning(
                f"Invalid account credentials response: {credentials.error.describe()}"
            )
            return credentials

        logger.info("Successfully fetched account credentials")
        return Ok(credentials.value)

    async def close(self) -> None:
        if self._owns_client:
            await self._http_client.aclose()
