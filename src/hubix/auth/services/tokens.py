"""hubIC token endpoint service.

Exchanges authorization codes for tokens and refreshes access tokens. Both
calls authenticate the application with HTTP Basic auth and expect a 200
with a bearer token payload; any other status is reported as-is, without
trying to interpret an error body.
"""

from __future__ import annotations

import logging

import httpx

from hubix.auth.models.errors import UnexpectedStatus
from hubix.auth.models.result import Err, Ok, Result
from hubix.auth.models.tokens import (
    RefreshedTokenPayload,
    RefreshTokenRequest,
    TokenBundle,
    TokenPayload,
    TokenRequest,
)
from hubix.auth.primitives.payload import decode_payload
from hubix.auth.primitives.query import encode_form
from hubix.auth.services.security import basic_auth_header
from hubix.auth.services.transport import build_http_client, send
from hubix.config import HubicConfig

logger = logging.getLogger(__name__)


class OAuth2TokenManager:
    """Manages hubIC token exchange and refresh operations.

    Handles the token endpoint interactions including:
    - Authorization code to access token exchange
    - Access token refresh

    Uses application/x-www-form-urlencoded bodies with client credentials in
    the Authorization header.
    """

    def __init__(
        self,
        config: HubicConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.config = config or HubicConfig()
        self._owns_client = http_client is None
        self._http_client = http_client or build_http_client(self.config.timeout)

    async def exchange_code(
        self, client_id: str, client_secret: str, code: str, redirect_uri: str
    ) -> Result[TokenBundle]:
        """Exchange an authorization code for access and refresh tokens.

        Returns:
            Ok(TokenBundle) with all three fields set, or Err(TransportError |
            UnexpectedStatus | JsonParseError | JsonShapeError)
        """
        token_request = TokenRequest(code=code, redirect_uri=redirect_uri)
        logger.info(f"Exchanging code for access token: POST {self.config.token_url}")
        return await self._post_token_request(
            client_id, client_secret, token_request.to_form_pairs(), TokenPayload
        )

    async def refresh_token(
        self, client_id: str, client_secret: str, refresh_token: str
    ) -> Result[TokenBundle]:
        """Obtain a new access token using a refresh token.

        Returns:
            Ok(TokenBundle) without a refresh token, or Err(TransportError |
            UnexpectedStatus | JsonParseError | JsonShapeError)
        """
        refresh_request = RefreshTokenRequest(refresh_token=refresh_token)
        logger.info(f"Refreshing access token: POST {self.config.token_url}")
        return await self._post_token_request(
            client_id,
            client_secret,
            refresh_request.to_form_pairs(),
            RefreshedTokenPayload,
        )

    async def _post_token_request(
        self,
        client_id: str,
        client_secret: str,
        form_pairs: list[tuple[str, str]],
        payload_model: type[TokenPayload] | type[RefreshedTokenPayload],
    ) -> Result[TokenBundle]:
        headers = self.config.request_headers()
        headers["Authorization"] = basic_auth_header(client_id, client_secret)

        logger.debug(
            f"Token request: grant_type={dict(form_pairs)['grant_type']}, "
            f"client_id={client_id}"
        )

        result = await send(
            self._http_client,
            "POST",
            self.config.token_url,
            headers,
            content=encode_form(form_pairs),
        )
        if result.is_error():
            return result

        response = result.value
        if response.status_code != 200:
            logger.warning(f"Token endpoint returned {response.status_code}")
            return Err(UnexpectedStatus(response.status_code))

        payload = decode_payload(response.content, payload_model)
        if payload.is_error():
            logger.warning(f"Invalid token response: {payload.error.describe()}")
            return payload

        logger.info("Token request successful")
        return Ok(payload.value.to_bundle())

    async def close(self) -> None:
        """Close the HTTP client if this manager created it."""
        if self._owns_client:
            await self._http_client.aclose()
