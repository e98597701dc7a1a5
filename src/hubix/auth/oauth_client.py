"""Complete hubIC authentication client.

Runs the three dependent round-trips of the authorization code flow
(login page, credential submission, code exchange) and refreshes tokens.
Each call is independent: the client keeps no per-flow state, so one
instance can serve concurrent callers.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

import httpx

from hubix.auth.models.errors import OAuth2StateInvalid, TransportError
from hubix.auth.models.flow import (
    AuthorizationChallenge,
    AuthorizationGrant,
    FlowStage,
    FlowTrace,
)
from hubix.auth.models.result import Err, Result
from hubix.auth.models.tokens import TokenBundle
from hubix.auth.services.flow import OAuth2FlowManager
from hubix.auth.services.security import validate_state
from hubix.auth.services.tokens import OAuth2TokenManager
from hubix.auth.services.transport import build_http_client
from hubix.config import HubicConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HubicOAuth2Client:
    """hubIC OAuth2 client emulating a browser login.

    Orchestrates the full flow from login page to tokens, providing a
    high-level interface on top of ``OAuth2FlowManager`` and
    ``OAuth2TokenManager``. All operations return ``Ok`` or ``Err`` values;
    the first failure of a flow is returned unchanged.
    """

    def __init__(
        self,
        config: HubicConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the client.

        Args:
            config: Endpoints and timeouts, defaults to production hubIC
            http_client: Client shared by all services. When omitted one is
                created with the configured timeout and closed in ``close()``.
        """
        self.config = config or HubicConfig()
        self._owns_client = http_client is None
        self._http_client = http_client or build_http_client(self.config.timeout)

        self.flow_manager = OAuth2FlowManager(self.config, self._http_client)
        self.token_manager = OAuth2TokenManager(self.config, self._http_client)

    async def authenticate(
        self,
        client_id: str,
        client_secret: str,
        redirect_url: str,
        username: str,
        password: str,
        *,
        trace: FlowTrace | None = None,
        deadline: float | None = None,
    ) -> Result[TokenBundle]:
        """Log in to hubIC and obtain access and refresh tokens.

        Performs, strictly in sequence:
        1. Request the login page and generate the OAuth2 state
        2. Submit the user credentials and read the code from the redirect
        3. Verify the echoed state and exchange the code for tokens

        Args:
            client_id: hubIC application id
            client_secret: hubIC application secret
            redirect_url: Redirect URI registered for the application
            username: hubIC account login
            password: hubIC account password
            trace: Optional trace that records the stages visited
            deadline: Optional overall time limit in seconds

        Returns:
            Ok(TokenBundle), or Err with the first failure encountered.
            A state mismatch yields Err(OAuth2StateInvalid) and the code is
            not exchanged.
        """
        trace = trace if trace is not None else FlowTrace()
        result = await self._with_deadline(
            self._authenticate(
                client_id, client_secret, redirect_url, username, password, trace
            ),
            deadline,
        )
        if result.is_error() and trace.current is not FlowStage.FAILED:
            trace.fail(result.error)
        return result

    async def _authenticate(
        self,
        client_id: str,
        client_secret: str,
        redirect_url: str,
        username: str,
        password: str,
        trace: FlowTrace,
    ) -> Result[TokenBundle]:
        challenge = await self.request_token(client_id, redirect_url)
        if challenge.is_error():
            logger.warning("Authenticate: Unable to request token")
            trace.fail(challenge.error)
            return challenge
        logger.info("Authenticate: Requested token")
        trace.advance(FlowStage.TOKEN_REQUESTED)

        grant = await self.confirm_access(
            challenge.value.action_url,
            challenge.value.action_params,
            username,
            password,
        )
        if grant.is_error():
            logger.warning("Authenticate: Unable to get code")
            trace.fail(grant.error)
            return grant

        if not validate_state(challenge.value.state, grant.value.state):
            logger.warning("Authenticate: Received invalid OAuth2 state")
            error = OAuth2StateInvalid()
            trace.fail(error)
            return Err(error)
        logger.info("Authenticate: Got code")
        trace.advance(FlowStage.ACCESS_CONFIRMED)

        tokens = await self.exchange_code(
            client_id, client_secret, grant.value.code, redirect_url
        )
        if tokens.is_error():
            logger.warning("Authenticate: Unable to exchange code")
            trace.fail(tokens.error)
            return tokens

        logger.info("Authenticate: Got access token")
        trace.advance(FlowStage.CODE_EXCHANGED)
        return tokens

    async def request_token(
        self, client_id: str, redirect_uri: str
    ) -> Result[AuthorizationChallenge]:
        return await self.flow_manager.request_token(client_id, redirect_uri)

    async def confirm_access(
        self,
        action_url: str,
        action_params: tuple[tuple[str, str], ...],
        username: str,
        password: str,
    ) -> Result[AuthorizationGrant]:
        return await self.flow_manager.confirm_access(
            action_url, action_params, username, password
        )

    async def exchange_code(
        self, client_id: str, client_secret: str, code: str, redirect_uri: str
    ) -> Result[TokenBundle]:
        return await self.token_manager.exchange_code(
            client_id, client_secret, code, redirect_uri
        )

    async def refresh_token(
        self,
        client_id: str,
        client_secret: str,
        refresh_token: str,
        *,
        deadline: float | None = None,
    ) -> Result[TokenBundle]:
        """Obtain a new access token. The returned bundle has no refresh token."""
        return await self._with_deadline(
            self.token_manager.refresh_token(client_id, client_secret, refresh_token),
            deadline,
        )

    async def _with_deadline(
        self, operation: Awaitable[Result[T]], deadline: float | None
    ) -> Result[T]:
        if deadline is None:
            return await operation
        try:
            return await asyncio.wait_for(operation, timeout=deadline)
        except asyncio.TimeoutError:
            logger.warning(f"Operation exceeded deadline of {deadline}s")
            return Err(TransportError(f"deadline of {deadline}s exceeded"))

    async def close(self) -> None:
        """Close the shared HTTP client if this client created it."""
        if self._owns_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> HubicOAuth2Client:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
