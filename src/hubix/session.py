"""Authenticated hubIC session.

Keeps the tokens of one account in a ``TokenStore`` and refreshes the access
token when it is about to expire.
"""

from __future__ import annotations

import logging

from hubix.account.credentials import AccountCredentials, HubicAccount
from hubix.auth.models.errors import NotAuthenticated
from hubix.auth.models.result import Err, Ok, Result
from hubix.auth.models.tokens import TokenState
from hubix.auth.oauth_client import HubicOAuth2Client
from hubix.config import AppCredentials
from hubix.store import TokenStore

logger = logging.getLogger(__name__)


class HubicSession:
    """Token lifecycle for a single hubIC account.

    Args:
        client: Client used for login and refresh
        store: Where the current tokens live
        app_credentials: Application id and secret
        account: Account API client, created from the client config if omitted
    """

    def __init__(
        self,
        client: HubicOAuth2Client,
        store: TokenStore,
        app_credentials: AppCredentials,
        account: HubicAccount | None = None,
        buffer_seconds: float = 30.0,
    ):
        self.client = client
        self.store = store
        self.app_credentials = app_credentials
        self.account = account or HubicAccount(client.config)
        self.buffer_seconds = buffer_seconds

    async def login(
        self, redirect_url: str, username: str, password: str
    ) -> Result[TokenState]:
        """Run the full authentication flow and store the resulting tokens."""
        result = await self.client.authenticate(
            self.app_credentials.client_id,
            self.app_credentials.client_secret,
            redirect_url,
            username,
            password,
        )
        if result.is_error():
            return result

        state = TokenState.from_bundle(result.value)
        self.store.set(state)
        logger.info("Stored new hubIC tokens")
        return Ok(state)

    async def get_access_token(self) -> Result[str]:
        """Return a valid access token, refreshing it first if needed.

        A failed refresh leaves the stored tokens untouched.
        """
        state = self.store.get()
        if state is None:
            return Err(NotAuthenticated("no tokens stored, log in first"))

        if state.is_valid(self.buffer_seconds):
            return Ok(state.access_token)

        if not state.can_refresh():
            logger.warning("Token expired and cannot be refreshed")
            return Err(
                NotAuthenticated("access token expired and no refresh token stored")
            )

        result = await self.client.refresh_token(
            self.app_credentials.client_id,
            self.app_credentials.client_secret,
            state.refresh_token,
        )
        if result.is_error():
            logger.error(f"Token refresh failed: {result.error.describe()}")
            return result

        new_state = state.refreshed(result.value)
        self.store.set(new_state)
        logger.info("Successfully refreshed access token")
        return Ok(new_state.access_token)

    async def get_account_credentials(self) -> Result[AccountCredentials]:
        token = await self.get_access_token()
        if token.is_error():
            return token
        return await self.account.get_credentials(token.value)

    async def close(self) -> None:
        await self.account.close()
        await self.client.close()
