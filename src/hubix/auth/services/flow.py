"""hubIC login emulation service.

Drives the two browser-facing steps of the authorization code flow: fetching
the login page and submitting the credentials to it. Neither step follows
redirects; the 302 issued after a successful login is where the code lives.
"""

from __future__ import annotations

import logging
from urllib.parse import urljoin

import httpx

from hubix.auth.models.errors import OAuth2Error, ShapeError, UnexpectedStatus
from hubix.auth.models.flow import (
    ActionDescriptor,
    AuthorizationChallenge,
    AuthorizationGrant,
    AuthorizationRequest,
    AuthorizationResponse,
)
from hubix.auth.models.result import Err, Ok, Result
from hubix.auth.primitives.forms import (
    find_single_form,
    find_single_named_input,
    parse_document,
)
from hubix.auth.primitives.query import decode_url_query, encode_form
from hubix.auth.services.security import generate_state
from hubix.auth.services.transport import build_http_client, send
from hubix.config import HubicConfig

logger = logging.getLogger(__name__)

OAUTH_INPUT_NAME = "oauth"


class OAuth2FlowManager:
    """Requests the hubIC login form and submits user credentials to it.

    Handles:
    - State generation for the authorization request
    - Extraction of the form target and hidden ``oauth`` field
    - Form submission and parsing of the resulting redirect
    """

    def __init__(
        self,
        config: HubicConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the flow manager.

        Args:
            config: Endpoints and timeouts, defaults to production hubIC
            http_client: Client to send requests with. When omitted the
                manager creates one and closes it in ``close()``.
        """
        self.config = config or HubicConfig()
        self._owns_client = http_client is None
        self._http_client = http_client or build_http_client(self.config.timeout)

    async def request_token(
        self, client_id: str, redirect_uri: str
    ) -> Result[AuthorizationChallenge]:
        """Start the authorization code flow.

        Generates a fresh state, requests the login page and extracts the form
        target URL and hidden fields from it.

        Returns:
            Ok(AuthorizationChallenge) with the form to submit and the state
            to compare against later, or Err(TransportError | UnexpectedStatus
            | ShapeError)
        """
        state = generate_state()
        auth_request = AuthorizationRequest(
            authorization_endpoint=self.config.authorize_url,
            client_id=client_id,
            redirect_uri=redirect_uri,
            scope=self.config.scope,
            state=state,
        )
        location = auth_request.build_authorization_url()

        logger.info(f"Requesting token: GET {location}")
        result = await send(
            self._http_client, "GET", location, self.config.request_headers()
        )
        if result.is_error():
            return result

        response = result.value
        if response.status_code != 200:
            logger.warning(f"Requesting token: got response {response.status_code}")
            return Err(UnexpectedStatus(response.status_code))

        doc = parse_document(response.content)

        action = find_single_form(doc)
        if action.is_error():
            return action
        oauth_id = find_single_named_input(doc, OAUTH_INPUT_NAME)
        if oauth_id.is_error():
            return oauth_id

        descriptor = ActionDescriptor(
            action_url=action.value,
            action_params=((OAUTH_INPUT_NAME, oauth_id.value),),
        )
        logger.info(
            f"Got response 200, action URL = {descriptor.action_url!r}, "
            f"action params = {descriptor.action_params!r}"
        )
        return Ok(AuthorizationChallenge(descriptor=descriptor, state=state))

    async def confirm_access(
        self,
        action_url: str,
        action_params: tuple[tuple[str, str], ...],
        username: str,
        password: str,
    ) -> Result[AuthorizationGrant]:
        """Submit the login form and read the code from the redirect.

        Args:
            action_url: Form target from ``request_token``, absolute or
                relative to the configured base URL
            action_params: Hidden form fields from ``request_token``
            username: hubIC account login
            password: hubIC account password

        Returns:
            Ok(AuthorizationGrant) with the code and the state echoed by the
            server, or Err(TransportError | UnexpectedStatus | OAuth2Error |
            ShapeError)
        """
        try:
            location = urljoin(self.config.base_url, action_url)
        except ValueError as e:
            return Err(ShapeError(f"invalid form action URL {action_url!r}: {e}"))

        params = [
            *action_params,
            *self.config.scope_params(),
            ("login", username),
            ("user_pwd", password),
            ("action", "accepted"),
        ]

        logged_params = [
            (key, "***" if key == "user_pwd" else value) for key, value in params
        ]
        logger.info(f"Confirming access: POST {location}, params = {logged_params!r}")

        result = await send(
            self._http_client,
            "POST",
            location,
            self.config.request_headers(),
            content=encode_form(params),
        )
        if result.is_error():
            return result

        response = result.value
        if response.status_code != 302:
            logger.warning(f"Confirming access: got response {response.status_code}")
            return Err(UnexpectedStatus(response.status_code))

        redirect_url = response.headers.get("Location")
        if redirect_url is None:
            return Err(ShapeError("302 response without Location header"))

        try:
            auth_response = AuthorizationResponse.from_query(
                decode_url_query(redirect_url)
            )
        except ValueError as e:
            return Err(ShapeError(f"invalid redirect URL {redirect_url!r}: {e}"))

        if auth_response.is_error():
            logger.warning(f"Confirming access: got OAuth2 error {auth_response.error}")
            return Err(OAuth2Error(auth_response.error))

        if not auth_response.is_success():
            return Err(ShapeError("redirect is missing the code parameter"))
        if auth_response.state is None:
            return Err(ShapeError("redirect is missing the state parameter"))

        logger.info("Confirming access: got authorization code")
        return Ok(
            AuthorizationGrant(code=auth_response.code, state=auth_response.state)
        )

    async def close(self) -> None:
        """Close the HTTP client if this manager created it."""
        if self._owns_client:
            await self._http_client.aclose()
