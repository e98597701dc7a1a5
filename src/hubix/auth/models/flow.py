"""Authorization flow models for the hubIC login emulation.

Contains the values threaded between the three round-trips of the
authorization code flow and the stage bookkeeping used for diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from hubix.auth.models.errors import AuthError
from hubix.auth.primitives.query import encode_form, first_value


@dataclass(frozen=True)
class AuthorizationRequest:
    """Query parameters of the initial GET against the authorization endpoint."""

    authorization_endpoint: str
    client_id: str
    redirect_uri: str
    scope: str
    state: str
    response_type: str = "code"

    def build_authorization_url(self) -> str:
        """Build the complete authorization URL, parameters in a fixed order."""
        params = [
            ("client_id", self.client_id),
            ("redirect_uri", self.redirect_uri),
            ("scope", self.scope),
            ("state", self.state),
            ("response_type", self.response_type),
        ]
        return f"{self.authorization_endpoint}?{encode_form(params).decode('ascii')}"


@dataclass(frozen=True)
class ActionDescriptor:
    """Target and hidden fields of the login form rendered by hubIC."""

    action_url: str
    action_params: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class AuthorizationChallenge:
    """Result of ``request_token``: the form to submit and the state to expect."""

    descriptor: ActionDescriptor
    state: str

    @property
    def action_url(self) -> str:
        return self.descriptor.action_url

    @property
    def action_params(self) -> tuple[tuple[str, str], ...]:
        return self.descriptor.action_params


@dataclass(frozen=True)
class AuthorizationResponse:
    """Query parameters carried by the post-login redirect."""

    code: str | None = None
    state: str | None = None
    error: str | None = None

    @classmethod
    def from_query(cls, pairs: list[tuple[str, str]]) -> AuthorizationResponse:
        return cls(
            code=first_value(pairs, "code"),
            state=first_value(pairs, "state"),
            error=first_value(pairs, "error"),
        )

    def is_success(self) -> bool:
        return self.error is None and self.code is not None

    def is_error(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class AuthorizationGrant:
    """Authorization code together with the state echoed by the server."""

    code: str
    state: str


class FlowStage(str, Enum):
    START = "start"
    TOKEN_REQUESTED = "token_requested"
    ACCESS_CONFIRMED = "access_confirmed"
    CODE_EXCHANGED = "code_exchanged"
    FAILED = "failed"


@dataclass
class FlowTrace:
    """Stages visited by a single ``authenticate`` call.

    Owned by the caller; the client only appends to it.
    """

    stages: list[FlowStage] = field(default_factory=lambda: [FlowStage.START])
    error: AuthError | None = None

    @property
    def current(self) -> FlowStage:
        return self.stages[-1]

    def advance(self, stage: FlowStage) -> None:
        self.stages.append(stage)

    def fail(self, error: AuthError) -> None:
        self.error = error
        self.stages.append(FlowStage.FAILED)
