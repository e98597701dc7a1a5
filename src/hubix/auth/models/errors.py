"""Error variants for the hubIC authentication flow.

Every operation returns one of these wrapped in an ``Err`` instead of raising,
so callers can tell transport trouble, unexpected HTTP statuses, OAuth2
rejections and malformed payloads apart without catching anything.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthError:
    """Base for all authentication error variants."""

    def describe(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class TransportError(AuthError):
    """Connection, DNS or timeout failure reported by the HTTP transport."""

    reason: str

    def describe(self) -> str:
        return f"transport error: {self.reason}"


@dataclass(frozen=True)
class UnexpectedStatus(AuthError):
    """A response arrived but its status differs from the one the step expects."""

    status_code: int

    def describe(self) -> str:
        return f"unexpected HTTP status {self.status_code}"


@dataclass(frozen=True)
class OAuth2Error(AuthError):
    """The authorization server put an explicit error code in the redirect."""

    error: str

    def describe(self) -> str:
        return f"OAuth2 error: {self.error}"


@dataclass(frozen=True)
class OAuth2StateInvalid(AuthError):
    """The state echoed by the server does not match the one we generated.

    This indicates either a forged redirect or an authorization server issue,
    so the authorization code that came with it is never exchanged.
    """

    def describe(self) -> str:
        return "OAuth2 state mismatch"


@dataclass(frozen=True)
class JsonParseError(AuthError):
    """Response body was not valid JSON."""

    reason: str

    def describe(self) -> str:
        return f"unable to parse JSON: {self.reason}"


@dataclass(frozen=True)
class JsonShapeError(AuthError):
    """Response JSON lacked required fields or had unexpected values."""

    detail: str = ""

    def describe(self) -> str:
        if not self.detail:
            return "unexpected JSON shape"
        return f"unexpected JSON shape: {self.detail}"


@dataclass(frozen=True)
class ShapeError(AuthError):
    """HTML page or redirect lacked an element the server always provides."""

    detail: str

    def describe(self) -> str:
        return f"unexpected response shape: {self.detail}"


@dataclass(frozen=True)
class NotAuthenticated(AuthError):
    """A session has no usable tokens and cannot obtain them by refreshing."""

    detail: str

    def describe(self) -> str:
        return f"not authenticated: {self.detail}"


class AuthenticationFailed(Exception):
    """Raised by ``Err.unwrap()`` for callers that prefer exceptions."""

    def __init__(self, error: AuthError):
        super().__init__(error.describe())
        self.error = error
