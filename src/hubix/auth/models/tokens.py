"""Token models for the hubIC OAuth2 endpoints.

Contains the token endpoint request parameters, the validated JSON payloads
the endpoint answers with, the bundle handed to callers and the state kept by
a token store.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, replace
from typing import Literal

from pydantic import BaseModel, StrictInt, StrictStr


@dataclass(frozen=True)
class TokenRequest:
    """Authorization code exchange parameters."""

    code: str
    redirect_uri: str
    grant_type: str = "authorization_code"

    def to_form_pairs(self) -> list[tuple[str, str]]:
        return [
            ("code", self.code),
            ("redirect_uri", self.redirect_uri),
            ("grant_type", self.grant_type),
        ]


@dataclass(frozen=True)
class RefreshTokenRequest:
    """Access token refresh parameters."""

    refresh_token: str
    grant_type: str = "refresh_token"

    def to_form_pairs(self) -> list[tuple[str, str]]:
        return [
            ("refresh_token", self.refresh_token),
            ("grant_type", self.grant_type),
        ]


class TokenPayload(BaseModel):
    """Successful authorization code exchange response.

    hubIC always issues bearer tokens; any other ``token_type`` is rejected.
    """

    access_token: StrictStr
    expires_in: StrictInt
    refresh_token: StrictStr
    token_type: Literal["Bearer"]

    def to_bundle(self) -> TokenBundle:
        return TokenBundle(
            access_token=self.access_token,
            expires_in=self.expires_in,
            refresh_token=self.refresh_token,
        )


class RefreshedTokenPayload(BaseModel):
    """Successful refresh response. hubIC does not rotate the refresh token."""

    access_token: StrictStr
    expires_in: StrictInt
    token_type: Literal["Bearer"]

    def to_bundle(self) -> TokenBundle:
        return TokenBundle(access_token=self.access_token, expires_in=self.expires_in)


@dataclass(frozen=True)
class TokenBundle:
    """Tokens returned to the caller. ``refresh_token`` is absent after a refresh."""

    access_token: str
    expires_in: int
    refresh_token: str | None = None


@dataclass(frozen=True)
class TokenState:
    """Tokens as kept by a token store, with an absolute expiry."""

    access_token: str
    refresh_token: str | None = None
    expires_at: float | None = None  # Unix timestamp

    @classmethod
    def from_bundle(cls, bundle: TokenBundle, now: float | None = None) -> TokenState:
        now = time.time() if now is None else now
        return cls(
            access_token=bundle.access_token,
            refresh_token=bundle.refresh_token,
            expires_at=now + bundle.expires_in,
        )

    def is_valid(self, buffer_seconds: float = 30.0, now: float | None = None) -> bool:
        """Check if access token is valid with optional buffer.

        Args:
            buffer_seconds: Treat the token as expired this many seconds early
            now: Current Unix time, defaults to ``time.time()``
        """
        if self.expires_at is None:
            return True

        now = time.time() if now is None else now
        return now < (self.expires_at - buffer_seconds)

    def can_refresh(self) -> bool:
        return bool(self.refresh_token)

    def refreshed(self, bundle: TokenBundle, now: float | None = None) -> TokenState:
        """Return a new state for a refreshed access token.

        The existing refresh token is kept unless the server issued a new one.
        """
        now = time.time() if now is None else now
        return replace(
            self,
            access_token=bundle.access_token,
            refresh_token=bundle.refresh_token or self.refresh_token,
            expires_at=now + bundle.expires_in,
        )
