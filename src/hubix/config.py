"""Configuration for the hubIC client.

Defaults match the production hubIC API. Every value can be overridden from
the environment so the command-line entry point can run against a staging
server without code changes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

HUBIX_VERSION = "0.1.0"


@dataclass(frozen=True)
class HubicConfig:
    """Endpoints, scope and timeouts used by every hubIC service."""

    base_url: str = "https://api.hubic.com"
    authorize_path: str = "/oauth/auth/"
    token_path: str = "/oauth/token/"
    credentials_path: str = "/1.0/account/credentials"
    scope: str = "credentials.r"
    timeout: float = 30.0
    account_timeout: float = 5.0
    user_agent: str = f"hubiX/{HUBIX_VERSION}"

    @property
    def authorize_url(self) -> str:
        return self.base_url + self.authorize_path

    @property
    def token_url(self) -> str:
        return self.base_url + self.token_path

    @property
    def credentials_url(self) -> str:
        return self.base_url + self.credentials_path

    def scope_params(self) -> list[tuple[str, str]]:
        """Scope as submitted with the login form.

        ``credentials.r`` in the authorization URL becomes ``credentials=r``
        in the form body.
        """
        params = []
        for item in self.scope.split(","):
            name, _, level = item.partition(".")
            params.append((name, level))
        return params

    def request_headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/x-www-form-urlencoded",
            "Connection": "Close",
            "Cache-Control": "no-cache, must-revalidate",
            "User-Agent": self.user_agent,
        }

    @classmethod
    def from_env(cls, prefix: str = "HUBIC_") -> HubicConfig:
        """Build a config from ``<prefix>BASE_URL``, ``<prefix>TIMEOUT`` etc.

        Raises:
            ValueError: If a timeout variable is not a number
        """
        overrides: dict[str, object] = {}
        for name in ("base_url", "user_agent", "scope"):
            value = os.getenv(prefix + name.upper())
            if value:
                overrides[name] = value
        for name in ("timeout", "account_timeout"):
            value = os.getenv(prefix + name.upper())
            if value:
                try:
                    overrides[name] = float(value)
                except ValueError as e:
                    raise ValueError(
                        f"{prefix + name.upper()} must be a number, got {value!r}"
                    ) from e
        return cls(**overrides)


@dataclass(frozen=True)
class AppCredentials:
    """Client id and secret of the hubIC application."""

    client_id: str
    client_secret: str = field(repr=False)

    @classmethod
    def from_env(cls, prefix: str = "HUBIC_") -> AppCredentials:
        return cls(
            client_id=os.environ[prefix + "CLIENT_ID"],
            client_secret=os.environ[prefix + "CLIENT_SECRET"],
        )


@dataclass(frozen=True)
class UserCredentials:
    """Login and password of the hubIC account owning the application."""

    username: str
    password: str = field(repr=False)

    @classmethod
    def from_env(cls, prefix: str = "HUBIC_") -> UserCredentials:
        return cls(
            username=os.environ[prefix + "USERNAME"],
            password=os.environ[prefix + "PASSWORD"],
        )
