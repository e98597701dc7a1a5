"""Security utilities for the hubIC authorization flow."""

from __future__ import annotations

import base64
import secrets


def generate_state() -> str:
    """Generate an unguessable OAuth2 state parameter.

    Returns:
        48 random bytes, URL-safe base64 encoded (64 characters)
    """
    return base64.urlsafe_b64encode(secrets.token_bytes(48)).decode("ascii")


def validate_state(expected: str, actual: str) -> bool:
    """Compare the state sent in the authorization request with the echoed one."""
    return secrets.compare_digest(expected.encode("utf-8"), actual.encode("utf-8"))


def basic_auth_header(client_id: str, client_secret: str) -> str:
    token = base64.b64encode(f"{client_id}:{client_secret}".encode()).decode("ascii")
    return f"Basic {token}"


def bearer_auth_header(access_token: str) -> str:
    return f"Bearer {access_token}"
