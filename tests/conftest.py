import asyncio
from urllib.parse import parse_qsl, urlencode

import httpx
import pytest

LOGIN_PAGE = """<!DOCTYPE html>
<html>
  <body>
    <form action="/oauth/auth/" method="POST">
      <input type="hidden" name="oauth" value="{oauth_id}">
      <input type="text" name="login">
      <input type="password" name="user_pwd">
      <button type="submit" name="action" value="accepted">Accept</button>
    </form>
  </body>
</html>
"""


class FakeHubic:
    """In-process stand-in for the hubIC OAuth2 and account endpoints."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._states: dict[str, tuple[str, str]] = {}

        self.login_page_status = 200
        self.login_page: str | None = None
        self.confirm_status = 302
        self.redirect_error: str | None = None
        self.echoed_state: str | None = None
        self.token_status = 200
        self.token_body: str | None = None
        self.refresh_body: str | None = None
        self.credentials_status = 200
        self.credentials_body: str | None = None
        self.fail_on: tuple[str, str] | None = None
        self.delay = 0.0

    @property
    def paths(self) -> list[tuple[str, str]]:
        return [(request.method, request.url.path) for request in self.requests]

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if self.delay:
            await asyncio.sleep(self.delay)
        if key == self.fail_on:
            raise httpx.ConnectError("connection refused", request=request)

        if key == ("GET", "/oauth/auth/"):
            return self._login_page(request)
        if key == ("POST", "/oauth/auth/"):
            return self._confirm(request)
        if key == ("POST", "/oauth/token/"):
            return self._token(request)
        if key == ("GET", "/1.0/account/credentials"):
            return httpx.Response(
                self.credentials_status,
                text=self.credentials_body
                or '{"token": "swift-token", "expires": "2026-10-20T10:00:00+02:00",'
                ' "endpoint": "https://lb1.hubic.ovh.net/v1/AUTH_abc"}',
            )
        return httpx.Response(404)

    def _login_page(self, request: httpx.Request) -> httpx.Response:
        oauth_id = f"oauth-{len(self._states) + 1}"
        self._states[oauth_id] = (
            request.url.params["state"],
            request.url.params["redirect_uri"],
        )
        html = self.login_page or LOGIN_PAGE.format(oauth_id=oauth_id)
        return httpx.Response(self.login_page_status, html=html)

    def _confirm(self, request: httpx.Request) -> httpx.Response:
        form = dict(parse_qsl(request.content.decode()))
        state, redirect_uri = self._states.get(
            form.get("oauth", ""), ("", "https://example.com/callback")
        )
        if self.redirect_error:
            query = {"error": self.redirect_error}
        else:
            query = {
                "code": f"code-for-{form['login']}",
                "state": self.echoed_state or state,
            }
        return httpx.Response(
            self.confirm_status,
            headers={"Location": f"{redirect_uri}?{urlencode(query)}"},
        )

    def _token(self, request: httpx.Request) -> httpx.Response:
        form = dict(parse_qsl(request.content.decode()))
        if form["grant_type"] == "refresh_token":
            body = self.refresh_body or (
                '{"access_token": "refreshed-access", "expires_in": 21600,'
                ' "token_type": "Bearer"}'
            )
        else:
            body = self.token_body or (
                f'{{"access_token": "access-{form["code"]}", "expires_in": 21600,'
                ' "refresh_token": "refresh-xyz", "token_type": "Bearer"}'
            )
        return httpx.Response(self.token_status, text=body)


@pytest.fixture
def fake_hubic() -> FakeHubic:
    return FakeHubic()


@pytest.fixture
async def http_client(fake_hubic: FakeHubic):
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(fake_hubic.handle),
        base_url="https://api.hubic.com",
    )
    yield client
    await client.aclose()
