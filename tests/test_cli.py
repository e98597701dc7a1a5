"""Tests for the ``python -m hubix`` entry point."""

import json

import httpx
import pytest

import hubix.__main__ as cli
from hubix.account.credentials import HubicAccount
from hubix.auth.oauth_client import HubicOAuth2Client


@pytest.fixture
def hubic_env(monkeypatch, fake_hubic):
    monkeypatch.setenv("HUBIC_CLIENT_ID", "client-id")
    monkeypatch.setenv("HUBIC_CLIENT_SECRET", "client-secret")
    monkeypatch.setenv("HUBIC_REDIRECT_URL", "https://myapp.com/callback")
    monkeypatch.setenv("HUBIC_USERNAME", "user@example.com")
    monkeypatch.setenv("HUBIC_PASSWORD", "secret")
    monkeypatch.setattr(cli, "load_dotenv", lambda: None)

    def mock_client():
        return httpx.AsyncClient(transport=httpx.MockTransport(fake_hubic.handle))

    monkeypatch.setattr(
        cli,
        "HubicOAuth2Client",
        lambda config: HubicOAuth2Client(config, http_client=mock_client()),
    )
    monkeypatch.setattr(
        cli,
        "HubicAccount",
        lambda config: HubicAccount(config, http_client=mock_client()),
    )


class TestMain:
    def test_prints_tokens(self, hubic_env, capsys):
        # Act
        exit_code = cli.main([])

        # Assert
        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output == {
            "access_token": "access-code-for-user@example.com",
            "expires_in": 21600,
            "refresh_token": "refresh-xyz",
        }

    def test_prints_account_credentials(self, hubic_env, capsys):
        # Act
        exit_code = cli.main(["--credentials"])

        # Assert
        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["credentials"]["token"] == "swift-token"

    def test_authentication_failure(self, hubic_env, fake_hubic, capsys):
        # Arrange
        fake_hubic.redirect_error = "access_denied"

        # Act
        exit_code = cli.main([])

        # Assert
        assert exit_code == 1
        assert "access_denied" in capsys.readouterr().err

    def test_missing_environment_variable(self, hubic_env, monkeypatch, capsys):
        # Arrange
        monkeypatch.delenv("HUBIC_PASSWORD")

        # Act
        exit_code = cli.main([])

        # Assert
        assert exit_code == 1
        assert "HUBIC_PASSWORD" in capsys.readouterr().err
