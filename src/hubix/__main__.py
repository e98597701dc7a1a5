"""Log in to hubIC from the command line and print the obtained tokens.

Reads the application and account credentials from the environment
(``HUBIC_CLIENT_ID``, ``HUBIC_CLIENT_SECRET``, ``HUBIC_REDIRECT_URL``,
``HUBIC_USERNAME``, ``HUBIC_PASSWORD``); a ``.env`` file is honoured.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys

from dotenv import load_dotenv

from hubix.account.credentials import HubicAccount
from hubix.auth.oauth_client import HubicOAuth2Client
from hubix.config import AppCredentials, HubicConfig, UserCredentials


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hubix", description="Authenticate against hubIC."
    )
    parser.add_argument(
        "--credentials",
        action="store_true",
        help="also fetch the account storage credentials",
    )
    parser.add_argument(
        "--deadline",
        type=float,
        default=None,
        help="overall time limit for the login flow, in seconds",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


async def run(args: argparse.Namespace) -> int:
    config = HubicConfig.from_env()
    app = AppCredentials.from_env()
    user = UserCredentials.from_env()
    redirect_url = os.environ["HUBIC_REDIRECT_URL"]

    async with HubicOAuth2Client(config) as client:
        result = await client.authenticate(
            app.client_id,
            app.client_secret,
            redirect_url,
            user.username,
            user.password,
            deadline=args.deadline,
        )
    if result.is_error():
        print(f"Authentication failed: {result.error.describe()}", file=sys.stderr)
        return 1

    output = {
        "access_token": result.value.access_token,
        "expires_in": result.value.expires_in,
        "refresh_token": result.value.refresh_token,
    }

    if args.credentials:
        account = HubicAccount(config)
        try:
            credentials = await account.get_credentials(result.value.access_token)
        finally:
            await account.close()
        if credentials.is_error():
            print(
                f"Fetching credentials failed: {credentials.error.describe()}",
                file=sys.stderr,
            )
            return 1
        output["credentials"] = credentials.value.model_dump()

    print(json.dumps(output, indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    load_dotenv()
    try:
        return asyncio.run(run(args))
    except KeyError as e:
        print(f"Missing environment variable {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
