# src/pkg_auth_client/cli.py

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
from typing import Any, Sequence

from .adapters.jwt.claims_decoder import UnverifiedClaimDecoder
from .config.env import settings_from_env
from .domain.exceptions import TokenDecodeError
from .integrations.common.client_factory import TokenClient, create_token_client


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pkg-auth-client",
        description="Inspect, refresh or clear the stored OAuth2 token pair "
                    "(settings come from AUTH_CLIENT_* environment variables).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log refresh decisions to stderr.",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("status", help="Show expiry of the stored access token (never prints tokens).")
    sub.add_parser("refresh", help="Exchange the stored refresh token for a new access token.")
    sub.add_parser("clear", help="Remove the stored access and refresh tokens.")

    return parser.parse_args(args=argv)


def _describe(client: TokenClient) -> dict[str, Any]:
    access_token = client.store.access_token
    summary: dict[str, Any] = {
        "has_access_token": bool(access_token),
        "has_refresh_token": bool(client.store.refresh_token),
    }
    try:
        claims = UnverifiedClaimDecoder().decode(access_token)
    except TokenDecodeError as exc:
        summary.update({"exp": None, "expired": True, "decode_error": str(exc)})
        return summary

    summary.update({"exp": claims.exp, "expired": client.gate.is_expired(access_token)})
    return summary


async def _run(args: argparse.Namespace) -> dict[str, Any]:
    settings = settings_from_env()
    async with create_token_client(settings) as client:
        if args.command == "status":
            return {"now": int(time.time()), **_describe(client)}

        if args.command == "refresh":
            previous_refresh_token = client.store.refresh_token
            await client.refresh_access_token()
            return {
                "refreshed": True,
                "refresh_token_rotated": client.store.refresh_token != previous_refresh_token,
                **_describe(client),
            }

        client.clear_tokens()
        return {"cleared": True}


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        summary = asyncio.run(_run(args))
        json.dump({"ok": True, **summary}, sys.stdout, indent=2)
        sys.stdout.write("\n")
    except Exception as exc:  # noqa: BLE001
        json.dump({"ok": False, "error": str(exc)}, sys.stdout, indent=2)
        sys.stdout.write("\n")
        raise


if __name__ == "__main__":
    main()
