# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""websubclient CLI."""

import argparse
import json
import sys
from dataclasses import replace
from typing import Any

from ..config import AuthConfig, ClientConfig, FollowRedirects, load_client_config
from ..errors import ClientInitializationError, error_category_to_reason
from ..log import setup_logging
from ..websub import Mode, SubscriptionChangeRequest, SubscriptionClient, SubscriptionOutcome

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send WebSub subscribe/unsubscribe requests to a hub")
    parser.add_argument("mode", choices=[m.value for m in Mode], help="Subscription change to request")
    parser.add_argument("hub", help="Hub URL")
    parser.add_argument("--topic", required=True, help="Topic URL")
    parser.add_argument("--callback", required=True, help="Callback URL the hub will deliver to")
    parser.add_argument("--secret", default=None, help="Shared secret for content signatures (subscribe only)")
    parser.add_argument("--lease-seconds", type=int, default=0, help="Requested lease; 0 uses the hub default")
    parser.add_argument("--follow-redirects", action="store_true", help="Follow 307/308 hub redirects")
    parser.add_argument("--max-redirects", type=int, default=None, help="Redirect limit (implies --follow-redirects)")
    auth = parser.add_mutually_exclusive_group()
    auth.add_argument("--bearer-token", default=None, help="Bearer token sent to the hub")
    auth.add_argument("--basic-auth", default=None, metavar="USER:PASS", help="HTTP Basic credentials")
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed hubs)",
    )
    parser.add_argument("--json", action="store_true", help="Output JSON instead of a one-line summary")
    parser.add_argument("--log-level", default=None, help="Logging level (default: $WEBSUB_LOG_LEVEL or WARNING)")
    return parser


def _auth_from_args(args: argparse.Namespace) -> AuthConfig | None:
    if args.bearer_token:
        return AuthConfig(bearer_token=args.bearer_token)
    if args.basic_auth:
        username, _, password = args.basic_auth.partition(":")
        return AuthConfig(username=username, password=password)
    return None


def build_config(args: argparse.Namespace) -> ClientConfig:
    config = load_client_config(auth=_auth_from_args(args))
    if args.ignore_ssl_errors:
        config.http.verify_ssl = False
    redirects = config.follow_redirects or FollowRedirects()
    if args.max_redirects is not None:
        redirects = FollowRedirects(enabled=True, max_count=args.max_redirects)
    elif args.follow_redirects:
        redirects = replace(redirects, enabled=True)
    config.follow_redirects = redirects
    return config


def _print_json(data: dict[str, Any]) -> None:
    json.dump(data, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(mode: Mode, outcome: SubscriptionOutcome) -> None:
    if outcome.response is not None:
        response = outcome.response
        print(f"[websubclient] {mode.phrase} accepted by {response.hub} (status {response.status_code}, attempts {outcome.attempts})")
        return
    error = outcome.error
    reason = error_category_to_reason(error.category) if error is not None else ""
    suffix = f" [{reason}]" if reason else ""
    print(f"[websubclient] {error}{suffix}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    mode = Mode(args.mode)
    try:
        request = SubscriptionChangeRequest(
            callback=args.callback,
            topic=args.topic,
            secret=args.secret,
            lease_seconds=args.lease_seconds,
        )
        client = SubscriptionClient(args.hub, build_config(args))
    except (ClientInitializationError, ValueError) as exc:
        print(f"[websubclient] {exc}", file=sys.stderr)
        return EXIT_USAGE

    with client:
        outcome = client.subscribe(request) if mode is Mode.SUBSCRIBE else client.unsubscribe(request)

    if args.json:
        _print_json(outcome.to_dict())
    else:
        _pretty_print(mode, outcome)

    return EXIT_OK if outcome.ok else EXIT_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
