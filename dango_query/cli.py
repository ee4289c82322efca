"""Command-line interface for the query client."""
from __future__ import annotations

import argparse
import asyncio
import base64
import dataclasses
import json
import logging
import sys
from enum import Enum
from typing import Any

from . import actions
from .app_config import AppConfigResolver, StaticAppConfig, get_app_config
from .client import create_client
from .config import load_config
from .exceptions import QueryError
from .interfaces.app_config import AppConfigProvider
from .logging_setup import configure_logging
from .models import AccountType

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="dango-query",
        description="Query Dango chain and contract state",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=0,
        help="Block height to query at (default: 0, latest)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("info", help="Chain id, config and last finalized block")

    app_config_parser = sub.add_parser("app-config", help="Contract registry")
    app_config_parser.add_argument("--key", default=None, help="Single registry key")

    balance_parser = sub.add_parser("balance", help="Balance of one denom")
    balance_parser.add_argument("address")
    balance_parser.add_argument("denom")

    admin_parser = sub.add_parser("token-admin", help="Admin of a denom")
    admin_parser.add_argument("denom")

    admins_parser = sub.add_parser("token-admins", help="Page of denom admins")
    admins_parser.add_argument("--start-after", default=None)
    admins_parser.add_argument("--limit", type=int, default=None)

    next_parser = sub.add_parser("next-address", help="Next account address of a user")
    next_parser.add_argument("username")
    next_parser.add_argument("account_type", choices=[t.value for t in AccountType])

    votes_parser = sub.add_parser("votes", help="Votes on a safe account proposal")
    votes_parser.add_argument("address")
    votes_parser.add_argument("proposal_id", type=int)

    return parser


def _to_jsonable(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _to_jsonable(dataclasses.asdict(value))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bytes):
        return base64.b64encode(value).decode()
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


async def _run(args: argparse.Namespace) -> Any:
    """Execute the selected command and return its result."""
    config = load_config(args.config)
    client = create_client(config)
    resolver: AppConfigProvider
    if config.app_config:
        resolver = StaticAppConfig(config.app_config)
    else:
        resolver = AppConfigResolver()
    height = args.height

    if args.command == "info":
        return await actions.get_chain_info(client, height)
    if args.command == "app-config":
        return await get_app_config(client, args.key, height, resolver)
    if args.command == "balance":
        return await actions.get_balance(client, args.address, args.denom, height)
    if args.command == "token-admin":
        return await actions.get_token_admin(
            client,
            actions.GetTokenAdminParameters(denom=args.denom, height=height),
            resolver=resolver,
        )
    if args.command == "token-admins":
        return await actions.get_all_token_admins(
            client,
            actions.GetAllTokenAdminsParameters(
                start_after=args.start_after, limit=args.limit, height=height
            ),
            resolver=resolver,
        )
    if args.command == "next-address":
        return await actions.get_next_account_address(
            client,
            actions.GetNextAccountAddressParameters(
                username=args.username, account_type=args.account_type, height=height
            ),
            resolver=resolver,
        )
    if args.command == "votes":
        return await actions.get_votes_for_proposal(
            client,
            actions.GetVotesForProposalParameters(
                address=args.address, proposal_id=args.proposal_id, height=height
            ),
        )
    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level)
    try:
        result = asyncio.run(_run(args))
    except (QueryError, ValueError) as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        sys.exit(2)

    print(json.dumps(_to_jsonable(result), indent=2))
