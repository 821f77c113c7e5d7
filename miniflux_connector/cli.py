"""Command line interface for running the Miniflux connector outside a host."""

import argparse
import sys
from datetime import UTC, datetime

from .config import ACTION_MODES, AUTH_SCHEMES, Config, get_log_level
from .connector import MinifluxConnector
from .errors import ConnectorError
from .host import ConsoleHost
from .logging_config import create_execution_logger, setup_structured_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="miniflux-connector",
        description="Verify a Miniflux account, load unread entries or run an action.",
    )
    parser.add_argument("--site", help="Miniflux instance URL (MINIFLUX_SITE)")
    parser.add_argument(
        "--auth-scheme", choices=AUTH_SCHEMES, help="Authentication scheme (MINIFLUX_AUTH_SCHEME)"
    )
    parser.add_argument("--limit", type=int, help="Maximum number of entries (MINIFLUX_LIMIT)")
    parser.add_argument("--days", type=int, help="Only entries from the last N days (MINIFLUX_DAYS)")
    parser.add_argument(
        "--category", dest="category_filter", help="Category id or comma-separated ids"
    )
    parser.add_argument(
        "--action-mode", choices=ACTION_MODES, help="Actions exposed on items (MINIFLUX_ACTION_MODE)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("verify", help="Check the instance URL and credentials")
    subparsers.add_parser("load", help="Print unread entries as display items")
    action = subparsers.add_parser("action", help="Run an action on an entry")
    action.add_argument("action_id", help="mark_as_read, mark_as_unread, star or unstar")
    action.add_argument("entry_id", help="Miniflux entry id")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    setup_structured_logging(get_log_level())

    execution_id = f"cli_{datetime.now(UTC).strftime('%Y%m%d_%H%M%S_%f')}"
    logger = create_execution_logger("cli", execution_id)

    try:
        connector_config = Config().get_connector_config(
            site=args.site,
            auth_scheme=args.auth_scheme,
            limit=args.limit,
            days=args.days,
            category_filter=args.category_filter,
            action_mode=args.action_mode,
        )
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}", error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 2

    connector = MinifluxConnector(connector_config, ConsoleHost(), execution_id=execution_id)

    try:
        if args.command == "verify":
            if connector.verify() is None:
                missing = ", ".join(connector_config.missing_fields())
                print(f"Configuration incomplete: {missing}", file=sys.stderr)
                return 1
        elif args.command == "load":
            connector.load()
        else:
            if not connector.perform_action(args.action_id, args.entry_id):
                return 1
    except ConnectorError as e:
        logger.error(f"{args.command} failed: {e.message}", command=args.command)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
